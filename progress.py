from __future__ import annotations

import logging
from typing import Any, Optional

from backend import BackendError
from metrics import round_half_up

logger = logging.getLogger(__name__)


def completion_percentage(completed: int, total: int) -> int:
    if total <= 0:
        return 0
    return round_half_up(completed / total * 100)


class ProgressTracker:
    """Completed lessons for one language and one user.

    Completions are append-only records; nothing is ever un-completed.
    """

    def __init__(self, client: Any, language: str, user_email: Optional[str]) -> None:
        self.client = client
        self.language = language
        self.user_email = user_email
        self.completed: set[str] = set()

    def load(self) -> set[str]:
        if not self.user_email:
            self.completed = set()
            return self.completed
        try:
            rows = self.client.entities.LearningProgress.filter(
                {"language": self.language, "user_email": self.user_email}
            )
        except BackendError:
            logger.exception("Error loading %s progress", self.language)
            return self.completed
        self.completed = {r["lesson_id"] for r in rows if r.get("completed")}
        return self.completed

    def is_completed(self, lesson_id: str) -> bool:
        return lesson_id in self.completed

    def mark_complete(self, lesson_id: str) -> bool:
        if not self.user_email or lesson_id in self.completed:
            return False
        try:
            self.client.entities.LearningProgress.create(
                {
                    "language": self.language,
                    "lesson_id": lesson_id,
                    "completed": True,
                    "user_email": self.user_email,
                }
            )
        except BackendError:
            logger.exception("Error updating progress for %s", lesson_id)
            return False
        self.completed.add(lesson_id)
        return True

    def completion_percentage(self, total: int) -> int:
        return completion_percentage(len(self.completed), total)

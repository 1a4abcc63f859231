from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass
from enum import Enum
from functools import partial
from typing import Any, Callable, Optional

import catalog
from metrics import accuracy, round_half_up, words_per_minute
from timer import SessionTimer

logger = logging.getLogger(__name__)


class Status(str, Enum):
    IDLE = "idle"
    ACTIVE = "active"
    COMPLETE = "complete"


@dataclass(frozen=True)
class SessionResult:
    language: str
    difficulty: str
    snippet_text: str
    elapsed_seconds: int
    accuracy_percent: int
    wpm: int

    def to_record(self, user_email: str) -> dict:
        return {
            "user_email": user_email,
            "language": self.language,
            "code_snippet": self.snippet_text,
            "time_seconds": self.elapsed_seconds,
            "accuracy": self.accuracy_percent,
            "wpm": self.wpm,
            "difficulty": self.difficulty,
        }


@dataclass(frozen=True)
class UserStatsDelta:
    total_practice_time_increment: int
    new_accuracy_average: int
    last_active_date: str

    def apply(self, prior: dict) -> dict:
        """Fields to write back onto the user record."""
        return {
            "total_practice_time": (prior.get("total_practice_time") or 0) + self.total_practice_time_increment,
            "accuracy_average": self.new_accuracy_average,
            "last_active": self.last_active_date,
        }


def derive_stats_delta(prior: dict, result: SessionResult, today: dt.date) -> UserStatsDelta:
    # Two-point average: the latest session always weighs 50%.
    prior_average = prior.get("accuracy_average") or 0
    return UserStatsDelta(
        total_practice_time_increment=result.elapsed_seconds,
        new_accuracy_average=round_half_up((prior_average + result.accuracy_percent) / 2),
        last_active_date=today.isoformat(),
    )


def run_inline(job: Callable[[], Any]) -> None:
    job()


class PracticeSession:
    """One typing-practice attempt: idle -> active -> complete.

    ``dispatch`` receives the persistence job once the snippet is typed
    exactly; the UI passes a background worker, tests may run it inline.
    The outcome of that job never changes the session's own state.
    """

    def __init__(
        self,
        language: str = catalog.DEFAULT_LANGUAGE,
        difficulty: str = catalog.DEFAULT_DIFFICULTY,
        *,
        user: Optional[dict] = None,
        gateway: Any = None,
        dispatch: Callable[[Callable[[], Any]], Any] = run_inline,
        timer: Optional[SessionTimer] = None,
        today: Callable[[], dt.date] = dt.date.today,
    ) -> None:
        self.snippet = catalog.get_snippet(language, difficulty)
        self.user = user
        self.gateway = gateway
        self.dispatch = dispatch
        self.timer = timer or SessionTimer()
        self.today = today
        self.user_input = ""
        self.status = Status.IDLE
        self.result: Optional[SessionResult] = None
        self.delta: Optional[UserStatsDelta] = None

    @property
    def language(self) -> str:
        return self.snippet.language

    @property
    def difficulty(self) -> str:
        return self.snippet.difficulty

    @property
    def started_at(self) -> Optional[float]:
        return self.timer.started_at

    @property
    def elapsed_seconds(self) -> int:
        if self.result is not None:
            return self.result.elapsed_seconds
        return self.timer.elapsed()

    @property
    def accuracy(self) -> int:
        if self.result is not None:
            return self.result.accuracy_percent
        return accuracy(self.snippet.text, self.user_input)

    @property
    def wpm(self) -> int:
        if self.result is not None:
            return self.result.wpm
        return words_per_minute(self.user_input, self.elapsed_seconds)

    def start(self) -> None:
        if self.status is Status.ACTIVE:
            return
        self.user_input = ""
        self.result = None
        self.delta = None
        self.timer.start()
        self.status = Status.ACTIVE
        logger.debug("Started %s/%s attempt", self.language, self.difficulty)

    def on_input(self, value: str) -> bool:
        """Feed the whole input buffer; returns True once the attempt is complete."""
        if self.status is not Status.ACTIVE:
            return self.status is Status.COMPLETE
        self.user_input = value
        if value == self.snippet.text:
            self._complete()
        return self.status is Status.COMPLETE

    def reset(self) -> None:
        self.timer.reset()
        self.user_input = ""
        self.result = None
        self.delta = None
        self.status = Status.IDLE

    def change_parameters(self, language: str, difficulty: str) -> None:
        self.snippet = catalog.get_snippet(language, difficulty)
        self.reset()

    def _complete(self) -> None:
        elapsed_s = self.timer.stop()
        self.result = SessionResult(
            language=self.language,
            difficulty=self.difficulty,
            snippet_text=self.snippet.text,
            elapsed_seconds=elapsed_s,
            accuracy_percent=accuracy(self.snippet.text, self.user_input),
            wpm=words_per_minute(self.user_input, elapsed_s),
        )
        self.status = Status.COMPLETE

        prior = dict(self.user or {})
        self.delta = derive_stats_delta(prior, self.result, self.today())
        logger.info(
            "Completed %s/%s in %ss (%s%%, %s wpm)",
            self.language,
            self.difficulty,
            elapsed_s,
            self.result.accuracy_percent,
            self.result.wpm,
        )

        if not self.user or not self.user.get("email"):
            logger.info("No signed-in user; session not saved")
            return
        self.user.update(self.delta.apply(prior))
        if self.gateway is None:
            return
        try:
            self.dispatch(partial(self.gateway.persist, self.result, self.delta, prior))
        except Exception:
            logger.exception("Could not dispatch session save")

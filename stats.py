from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from typing import Any, Optional

from metrics import round_half_up

RECENT_SESSIONS = 5

# (minimum streak, icon, label), highest first
STREAK_BADGES = [
    (30, "🏆", "Master Coder"),
    (14, "🔥", "On Fire"),
    (7, "⚡", "Rising Star"),
    (3, "✨", "Getting Started"),
    (0, "🌱", "Beginner"),
]


@dataclass
class Badge:
    icon: str
    label: str


@dataclass
class ProfileSummary:
    full_name: str
    email: str
    streak: int
    badge: Badge
    practice_minutes: int
    completed_lessons: int
    accuracy_average: int
    average_wpm: int
    recent_sessions: list[dict[str, Any]] = field(default_factory=list)

    @property
    def initial(self) -> str:
        return (self.full_name[:1] or "U").upper()


def streak_badge(streak: int) -> Badge:
    for minimum, icon, label in STREAK_BADGES:
        if streak >= minimum:
            return Badge(icon, label)
    return Badge(*STREAK_BADGES[-1][1:])


def average_wpm(sessions: list[dict[str, Any]]) -> int:
    total = len(sessions)
    if not total:
        return 0
    return round_half_up(sum(s.get("wpm", 0) for s in sessions) / total)


def build_profile(
    user: Optional[dict[str, Any]],
    sessions: list[dict[str, Any]],
    progress: list[dict[str, Any]],
) -> ProfileSummary:
    """Aggregate the dashboard numbers.

    ``sessions`` is expected newest first, as returned by the backend
    when sorted on ``-created_date``.
    """
    user = user or {}
    streak = user.get("current_streak") or 0
    return ProfileSummary(
        full_name=user.get("full_name") or "User",
        email=user.get("email") or "",
        streak=streak,
        badge=streak_badge(streak),
        practice_minutes=round_half_up((user.get("total_practice_time") or 0) / 60),
        completed_lessons=sum(1 for p in progress if p.get("completed")),
        accuracy_average=user.get("accuracy_average") or 0,
        average_wpm=average_wpm(sessions),
        recent_sessions=sessions[:RECENT_SESSIONS],
    )


def format_session_date(iso_ts: str) -> str:
    """Render a stored timestamp as e.g. ``May 7, 2024``."""
    if not iso_ts:
        return "Unknown date"
    try:
        parsed = dt.datetime.fromisoformat(iso_ts)
    except ValueError:
        return iso_ts
    return f"{parsed:%b} {parsed.day}, {parsed.year}"

import logging
from unittest.mock import MagicMock

from backend import BackendError
from progress import ProgressTracker, completion_percentage

EMAIL = "ada@example.com"


def test_load_returns_completed_lessons_for_language(local_backend):
    progress = local_backend.entities.LearningProgress
    progress.create({"language": "c", "lesson_id": "c-1", "completed": True, "user_email": EMAIL})
    progress.create({"language": "c", "lesson_id": "c-2", "completed": False, "user_email": EMAIL})
    progress.create({"language": "java", "lesson_id": "java-1", "completed": True, "user_email": EMAIL})
    progress.create({"language": "c", "lesson_id": "c-3", "completed": True, "user_email": "bob@x"})

    tracker = ProgressTracker(local_backend, "c", EMAIL)
    assert tracker.load() == {"c-1"}


def test_mark_complete_appends_once(local_backend):
    tracker = ProgressTracker(local_backend, "python", EMAIL)
    tracker.load()
    assert tracker.mark_complete("python-2") is True
    assert tracker.mark_complete("python-2") is False
    rows = local_backend.entities.LearningProgress.filter({"user_email": EMAIL})
    assert len(rows) == 1
    assert rows[0]["completed"] is True

    fresh = ProgressTracker(local_backend, "python", EMAIL)
    assert fresh.load() == {"python-2"}


def test_mark_complete_without_user_is_noop(local_backend):
    tracker = ProgressTracker(local_backend, "python", None)
    assert tracker.load() == set()
    assert tracker.mark_complete("python-1") is False
    assert local_backend.entities.LearningProgress.filter({}) == []


def test_mark_complete_backend_failure_is_logged(caplog):
    client = MagicMock()
    client.entities.LearningProgress.create.side_effect = BackendError("offline")
    tracker = ProgressTracker(client, "c", EMAIL)
    with caplog.at_level(logging.ERROR):
        assert tracker.mark_complete("c-1") is False
    assert not tracker.is_completed("c-1")
    assert "Error updating progress" in caplog.text


def test_completion_percentage():
    assert completion_percentage(0, 5) == 0
    assert completion_percentage(1, 6) == 17
    assert completion_percentage(3, 3) == 100
    assert completion_percentage(1, 0) == 0


def test_tracker_completion_percentage(local_backend):
    tracker = ProgressTracker(local_backend, "java", EMAIL)
    tracker.mark_complete("java-1")
    assert tracker.completion_percentage(3) == 33

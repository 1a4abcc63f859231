import json
import logging
from unittest.mock import MagicMock

import pytest
import requests

from backend import BackendError, HttpBackend, LocalBackend, SessionGateway
from session import SessionResult, UserStatsDelta


def make_http_session(payload=None, content=b"{}"):
    response = MagicMock()
    response.content = content
    response.json.return_value = payload
    http = MagicMock()
    http.headers = {}
    http.request.return_value = response
    return http, response


# ---- local backend ----

def test_local_backend_defaults_user(local_backend):
    user = local_backend.auth.me()
    assert user["email"] == "learner@localhost"
    assert user["has_seen_welcome"] is False


def test_local_backend_update_me_persists(local_backend, tmp_path):
    local_backend.auth.update_me(has_seen_welcome=True, accuracy_average=70)
    reopened = LocalBackend(tmp_path / "data.json")
    user = reopened.auth.me()
    assert user["has_seen_welcome"] is True
    assert user["accuracy_average"] == 70


def test_local_entities_create_and_filter(local_backend):
    sessions = local_backend.entities.TypingSession
    first = sessions.create({"user_email": "a@x", "wpm": 10})
    sessions.create({"user_email": "b@x", "wpm": 20})
    assert first["id"]
    assert first["created_date"]
    rows = sessions.filter({"user_email": "a@x"})
    assert [r["wpm"] for r in rows] == [10]


def test_local_entities_sort_descending(local_backend):
    progress = local_backend.entities.LearningProgress
    for lesson_id in ("c-1", "c-3", "c-2"):
        progress.create({"lesson_id": lesson_id, "language": "c"})
    rows = progress.filter({"language": "c"}, "-lesson_id")
    assert [r["lesson_id"] for r in rows] == ["c-3", "c-2", "c-1"]


def test_local_backend_recovers_from_corrupt_file(tmp_path):
    path = tmp_path / "data.json"
    path.write_text("{not json")
    backend = LocalBackend(path)
    assert backend.auth.me()["email"] == "learner@localhost"


@pytest.mark.parametrize("content", [b"[]", b'"text"', b"\xff\xfe{}", b'{"user": [], "entities": 3}'])
def test_local_backend_recovers_from_unexpected_content(tmp_path, content):
    path = tmp_path / "data.json"
    path.write_bytes(content)
    backend = LocalBackend(path)
    assert backend.auth.me()["email"] == "learner@localhost"
    assert backend.entities.TypingSession.filter({}) == []


def test_local_backend_unreadable_file_raises_backend_error(tmp_path):
    path = tmp_path / "data.json"
    path.mkdir()
    with pytest.raises(BackendError):
        LocalBackend(path).auth.me()


def test_local_entities_sort_with_missing_numeric_field(local_backend):
    sessions = local_backend.entities.TypingSession
    sessions.create({"user_email": "a@x", "wpm": 10})
    sessions.create({"user_email": "a@x"})
    sessions.create({"user_email": "a@x", "wpm": 30})
    assert [r.get("wpm") for r in sessions.filter({}, "-wpm")] == [30, 10, None]
    assert [r.get("wpm") for r in sessions.filter({}, "wpm")] == [10, 30, None]


# ---- http backend ----

def test_http_create_posts_record():
    http, _ = make_http_session({"id": "1"})
    backend = HttpBackend("https://api.example.com/", "app1", "secret", session=http)
    row = backend.entities.TypingSession.create({"wpm": 5})
    assert row == {"id": "1"}
    http.request.assert_called_once_with(
        "POST",
        "https://api.example.com/api/apps/app1/entities/TypingSession",
        timeout=8,
        json={"wpm": 5},
    )
    assert http.headers["api_key"] == "secret"


def test_http_filter_sends_query_and_sort():
    http, _ = make_http_session([{"id": "1"}], content=b"[]")
    backend = HttpBackend("https://api.example.com", "app1", session=http)
    rows = backend.entities.LearningProgress.filter({"language": "c"}, "-created_date")
    assert rows == [{"id": "1"}]
    _, kwargs = http.request.call_args
    assert kwargs["params"] == {"q": json.dumps({"language": "c"}), "sort_by": "-created_date"}


def test_http_update_me():
    http, _ = make_http_session({"email": "a@x", "has_seen_welcome": True})
    backend = HttpBackend("https://api.example.com", "app1", session=http)
    user = backend.auth.update_me(has_seen_welcome=True)
    assert user["has_seen_welcome"] is True
    args, kwargs = http.request.call_args
    assert args == ("PUT", "https://api.example.com/api/apps/app1/entities/User/me")
    assert kwargs["json"] == {"has_seen_welcome": True}


def test_http_connection_error_becomes_backend_error():
    http, _ = make_http_session()
    http.request.side_effect = requests.ConnectionError("down")
    backend = HttpBackend("https://api.example.com", "app1", session=http)
    with pytest.raises(BackendError):
        backend.auth.me()


def test_http_error_status_becomes_backend_error():
    http, response = make_http_session()
    response.raise_for_status.side_effect = requests.HTTPError("500 Server Error")
    backend = HttpBackend("https://api.example.com", "app1", session=http)
    with pytest.raises(BackendError):
        backend.entities.TypingSession.create({})


def test_http_invalid_json_becomes_backend_error():
    http, response = make_http_session(content=b"<html>")
    response.json.side_effect = ValueError("no json")
    backend = HttpBackend("https://api.example.com", "app1", session=http)
    with pytest.raises(BackendError):
        backend.auth.me()


# ---- gateway ----

RESULT = SessionResult("python", "easy", "print(1)", 10, 100, 6)
DELTA = UserStatsDelta(10, 90, "2024-05-17")


def test_gateway_writes_session_and_stats(local_backend):
    gateway = SessionGateway(local_backend)
    prior = {"email": "learner@localhost", "total_practice_time": 20, "accuracy_average": 80}
    assert gateway.persist(RESULT, DELTA, prior) is True

    rows = local_backend.entities.TypingSession.filter({"user_email": "learner@localhost"})
    assert len(rows) == 1
    assert rows[0]["code_snippet"] == "print(1)"
    assert rows[0]["time_seconds"] == 10
    user = local_backend.auth.me()
    assert user["total_practice_time"] == 30
    assert user["accuracy_average"] == 90
    assert user["last_active"] == "2024-05-17"


def test_gateway_saves_over_undecodable_data_file(tmp_path):
    path = tmp_path / "data.json"
    path.write_bytes(b"\xff\xfe{}")
    backend = LocalBackend(path)
    assert SessionGateway(backend).persist(RESULT, DELTA, {"email": "a@x"}) is True
    assert len(backend.entities.TypingSession.filter({"user_email": "a@x"})) == 1


def test_gateway_logs_unreadable_data_file(tmp_path, caplog):
    path = tmp_path / "data.json"
    path.mkdir()
    gateway = SessionGateway(LocalBackend(path))
    with caplog.at_level(logging.ERROR):
        assert gateway.persist(RESULT, DELTA, {"email": "a@x"}) is False
    assert "Error saving session" in caplog.text


def test_gateway_logs_and_swallows_backend_errors(caplog):
    client = MagicMock()
    client.entities.TypingSession.create.side_effect = BackendError("rejected")
    gateway = SessionGateway(client)
    with caplog.at_level(logging.ERROR):
        assert gateway.persist(RESULT, DELTA, {"email": "a@x"}) is False
    assert "Error saving session" in caplog.text
    client.auth.update_me.assert_not_called()

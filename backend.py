from __future__ import annotations

import datetime as dt
import json
import logging
import uuid
from pathlib import Path
from typing import Any, Optional

import requests

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT_S = 8
USER_AGENT = "code-tutor/0.1 (python requests)"


class BackendError(Exception):
    """Raised when the backend rejects a call or cannot be reached."""


def _sort_records(records: list[dict], sort: Optional[str]) -> list[dict]:
    if not sort:
        return records
    reverse = sort.startswith("-")
    field = sort.lstrip("-")
    # Rows without the field go last in either direction.
    present = [r for r in records if r.get(field) is not None]
    missing = [r for r in records if r.get(field) is None]
    return sorted(present, key=lambda r: r[field], reverse=reverse) + missing


def _matches(record: dict, query: dict) -> bool:
    return all(record.get(k) == v for k, v in query.items())


# ---------------------------
# Remote REST backend
# ---------------------------

class _HttpTransport:
    def __init__(self, base_url: str, api_key: str = "", session: requests.Session | None = None) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "User-Agent": USER_AGENT,
                "Accept": "application/json",
            }
        )
        if api_key:
            self.session.headers["api_key"] = api_key

    def request(self, method: str, path: str, **kwargs: Any) -> Any:
        url = f"{self.base_url}/{path.lstrip('/')}"
        try:
            response = self.session.request(method, url, timeout=REQUEST_TIMEOUT_S, **kwargs)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise BackendError(f"{method} {url} failed: {exc}") from exc
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise BackendError(f"{method} {url} returned invalid JSON") from exc


class HttpAuth:
    def __init__(self, transport: _HttpTransport) -> None:
        self._transport = transport

    def me(self) -> dict:
        return self._transport.request("GET", "entities/User/me") or {}

    def update_me(self, **fields: Any) -> dict:
        return self._transport.request("PUT", "entities/User/me", json=fields) or {}

    def logout(self) -> None:
        self._transport.request("POST", "auth/logout")


class HttpEntityCollection:
    def __init__(self, transport: _HttpTransport, name: str) -> None:
        self._transport = transport
        self.name = name

    def create(self, record: dict) -> dict:
        return self._transport.request("POST", f"entities/{self.name}", json=record) or {}

    def filter(self, query: dict, sort: Optional[str] = None) -> list[dict]:
        params = {"q": json.dumps(query)}
        if sort:
            params["sort_by"] = sort
        data = self._transport.request("GET", f"entities/{self.name}", params=params)
        return list(data or [])


class HttpEntities:
    def __init__(self, transport: _HttpTransport) -> None:
        self._transport = transport

    def __getattr__(self, name: str) -> HttpEntityCollection:
        if name.startswith("_"):
            raise AttributeError(name)
        return HttpEntityCollection(self._transport, name)


class HttpBackend:
    """REST client for a hosted backend app (``/api/apps/<app_id>``)."""

    def __init__(self, base_url: str, app_id: str, api_key: str = "", session: requests.Session | None = None) -> None:
        self._transport = _HttpTransport(f"{base_url.rstrip('/')}/api/apps/{app_id}", api_key, session)
        self.auth = HttpAuth(self._transport)
        self.entities = HttpEntities(self._transport)


# ---------------------------
# Local JSON-file backend
# ---------------------------

DEFAULT_LOCAL_USER = {
    "email": "learner@localhost",
    "full_name": "Learner",
    "has_seen_welcome": False,
    "total_practice_time": 0,
    "accuracy_average": 0,
    "current_streak": 0,
}


class LocalStore:
    def __init__(self, path: Path) -> None:
        self.path = path

    def load(self) -> dict[str, Any]:
        if not self.path.exists():
            return {"user": dict(DEFAULT_LOCAL_USER), "entities": {}}
        try:
            raw = self.path.read_bytes()
        except OSError as exc:
            raise BackendError(f"cannot read {self.path}: {exc}") from exc
        try:
            data = json.loads(raw.decode("utf-8"))
        except ValueError:
            data = None
        if not isinstance(data, dict):
            logger.warning("Ignoring unreadable data file %s", self.path)
            return {"user": dict(DEFAULT_LOCAL_USER), "entities": {}}
        if not isinstance(data.get("user"), dict):
            data["user"] = dict(DEFAULT_LOCAL_USER)
        if not isinstance(data.get("entities"), dict):
            data["entities"] = {}
        return data

    def save(self, data: dict[str, Any]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        except OSError as exc:
            raise BackendError(f"cannot write {self.path}: {exc}") from exc


class LocalAuth:
    def __init__(self, store: LocalStore) -> None:
        self._store = store

    def me(self) -> dict:
        return dict(self._store.load()["user"])

    def update_me(self, **fields: Any) -> dict:
        data = self._store.load()
        data["user"].update(fields)
        self._store.save(data)
        return dict(data["user"])

    def logout(self) -> None:
        logger.info("Local backend has no remote session to end")


class LocalEntityCollection:
    def __init__(self, store: LocalStore, name: str) -> None:
        self._store = store
        self.name = name

    def create(self, record: dict) -> dict:
        data = self._store.load()
        row = dict(record)
        row["id"] = str(uuid.uuid4())
        row["created_date"] = dt.datetime.now(dt.timezone.utc).isoformat()
        data["entities"].setdefault(self.name, []).append(row)
        self._store.save(data)
        return row

    def filter(self, query: dict, sort: Optional[str] = None) -> list[dict]:
        rows = self._store.load()["entities"].get(self.name, [])
        return _sort_records([r for r in rows if _matches(r, query)], sort)


class LocalEntities:
    def __init__(self, store: LocalStore) -> None:
        self._store = store

    def __getattr__(self, name: str) -> LocalEntityCollection:
        if name.startswith("_"):
            raise AttributeError(name)
        return LocalEntityCollection(self._store, name)


class LocalBackend:
    """Single-user backend that keeps everything in one JSON file."""

    def __init__(self, path: Path) -> None:
        self.store = LocalStore(path)
        self.auth = LocalAuth(self.store)
        self.entities = LocalEntities(self.store)


# ---------------------------
# Persistence gateway
# ---------------------------

class SessionGateway:
    """Writes finished practice sessions and rolling user stats."""

    def __init__(self, client: Any) -> None:
        self.client = client

    def create_session(self, record: dict) -> dict:
        return self.client.entities.TypingSession.create(record)

    def update_user_stats(self, delta: Any, prior: dict) -> dict:
        return self.client.auth.update_me(**delta.apply(prior))

    def persist(self, result: Any, delta: Any, user: dict) -> bool:
        """Single attempt at writing a session; failures are logged, never raised."""
        record = result.to_record(user["email"])
        try:
            self.create_session(record)
            self.update_user_stats(delta, user)
        except BackendError:
            logger.exception("Error saving session for %s", user.get("email"))
            return False
        logger.info(
            "Saved %s/%s session: %ss, %s%% accuracy, %s wpm",
            result.language,
            result.difficulty,
            result.elapsed_seconds,
            result.accuracy_percent,
            result.wpm,
        )
        return True

from __future__ import annotations

import datetime as dt

import pytest

from backend import LocalBackend


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeGateway:
    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.calls: list[tuple] = []

    def persist(self, result, delta, user):
        self.calls.append((result, delta, user))
        if self.fail:
            raise RuntimeError("backend unavailable")
        return True


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def today() -> dt.date:
    return dt.date(2024, 5, 17)


@pytest.fixture
def local_backend(tmp_path) -> LocalBackend:
    return LocalBackend(tmp_path / "data.json")

"""
Shared fixtures: a throwaway SQLite file per test, a steppable clock for the
cache, and a TestClient bound to an app built around that service.
"""

from __future__ import annotations

from collections.abc import Iterator
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from cache import ResponseCache
from main import create_app
from repo_stress_logs import StressLogRepo
from service_stress_logs import StressLogService


class FakeClock:
    """Monotonic-style clock the tests advance by hand."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def db_path(tmp_path) -> str:
    return str(tmp_path / "stress_agent.db")


@pytest.fixture
def repo(db_path: str) -> StressLogRepo:
    r = StressLogRepo(db_path)
    r.create_table()
    return r


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> ResponseCache:
    return ResponseCache(ttl_seconds=300, clock=clock)


@pytest.fixture
def svc(repo: StressLogRepo, cache: ResponseCache) -> StressLogService:
    return StressLogService(repo, cache)


@pytest.fixture
def client(svc: StressLogService) -> Iterator[TestClient]:
    with TestClient(create_app(svc, serve_front_end=False)) as c:
        yield c


def make_row(**overrides) -> dict:
    """A stored row as `StressLogRepo.fetch_recent` returns it."""
    row = {
        "id": "row-1",
        "user_id": "demo_user",
        "timestamp": int(datetime(2026, 3, 1, tzinfo=timezone.utc).timestamp()),
        "date": "2026-03-01",
        "mood": 5,
        "tag": "Work",
        "note": "",
        "sleep_hours": 7.0,
        "work_hours": 8.0,
        "heart_rate": None,
    }
    row.update(overrides)
    return row

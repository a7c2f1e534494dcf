"""
Tests for `StressLogService`: id/time assignment, caching and invalidation.
"""

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from cache import ResponseCache
from conftest import FakeClock
from models import StressLogIn
from repo_stress_logs import StressLogRepo
from service_stress_logs import RESET_MESSAGE, SAVED_MESSAGE, StressLogService
from settings import settings
from suggestions import HIGH_STRESS, SLEEP_DEFICIT


@pytest.fixture
def spy_repo(repo: StressLogRepo) -> MagicMock:
    return MagicMock(wraps=repo)


@pytest.fixture
def spy_svc(spy_repo: MagicMock, cache: ResponseCache) -> StressLogService:
    return StressLogService(spy_repo, cache)


def _log(user_id: str = "demo_user", **kw) -> StressLogIn:
    data = {"mood": 5, "tag": "Work", "note": "", "sleep_hours": 7.0, "work_hours": 8.0}
    data.update(kw)
    return StressLogIn(user_id=user_id, **data)


def test_submit_assigns_server_fields_from_one_instant(repo: StressLogRepo, cache: ResponseCache) -> None:
    instant = datetime(2026, 1, 1, 23, 59, 59, 999999, tzinfo=timezone.utc)
    svc = StressLogService(repo, cache, now=lambda: instant)
    result = svc.submit(_log())
    [row] = repo.fetch_recent("demo_user", 5)
    assert row["id"] == result["id"]
    assert row["timestamp"] == int(instant.timestamp())
    assert row["date"] == "2026-01-01"


def test_submit_returns_suggestions_for_submitted_values(svc: StressLogService) -> None:
    result = svc.submit(_log(mood=8, sleep_hours=4.0))
    assert result["message"] == SAVED_MESSAGE
    assert result["suggestions"] == [HIGH_STRESS, SLEEP_DEFICIT]


def test_submit_ids_are_unique(svc: StressLogService) -> None:
    ids = {svc.submit(_log())["id"] for _ in range(5)}
    assert len(ids) == 5


def test_list_recent_served_from_cache(spy_svc: StressLogService, spy_repo: MagicMock) -> None:
    spy_svc.submit(_log())
    first = spy_svc.list_recent("demo_user", 30)
    second = spy_svc.list_recent("demo_user", 30)
    assert first == second
    assert spy_repo.fetch_recent.call_count == 1


def test_list_recent_refetches_after_ttl(
    spy_svc: StressLogService, spy_repo: MagicMock, clock: FakeClock
) -> None:
    spy_svc.list_recent("demo_user", 30)
    clock.advance(301)
    spy_svc.list_recent("demo_user", 30)
    assert spy_repo.fetch_recent.call_count == 2


def test_different_limits_are_cached_separately(spy_svc: StressLogService, spy_repo: MagicMock) -> None:
    spy_svc.list_recent("demo_user", 30)
    spy_svc.list_recent("demo_user", 5)
    assert spy_repo.fetch_recent.call_count == 2


def test_limit_defaults_and_is_clamped(
    spy_svc: StressLogService, spy_repo: MagicMock, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(settings, "max_list_limit", 50)
    spy_svc.list_recent("u")
    spy_svc.list_recent("u", -3)
    spy_svc.list_recent("u", 10_000)
    limits = [c.args[1] for c in spy_repo.fetch_recent.call_args_list]
    assert limits == [settings.default_list_limit, 1, 50]


def test_submit_invalidates_only_that_user(spy_svc: StressLogService, spy_repo: MagicMock) -> None:
    spy_svc.list_recent("alice", 30)
    spy_svc.analytics("alice")
    spy_svc.list_recent("bob", 30)
    spy_svc.submit(_log(user_id="alice"))

    assert len(spy_svc.list_recent("alice", 30)) == 1
    assert spy_svc.analytics("alice")["averageMood"] == 5.0
    spy_svc.list_recent("bob", 30)
    # alice: list+analytics twice each; bob: once
    assert spy_repo.fetch_recent.call_count == 5


def test_analytics_samples_recent_window(svc: StressLogService, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "analytics_window", 3)
    for mood in [1, 2, 9, 9, 9]:
        svc.submit(_log(mood=mood))
    summary = svc.analytics("demo_user")
    assert summary["averageMood"] == 9.0
    assert len(summary["trendData"]) == 3


def test_analytics_for_unknown_user_is_zeroed(svc: StressLogService) -> None:
    assert svc.analytics("nobody") == {
        "averageMood": 0,
        "averageSleep": 0,
        "mostCommonTrigger": "None",
        "trendData": [],
    }


def test_analytics_cached(spy_svc: StressLogService, spy_repo: MagicMock) -> None:
    spy_svc.analytics("demo_user")
    spy_svc.analytics("demo_user")
    assert spy_repo.fetch_recent.call_count == 1


def test_reset_all_clears_every_user_and_cache(svc: StressLogService) -> None:
    svc.submit(_log(user_id="alice"))
    svc.submit(_log(user_id="bob"))
    svc.submit(_log(user_id="bob"))
    assert len(svc.list_recent("bob", 30)) == 2

    assert svc.reset_all() == {"message": RESET_MESSAGE, "deletedRecords": 3}
    assert svc.list_recent("alice", 30) == []
    assert svc.list_recent("bob", 30) == []


def test_analytics_refetches_after_ttl(
    spy_svc: StressLogService, spy_repo: MagicMock, clock: FakeClock
) -> None:
    spy_svc.analytics("demo_user")
    clock.advance(299)
    spy_svc.analytics("demo_user")
    assert spy_repo.fetch_recent.call_count == 1
    clock.advance(2)
    spy_svc.analytics("demo_user")
    assert spy_repo.fetch_recent.call_count == 2

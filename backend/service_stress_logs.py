"""
Service / facade layer.

This module implements the business rules around stress logs. It is free of
SQL: it calls `StressLogRepo` for storage, `suggestions.suggest` for advice
and `analytics.summarize` for the rolling summary, and owns the response
cache that sits in front of the read paths.

Key responsibilities:
- assign `id`, `timestamp` and `date` from a single captured instant
- compute suggestions from the submitted (not stored) values
- serve list/analytics reads through the cache
- invalidate a user's cached reads after they submit, and everything on reset
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

import structlog

from analytics import summarize
from cache import ResponseCache
from models import StressLogIn
from repo_stress_logs import StressLogRepo
from settings import settings
from suggestions import suggest

logger = structlog.get_logger(__name__)

SAVED_MESSAGE = "Stress log saved successfully"
RESET_MESSAGE = "Database reset successfully"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def logs_cache_key(user_id: str, limit: int) -> str:
    return f"stress-logs-{user_id}-{limit}"


def analytics_cache_key(user_id: str) -> str:
    return f"analytics-{user_id}"


class StressLogService:
    """Business rules + caching for the stress log API.

    Example usage:
        svc = StressLogService(StressLogRepo(), ResponseCache(ttl_seconds=300))
        svc.submit(StressLogIn(user_id="demo_user", mood=7, sleep_hours=6.5))
    """

    def __init__(
        self,
        repo: StressLogRepo,
        cache: Optional[ResponseCache] = None,
        now: Callable[[], datetime] = _utcnow,
    ):
        self.repo = repo
        self.cache = cache if cache is not None else ResponseCache(settings.cache_ttl_seconds)
        self._now = now

    def startup(self) -> None:
        self.repo.create_table()

    def submit(self, log: StressLogIn) -> Dict[str, Any]:
        """Persist one entry and return its id plus suggestions."""

        instant = self._now()
        entry = log.model_dump()
        entry["id"] = str(uuid.uuid4())
        entry["timestamp"] = int(instant.timestamp())
        entry["date"] = instant.date().isoformat()

        log_id = self.repo.insert_log(entry)
        self._invalidate_user(log.user_id)
        logger.info("stress_log_saved", user_id=log.user_id, log_id=log_id, mood=log.mood)

        return {
            "id": log_id,
            "suggestions": suggest(log.mood, log.sleep_hours, log.work_hours),
            "message": SAVED_MESSAGE,
        }

    def list_recent(self, user_id: str, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        """Return up to `limit` entries newest-first, capped by settings."""

        if limit is None:
            limit = settings.default_list_limit
        limit = max(1, min(limit, settings.max_list_limit))

        key = logs_cache_key(user_id, limit)
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug("cache_hit", key=key)
            return cached

        rows = self.repo.fetch_recent(user_id, limit)
        self.cache.set(key, rows)
        return rows

    def analytics(self, user_id: str) -> Dict[str, Any]:
        """Summary over the user's most recent `settings.analytics_window` entries."""

        key = analytics_cache_key(user_id)
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug("cache_hit", key=key)
            return cached

        rows = self.repo.fetch_recent(user_id, settings.analytics_window)
        summary = summarize(rows)
        self.cache.set(key, summary)
        return summary

    def reset_all(self) -> Dict[str, Any]:
        """Delete every entry for every user."""

        deleted = self.repo.delete_all()
        self.cache.clear()
        logger.warning("database_reset", deleted=deleted)
        return {"message": RESET_MESSAGE, "deletedRecords": deleted}

    def health_check(self) -> None:
        self.repo.ping()

    def _invalidate_user(self, user_id: str) -> None:
        self.cache.invalidate_prefix(f"stress-logs-{user_id}-")
        self.cache.invalidate_prefix(analytics_cache_key(user_id))

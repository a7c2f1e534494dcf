"""
In-process response cache with a fixed time-to-live.

Entries are never evicted proactively: an expired entry is dropped the next
time its key is looked up. There is no size cap, so key churn grows the dict
until the process exits.

Route handlers run in FastAPI's threadpool, so the dict is guarded by a lock.
"""

import threading
import time
from typing import Any, Callable, Dict, Optional, Tuple

import structlog

logger = structlog.get_logger(__name__)


class ResponseCache:
    """key -> (value, stored_at) with lazy expiry.

    `clock` returns seconds; tests pass a fake one to step over the TTL.
    Cached values must not be `None`, since `get()` uses `None` for a miss.
    """

    def __init__(self, ttl_seconds: float = 300.0, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[str, Tuple[Any, float]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            cached = self._entries.get(key)
            if cached is None:
                return None
            value, stored_at = cached
            if self._clock() - stored_at < self.ttl_seconds:
                return value
            del self._entries[key]
        logger.debug("cache_expired", key=key)
        return None

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._entries[key] = (value, self._clock())

    def invalidate_prefix(self, prefix: str) -> int:
        """Drop every key starting with `prefix`. Returns how many went."""

        with self._lock:
            stale = [k for k in self._entries if k.startswith(prefix)]
            for k in stale:
                del self._entries[k]
        return len(stale)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

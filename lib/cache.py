# =============================================================================
# lib/cache.py - Time-Bounded In-Memory Cache
# =============================================================================
# A small key/value store where every entry expires after a fixed TTL.
#
# Expired entries are evicted lazily: nothing sweeps in the background, a
# stale entry is simply dropped the next time someone asks for it.
#
# Usage:
#   from lib.cache import TTLCache
#   cache = TTLCache(ttl_seconds=300)
#   cache.set("websites", websites)
#   cache.get("websites")  # -> websites, or None once 5 minutes have passed
# =============================================================================

import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable

logger = logging.getLogger(__name__)

# Default TTL: 5 minutes
DEFAULT_TTL_SECONDS = 300.0


@dataclass(frozen=True)
class CacheEntry:
    """A cached value and the clock reading taken when it was stored."""
    value: Any
    inserted_at: float


class TTLCache:
    """
    Thread-safe key/value cache with per-entry expiry.

    An entry is valid while `now - inserted_at < ttl`. The clock is
    injectable so tests can move time forward without sleeping.

    Example:
        clock = FakeClock()
        cache = TTLCache(ttl_seconds=10, clock=clock)
        cache.set("k", 1)
        clock.advance(11)
        cache.get("k")  # -> None
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        if ttl_seconds <= 0:
            raise ValueError(f"ttl_seconds must be positive, got {ttl_seconds}")
        self._ttl = float(ttl_seconds)
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    def _is_fresh(self, entry: CacheEntry) -> bool:
        return self._clock() - entry.inserted_at < self._ttl

    def get(self, key: str) -> Any | None:
        """
        Get a cached value.

        Returns None when the key is absent or its entry has expired.
        Expired entries are removed as a side effect.
        """
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None

            if not self._is_fresh(entry):
                del self._entries[key]
                logger.debug(f"Cache entry expired: {key}")
                return None

            return entry.value

    def set(self, key: str, value: Any) -> None:
        """Store a value, resetting its insertion time."""
        with self._lock:
            self._entries[key] = CacheEntry(value=value, inserted_at=self._clock())

    def delete(self, key: str) -> bool:
        """Drop a single key. Returns True if something was removed."""
        with self._lock:
            return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        """Remove every entry."""
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
        logger.info(f"Cache cleared ({count} entries)")

    def stats(self) -> dict[str, Any]:
        """
        Report what the cache currently holds.

        Counts stored entries, including ones that have expired but have
        not been looked up since.
        """
        with self._lock:
            keys = list(self._entries.keys())
        return {"size": len(keys), "keys": keys}

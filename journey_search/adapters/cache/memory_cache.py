"""Thread-safe in-memory cache for directory groupings.

The location service keeps the fetched city/station groupings here
between index rebuilds. An entry's TTL bounds how stale the directory
may get; ``invalidate`` forces the next build to refetch. The clock is
injectable so expiry can be driven from tests.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Generic, NamedTuple, Optional, TypeVar

T = TypeVar("T")

Clock = Callable[[], float]


class _Entry(NamedTuple):
    value: Any
    expires_at: float

    def expired(self, now: float) -> bool:
        return now > self.expires_at


@dataclass
class InMemoryCache(Generic[T]):
    """CachePort kept in a dict, guarded by a lock.

    Attributes:
        default_ttl_seconds: Lifetime of an entry, None to keep it until
            invalidated
        name: Suffix of the cache's logger name
        clock: Monotonic time source in seconds

    Example:
        cache = InMemoryCache[LocationGroups](name="directory", default_ttl_seconds=3600)
        groups = cache.get_or_compute("location_groups", directory.fetch_location_groups)
    """

    default_ttl_seconds: Optional[float] = None
    name: str = "cache"
    clock: Clock = field(default=time.monotonic, repr=False)

    _entries: Dict[str, _Entry] = field(default_factory=dict, init=False, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, init=False, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(f"{__name__}.{self.name}")

    def _lookup(self, key: str) -> Optional[_Entry]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None and entry.expired(self.clock()):
                del self._entries[key]
                self._logger.debug("Cached entry expired", extra={"key": key})
                return None
            return entry

    def set(self, key: str, value: T, ttl: Optional[float] = None) -> None:
        """Store ``value`` under ``key``.

        Args:
            key: Cache key.
            value: Value to keep.
            ttl: Lifetime for this entry, overriding the default.
        """
        lifetime = self.default_ttl_seconds if ttl is None else ttl
        expires_at = float("inf") if lifetime is None else self.clock() + lifetime
        with self._lock:
            self._entries[key] = _Entry(value, expires_at)
        self._logger.debug("Cached entry stored", extra={"key": key, "ttl": lifetime})

    def get_or_compute(self, key: str, compute_fn: Callable[[], T]) -> T:
        """Cached value for ``key``, or the result of ``compute_fn`` stored under it.

        ``compute_fn`` runs outside the lock; a directory fetch may be slow.
        """
        entry = self._lookup(key)
        if entry is not None:
            self._logger.debug("Cache hit", extra={"key": key})
            return entry.value

        self._logger.debug("Cache miss, fetching", extra={"key": key})
        value = compute_fn()
        self.set(key, value)
        return value

    def invalidate(self, key: str) -> bool:
        with self._lock:
            removed = self._entries.pop(key, None) is not None
        if removed:
            self._logger.debug("Cached entry invalidated", extra={"key": key})
        return removed

"""Cache port - where the location service keeps fetched groupings.

The directory is slow and changes rarely, so the city/station groupings
are fetched once and reused for every index rebuild until the entry
expires or is invalidated.
"""

from __future__ import annotations

from typing import Callable, Protocol, TypeVar

T = TypeVar("T")


class CachePort(Protocol[T]):
    """Keyed store for directory groupings.

    Implementations:
    - adapters/cache/memory_cache.py (InMemoryCache) - TTL-bounded
    - adapters/cache/null_cache.py (NullCache) - refetch on every build
    """

    def get_or_compute(self, key: str, compute_fn: Callable[[], T]) -> T:
        """Stored value for ``key``, fetching it with ``compute_fn`` when absent.

        Errors raised by ``compute_fn`` propagate and nothing is stored.
        """
        ...

    def invalidate(self, key: str) -> bool:
        """Drop ``key`` so the next lookup fetches again.

        Returns:
            True if an entry was dropped.
        """
        ...

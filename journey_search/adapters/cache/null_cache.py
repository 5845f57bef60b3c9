"""Null cache - never stores anything.

Every index build refetches the directory, e.g. in tests that count
directory calls.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

T = TypeVar("T")


@dataclass
class NullCache(Generic[T]):
    """CachePort that always fetches."""

    def get_or_compute(self, key: str, compute_fn: Callable[[], T]) -> T:
        return compute_fn()

    def invalidate(self, key: str) -> bool:
        return False

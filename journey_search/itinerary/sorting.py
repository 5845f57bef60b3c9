"""Stable ordering of itineraries by departure, travel time or price."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, List, Sequence, Union

from ..domain.models import Itinerary, SortKey

SortValue = Union[datetime, int, float]


def _departure(item: Itinerary) -> datetime:
    # Transfer itineraries expose the first leg's departure.
    return item.departure_time


def _travel_time(item: Itinerary) -> int:
    # Transfer: first leg + layover + second leg.
    return item.travel_time


def _price(item: Itinerary) -> float:
    # Transfer: first leg + second leg.
    return item.price


SORT_KEYS: Dict[SortKey, Callable[[Itinerary], SortValue]] = {
    SortKey.DEPARTURE_TIME: _departure,
    SortKey.TRAVEL_TIME: _travel_time,
    SortKey.PRICE: _price,
}


def sort_itineraries(
    results: Sequence[Itinerary],
    key: SortKey = SortKey.DEPARTURE_TIME,
    ascending: bool = True,
) -> List[Itinerary]:
    """Order itineraries by ``key``.

    The sort is stable in both directions: itineraries with equal keys
    keep their relative order whether ascending or descending.
    """
    return sorted(results, key=SORT_KEYS[key], reverse=not ascending)


@dataclass
class SortState:
    """Which key the list is ordered by, and in which direction."""

    key: SortKey = SortKey.DEPARTURE_TIME
    ascending: bool = True

    def toggle(self, key: SortKey) -> None:
        """Select ``key``; selecting the current key flips the direction."""
        if key is self.key:
            self.ascending = not self.ascending
        else:
            self.key = key
            self.ascending = True

    def apply(self, results: Sequence[Itinerary]) -> List[Itinerary]:
        return sort_itineraries(results, self.key, self.ascending)

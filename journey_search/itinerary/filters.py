"""Ordered, composable predicates over direct and transfer itineraries.

Each step keeps or drops an itinerary on its own (logical AND across
steps) and never reorders. The steps run in a fixed sequence:

1. availability (only when enabled)
2. train type
3. seat type
4. departure station
5. transfer station (transfer mode only)
6. arrival station
7. departure time window
8. arrival time window

A facet step is skipped when every option of its group is checked, or
while the group still holds the loading placeholder.

Time windows compare clock minutes only. A journey that leaves at 23:00
and arrives at 01:00 the next day has an arrival of minute 60.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence, Tuple

from ..domain.models import (
    DirectItinerary,
    Itinerary,
    QueryMode,
    TimeWindow,
    TransferItinerary,
)
from .facets import LOADING_PLACEHOLDER, FacetGroup, FacetSet
from .train_types import OTHER_LABEL, classify_itinerary

logger = logging.getLogger(__name__)

Predicate = Callable[[Itinerary], bool]


@dataclass
class FilterCriteria:
    """User-controlled narrowing of a result batch.

    Attributes:
        facets: Checkbox groups
        mode: Query mode of the batch being filtered
        available_only: Hide itineraries that cannot be booked
        departure_window: Allowed clock time of the first departure
        arrival_window: Allowed clock time of the final arrival
        placeholder: Option value marking a group that is still loading
        other_label: Train-type label for trains outside every bucket
    """

    facets: FacetSet = field(default_factory=FacetSet)
    mode: QueryMode = QueryMode.DIRECT
    available_only: bool = False
    departure_window: TimeWindow = field(default_factory=TimeWindow)
    arrival_window: TimeWindow = field(default_factory=TimeWindow)
    placeholder: str = LOADING_PLACEHOLDER
    other_label: str = OTHER_LABEL


def _legs(item: Itinerary) -> Tuple[DirectItinerary, ...]:
    if isinstance(item, TransferItinerary):
        return (item.first_leg, item.second_leg)
    if isinstance(item, DirectItinerary):
        return (item,)
    raise TypeError(f"Unsupported itinerary type: {type(item).__name__}")


def _first_leg(item: Itinerary) -> DirectItinerary:
    return _legs(item)[0]


def _last_leg(item: Itinerary) -> DirectItinerary:
    return _legs(item)[-1]


def is_available(item: Itinerary) -> bool:
    """Bookable: every leg has at least one seat class with seats left."""
    return all(leg.has_available_seat for leg in _legs(item))


def offers_seat_type(item: Itinerary, checked: Sequence[str]) -> bool:
    """Any leg exposes any checked seat class."""
    wanted = set(checked)
    return any(seat_type in wanted for leg in _legs(item) for seat_type in leg.seats)


def _facet_active(group: Optional[FacetGroup], placeholder: str) -> bool:
    if group is None or group.is_unfiltered:
        return False
    return placeholder not in group.checked


def _station_predicate(
    group: FacetGroup, station_of: Callable[[Itinerary], str]
) -> Predicate:
    checked = set(group.checked)
    return lambda item: station_of(item) in checked


def build_predicates(criteria: FilterCriteria) -> List[Tuple[str, Predicate]]:
    """Named predicates for the active steps, in pipeline order."""
    facets = criteria.facets
    steps: List[Tuple[str, Predicate]] = []

    if criteria.available_only:
        steps.append(("availability", is_available))

    if _facet_active(facets.train_types, criteria.placeholder):
        train_checked = set(facets.train_types.checked)
        other_label = criteria.other_label
        steps.append(
            (
                "train_type",
                lambda item: classify_itinerary(item, other_label) in train_checked,
            )
        )

    if _facet_active(facets.seat_types, criteria.placeholder):
        seat_checked = list(facets.seat_types.checked)
        steps.append(("seat_type", lambda item: offers_seat_type(item, seat_checked)))

    if _facet_active(facets.departure_stations, criteria.placeholder):
        steps.append(
            (
                "departure_station",
                _station_predicate(
                    facets.departure_stations,
                    lambda item: _first_leg(item).departure_station,
                ),
            )
        )

    if criteria.mode is QueryMode.TRANSFER and facets.transfer_stations is not None:
        if _facet_active(facets.transfer_stations, criteria.placeholder):
            steps.append(
                (
                    "transfer_station",
                    _station_predicate(
                        facets.transfer_stations,
                        lambda item: _last_leg(item).departure_station,
                    ),
                )
            )

    if _facet_active(facets.arrival_stations, criteria.placeholder):
        steps.append(
            (
                "arrival_station",
                _station_predicate(
                    facets.arrival_stations,
                    lambda item: _last_leg(item).arrival_station,
                ),
            )
        )

    departure_window = criteria.departure_window
    steps.append(
        (
            "departure_window",
            lambda item: departure_window.contains(_first_leg(item).departure_time),
        )
    )
    arrival_window = criteria.arrival_window
    steps.append(
        (
            "arrival_window",
            lambda item: arrival_window.contains(_last_leg(item).arrival_time),
        )
    )
    return steps


def apply_filters(
    results: Sequence[Itinerary], criteria: FilterCriteria
) -> List[Itinerary]:
    """Run every active step over ``results``.

    Args:
        results: Itineraries of one batch, all of the criteria's mode.
        criteria: Facet selections, availability toggle and time windows.

    Returns:
        The retained itineraries in their original relative order.
    """
    filtered = list(results)
    for name, predicate in build_predicates(criteria):
        before = len(filtered)
        filtered = [item for item in filtered if predicate(item)]
        if len(filtered) != before:
            logger.debug(
                "Filter step applied",
                extra={"step": name, "before": before, "after": len(filtered)},
            )
    return filtered

"""Facet groups and their extraction from a result batch.

A facet group is a checkbox list: the options come from the current
batch of itineraries and the user narrows the checked subset. Every new
batch rebuilds the groups from scratch with everything checked; earlier
narrowing is discarded.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional, Sequence

from ..domain.models import DirectItinerary, Itinerary, QueryMode, TransferItinerary
from .train_types import OTHER_LABEL, train_type_labels

logger = logging.getLogger(__name__)

LOADING_PLACEHOLDER = "加载中..."


@dataclass
class FacetGroup:
    """One filter dimension.

    ``check_all`` is derived from ``checked`` and ``options``, so it holds
    after every toggle and every reset.

    Attributes:
        options: Available values, codepoint order for extracted facets
        checked: Currently selected values, kept in option order
    """

    options: List[str] = field(default_factory=list)
    checked: List[str] = field(default_factory=list)

    @classmethod
    def all_checked(cls, options: Iterable[str]) -> FacetGroup:
        options = list(options)
        return cls(options=options, checked=list(options))

    @classmethod
    def loading(cls, placeholder: str = LOADING_PLACEHOLDER) -> FacetGroup:
        """Group shown before the first batch arrives."""
        return cls.all_checked([placeholder])

    @property
    def check_all(self) -> bool:
        return len(self.checked) == len(self.options)

    @property
    def indeterminate(self) -> bool:
        return 0 < len(self.checked) < len(self.options)

    @property
    def is_unfiltered(self) -> bool:
        """True when every option is checked, so the facet excludes nothing."""
        return set(self.checked) == set(self.options)

    def is_checked(self, option: str) -> bool:
        return option in self.checked

    def set_checked(self, values: Iterable[str]) -> None:
        """Replace the selection; unknown values are ignored."""
        wanted = set(values)
        self.checked = [option for option in self.options if option in wanted]

    def toggle(self, option: str) -> None:
        """Check or uncheck a single option."""
        if option not in self.options:
            raise KeyError(f"Unknown facet option: {option}")
        if option in self.checked:
            self.set_checked(value for value in self.checked if value != option)
        else:
            self.set_checked([*self.checked, option])

    def toggle_all(self) -> None:
        """Flip the check-all box: everything or nothing."""
        self.checked = [] if self.check_all else list(self.options)


@dataclass
class FacetSet:
    """Every facet group the result list can be narrowed by.

    Attributes:
        train_types: Static train-type buckets
        seat_types: Seat classes offered by the batch
        departure_stations: Boarding stations (first leg for transfers)
        transfer_stations: Transfer points; None in direct mode
        arrival_stations: Alighting stations (second leg for transfers)
    """

    train_types: FacetGroup = field(
        default_factory=lambda: FacetGroup.all_checked(train_type_labels())
    )
    seat_types: FacetGroup = field(default_factory=FacetGroup.loading)
    departure_stations: FacetGroup = field(default_factory=FacetGroup.loading)
    transfer_stations: Optional[FacetGroup] = field(default_factory=FacetGroup.loading)
    arrival_stations: FacetGroup = field(default_factory=FacetGroup.loading)

    @classmethod
    def initial(
        cls,
        placeholder: str = LOADING_PLACEHOLDER,
        other_label: str = OTHER_LABEL,
    ) -> FacetSet:
        """Facets before any query: static train types, loading placeholders."""
        return cls(
            train_types=FacetGroup.all_checked(train_type_labels(other_label)),
            seat_types=FacetGroup.loading(placeholder),
            departure_stations=FacetGroup.loading(placeholder),
            transfer_stations=FacetGroup.loading(placeholder),
            arrival_stations=FacetGroup.loading(placeholder),
        )


def _sorted_unique(values: Iterable[str]) -> List[str]:
    return sorted(set(values))


def _seat_types(leg: DirectItinerary) -> List[str]:
    return list(leg.seats.keys()) if leg.seats else []


def _collect(
    results: Sequence[Itinerary],
    mode: QueryMode,
    direct_fn: Callable[[DirectItinerary], List[str]],
    transfer_fn: Callable[[TransferItinerary], List[str]],
) -> List[str]:
    values: List[str] = []
    for item in results:
        if mode is QueryMode.DIRECT and isinstance(item, DirectItinerary):
            values.extend(direct_fn(item))
        elif mode is QueryMode.TRANSFER and isinstance(item, TransferItinerary):
            values.extend(transfer_fn(item))
        else:
            logger.warning(
                "Itinerary does not match query mode, skipped for facets",
                extra={"mode": mode.value, "type": type(item).__name__},
            )
    return _sorted_unique(value for value in values if value)


def extract_facets(
    results: Sequence[Itinerary],
    mode: QueryMode,
    train_types: Optional[FacetGroup] = None,
) -> FacetSet:
    """Build fresh facet groups from a result batch.

    Args:
        results: The batch returned by the schedule query.
        mode: Query mode the batch was requested with.
        train_types: Train-type group to carry over; it is not derived
            from the batch. Defaults to all buckets checked.

    Returns:
        A FacetSet whose extracted groups have every option checked.
    """
    seat_types = _collect(
        results,
        mode,
        _seat_types,
        lambda item: _seat_types(item.first_leg) + _seat_types(item.second_leg),
    )
    departures = _collect(
        results,
        mode,
        lambda item: [item.departure_station],
        lambda item: [item.first_leg.departure_station],
    )
    arrivals = _collect(
        results,
        mode,
        lambda item: [item.arrival_station],
        lambda item: [item.second_leg.arrival_station],
    )
    transfers: Optional[FacetGroup] = None
    if mode is QueryMode.TRANSFER:
        transfers = FacetGroup.all_checked(
            _collect(results, mode, lambda item: [], lambda item: [item.transfer_station])
        )

    facets = FacetSet(
        train_types=(
            FacetGroup(list(train_types.options), list(train_types.checked))
            if train_types is not None
            else FacetGroup.all_checked(train_type_labels())
        ),
        seat_types=FacetGroup.all_checked(seat_types),
        departure_stations=FacetGroup.all_checked(departures),
        transfer_stations=transfers,
        arrival_stations=FacetGroup.all_checked(arrivals),
    )
    logger.debug(
        "Facets extracted",
        extra={
            "mode": mode.value,
            "results": len(results),
            "seat_types": len(seat_types),
            "departure_stations": len(departures),
            "arrival_stations": len(arrivals),
        },
    )
    return facets

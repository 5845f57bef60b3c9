"""Search session - query state, facets, filters and ordering.

One session per UI session. It builds the query from user input,
issues the remote search, rebuilds the facets from each successful
batch and produces the displayed list (filtered, then sorted).

Responses are applied in the order they resolve, so a slow earlier
query can overwrite a faster later one. Each query carries a ticket
with a generation number; with ``drop_stale_responses`` enabled a
response older than the newest applied one is dropped, and
``cancel_pending`` makes every in-flight ticket stale.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import List, Optional, Sequence

from ..config import SearchConfig, get_config
from ..domain.errors import (
    JourneySearchError,
    QueryValidationError,
    ScheduleQueryError,
)
from ..domain.models import (
    Itinerary,
    QueryMode,
    ScheduleCriteria,
    SortKey,
    TimeWindow,
)
from ..itinerary.facets import FacetGroup, FacetSet, extract_facets
from ..itinerary.filters import FilterCriteria, apply_filters
from ..itinerary.sorting import SortState
from ..ports.schedule import ScheduleQueryPort
from .location_service import LocationService

FACET_NAMES = (
    "train_types",
    "seat_types",
    "departure_stations",
    "transfer_stations",
    "arrival_stations",
)


@dataclass(frozen=True)
class QueryTicket:
    """Handle for one in-flight schedule query."""

    generation: int
    criteria: ScheduleCriteria


@dataclass(frozen=True)
class SearchOutcome:
    """What the UI shows after a search attempt.

    Attributes:
        ok: Whether the search succeeded
        message: User-facing notice
        results: Displayed itineraries (previous ones on failure)
        retryable: Whether the user may simply try again
        suggestions: Corrections for an unresolved location
    """

    ok: bool
    message: str
    results: tuple[Itinerary, ...] = ()
    retryable: bool = False
    suggestions: tuple[str, ...] = ()


def booking_dates(days: int = 14, start: Optional[date] = None) -> List[date]:
    """Dates offered in the date picker, starting today."""
    start = start or date.today()
    return [start + timedelta(days=offset) for offset in range(days)]


@dataclass
class SearchSession:
    """Owns the query inputs, the latest result batch and the view state.

    Attributes:
        schedule: Remote schedule search
        locations: Location resolution for the query inputs
        config: Search configuration
    """

    schedule: ScheduleQueryPort
    locations: LocationService
    config: SearchConfig = field(default_factory=lambda: get_config().search)

    # Query inputs
    departure_date: Optional[date] = field(default_factory=date.today)
    departure_text: str = ""
    arrival_text: str = ""
    mode: QueryMode = QueryMode.DIRECT

    # View state
    available_only: bool = False
    departure_window: TimeWindow = field(default_factory=TimeWindow)
    arrival_window: TimeWindow = field(default_factory=TimeWindow)
    sort: SortState = field(default_factory=SortState)

    _results: List[Itinerary] = field(default_factory=list, init=False, repr=False)
    _results_mode: QueryMode = field(default=QueryMode.DIRECT, init=False, repr=False)
    _facets: FacetSet = field(init=False, repr=False)
    _issued: int = field(default=0, init=False, repr=False)
    _applied: int = field(default=0, init=False, repr=False)
    _cancelled_below: int = field(default=0, init=False, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)
        self._facets = FacetSet.initial(
            self.config.loading_placeholder, self.config.other_train_type_label
        )

    # -------------------- results and facets --------------------

    @property
    def results(self) -> List[Itinerary]:
        """Latest applied batch, unfiltered."""
        return list(self._results)

    @property
    def results_mode(self) -> QueryMode:
        return self._results_mode

    @property
    def facets(self) -> FacetSet:
        return self._facets

    def facet(self, name: str) -> FacetGroup:
        """Facet group by attribute name (e.g. 'seat_types')."""
        if name not in FACET_NAMES:
            raise KeyError(f"Unknown facet: {name}")
        group = getattr(self._facets, name)
        if group is None:
            raise KeyError(f"Facet {name} is not available in {self._results_mode.value} mode")
        return group

    def toggle_facet(self, name: str, option: str) -> None:
        self.facet(name).toggle(option)

    def toggle_all(self, name: str) -> None:
        self.facet(name).toggle_all()

    # -------------------- time windows and sorting --------------------

    def set_departure_window(self, window: TimeWindow) -> None:
        self.departure_window = window

    def set_arrival_window(self, window: TimeWindow) -> None:
        self.arrival_window = window

    def reset_time_windows(self) -> None:
        self.departure_window = TimeWindow()
        self.arrival_window = TimeWindow()

    def toggle_sort(self, key: SortKey) -> None:
        self.sort.toggle(key)

    # -------------------- display --------------------

    def filter_criteria(self) -> FilterCriteria:
        return FilterCriteria(
            facets=self._facets,
            mode=self._results_mode,
            available_only=self.available_only,
            departure_window=self.departure_window,
            arrival_window=self.arrival_window,
            placeholder=self.config.loading_placeholder,
            other_label=self.config.other_train_type_label,
        )

    def display(self) -> List[Itinerary]:
        """The filtered, ordered list shown to the user."""
        filtered = apply_filters(self._results, self.filter_criteria())
        return self.sort.apply(filtered)

    # -------------------- querying --------------------

    def build_criteria(self) -> ScheduleCriteria:
        """Validate the query inputs and resolve both locations.

        Raises:
            QueryValidationError: If the date or a location is missing,
                or a location does not resolve.
        """
        if self.departure_date is None:
            raise QueryValidationError("Departure date is required", field_name="departure_date")
        if not self.departure_text.strip() or not self.arrival_text.strip():
            raise QueryValidationError(
                "Departure and arrival locations are required",
                field_name="departure" if not self.departure_text.strip() else "arrival",
            )
        origin = self.locations.require(self.departure_text, "departure")
        destination = self.locations.require(self.arrival_text, "arrival")
        return ScheduleCriteria(
            departure_date=self.departure_date,
            origin=origin,
            destination=destination,
            mode=self.mode,
        )

    def begin_query(self, criteria: ScheduleCriteria) -> QueryTicket:
        """Register an in-flight query and return its ticket."""
        self._issued += 1
        return QueryTicket(generation=self._issued, criteria=criteria)

    def is_stale(self, ticket: QueryTicket) -> bool:
        if ticket.generation < self._cancelled_below:
            return True
        return self.config.drop_stale_responses and ticket.generation < self._applied

    def complete_query(self, ticket: QueryTicket, results: Sequence[Itinerary]) -> bool:
        """Apply a successful response.

        Replaces the result batch and rebuilds every extracted facet
        group with all options checked. The train-type selection is kept.

        Returns:
            False if the response was dropped as stale.
        """
        if self.is_stale(ticket):
            self._logger.info(
                "Stale schedule response dropped",
                extra={"generation": ticket.generation, "applied": self._applied},
            )
            return False

        mode = ticket.criteria.mode
        self._results = list(results)
        self._results_mode = mode
        self._facets = extract_facets(self._results, mode, train_types=self._facets.train_types)
        self._applied = max(self._applied, ticket.generation)
        self._logger.info(
            "Schedule response applied",
            extra={
                "generation": ticket.generation,
                "mode": mode.value,
                "results": len(self._results),
            },
        )
        return True

    def cancel_pending(self) -> None:
        """Make every ticket issued so far stale."""
        self._cancelled_below = self._issued + 1

    def search(self) -> List[Itinerary]:
        """Validate, query and apply; returns the displayed list.

        On failure the previous results and facets are left untouched.

        Raises:
            QueryValidationError: If the inputs are invalid.
            DirectoryError: If the location indexes cannot be built.
            ScheduleQueryError: If the remote search fails.
        """
        criteria = self.build_criteria()
        ticket = self.begin_query(criteria)
        self._logger.info(
            "Schedule query issued",
            extra={
                "generation": ticket.generation,
                "date": criteria.departure_date.isoformat(),
                "origin": criteria.origin.canonical,
                "destination": criteria.destination.canonical,
                "mode": criteria.mode.value,
            },
        )
        results = self.schedule.query_itineraries(criteria)
        self.complete_query(ticket, results)
        return self.display()

    def search_safe(self) -> SearchOutcome:
        """Run ``search`` and turn every error into a user-facing outcome."""
        try:
            results = self.search()
            return SearchOutcome(ok=True, message="Search succeeded", results=tuple(results))
        except QueryValidationError as e:
            return SearchOutcome(
                ok=False,
                message=e.message,
                results=tuple(self.display()),
                suggestions=e.suggestions,
            )
        except ScheduleQueryError as e:
            self._logger.warning(
                "Schedule query failed",
                extra={"status_code": e.status_code, "error": str(e)},
            )
            message = f"Search failed: {e.message}"
            if e.retryable:
                message += ", please try again"
            return SearchOutcome(
                ok=False,
                message=message,
                results=tuple(self.display()),
                retryable=e.retryable,
            )
        except JourneySearchError as e:
            self._logger.warning("Search failed", extra={"error": str(e)})
            return SearchOutcome(
                ok=False,
                message=f"Search failed: {e.message}",
                results=tuple(self.display()),
                retryable=True,
            )

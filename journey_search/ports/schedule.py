"""Schedule port - The remote itinerary search."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, Sequence

if TYPE_CHECKING:
    from ..domain.models import Itinerary, ScheduleCriteria


class ScheduleQueryPort(Protocol):
    """Port for the remote schedule search.

    Implementation: adapters/api/schedule_adapter.py

    The search itself happens remotely; this core only filters and
    orders what comes back.
    """

    def query_itineraries(self, criteria: ScheduleCriteria) -> Sequence[Itinerary]:
        """Search itineraries for a date, origin and destination.

        Args:
            criteria: Date, resolved origin/destination and query mode.

        Returns:
            DirectItinerary items in direct mode, TransferItinerary items
            in transfer mode. May be empty.

        Raises:
            ScheduleQueryError: On network failure, timeout or a
                non-success status code.
        """
        ...

"""Services layer - Application orchestration.

Available services:
- LocationService: location indexes, resolution and autocomplete
- SearchSession: query state, facets, filtering and ordering
"""

from .location_service import LocationService
from .search_session import QueryTicket, SearchOutcome, SearchSession, booking_dates

__all__ = [
    "LocationService",
    "SearchSession",
    "SearchOutcome",
    "QueryTicket",
    "booking_dates",
]

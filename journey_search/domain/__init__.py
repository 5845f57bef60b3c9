"""Domain layer - Core models and errors.

This module contains the immutable domain models and typed errors
used throughout the package. No external dependencies.
"""

from .errors import (
    ConfigurationError,
    DirectoryError,
    JourneySearchError,
    QueryValidationError,
    ScheduleQueryError,
)
from .models import (
    DirectItinerary,
    Itinerary,
    LocationGroups,
    LocationKind,
    LocationToken,
    NameGroup,
    QueryMode,
    ScheduleCriteria,
    SeatInfo,
    SortKey,
    StopInfo,
    TimeWindow,
    TransferItinerary,
)

__all__ = [
    # Models
    "NameGroup",
    "LocationGroups",
    "LocationKind",
    "LocationToken",
    "SeatInfo",
    "StopInfo",
    "DirectItinerary",
    "TransferItinerary",
    "Itinerary",
    "TimeWindow",
    "QueryMode",
    "SortKey",
    "ScheduleCriteria",
    # Errors
    "JourneySearchError",
    "DirectoryError",
    "ScheduleQueryError",
    "QueryValidationError",
    "ConfigurationError",
]

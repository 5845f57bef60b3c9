"""Typed domain errors for the journey search core.

All errors inherit from JourneySearchError and can optionally wrap a
root cause exception for debugging. None of them is fatal: callers
recover at the call site, usually by showing a message.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class JourneySearchError(Exception):
    """Base error for the journey search domain.

    Attributes:
        message: Human-readable error description
        cause: Optional underlying exception that caused this error
    """

    message: str
    cause: Optional[Exception] = field(default=None, repr=False)

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class DirectoryError(JourneySearchError):
    """Failed to fetch city/station groupings.

    Attributes:
        endpoint: The directory endpoint that failed
    """

    endpoint: str = ""


@dataclass
class ScheduleQueryError(JourneySearchError):
    """The remote schedule search failed.

    Attributes:
        status_code: Application or HTTP status code, if one was returned
        retryable: Whether asking again may succeed (network, timeout)
    """

    status_code: Optional[int] = None
    retryable: bool = True


@dataclass
class QueryValidationError(JourneySearchError):
    """The user's query is incomplete or names an unknown location.

    Attributes:
        field_name: The query field that failed validation
        suggestions: Close matches to offer the user
    """

    field_name: str = ""
    suggestions: tuple[str, ...] = ()


@dataclass
class ConfigurationError(JourneySearchError):
    """Invalid or missing configuration.

    Attributes:
        setting_name: Name of the problematic setting
        expected_type: Expected type or format
    """

    setting_name: str = ""
    expected_type: Optional[str] = None

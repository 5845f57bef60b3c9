"""Booking API adapters - directory and schedule search over HTTP."""

from .client import BookingApiClient
from .directory_adapter import ApiLocationDirectory
from .schedule_adapter import ApiScheduleQuery, build_request_body

__all__ = [
    "BookingApiClient",
    "ApiLocationDirectory",
    "ApiScheduleQuery",
    "build_request_body",
]

"""Schedule query adapter over the booking API.

Direct and transfer searches hit different endpoints with the same
request body. A city token is sent as ``departureCity``/``arrivalCity``,
a station token as ``departureStation``/``arrivalStation``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List

import requests
from pydantic import ValidationError

from ...domain.errors import ScheduleQueryError
from ...domain.models import Itinerary, LocationToken, QueryMode, ScheduleCriteria
from .client import BookingApiClient
from .payloads import DirectSolutions, TransferSolutions

# Application codes the backend answers with besides 200.
ERROR_MESSAGES: Dict[int, str] = {
    403: "Invalid session",
    404: "Unknown city or station name",
    12001: "Query fields rejected by the server",
}


def build_request_body(criteria: ScheduleCriteria) -> Dict[str, Any]:
    """Request body for a schedule query."""
    body: Dict[str, Any] = {"departureDate": criteria.departure_date.isoformat()}
    body.update(_location_fields("departure", criteria.origin))
    body.update(_location_fields("arrival", criteria.destination))
    return body


def _location_fields(prefix: str, token: LocationToken) -> Dict[str, str]:
    suffix = "City" if token.is_city else "Station"
    return {f"{prefix}{suffix}": token.query_name}


@dataclass
class ApiScheduleQuery:
    """ScheduleQueryPort implementation backed by BookingApiClient."""

    client: BookingApiClient = field(default_factory=BookingApiClient)

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def query_itineraries(self, criteria: ScheduleCriteria) -> List[Itinerary]:
        """Run the remote search.

        Raises:
            ScheduleQueryError: On transport failure, a non-success code
                or an unreadable payload.
        """
        if criteria.mode is QueryMode.TRANSFER:
            path = self.client.config.transfer_query_path
        else:
            path = self.client.config.direct_query_path
        body = build_request_body(criteria)

        try:
            envelope = self.client.post(path, body)
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            raise ScheduleQueryError(
                "Schedule query failed",
                status_code=status,
                retryable=True,
                cause=e,
            )
        except (requests.JSONDecodeError, ValidationError) as e:
            raise ScheduleQueryError(
                "Malformed schedule response", retryable=False, cause=e
            )
        except requests.RequestException as e:
            raise ScheduleQueryError("Schedule query failed", retryable=True, cause=e)

        if not envelope.ok:
            message = ERROR_MESSAGES.get(envelope.code, "Unknown error")
            self._logger.warning(
                "Schedule query rejected",
                extra={"code": envelope.code, "server_message": envelope.message},
            )
            raise ScheduleQueryError(
                message,
                status_code=envelope.code,
                retryable=envelope.code not in ERROR_MESSAGES,
            )

        try:
            if criteria.mode is QueryMode.TRANSFER:
                solutions = TransferSolutions.model_validate(envelope.data or {})
            else:
                solutions = DirectSolutions.model_validate(envelope.data or {})
        except ValidationError as e:
            raise ScheduleQueryError(
                "Malformed schedule payload", retryable=False, cause=e
            )

        itineraries: List[Itinerary] = [item.to_domain() for item in solutions.solutions]
        self._logger.info(
            "Schedule query succeeded",
            extra={"mode": criteria.mode.value, "results": len(itineraries)},
        )
        return itineraries

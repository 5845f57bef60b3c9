"""HTTP client for the booking backend.

A thin wrapper around a ``requests.Session``: base URL and timeout
from config, bearer token when a session token is configured, and
decoding of the ``{code, message, data}`` envelope. Transport errors
propagate as ``requests`` exceptions; the adapters turn them into
domain errors.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import requests

from ...config import ApiConfig, get_config
from .payloads import ApiEnvelope


@dataclass
class BookingApiClient:
    """Session-backed client for the booking REST API.

    Attributes:
        config: API configuration (base URL, timeout, token, paths)
        session: HTTP session, injectable for tests
    """

    config: ApiConfig = field(default_factory=lambda: get_config().api)
    session: requests.Session = field(default_factory=requests.Session)

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def _headers(self) -> Dict[str, str]:
        if self.config.session_token:
            return {"Authorization": f"Bearer {self.config.session_token}"}
        return {}

    def _url(self, path: str) -> str:
        return self.config.base_url.rstrip("/") + "/" + path.lstrip("/")

    def request(
        self,
        method: str,
        path: str,
        json: Optional[Dict[str, Any]] = None,
    ) -> ApiEnvelope:
        """Send a request and decode the response envelope.

        Args:
            method: HTTP method.
            path: Endpoint path relative to the base URL.
            json: Optional JSON body.

        Returns:
            The decoded envelope, whatever its application code.

        Raises:
            requests.RequestException: On connection failure, timeout or
                a non-2xx HTTP status.
            pydantic.ValidationError: If the body is not an envelope.
        """
        url = self._url(path)
        self._logger.debug("API request", extra={"method": method, "url": url})

        response = self.session.request(
            method,
            url,
            json=json,
            headers=self._headers(),
            timeout=self.config.timeout_seconds,
        )
        response.raise_for_status()
        envelope = ApiEnvelope.model_validate(response.json())

        self._logger.debug(
            "API response",
            extra={"url": url, "status": response.status_code, "code": envelope.code},
        )
        return envelope

    def get(self, path: str) -> ApiEnvelope:
        return self.request("GET", path)

    def post(self, path: str, body: Dict[str, Any]) -> ApiEnvelope:
        return self.request("POST", path, json=body)

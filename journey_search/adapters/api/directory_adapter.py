"""Location directory adapter over the booking API.

Fetches province -> cities from the city endpoint and city -> stations
from the station endpoint.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

import requests
from pydantic import ValidationError

from ...domain.errors import DirectoryError
from ...domain.models import LocationGroups
from .client import BookingApiClient


@dataclass
class ApiLocationDirectory:
    """LocationDirectoryPort implementation backed by BookingApiClient."""

    client: BookingApiClient = field(default_factory=BookingApiClient)

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def fetch_location_groups(self) -> LocationGroups:
        """Fetch both groupings.

        Raises:
            DirectoryError: If either endpoint fails or answers with a
                non-success code.
        """
        cities = self._fetch_group(self.client.config.city_path)
        stations = self._fetch_group(self.client.config.station_path)
        self._logger.info(
            "Location directory fetched",
            extra={
                "provinces": len(cities),
                "cities": sum(len(names) for names in cities.values()),
                "station_cities": len(stations),
            },
        )
        return LocationGroups(cities=cities, stations=stations)

    def _fetch_group(self, path: str) -> Dict[str, Tuple[str, ...]]:
        try:
            envelope = self.client.get(path)
        except (requests.RequestException, ValidationError) as e:
            raise DirectoryError(
                f"Failed to fetch {path}",
                endpoint=path,
                cause=e,
            )

        if not envelope.ok:
            raise DirectoryError(
                envelope.message or f"Directory returned code {envelope.code}",
                endpoint=path,
            )

        raw = envelope.data or {}
        if not isinstance(raw, dict):
            raise DirectoryError(
                f"Unexpected directory payload of type {type(raw).__name__}",
                endpoint=path,
            )

        groups: Dict[str, Tuple[str, ...]] = {}
        for key, names in raw.items():
            if not isinstance(names, list):
                self._logger.warning(
                    "Skipping malformed directory group",
                    extra={"endpoint": path, "group": key},
                )
                continue
            cleaned: List[str] = [str(name).strip() for name in names if str(name).strip()]
            groups[str(key)] = tuple(cleaned)
        return groups

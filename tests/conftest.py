"""Shared fixtures: itinerary factories and in-memory fakes for the ports."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Dict, List, Optional, Sequence

import pytest

from journey_search.adapters.cache import InMemoryCache
from journey_search.config import SearchConfig
from journey_search.domain.errors import ScheduleQueryError
from journey_search.domain.models import (
    DirectItinerary,
    LocationGroups,
    ScheduleCriteria,
    SeatInfo,
    TransferItinerary,
)
from journey_search.services import LocationService, SearchSession

BASE_DAY = datetime(2025, 6, 1)


def _direct(
    train_number: str = "G1",
    departure_station: str = "北京南站",
    arrival_station: str = "上海虹桥站",
    departure: str = "08:00",
    travel_minutes: int = 300,
    price: float = 500.0,
    seats: Optional[Dict[str, int]] = None,
    day_offset: int = 0,
) -> DirectItinerary:
    hours, minutes = (int(part) for part in departure.split(":"))
    departure_time = BASE_DAY + timedelta(days=day_offset, hours=hours, minutes=minutes)
    arrival_time = departure_time + timedelta(minutes=travel_minutes)
    if seats is None:
        seats = {"二等座": 10}
    return DirectItinerary(
        train_number=train_number,
        departure_station=departure_station,
        departure_time=departure_time,
        arrival_station=arrival_station,
        arrival_time=arrival_time,
        origin_station=departure_station,
        origin_departure_time=departure_time,
        terminal_station=arrival_station,
        terminal_arrival_time=arrival_time,
        travel_time=travel_minutes * 60,
        price=price,
        seats={
            seat_type: SeatInfo(seat_type=seat_type, remaining=left, price=price)
            for seat_type, left in seats.items()
        },
    )


def _transfer(
    first: DirectItinerary,
    second: DirectItinerary,
    layover_minutes: int = 30,
) -> TransferItinerary:
    return TransferItinerary(
        first_leg=first, second_leg=second, layover_seconds=layover_minutes * 60
    )


@pytest.fixture
def make_direct():
    return _direct


@pytest.fixture
def make_transfer():
    return _transfer


@pytest.fixture
def char_transliterate():
    """Deterministic stand-in for a transliterator: one token per character."""

    def transliterate(name: str) -> str:
        return " ".join(f"u{ord(ch):x}" for ch in name)

    return transliterate


class FakeDirectory:
    """LocationDirectoryPort returning fixed groupings, counting calls."""

    def __init__(self, groups: LocationGroups) -> None:
        self.groups = groups
        self.calls = 0

    def fetch_location_groups(self) -> LocationGroups:
        self.calls += 1
        return self.groups


class FakeTransliterator:
    def transliterate(self, name: str) -> str:
        return name.lower()


class FakeSchedule:
    """ScheduleQueryPort that replays queued responses or errors."""

    def __init__(self) -> None:
        self.responses: List[object] = []
        self.criteria: List[ScheduleCriteria] = []

    def queue(self, response: object) -> None:
        self.responses.append(response)

    def query_itineraries(self, criteria: ScheduleCriteria) -> Sequence:
        self.criteria.append(criteria)
        response = self.responses.pop(0) if self.responses else []
        if isinstance(response, ScheduleQueryError):
            raise response
        return response


@pytest.fixture
def location_groups() -> LocationGroups:
    return LocationGroups(
        cities={"北京市": ["北京"], "上海市": ["上海"], "江苏省": ["南京", "南通"]},
        stations={
            "北京": ["北京南", "北京西"],
            "上海": ["上海虹桥"],
            "南京": ["南京南"],
        },
    )


@pytest.fixture
def fake_directory(location_groups) -> FakeDirectory:
    return FakeDirectory(location_groups)


@pytest.fixture
def fake_schedule() -> FakeSchedule:
    return FakeSchedule()


@pytest.fixture
def location_service(fake_directory) -> LocationService:
    return LocationService(
        directory=fake_directory,
        transliterator=FakeTransliterator(),
        cache=InMemoryCache(name="test"),
    )


@pytest.fixture
def session(fake_schedule, location_service) -> SearchSession:
    return SearchSession(
        schedule=fake_schedule,
        locations=location_service,
        config=SearchConfig(),
    )

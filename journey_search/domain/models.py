"""Immutable domain models for the journey search core.

Location data (name groups, tokens) and itinerary data (direct and
transfer journeys) are frozen dataclasses with slots.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum, auto
from typing import ClassVar, Mapping, Optional, Sequence, Union

# Raw directory data: grouping key (province or city) -> ordered names.
NameGroup = Mapping[str, Sequence[str]]

MINUTES_PER_DAY = 24 * 60


class LocationKind(Enum):
    """What a resolved location refers to."""

    CITY = auto()
    STATION = auto()


class QueryMode(str, Enum):
    """Shape of the itineraries returned by a schedule query."""

    DIRECT = "direct"
    TRANSFER = "indirect"


class SortKey(Enum):
    """Ordering keys offered to the user."""

    DEPARTURE_TIME = auto()
    TRAVEL_TIME = auto()
    PRICE = auto()


@dataclass(frozen=True, slots=True)
class LocationGroups:
    """City and station groupings as delivered by the directory.

    Attributes:
        cities: province -> city names
        stations: city -> station names
    """

    cities: NameGroup = field(default_factory=dict)
    stations: NameGroup = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class LocationToken:
    """A disambiguated location reference.

    Only ``LocationResolver`` creates these; callers receive them and
    pass them on to the schedule query.

    Attributes:
        kind: City or station
        canonical: Name without the station marker
        directory_name: Station name as the directory spells it, when
            that differs from ``canonical``; ignored for equality
    """

    kind: LocationKind
    canonical: str
    directory_name: Optional[str] = field(default=None, compare=False)

    @property
    def is_city(self) -> bool:
        return self.kind is LocationKind.CITY

    @property
    def is_station(self) -> bool:
        return self.kind is LocationKind.STATION

    @property
    def query_name(self) -> str:
        """Name sent to the schedule search."""
        return self.directory_name or self.canonical


@dataclass(frozen=True, slots=True)
class SeatInfo:
    """Availability and price of one seat class on one leg.

    Attributes:
        seat_type: Seat class label (e.g. '二等座')
        remaining: Number of seats left
        price: Price of one seat of this class
        capacity: Total seats of this class, when the provider reports it
    """

    seat_type: str
    remaining: int
    price: float
    capacity: Optional[int] = None

    @property
    def is_available(self) -> bool:
        return self.remaining > 0


@dataclass(frozen=True, slots=True)
class StopInfo:
    """A stop on a train's route. Origin has no arrival, terminal no departure."""

    station_name: str
    arrival_time: Optional[datetime] = None
    departure_time: Optional[datetime] = None


@dataclass(frozen=True, slots=True)
class DirectItinerary:
    """A single-leg journey.

    Attributes:
        train_number: Train identifier (e.g. 'G53')
        departure_station: Boarding station
        departure_time: Instant of leaving the boarding station
        arrival_station: Alighting station
        arrival_time: Instant of reaching the alighting station
        origin_station: First station of the train
        origin_departure_time: Instant the train leaves its origin
        terminal_station: Last station of the train
        terminal_arrival_time: Instant the train reaches its terminal
        travel_time: Seconds between departure and arrival
        price: Total price reported by the provider
        seats: Seat class -> availability
        route: Ordered stops of the train
    """

    mode: ClassVar[QueryMode] = QueryMode.DIRECT

    train_number: str
    departure_station: str
    departure_time: datetime
    arrival_station: str
    arrival_time: datetime
    origin_station: str
    origin_departure_time: datetime
    terminal_station: str
    terminal_arrival_time: datetime
    travel_time: int
    price: float
    seats: Mapping[str, SeatInfo] = field(default_factory=dict)
    route: tuple[StopInfo, ...] = field(default_factory=tuple)

    @property
    def has_available_seat(self) -> bool:
        return any(seat.is_available for seat in self.seats.values())

    @property
    def train_letter(self) -> str:
        return self.train_number[:1]


@dataclass(frozen=True, slots=True)
class TransferItinerary:
    """A two-leg journey with a layover at the transfer station.

    The provider guarantees ``second_leg.departure_station`` is the
    station where ``first_leg`` arrives; nothing here checks it.
    """

    mode: ClassVar[QueryMode] = QueryMode.TRANSFER

    first_leg: DirectItinerary
    second_leg: DirectItinerary
    layover_seconds: int

    @property
    def transfer_station(self) -> str:
        return self.second_leg.departure_station

    @property
    def departure_time(self) -> datetime:
        return self.first_leg.departure_time

    @property
    def arrival_time(self) -> datetime:
        return self.second_leg.arrival_time

    @property
    def travel_time(self) -> int:
        return (
            self.first_leg.travel_time
            + self.layover_seconds
            + self.second_leg.travel_time
        )

    @property
    def price(self) -> float:
        return self.first_leg.price + self.second_leg.price


Itinerary = Union[DirectItinerary, TransferItinerary]


@dataclass(frozen=True, slots=True)
class TimeWindow:
    """Inclusive minute-of-day range, independent of the calendar date."""

    start_minute: int = 0
    end_minute: int = MINUTES_PER_DAY - 1

    def __post_init__(self) -> None:
        """Validate bounds."""
        for value in (self.start_minute, self.end_minute):
            if not 0 <= value < MINUTES_PER_DAY:
                raise ValueError(
                    f"Minute of day must be between 0 and {MINUTES_PER_DAY - 1}, got {value}"
                )
        if self.start_minute > self.end_minute:
            raise ValueError(
                f"Window start {self.start_minute} is after end {self.end_minute}"
            )

    @classmethod
    def from_clock(cls, start: str, end: str) -> TimeWindow:
        """Build a window from 'HH:MM' strings."""
        return cls(_clock_to_minutes(start), _clock_to_minutes(end))

    @property
    def is_full_day(self) -> bool:
        return self.start_minute == 0 and self.end_minute == MINUTES_PER_DAY - 1

    def contains(self, instant: datetime) -> bool:
        minutes = instant.hour * 60 + instant.minute
        return self.start_minute <= minutes <= self.end_minute


def _clock_to_minutes(text: str) -> int:
    hours, _, minutes = text.strip().partition(":")
    return int(hours) * 60 + int(minutes or 0)


@dataclass(frozen=True, slots=True)
class ScheduleCriteria:
    """Everything the remote schedule search needs."""

    departure_date: date
    origin: LocationToken
    destination: LocationToken
    mode: QueryMode = QueryMode.DIRECT

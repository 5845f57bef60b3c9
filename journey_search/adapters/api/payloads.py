"""Wire models for the booking backend.

Every response is wrapped in ``{code, message, data}``. Schedule
queries carry their itineraries under ``data.solutions``; field names
are camelCase except the transfer wrapper (``first_ride``,
``second_ride``, ``relaxing_time``).
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ...domain.models import (
    DirectItinerary,
    SeatInfo,
    StopInfo,
    TransferItinerary,
)

SUCCESS_CODE = 200


class ApiEnvelope(BaseModel):
    """Response wrapper shared by every endpoint."""

    code: int
    message: str = ""
    data: Any = None

    @property
    def ok(self) -> bool:
        return self.code == SUCCESS_CODE


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class SeatPayload(_WireModel):
    seat_type: str = Field("", alias="seatType")
    left: int = 0
    price: float = 0.0
    capacity: Optional[int] = None

    def to_domain(self, seat_type: str) -> SeatInfo:
        return SeatInfo(
            seat_type=self.seat_type or seat_type,
            remaining=self.left,
            price=self.price,
            capacity=self.capacity,
        )


class StopPayload(_WireModel):
    station_name: str = Field(alias="stationName")
    arrival_time: Optional[datetime] = Field(None, alias="arrivalTime")
    departure_time: Optional[datetime] = Field(None, alias="departureTime")

    def to_domain(self) -> StopInfo:
        return StopInfo(
            station_name=self.station_name,
            arrival_time=self.arrival_time,
            departure_time=self.departure_time,
        )


class DirectSchedulePayload(_WireModel):
    departure_station: str = Field(alias="departureStation")
    departure_time: datetime = Field(alias="departureTime")
    arrival_station: str = Field(alias="arrivalStation")
    arrival_time: datetime = Field(alias="arrivalTime")
    origin_station: str = Field(alias="originStation")
    origin_departure_time: datetime = Field(alias="originDepartureTime")
    terminal_station: str = Field(alias="terminalStation")
    terminal_arrival_time: datetime = Field(alias="terminalArrivalTime")
    train_number: str = Field(alias="trainNumber")
    travel_time: int = Field(alias="travelTime")
    price: float
    route: List[StopPayload] = Field(default_factory=list)
    # Missing seat data contributes nothing downstream.
    seat_info: Optional[Dict[str, SeatPayload]] = Field(None, alias="seatInfo")

    def to_domain(self) -> DirectItinerary:
        seats = {
            seat_type: payload.to_domain(seat_type)
            for seat_type, payload in (self.seat_info or {}).items()
        }
        return DirectItinerary(
            train_number=self.train_number,
            departure_station=self.departure_station,
            departure_time=self.departure_time,
            arrival_station=self.arrival_station,
            arrival_time=self.arrival_time,
            origin_station=self.origin_station,
            origin_departure_time=self.origin_departure_time,
            terminal_station=self.terminal_station,
            terminal_arrival_time=self.terminal_arrival_time,
            travel_time=self.travel_time,
            price=self.price,
            seats=seats,
            route=tuple(stop.to_domain() for stop in self.route),
        )


class TransferSchedulePayload(_WireModel):
    first_ride: DirectSchedulePayload
    second_ride: DirectSchedulePayload
    relaxing_time: int

    def to_domain(self) -> TransferItinerary:
        return TransferItinerary(
            first_leg=self.first_ride.to_domain(),
            second_leg=self.second_ride.to_domain(),
            layover_seconds=self.relaxing_time,
        )


class DirectSolutions(_WireModel):
    solutions: List[DirectSchedulePayload] = Field(default_factory=list)


class TransferSolutions(_WireModel):
    solutions: List[TransferSchedulePayload] = Field(default_factory=list)

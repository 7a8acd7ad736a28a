"""
Domain value objects.

Everything here is a frozen dataclass: candidate trips and history records
are read-only snapshots handed to the pure matching / suggestion functions,
and their outputs (``TripMatch``) are never mutated after construction.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from .enums import (
    ConversationLevel,
    TemperaturePreference,
    TripRole,
    TripStatus,
    TripType,
)


# ── Value Objects ─────────────────────────────────────────────────────


@dataclass(frozen=True)
class GeoPoint:
    latitude: float
    longitude: float
    address: str = ""


@dataclass(frozen=True)
class RidePreferences:
    """A rider's desired ride environment, or a driver's offered one."""

    allows_smoking: bool = False
    allows_music: bool = True
    allows_pets: bool = False
    conversation_level: ConversationLevel = ConversationLevel.MODERATE
    temperature_preference: TemperaturePreference = TemperaturePreference.MODERATE


@dataclass(frozen=True)
class Route:
    origin: GeoPoint
    destination: GeoPoint
    stops: tuple[GeoPoint, ...] = ()


# ── Matching inputs / outputs ─────────────────────────────────────────


@dataclass(frozen=True)
class CandidateTrip:
    trip_id: str
    driver_id: str
    driver_name: str
    driver_rating: float
    driver_preferences: RidePreferences
    origin: GeoPoint
    destination: GeoPoint
    price_per_seat: float
    departure_time: datetime
    available_seats: int = 1
    vehicle_type: str = "Sedan"
    is_verified: bool = False
    stops: tuple[GeoPoint, ...] = ()

    @property
    def route(self) -> Route:
        return Route(self.origin, self.destination, self.stops)


@dataclass(frozen=True)
class MatchQuery:
    desired_route: Route
    rider_preferences: RidePreferences = field(default_factory=RidePreferences)
    max_price_per_seat: float = 0.0
    min_driver_rating: float = 4.0


@dataclass(frozen=True)
class TripMatch:
    trip_id: str
    driver_id: str
    driver_name: str
    driver_rating: float
    compatibility_score: int
    match_reasons: tuple[str, ...]
    price_per_seat: float
    departure_time: datetime
    available_seats: int
    vehicle_type: str
    is_verified: bool


# ── History ───────────────────────────────────────────────────────────


@dataclass(frozen=True)
class TripHistoryRecord:
    from_address: str
    to_address: str
    departure_time: datetime
    price: float = 0.0
    distance_km: float = 0.0
    trip_type: TripType = TripType.WASEL
    role: TripRole = TripRole.PASSENGER
    status: TripStatus = TripStatus.COMPLETED
    rating: Optional[float] = None

"""
Pydantic request / response schemas for the REST API.

Requests arrive as loosely-typed JSON; every schema that feeds the matching
engine validates ranges here and converts itself into a frozen domain value
object with ``to_domain()``.  Nothing untyped crosses into ``wasel.domain``.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from wasel.config import settings
from wasel.domain.entities import (
    CandidateTrip,
    GeoPoint,
    MatchQuery,
    RidePreferences,
    Route,
    TripHistoryRecord,
    TripMatch,
)
from wasel.domain.enums import (
    ConversationLevel,
    TemperaturePreference,
    TripRole,
    TripStatus,
    TripType,
)


# ── Shared ────────────────────────────────────────────────────────────


class GeoPointSchema(BaseModel):
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    address: str = ""

    def to_domain(self) -> GeoPoint:
        return GeoPoint(self.latitude, self.longitude, self.address)


class RidePreferencesSchema(BaseModel):
    allows_smoking: bool = False
    allows_music: bool = True
    allows_pets: bool = False
    conversation_level: ConversationLevel = ConversationLevel.MODERATE
    temperature_preference: TemperaturePreference = TemperaturePreference.MODERATE

    def to_domain(self) -> RidePreferences:
        return RidePreferences(
            allows_smoking=self.allows_smoking,
            allows_music=self.allows_music,
            allows_pets=self.allows_pets,
            conversation_level=self.conversation_level,
            temperature_preference=self.temperature_preference,
        )


# ── Requests ──────────────────────────────────────────────────────────


class MatchQuerySchema(BaseModel):
    origin: GeoPointSchema
    destination: GeoPointSchema
    rider_preferences: RidePreferencesSchema = Field(
        default_factory=RidePreferencesSchema
    )
    max_price_per_seat: float = Field(..., ge=0)
    min_driver_rating: float = Field(settings.default_min_rating, ge=0, le=5)

    def to_domain(self) -> MatchQuery:
        return MatchQuery(
            desired_route=Route(
                self.origin.to_domain(), self.destination.to_domain()
            ),
            rider_preferences=self.rider_preferences.to_domain(),
            max_price_per_seat=self.max_price_per_seat,
            min_driver_rating=self.min_driver_rating,
        )


class CandidateTripSchema(BaseModel):
    trip_id: str
    driver_id: str
    driver_name: str
    driver_rating: float = Field(..., ge=0, le=5)
    driver_preferences: RidePreferencesSchema = Field(
        default_factory=RidePreferencesSchema
    )
    origin: GeoPointSchema
    destination: GeoPointSchema
    stops: list[GeoPointSchema] = []
    price_per_seat: float = Field(..., ge=0)
    departure_time: datetime
    available_seats: int = Field(1, ge=0)
    vehicle_type: str = "Sedan"
    is_verified: bool = False

    def to_domain(self) -> CandidateTrip:
        return CandidateTrip(
            trip_id=self.trip_id,
            driver_id=self.driver_id,
            driver_name=self.driver_name,
            driver_rating=self.driver_rating,
            driver_preferences=self.driver_preferences.to_domain(),
            origin=self.origin.to_domain(),
            destination=self.destination.to_domain(),
            stops=tuple(s.to_domain() for s in self.stops),
            price_per_seat=self.price_per_seat,
            departure_time=self.departure_time,
            available_seats=self.available_seats,
            vehicle_type=self.vehicle_type,
            is_verified=self.is_verified,
        )


class MatchRequest(BaseModel):
    query: MatchQuerySchema
    candidates: list[CandidateTripSchema] = []


class TripSearchRequest(BaseModel):
    query: MatchQuerySchema
    departure_date: Optional[date] = None


class TripCreateRequest(BaseModel):
    driver_id: str = Field(..., max_length=64)
    driver_name: str = Field(..., max_length=120)
    driver_rating: float = Field(5.0, ge=0, le=5)
    is_verified: bool = False
    preferences: RidePreferencesSchema = Field(default_factory=RidePreferencesSchema)
    origin: GeoPointSchema
    destination: GeoPointSchema
    stops: list[GeoPointSchema] = []
    price_per_seat: float = Field(..., ge=0)
    departure_time: datetime
    available_seats: int = Field(1, ge=1, le=8)
    vehicle_type: str = Field("Sedan", max_length=40)


class HistoryRecordSchema(BaseModel):
    from_address: str
    to_address: str
    departure_time: datetime
    price: float = Field(0.0, ge=0)
    distance_km: float = Field(0.0, ge=0)
    trip_type: TripType = TripType.WASEL
    role: TripRole = TripRole.PASSENGER
    status: TripStatus = TripStatus.COMPLETED
    rating: Optional[float] = Field(None, ge=0, le=5)

    def to_domain(self) -> TripHistoryRecord:
        return TripHistoryRecord(
            from_address=self.from_address,
            to_address=self.to_address,
            departure_time=self.departure_time,
            price=self.price,
            distance_km=self.distance_km,
            trip_type=self.trip_type,
            role=self.role,
            status=self.status,
            rating=self.rating,
        )


class HistoryRequest(BaseModel):
    history: list[HistoryRecordSchema] = []

    def to_domain(self) -> list[TripHistoryRecord]:
        return [record.to_domain() for record in self.history]


class AnalyticsRequest(HistoryRequest):
    # Anchors the monthly series; the server clock when omitted
    as_of: Optional[datetime] = None


class ExpenseReportRequest(HistoryRequest):
    start: date
    end: date

    @model_validator(mode="after")
    def check_period(self) -> ExpenseReportRequest:
        if self.end < self.start:
            raise ValueError("end must not be before start")
        return self


# ── Responses ─────────────────────────────────────────────────────────


class TripMatchResponse(BaseModel):
    trip_id: str
    driver_id: str
    driver_name: str
    driver_rating: float
    compatibility_score: int = Field(..., ge=0, le=100)
    match_reasons: list[str]
    price_per_seat: float
    departure_time: datetime
    available_seats: int
    vehicle_type: str
    is_verified: bool

    @classmethod
    def from_domain(cls, match: TripMatch) -> "TripMatchResponse":
        return cls(
            trip_id=match.trip_id,
            driver_id=match.driver_id,
            driver_name=match.driver_name,
            driver_rating=match.driver_rating,
            compatibility_score=match.compatibility_score,
            match_reasons=list(match.match_reasons),
            price_per_seat=match.price_per_seat,
            departure_time=match.departure_time,
            available_seats=match.available_seats,
            vehicle_type=match.vehicle_type,
            is_verified=match.is_verified,
        )


class TripResponse(BaseModel):
    id: int
    driver_id: str
    driver_name: str
    driver_rating: float
    is_verified: bool
    origin_lat: float
    origin_lng: float
    origin_address: str
    destination_lat: float
    destination_lng: float
    destination_address: str
    stops: list[GeoPointSchema] = []
    price_per_seat: float
    departure_time: datetime
    available_seats: int
    vehicle_type: str
    origin_h3_cell: str

    model_config = {"from_attributes": True}


class SuggestionsResponse(BaseModel):
    suggestions: list[str]


class RouteStatsResponse(BaseModel):
    route: str
    count: int
    avg_price: int
    last_used: datetime

    model_config = {"from_attributes": True}


class CategoryBreakdownResponse(BaseModel):
    by_type: dict[str, int]
    by_time: dict[str, int]

    model_config = {"from_attributes": True}


class MonthlyStatsResponse(BaseModel):
    month: str
    trips: int
    spent: float
    earned: float
    distance: float

    model_config = {"from_attributes": True}


class AnalyticsResponse(BaseModel):
    total_trips: int
    total_distance: int
    total_spent: int
    total_earned: int
    carbon_saved: float
    average_rating: float
    total_rides: int
    total_drives: int
    top_routes: list[RouteStatsResponse]
    categories: CategoryBreakdownResponse
    monthly_data: list[MonthlyStatsResponse] = []

    model_config = {"from_attributes": True}


class ExpenseReportResponse(BaseModel):
    start: date
    end: date
    total_trips: int
    total_amount: float
    trips: list[HistoryRecordSchema]
    report: str


class GeocodeResponse(BaseModel):
    latitude: float
    longitude: float
    address: str
    resolved: bool


class HealthResponse(BaseModel):
    status: str = "ok"


class ErrorResponse(BaseModel):
    detail: str

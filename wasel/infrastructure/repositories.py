"""
Repository Pattern -- abstracts DB access so domain logic stays DB-agnostic.

The repository receives an ``AsyncSession`` (unit-of-work) and exposes
domain-relevant queries only.  Rows leave this module as ORM models; use
``to_candidate_trip`` to turn one into the immutable value object the
matching engine consumes.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Iterable, Optional
from zoneinfo import ZoneInfo

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import TripModel
from wasel.config import settings
from wasel.domain.entities import CandidateTrip, GeoPoint, RidePreferences
from wasel.domain.enums import ConversationLevel, TemperaturePreference
from wasel.domain.matching import ride_h3_cell


class TripRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_trip(
        self,
        *,
        driver_id: str,
        driver_name: str,
        origin: GeoPoint,
        destination: GeoPoint,
        price_per_seat: float,
        departure_time: datetime,
        driver_rating: float = 5.0,
        preferences: RidePreferences | None = None,
        stops: Iterable[GeoPoint] = (),
        available_seats: int = 1,
        vehicle_type: str = "Sedan",
        is_verified: bool = False,
    ) -> TripModel:
        """Store an offered trip, indexing its origin by H3 cell."""
        prefs = preferences or RidePreferences()
        trip = TripModel(
            driver_id=driver_id,
            driver_name=driver_name,
            driver_rating=driver_rating,
            is_verified=is_verified,
            allows_smoking=prefs.allows_smoking,
            allows_music=prefs.allows_music,
            allows_pets=prefs.allows_pets,
            conversation_level=prefs.conversation_level,
            temperature_preference=prefs.temperature_preference,
            origin_lat=origin.latitude,
            origin_lng=origin.longitude,
            origin_address=origin.address,
            destination_lat=destination.latitude,
            destination_lng=destination.longitude,
            destination_address=destination.address,
            stops=[
                {
                    "latitude": s.latitude,
                    "longitude": s.longitude,
                    "address": s.address,
                }
                for s in stops
            ],
            origin_h3_cell=ride_h3_cell(
                origin.latitude, origin.longitude, settings.h3_resolution
            ),
            price_per_seat=price_per_seat,
            departure_time=departure_time,
            available_seats=available_seats,
            vehicle_type=vehicle_type,
        )
        self.session.add(trip)
        await self.session.flush()
        return trip

    async def get_by_id(self, trip_id: int) -> Optional[TripModel]:
        return await self.session.get(TripModel, trip_id)

    async def find_candidates(
        self,
        cells: Iterable[str],
        departure_date: date | None = None,
    ) -> list[TripModel]:
        """Trips with free seats whose origin lies in one of *cells*.

        ``departure_date`` is a calendar day in ``settings.timezone``; its
        bounds are compared as aware datetimes, see ``day_bounds``.
        """
        query = (
            select(TripModel)
            .where(TripModel.origin_h3_cell.in_(list(cells)))
            .where(TripModel.available_seats > 0)
            .order_by(TripModel.departure_time, TripModel.id)
        )
        if departure_date is not None:
            day_start, day_end = day_bounds(departure_date)
            query = query.where(
                TripModel.departure_time >= day_start,
                TripModel.departure_time < day_end,
            )
        result = await self.session.execute(query)
        return list(result.scalars().all())


def day_bounds(
    day: date, tz: str | None = None
) -> tuple[datetime, datetime]:
    """Start and end of *day* as timezone-aware datetimes.

    ``departure_time`` is a ``timestamptz`` column, so the bounds carry the
    zone explicitly (``settings.timezone`` unless *tz* is given) instead of
    leaving PostgreSQL to read naive values in the session zone.  The end
    is exclusive.
    """
    zone = ZoneInfo(tz or settings.timezone)
    start = datetime.combine(day, time.min, tzinfo=zone)
    end = datetime.combine(day + timedelta(days=1), time.min, tzinfo=zone)
    return start, end


def to_candidate_trip(trip: TripModel) -> CandidateTrip:
    return CandidateTrip(
        trip_id=str(trip.id),
        driver_id=trip.driver_id,
        driver_name=trip.driver_name,
        driver_rating=trip.driver_rating,
        driver_preferences=RidePreferences(
            allows_smoking=trip.allows_smoking,
            allows_music=trip.allows_music,
            allows_pets=trip.allows_pets,
            conversation_level=ConversationLevel(trip.conversation_level),
            temperature_preference=TemperaturePreference(
                trip.temperature_preference
            ),
        ),
        origin=GeoPoint(trip.origin_lat, trip.origin_lng, trip.origin_address),
        destination=GeoPoint(
            trip.destination_lat, trip.destination_lng, trip.destination_address
        ),
        stops=tuple(
            GeoPoint(s["latitude"], s["longitude"], s.get("address", ""))
            for s in trip.stops or ()
        ),
        price_per_seat=trip.price_per_seat,
        departure_time=trip.departure_time,
        available_seats=trip.available_seats,
        vehicle_type=trip.vehicle_type,
        is_verified=trip.is_verified,
    )

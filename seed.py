"""
Seed script -- populates the database with sample trips for reviewers.

Run after migrations:
    python seed.py

Creates 8 offered trips around Dubai and Abu Dhabi departing tomorrow,
with a mix of driver ratings, preferences, prices and stops.
"""

import asyncio
from datetime import datetime, timedelta

from sqlalchemy import text

from wasel.domain.entities import GeoPoint, RidePreferences
from wasel.domain.enums import ConversationLevel, TemperaturePreference
from wasel.domain.geocoding import geocode
from wasel.infrastructure.database import async_session_factory, engine
from wasel.infrastructure.repositories import TripRepository

DUBAI_MARINA = GeoPoint(25.0805, 55.1403, "Dubai Marina")
DOWNTOWN_DUBAI = GeoPoint(25.1972, 55.2744, "Downtown Dubai")
DUBAI_AIRPORT = GeoPoint(25.2532, 55.3657, "Dubai Airport")
SHARJAH = GeoPoint(25.3463, 55.4209, "Sharjah")

QUIET_COOL = RidePreferences(
    conversation_level=ConversationLevel.QUIET,
    temperature_preference=TemperaturePreference.COLD,
)
CHATTY_SMOKER = RidePreferences(
    allows_smoking=True,
    conversation_level=ConversationLevel.CHATTY,
)


def _trips(tomorrow: datetime) -> list[dict]:
    dubai, abu_dhabi = geocode("Dubai"), geocode("Abu Dhabi")
    return [
        {"driver_id": "drv-1", "driver_name": "Omar Haddad", "driver_rating": 4.9,
         "origin": dubai, "destination": abu_dhabi, "price_per_seat": 45.0,
         "departure_time": tomorrow.replace(hour=7), "available_seats": 3,
         "vehicle_type": "Sedan", "is_verified": True},
        {"driver_id": "drv-2", "driver_name": "Layla Mansour", "driver_rating": 4.6,
         "origin": dubai, "destination": abu_dhabi, "price_per_seat": 38.0,
         "departure_time": tomorrow.replace(hour=8), "available_seats": 2,
         "vehicle_type": "SUV", "preferences": QUIET_COOL},
        {"driver_id": "drv-3", "driver_name": "Yousef Karim", "driver_rating": 4.2,
         "origin": dubai, "destination": abu_dhabi, "price_per_seat": 60.0,
         "departure_time": tomorrow.replace(hour=9), "available_seats": 4,
         "vehicle_type": "Van", "preferences": CHATTY_SMOKER},
        {"driver_id": "drv-4", "driver_name": "Noura Saleh", "driver_rating": 4.8,
         "origin": DUBAI_MARINA, "destination": DOWNTOWN_DUBAI, "price_per_seat": 20.0,
         "departure_time": tomorrow.replace(hour=7, minute=30), "available_seats": 3,
         "vehicle_type": "Sedan", "is_verified": True},
        {"driver_id": "drv-5", "driver_name": "Khalid Farouk", "driver_rating": 4.5,
         "origin": DUBAI_MARINA, "destination": DUBAI_AIRPORT, "price_per_seat": 35.0,
         "departure_time": tomorrow.replace(hour=6), "available_seats": 2,
         "vehicle_type": "Sedan", "stops": [DOWNTOWN_DUBAI]},
        {"driver_id": "drv-6", "driver_name": "Mariam Aziz", "driver_rating": 5.0,
         "origin": SHARJAH, "destination": DUBAI_AIRPORT, "price_per_seat": 25.0,
         "departure_time": tomorrow.replace(hour=17), "available_seats": 1,
         "vehicle_type": "Sedan", "is_verified": True},
        {"driver_id": "drv-7", "driver_name": "Tariq Nasser", "driver_rating": 3.9,
         "origin": abu_dhabi, "destination": dubai, "price_per_seat": 40.0,
         "departure_time": tomorrow.replace(hour=18), "available_seats": 3,
         "vehicle_type": "SUV"},
        {"driver_id": "drv-8", "driver_name": "Huda Rahman", "driver_rating": 4.7,
         "origin": abu_dhabi, "destination": dubai, "price_per_seat": 42.0,
         "departure_time": tomorrow.replace(hour=19), "available_seats": 2,
         "vehicle_type": "Sedan", "is_verified": True},
    ]


async def seed():
    async with async_session_factory() as session:
        # Check if already seeded
        result = await session.execute(text("SELECT count(*) FROM trips"))
        if result.scalar() > 0:
            print("Database already seeded. Skipping.")
            return

        tomorrow = (datetime.now() + timedelta(days=1)).replace(
            minute=0, second=0, microsecond=0
        )
        repo = TripRepository(session)
        trips = _trips(tomorrow)
        for t in trips:
            await repo.create_trip(**t)
        print(f"  Created {len(trips)} trips")

        await session.commit()
        print("\nSeed complete!")


async def main():
    print("Seeding database...")
    await seed()
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())

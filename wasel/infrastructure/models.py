"""
SQLAlchemy ORM models  (maps to PostgreSQL).

Tables
------
* ``trips`` -- trips offered by drivers, the candidate pool for matching

Indexes
-------
* **B-Tree** on ``origin_h3_cell`` for the coarse geographic pre-filter,
  on ``departure_time`` for date filtering and on ``driver_id``.
"""

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Enum,
    Float,
    Index,
    Integer,
    String,
    func,
)

from .database import Base
from wasel.domain.enums import ConversationLevel, TemperaturePreference


class TripModel(Base):
    __tablename__ = "trips"

    id = Column(Integer, primary_key=True, autoincrement=True)

    driver_id = Column(String(64), nullable=False)
    driver_name = Column(String(120), nullable=False)
    driver_rating = Column(Float, default=5.0, nullable=False)
    is_verified = Column(Boolean, default=False, nullable=False)

    # Driver's offered ride environment
    allows_smoking = Column(Boolean, default=False, nullable=False)
    allows_music = Column(Boolean, default=True, nullable=False)
    allows_pets = Column(Boolean, default=False, nullable=False)
    conversation_level = Column(
        Enum(ConversationLevel), default=ConversationLevel.MODERATE, nullable=False
    )
    temperature_preference = Column(
        Enum(TemperaturePreference),
        default=TemperaturePreference.MODERATE,
        nullable=False,
    )

    origin_lat = Column(Float, nullable=False)
    origin_lng = Column(Float, nullable=False)
    origin_address = Column(String(255), default="", nullable=False)
    destination_lat = Column(Float, nullable=False)
    destination_lng = Column(Float, nullable=False)
    destination_address = Column(String(255), default="", nullable=False)
    # Ordered list of {"latitude", "longitude", "address"}
    stops = Column(JSON, default=list, nullable=False)
    origin_h3_cell = Column(String(20), nullable=False)

    price_per_seat = Column(Float, nullable=False)
    departure_time = Column(DateTime(timezone=True), nullable=False)
    available_seats = Column(Integer, default=1, nullable=False)
    vehicle_type = Column(String(40), default="Sedan", nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        Index("idx_trips_origin_cell", "origin_h3_cell"),
        Index("idx_trips_departure", "departure_time"),
        Index("idx_trips_driver", "driver_id"),
    )

"""Domain enumerations shared by the matching and analytics layers."""

import enum


class ConversationLevel(str, enum.Enum):
    QUIET = "quiet"
    MODERATE = "moderate"
    CHATTY = "chatty"


class TemperaturePreference(str, enum.Enum):
    COLD = "cold"
    MODERATE = "moderate"
    WARM = "warm"


class TripType(str, enum.Enum):
    """Wasel is a one-way trip, Raje3 a return trip."""

    WASEL = "wasel"
    RAJE3 = "raje3"


class TripRole(str, enum.Enum):
    DRIVER = "driver"
    PASSENGER = "passenger"


class TripStatus(str, enum.Enum):
    UPCOMING = "upcoming"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

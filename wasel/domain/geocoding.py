"""
Mock geocoder.

Resolves a free-text city name to coordinates from a fixed lookup table.
In production this would be replaced by a geocoding-service client; the
matching engine only ever sees the resulting ``GeoPoint``.
"""

from .entities import GeoPoint

KNOWN_LOCATIONS: dict[str, tuple[float, float]] = {
    "dubai": (25.2048, 55.2708),
    "abu dhabi": (24.4539, 54.3773),
    "riyadh": (24.7136, 46.6753),
    "jeddah": (21.5433, 39.1728),
    "cairo": (30.0444, 31.2357),
    "alexandria": (31.2001, 29.9187),
    "doha": (25.2867, 51.5310),
}

DEFAULT_LOCATION = "dubai"


def is_known_location(location: str) -> bool:
    return location.strip().lower() in KNOWN_LOCATIONS


def geocode(location: str) -> GeoPoint:
    """Coordinates for *location*; unknown names resolve to Dubai."""
    lat, lng = KNOWN_LOCATIONS.get(
        location.strip().lower(), KNOWN_LOCATIONS[DEFAULT_LOCATION]
    )
    return GeoPoint(latitude=lat, longitude=lng, address=location)

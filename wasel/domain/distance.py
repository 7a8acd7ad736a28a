"""
Distance calculation using the Haversine formula.

Assumption
----------
Great-circle distance stands in for road distance.  Trip matching only
needs to know how far a rider's desired endpoints are from a driver's, and
at the sub-10 km scale that matters for scoring the difference is small.

Complexity: O(1) per call.
"""

import math

from .entities import GeoPoint

EARTH_RADIUS_KM = 6_371.0


def haversine_km(
    lat1: float, lng1: float, lat2: float, lng2: float
) -> float:
    """Return the great-circle distance in **km** between two points."""
    lat1_r, lat2_r = math.radians(lat1), math.radians(lat2)
    dlat = math.radians(lat2 - lat1)
    dlng = math.radians(lng2 - lng1)

    a = (
        math.sin(dlat / 2) ** 2
        + math.cos(lat1_r) * math.cos(lat2_r) * math.sin(dlng / 2) ** 2
    )
    return 2 * EARTH_RADIUS_KM * math.asin(math.sqrt(a))


def distance_km(a: GeoPoint, b: GeoPoint) -> float:
    """Distance between two ``GeoPoint``s.  Addresses are ignored."""
    return haversine_km(a.latitude, a.longitude, b.latitude, b.longitude)

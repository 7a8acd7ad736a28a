"""
Trip Matching Engine
====================

1. **Coarse pre-filter** -- stored trips are narrowed to those whose origin
   falls in the rider's H3 hexagon (resolution 7, ~5.16 km²) or the rings
   around it, out to the 10 km where the start score reaches 0.  This
   happens at the storage boundary, see ``search_cells``.
2. **Scoring**           -- each candidate gets four sub-scores (route,
   preference, rating, price) combined with fixed weights, see
   ``scoring.py``.
3. **Threshold**         -- candidates whose *unrounded* overall score is
   below 50 are dropped.
4. **Ranking**           -- survivors are sorted by their rounded score,
   descending.  ``sorted`` is stable, so equal scores keep input order.

Complexity
----------
Let N = candidates, s = stops per candidate.

* Scoring:  O(N x s)
* Ranking:  O(N log N)

Every function here is pure: no I/O, no clock reads, no shared state.
"""

from __future__ import annotations

import logging
import math
from typing import Iterable

import h3

from .entities import CandidateTrip, GeoPoint, MatchQuery, TripMatch
from .scoring import (
    ROUTE_DECAY_RADIUS_KM,
    ScoreBreakdown,
    preference_score,
    price_score,
    rating_score,
    route_score,
)

logger = logging.getLogger(__name__)

MATCH_THRESHOLD = 50.0

PERFECT_ROUTE = 80.0
GREAT_COMPATIBILITY = 90.0
HIGHLY_RATED = 4.7
GREAT_PRICE = 85.0


def ride_h3_cell(lat: float, lng: float, resolution: int = 7) -> str:
    """Map a geo-point to an H3 hexagonal cell index.  O(1)."""
    return h3.latlng_to_cell(lat, lng, resolution)


def rings_for_radius(radius_km: float, resolution: int = 7) -> int:
    """Hexagon rings needed to reach *radius_km* from a cell.

    Neighbouring cell centres are ``edge x sqrt(3)`` apart, so k rings reach
    about ``k x edge x sqrt(3)`` km.  At resolution 7 a 10 km radius needs 5.
    """
    spacing = h3.average_hexagon_edge_length(resolution, unit="km") * math.sqrt(3)
    return math.ceil(radius_km / spacing)


def search_cells(
    point: GeoPoint, resolution: int = 7, ring_size: int | None = None
) -> set[str]:
    """Cells within ``ring_size`` hexagon rings of *point*'s cell.

    By default the disk covers ``ROUTE_DECAY_RADIUS_KM``: a trip starting
    farther away than that gets no start score, so it is left to other
    searches rather than scored here.

    Complexity: O(k²) where k = ring_size.
    """
    if ring_size is None:
        ring_size = rings_for_radius(ROUTE_DECAY_RADIUS_KM, resolution)
    origin = ride_h3_cell(point.latitude, point.longitude, resolution)
    return set(h3.grid_disk(origin, ring_size))


def score_trip(query: MatchQuery, trip: CandidateTrip) -> ScoreBreakdown:
    return ScoreBreakdown(
        route=route_score(query.desired_route, trip.route),
        preference=preference_score(
            query.rider_preferences, trip.driver_preferences
        ),
        rating=rating_score(trip.driver_rating, query.min_driver_rating),
        price=price_score(query.max_price_per_seat, trip.price_per_seat),
    )


def match_reasons(scores: ScoreBreakdown, trip: CandidateTrip) -> tuple[str, ...]:
    """Human-readable justifications, always in the same order."""
    reasons: list[str] = []
    if scores.route >= PERFECT_ROUTE:
        reasons.append("Perfect route match")
    if scores.preference >= GREAT_COMPATIBILITY:
        reasons.append("Great compatibility")
    if trip.driver_rating >= HIGHLY_RATED:
        reasons.append("Highly rated driver")
    if trip.is_verified:
        reasons.append("Verified profile")
    if scores.price >= GREAT_PRICE:
        reasons.append("Great price")
    return tuple(reasons)


def round_score(overall: float) -> int:
    """Round half up (92.5 -> 93) and clamp to ``[0, 100]``."""
    return max(0, min(100, math.floor(overall + 0.5)))


def match_trips(
    query: MatchQuery, candidates: Iterable[CandidateTrip]
) -> list[TripMatch]:
    """Score, filter and rank *candidates* against *query*."""
    matches: list[TripMatch] = []
    scored = 0

    for trip in candidates:
        scored += 1
        scores = score_trip(query, trip)
        overall = scores.overall
        if overall < MATCH_THRESHOLD:
            continue

        matches.append(
            TripMatch(
                trip_id=trip.trip_id,
                driver_id=trip.driver_id,
                driver_name=trip.driver_name,
                driver_rating=trip.driver_rating,
                compatibility_score=round_score(overall),
                match_reasons=match_reasons(scores, trip),
                price_per_seat=trip.price_per_seat,
                departure_time=trip.departure_time,
                available_seats=trip.available_seats,
                vehicle_type=trip.vehicle_type,
                is_verified=trip.is_verified,
            )
        )

    logger.debug("Scored %d candidate trips, %d matched", scored, len(matches))
    return sorted(matches, key=lambda m: m.compatibility_score, reverse=True)

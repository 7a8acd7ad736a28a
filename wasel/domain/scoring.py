"""
Compatibility Scorers
=====================

Four independent sub-scores, each in ``[0, 100]``:

* **Route**       -- linear decay to 0 at 10 km from either endpoint, plus a
  flat +20 when any of the driver's stops is within 5 km of the rider's
  origin or destination.
* **Preference**  -- 100 minus a penalty per mismatched field
  (smoking 30, pets 20, music / conversation / temperature 10 each).
* **Price**       -- 0 above budget, otherwise a 70 floor plus the percent
  saved against the rider's maximum.
* **Rating**      -- 0 below the rider's minimum, otherwise linear from the
  minimum (0) to 5.0 (100).

Overall = 0.40 x route + 0.25 x preference + 0.20 x rating + 0.15 x price

Complexity: O(s) for the route score (s = number of stops), O(1) otherwise.
"""

from __future__ import annotations

from dataclasses import dataclass

from .distance import distance_km
from .entities import RidePreferences, Route

MAX_SCORE = 100.0
MAX_RATING = 5.0

ROUTE_DECAY_PER_KM = 10.0
ROUTE_DECAY_RADIUS_KM = MAX_SCORE / ROUTE_DECAY_PER_KM  # start score hits 0 here
STOP_RADIUS_KM = 5.0
STOP_BONUS = 20.0

SMOKING_PENALTY = 30
PETS_PENALTY = 20
MUSIC_PENALTY = 10
CONVERSATION_PENALTY = 10
TEMPERATURE_PENALTY = 10

PRICE_FLOOR = 70.0

WEIGHTS = {
    "route": 0.40,
    "preference": 0.25,
    "rating": 0.20,
    "price": 0.15,
}


def _clamp(value: float) -> float:
    return max(0.0, min(MAX_SCORE, value))


def route_score(user_route: Route, trip_route: Route) -> float:
    start_distance = distance_km(user_route.origin, trip_route.origin)
    end_distance = distance_km(user_route.destination, trip_route.destination)

    start_score = max(0.0, MAX_SCORE - start_distance * ROUTE_DECAY_PER_KM)
    end_score = max(0.0, MAX_SCORE - end_distance * ROUTE_DECAY_PER_KM)

    near_stop = any(
        distance_km(user_route.origin, stop) < STOP_RADIUS_KM
        or distance_km(user_route.destination, stop) < STOP_RADIUS_KM
        for stop in trip_route.stops
    )
    stop_bonus = STOP_BONUS if near_stop else 0.0

    return min(MAX_SCORE, (start_score + end_score) / 2 + stop_bonus)


def preference_score(rider: RidePreferences, driver: RidePreferences) -> float:
    score = MAX_SCORE

    # Hard constraints
    if rider.allows_smoking != driver.allows_smoking:
        score -= SMOKING_PENALTY
    if rider.allows_pets != driver.allows_pets:
        score -= PETS_PENALTY

    # Soft preferences
    if rider.allows_music != driver.allows_music:
        score -= MUSIC_PENALTY
    if rider.conversation_level != driver.conversation_level:
        score -= CONVERSATION_PENALTY
    if rider.temperature_preference != driver.temperature_preference:
        score -= TEMPERATURE_PENALTY

    return max(0.0, score)


def price_score(max_price: float, trip_price: float) -> float:
    """Score a seat price against the rider's budget.

    A zero (or negative) budget can only be met by a free seat, which
    still has no meaningful saving, so it scores 0 instead of ``0 / 0``.
    """
    if trip_price > max_price or max_price <= 0:
        return 0.0

    percent_saving = (max_price - trip_price) / max_price * 100
    return _clamp(PRICE_FLOOR + percent_saving)


def rating_score(driver_rating: float, min_rating: float = 4.0) -> float:
    """Score a driver's rating against the rider's minimum.

    When the minimum is already the top of the scale only a perfect 5.0
    can satisfy it, and it scores 100.
    """
    if driver_rating < min_rating:
        return 0.0
    if min_rating >= MAX_RATING:
        return MAX_SCORE if driver_rating == MAX_RATING else 0.0

    return _clamp(
        (driver_rating - min_rating) / (MAX_RATING - min_rating) * MAX_SCORE
    )


@dataclass(frozen=True)
class ScoreBreakdown:
    route: float
    preference: float
    rating: float
    price: float

    @property
    def overall(self) -> float:
        """Weighted sum of the sub-scores, unrounded."""
        return (
            self.route * WEIGHTS["route"]
            + self.preference * WEIGHTS["preference"]
            + self.rating * WEIGHTS["rating"]
            + self.price * WEIGHTS["price"]
        )

"""Unit tests for the match aggregator and the H3 pre-filter."""

import math

import pytest

from wasel.domain.entities import GeoPoint, MatchQuery, RidePreferences, Route
from wasel.domain.enums import ConversationLevel
from wasel.domain.matching import (
    match_reasons,
    match_trips,
    ride_h3_cell,
    rings_for_radius,
    round_score,
    score_trip,
    search_cells,
)
from tests.conftest import ABU_DHABI, ALEXANDRIA, CAIRO, DUBAI


class TestScenarios:
    def test_perfect_dubai_to_abu_dhabi_match(self, dubai_query, make_trip):
        trip = make_trip()
        scores = score_trip(dubai_query, trip)

        assert scores.route == 100.0
        assert scores.preference == 100.0
        assert scores.price == pytest.approx(80.0)
        assert scores.rating == pytest.approx(80.0)
        assert scores.overall == pytest.approx(93.0)

        [match] = match_trips(dubai_query, [trip])
        assert match.compatibility_score == 93
        assert match.match_reasons == (
            "Perfect route match",
            "Great compatibility",
            "Highly rated driver",
            "Verified profile",
        )

    def test_over_budget_trip_scores_zero_on_price(self, dubai_query, make_trip):
        trip = make_trip(price_per_seat=60.0)
        scores = score_trip(dubai_query, trip)
        assert scores.price == 0.0

        # Still included: 40 + 25 + 16 + 0 = 81
        [match] = match_trips(dubai_query, [trip])
        assert match.compatibility_score == 81

    def test_low_rated_driver_scores_zero_on_rating(self, dubai_query, make_trip):
        trip = make_trip(driver_rating=3.5)
        assert score_trip(dubai_query, trip).rating == 0.0


class TestThreshold:
    def _far_query(self) -> MatchQuery:
        # Nowhere near Dubai -> Abu Dhabi, so the route score is 0
        return MatchQuery(
            desired_route=Route(CAIRO, ALEXANDRIA),
            rider_preferences=RidePreferences(),
            max_price_per_seat=45.0,
            min_driver_rating=4.0,
        )

    def test_compares_unrounded_score(self, make_trip):
        # 0 + 25 + 0.2 x 70.5 + 0.15 x 70 = 49.6, which would round to 50
        trip = make_trip(driver_rating=4.705, is_verified=False)
        query = self._far_query()

        overall = score_trip(query, trip).overall
        assert overall == pytest.approx(49.6)
        assert round_score(overall) == 50
        assert match_trips(query, [trip]) == []

    def test_just_above_threshold_is_included(self, make_trip):
        # 0 + 25 + 0.2 x 75 + 0.15 x 70 = 50.5
        trip = make_trip(driver_rating=4.75, is_verified=False)
        [match] = match_trips(self._far_query(), [trip])
        assert match.compatibility_score == 51
        assert match.match_reasons == ("Great compatibility", "Highly rated driver")

    def test_far_trip_with_bad_preferences_is_dropped(self, make_trip):
        trip = make_trip(
            driver_preferences=RidePreferences(allows_smoking=True, allows_pets=True)
        )
        assert match_trips(self._far_query(), [trip]) == []


class TestRanking:
    def test_sorted_descending(self, dubai_query, make_trip):
        okay = make_trip("okay", driver_rating=4.2)
        best = make_trip("best", driver_rating=5.0)
        good = make_trip("good", driver_rating=4.6)

        result = match_trips(dubai_query, [okay, best, good])
        assert [m.trip_id for m in result] == ["best", "good", "okay"]
        scores = [m.compatibility_score for m in result]
        assert scores == sorted(scores, reverse=True)

    def test_ties_keep_input_order(self, dubai_query, make_trip):
        trips = [make_trip(f"t{i}") for i in range(5)]
        result = match_trips(dubai_query, trips)
        assert [m.trip_id for m in result] == ["t0", "t1", "t2", "t3", "t4"]

    def test_ties_keep_input_order_around_higher_scores(self, dubai_query, make_trip):
        a = make_trip("a")
        top = make_trip("top", driver_rating=5.0)
        b = make_trip("b")
        result = match_trips(dubai_query, [a, top, b])
        assert [m.trip_id for m in result] == ["top", "a", "b"]

    def test_empty_candidates(self, dubai_query):
        assert match_trips(dubai_query, []) == []

    def test_idempotent(self, dubai_query, make_trip):
        trips = [
            make_trip("a", driver_rating=4.1),
            make_trip("b", price_per_seat=20.0),
            make_trip("c", driver_preferences=RidePreferences(allows_music=False)),
        ]
        assert match_trips(dubai_query, trips) == match_trips(dubai_query, trips)

    def test_accepts_any_iterable(self, dubai_query, make_trip):
        result = match_trips(dubai_query, (make_trip(str(i)) for i in range(3)))
        assert len(result) == 3


class TestMatchReasons:
    def test_fixed_order_with_every_reason(self, dubai_query, make_trip):
        trip = make_trip(price_per_seat=25.0, driver_rating=4.9)
        scores = score_trip(dubai_query, trip)
        assert match_reasons(scores, trip) == (
            "Perfect route match",
            "Great compatibility",
            "Highly rated driver",
            "Verified profile",
            "Great price",
        )

    def test_no_reasons(self, make_trip):
        query = MatchQuery(
            desired_route=Route(CAIRO, ALEXANDRIA),
            max_price_per_seat=50.0,
        )
        trip = make_trip(
            driver_rating=4.5,
            is_verified=False,
            driver_preferences=RidePreferences(
                conversation_level=ConversationLevel.CHATTY, allows_music=False
            ),
        )
        assert match_reasons(score_trip(query, trip), trip) == ()


class TestRoundScore:
    def test_rounds_half_up(self):
        assert round_score(92.5) == 93
        assert round_score(50.5) == 51

    def test_rounds_down(self):
        assert round_score(92.49) == 92

    def test_clamped(self):
        assert round_score(100.0000001) == 100
        assert round_score(0.0) == 0


class TestH3Cells:
    def test_returns_string(self):
        cell = ride_h3_cell(DUBAI.latitude, DUBAI.longitude, 7)
        assert isinstance(cell, str)
        assert len(cell) > 0

    def test_nearby_points_same_cell(self):
        c1 = ride_h3_cell(25.2048, 55.2708, 7)
        c2 = ride_h3_cell(25.2049, 55.2709, 7)
        assert c1 == c2

    def test_search_area_contains_own_cell(self):
        cells = search_cells(DUBAI, resolution=7, ring_size=2)
        assert ride_h3_cell(DUBAI.latitude, DUBAI.longitude, 7) in cells
        # 1 + 6 + 12 hexagons
        assert len(cells) == 19

    def test_search_area_excludes_other_cities(self):
        cells = search_cells(DUBAI, resolution=7, ring_size=2)
        assert ride_h3_cell(ABU_DHABI.latitude, ABU_DHABI.longitude, 7) not in cells

    def test_ring_size_zero_is_single_cell(self):
        point = GeoPoint(24.4539, 54.3773)
        assert search_cells(point, ring_size=0) == {
            ride_h3_cell(point.latitude, point.longitude, 7)
        }

    def test_rings_cover_route_decay_radius(self):
        assert rings_for_radius(10.0, 7) == 5
        assert rings_for_radius(0.0, 7) == 0

    @pytest.mark.parametrize("km", [3.0, 6.0, 8.0])
    def test_default_search_area_reaches_scoring_trips(self, km):
        # Trips up to 10 km away still earn a start score
        offset = km / 111.195
        cells = search_cells(DUBAI)
        for lat, lng in (
            (DUBAI.latitude + offset, DUBAI.longitude),
            (DUBAI.latitude - offset, DUBAI.longitude),
            (DUBAI.latitude, DUBAI.longitude + offset / math.cos(math.radians(DUBAI.latitude))),
        ):
            assert ride_h3_cell(lat, lng, 7) in cells

"""Unit tests for the smart suggestion heuristic and the mock geocoder."""

from datetime import datetime

from wasel.domain.entities import GeoPoint, TripHistoryRecord
from wasel.domain.geocoding import geocode, is_known_location
from wasel.domain.suggestions import (
    MORNING_COMMUTE_SUGGESTION,
    generate_suggestions,
    route_key,
)


def _record(frm: str, to: str, hour: int = 14, day: int = 1) -> TripHistoryRecord:
    return TripHistoryRecord(
        from_address=frm,
        to_address=to,
        departure_time=datetime(2026, 10, day, hour, 15),
    )


class TestRecurringRoute:
    def test_repeated_route_is_suggested(self):
        history = [_record("Dubai Marina", "Downtown Dubai", day=d) for d in range(1, 5)]
        history.append(_record("Sharjah", "Dubai Airport"))

        assert generate_suggestions(history) == [
            "Set up recurring trip for Dubai Marina-Downtown Dubai?"
        ]

    def test_two_occurrences_are_not_enough(self):
        history = [_record("A", "B"), _record("A", "B"), _record("C", "D")]
        assert generate_suggestions(history) == []

    def test_direction_matters(self):
        history = [_record("A", "B"), _record("B", "A"), _record("A", "B"), _record("B", "A")]
        assert generate_suggestions(history) == []

    def test_case_matters(self):
        history = [_record("Dubai", "Doha"), _record("dubai", "Doha"), _record("DUBAI", "Doha")]
        assert generate_suggestions(history) == []

    def test_first_seen_route_wins_a_tie(self):
        history = [_record("C", "D"), _record("A", "B")] * 3
        assert generate_suggestions(history) == ["Set up recurring trip for C-D?"]

    def test_route_key(self):
        assert route_key(_record("Dubai Marina", "JLT")) == "Dubai Marina-JLT"


class TestMorningPattern:
    def test_three_morning_trips(self):
        history = [
            _record("Dubai Marina", "Downtown Dubai", hour=14, day=d) for d in range(1, 5)
        ]
        history.append(_record("Sharjah", "Dubai Airport"))
        history += [
            _record("JLT", "DIFC", hour=7),
            _record("Al Barsha", "Deira", hour=8),
            _record("Jumeirah", "Business Bay", hour=9),
        ]

        assert generate_suggestions(history) == [
            "Set up recurring trip for Dubai Marina-Downtown Dubai?",
            MORNING_COMMUTE_SUGGESTION,
        ]

    def test_window_is_six_to_nine_inclusive(self):
        inside = [_record("A", f"X{h}", hour=h) for h in (6, 9, 9)]
        assert generate_suggestions(inside) == [MORNING_COMMUTE_SUGGESTION]

        outside = [_record("A", f"X{h}", hour=h) for h in (5, 10, 10)]
        assert generate_suggestions(outside) == []

    def test_morning_route_counts_for_both(self):
        history = [_record("Home", "Office", hour=8, day=d) for d in range(1, 4)]
        assert generate_suggestions(history) == [
            "Set up recurring trip for Home-Office?",
            MORNING_COMMUTE_SUGGESTION,
        ]


class TestEmptyHistory:
    def test_no_suggestions(self):
        assert generate_suggestions([]) == []


class TestGeocode:
    def test_known_city(self):
        point = geocode("Abu Dhabi")
        assert (point.latitude, point.longitude) == (24.4539, 54.3773)
        assert point.address == "Abu Dhabi"

    def test_lookup_ignores_case_and_whitespace(self):
        assert geocode("  CAIRO ") == GeoPoint(30.0444, 31.2357, "  CAIRO ")
        assert is_known_location("  Doha")

    def test_unknown_city_falls_back_to_dubai(self):
        point = geocode("Atlantis")
        assert (point.latitude, point.longitude) == (25.2048, 55.2708)
        assert point.address == "Atlantis"
        assert not is_known_location("Atlantis")

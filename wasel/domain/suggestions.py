"""
Smart suggestions from a user's trip history.

Two independent checks, reported in this order:

1. **Recurring route** -- the most frequent ``from-to`` pair (exact,
   case- and direction-sensitive; first seen wins a tie) occurs 3+ times.
2. **Morning pattern**  -- 3+ trips departed between 06:00 and 09:59, read
   from each record's own timestamp.
"""

from __future__ import annotations

from collections import Counter
from typing import Sequence

from .entities import TripHistoryRecord

MIN_ROUTE_OCCURRENCES = 3
MIN_MORNING_TRIPS = 3
MORNING_HOURS = range(6, 10)

MORNING_COMMUTE_SUGGESTION = (
    "You often travel in the morning. Enable morning commute alerts?"
)


def route_key(record: TripHistoryRecord) -> str:
    return f"{record.from_address}-{record.to_address}"


def generate_suggestions(history: Sequence[TripHistoryRecord]) -> list[str]:
    suggestions: list[str] = []

    # Counter.most_common keeps insertion order among equal counts
    frequency = Counter(route_key(record) for record in history)
    if frequency:
        route, count = frequency.most_common(1)[0]
        if count >= MIN_ROUTE_OCCURRENCES:
            suggestions.append(f"Set up recurring trip for {route}?")

    morning_trips = [
        record for record in history
        if record.departure_time.hour in MORNING_HOURS
    ]
    if len(morning_trips) >= MIN_MORNING_TRIPS:
        suggestions.append(MORNING_COMMUTE_SUGGESTION)

    return suggestions

"""
Trip analytics over a user's history.

Only completed trips count.  Money and distance totals are rounded to whole
units, carbon saved and average rating to one decimal.  Carbon saved
assumes 0.12 kg CO2 per shared km.

Nothing here reads the clock: the monthly series is anchored on a ``now``
supplied by the caller.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional, Sequence

from .entities import TripHistoryRecord
from .enums import TripRole, TripStatus, TripType

CARBON_KG_PER_KM = 0.12
TOP_ROUTES_LIMIT = 5
MONTHS_SHOWN = 6

MONTH_NAMES = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

REPORT_TITLE = "Wassel Expense Report"
REPORT_RULE = "=" * 60


@dataclass(frozen=True)
class RouteStats:
    route: str
    count: int
    avg_price: int
    last_used: datetime


@dataclass(frozen=True)
class CategoryBreakdown:
    by_type: dict[str, int]
    by_time: dict[str, int]


@dataclass(frozen=True)
class MonthlyStats:
    month: str  # "Oct 2026"
    trips: int
    spent: float
    earned: float
    distance: float


@dataclass(frozen=True)
class TripAnalytics:
    total_trips: int
    total_distance: int
    total_spent: int
    total_earned: int
    carbon_saved: float
    average_rating: float
    total_rides: int
    total_drives: int
    top_routes: list[RouteStats]
    categories: CategoryBreakdown
    monthly_data: list[MonthlyStats] = field(default_factory=list)


def time_of_day(hour: int) -> str:
    if 6 <= hour < 12:
        return "morning"
    if 12 <= hour < 17:
        return "afternoon"
    if 17 <= hour < 21:
        return "evening"
    return "night"


def _round_half_up(value: float, digits: int = 0) -> float:
    factor = 10 ** digits
    return int(value * factor + 0.5) / factor


def top_routes(
    trips: Sequence[TripHistoryRecord], limit: int = TOP_ROUTES_LIMIT
) -> list[RouteStats]:
    """Most used routes, by count descending; ties keep first-seen order."""
    grouped: dict[str, list[TripHistoryRecord]] = {}
    for trip in trips:
        grouped.setdefault(f"{trip.from_address} → {trip.to_address}", []).append(trip)

    stats = [
        RouteStats(
            route=route,
            count=len(records),
            avg_price=int(_round_half_up(sum(r.price for r in records) / len(records))),
            last_used=max(r.departure_time for r in records),
        )
        for route, records in grouped.items()
    ]
    return sorted(stats, key=lambda s: s.count, reverse=True)[:limit]


def category_breakdown(trips: Sequence[TripHistoryRecord]) -> CategoryBreakdown:
    by_type = Counter(trip.trip_type.value for trip in trips)
    by_time = Counter(time_of_day(trip.departure_time.hour) for trip in trips)
    return CategoryBreakdown(
        by_type={t.value: by_type.get(t.value, 0) for t in TripType},
        by_time={
            bucket: by_time.get(bucket, 0)
            for bucket in ("morning", "afternoon", "evening", "night")
        },
    )


def month_label(year: int, month: int) -> str:
    return f"{MONTH_NAMES[month - 1]} {year}"


def monthly_data(
    trips: Sequence[TripHistoryRecord],
    now: datetime,
    months: int = MONTHS_SHOWN,
) -> list[MonthlyStats]:
    """Per-month totals for the *months* calendar months ending with *now*'s.

    Oldest month first.  Months with no completed trips are still listed,
    with zeros; trips outside the window are ignored.
    """
    buckets: dict[str, list[TripHistoryRecord]] = {}
    for back in range(months - 1, -1, -1):
        year, month = divmod(now.year * 12 + now.month - 1 - back, 12)
        buckets[month_label(year, month + 1)] = []

    for trip in trips:
        if trip.status != TripStatus.COMPLETED:
            continue
        key = month_label(trip.departure_time.year, trip.departure_time.month)
        if key in buckets:
            buckets[key].append(trip)

    return [
        MonthlyStats(
            month=key,
            trips=len(records),
            spent=sum(r.price for r in records if r.role == TripRole.PASSENGER),
            earned=sum(r.price for r in records if r.role != TripRole.PASSENGER),
            distance=sum(r.distance_km for r in records),
        )
        for key, records in buckets.items()
    ]


@dataclass(frozen=True)
class ExpenseReport:
    """Completed passenger trips between two days, both inclusive."""

    start: date
    end: date
    trips: list[TripHistoryRecord]

    @property
    def total_trips(self) -> int:
        return len(self.trips)

    @property
    def total_amount(self) -> float:
        return sum(t.price for t in self.trips)

    def render(self) -> str:
        lines = [
            REPORT_TITLE,
            f"Period: {self.start.isoformat()} - {self.end.isoformat()}",
            "",
            f"Total Trips: {self.total_trips}",
            f"Total Amount: {_amount(self.total_amount)} AED",
            "",
            "Breakdown:",
            "Date\t\tRoute\t\t\t\tAmount",
            REPORT_RULE,
        ]
        lines += [
            f"{t.departure_time.date().isoformat()}\t"
            f"{t.from_address} → {t.to_address}\t\t{_amount(t.price)} AED"
            for t in self.trips
        ]
        return "\n".join(lines) + "\n"


def _amount(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else f"{value:.2f}"


def expense_report(
    trips: Sequence[TripHistoryRecord], start: date, end: date
) -> ExpenseReport:
    """Collect the trips a rider paid for between *start* and *end*."""
    selected = [
        t
        for t in trips
        if t.status == TripStatus.COMPLETED
        and t.role == TripRole.PASSENGER
        and start <= t.departure_time.date() <= end
    ]
    return ExpenseReport(start=start, end=end, trips=selected)


def calculate_analytics(
    history: Sequence[TripHistoryRecord], now: Optional[datetime] = None
) -> TripAnalytics:
    """Totals over *history*; the monthly series is only built when *now* is given."""
    completed = [t for t in history if t.status == TripStatus.COMPLETED]
    as_passenger = [t for t in completed if t.role == TripRole.PASSENGER]
    as_driver = [t for t in completed if t.role == TripRole.DRIVER]

    total_distance = sum(t.distance_km for t in completed)
    rated = [t.rating for t in completed if t.rating]
    average_rating = sum(rated) / len(rated) if rated else 0.0

    return TripAnalytics(
        total_trips=len(completed),
        total_distance=int(_round_half_up(total_distance)),
        total_spent=int(_round_half_up(sum(t.price for t in as_passenger))),
        total_earned=int(_round_half_up(sum(t.price for t in as_driver))),
        carbon_saved=_round_half_up(total_distance * CARBON_KG_PER_KM, 1),
        average_rating=_round_half_up(average_rating, 1),
        total_rides=len(as_passenger),
        total_drives=len(as_driver),
        top_routes=top_routes(completed),
        categories=category_breakdown(completed),
        monthly_data=monthly_data(completed, now) if now is not None else [],
    )

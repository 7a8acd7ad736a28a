"""
Matching endpoints
==================

POST /api/v1/matches      -- score caller-supplied candidate trips
POST /api/v1/suggestions  -- smart suggestions from a trip history
POST /api/v1/analytics    -- trip analytics summary from a trip history
POST /api/v1/analytics/expense-report
                          -- completed passenger trips in a date range
GET  /api/v1/geocode      -- resolve a city name to coordinates

None of these touch the database: the caller supplies the data and the
pure domain functions do the rest.
"""

from datetime import datetime

from fastapi import APIRouter, Query, Request

from wasel.api.middleware import limiter
from wasel.api.schemas import (
    AnalyticsRequest,
    AnalyticsResponse,
    ExpenseReportRequest,
    ExpenseReportResponse,
    GeocodeResponse,
    HistoryRecordSchema,
    HistoryRequest,
    MatchRequest,
    SuggestionsResponse,
    TripMatchResponse,
)
from wasel.config import settings
from wasel.domain.analytics import calculate_analytics, expense_report
from wasel.domain.geocoding import geocode, is_known_location
from wasel.domain.matching import match_trips
from wasel.domain.suggestions import generate_suggestions

router = APIRouter(tags=["matching"])


@router.post(
    "/matches",
    response_model=list[TripMatchResponse],
    summary="Rank candidate trips by compatibility",
)
@limiter.limit(settings.rate_limit)
async def create_matches(request: Request, body: MatchRequest):
    matches = match_trips(
        body.query.to_domain(), [c.to_domain() for c in body.candidates]
    )
    return [TripMatchResponse.from_domain(m) for m in matches]


@router.post(
    "/suggestions",
    response_model=SuggestionsResponse,
    summary="Suggest recurring trips and commute alerts",
)
@limiter.limit(settings.rate_limit)
async def create_suggestions(request: Request, body: HistoryRequest):
    return SuggestionsResponse(suggestions=generate_suggestions(body.to_domain()))


@router.post(
    "/analytics",
    response_model=AnalyticsResponse,
    summary="Summarise a trip history",
)
@limiter.limit(settings.rate_limit)
async def create_analytics(request: Request, body: AnalyticsRequest):
    now = body.as_of or datetime.now()
    return AnalyticsResponse.model_validate(
        calculate_analytics(body.to_domain(), now=now), from_attributes=True
    )


@router.post(
    "/analytics/expense-report",
    response_model=ExpenseReportResponse,
    summary="Report completed passenger trips in a date range",
    description="Both ``start`` and ``end`` are inclusive calendar days.",
)
@limiter.limit(settings.rate_limit)
async def create_expense_report(request: Request, body: ExpenseReportRequest):
    report = expense_report(body.to_domain(), body.start, body.end)
    return ExpenseReportResponse(
        start=report.start,
        end=report.end,
        total_trips=report.total_trips,
        total_amount=report.total_amount,
        trips=[
            HistoryRecordSchema.model_validate(t, from_attributes=True)
            for t in report.trips
        ],
        report=report.render(),
    )


@router.get(
    "/geocode",
    response_model=GeocodeResponse,
    summary="Resolve a city name to coordinates",
    description="Unknown names resolve to Dubai with ``resolved`` set to false.",
)
@limiter.limit(settings.rate_limit)
async def get_geocode(request: Request, q: str = Query(..., min_length=1)):
    point = geocode(q)
    return GeocodeResponse(
        latitude=point.latitude,
        longitude=point.longitude,
        address=point.address,
        resolved=is_known_location(q),
    )

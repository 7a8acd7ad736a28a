"""
Trip endpoints
==============

POST /api/v1/trips          -- offer a trip (driver side)
GET  /api/v1/trips/{id}     -- fetch a stored trip
POST /api/v1/trips/search   -- match stored trips against a rider's query
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from wasel.api.dependencies import get_trip_repository
from wasel.api.middleware import limiter
from wasel.api.schemas import (
    ErrorResponse,
    TripCreateRequest,
    TripMatchResponse,
    TripResponse,
    TripSearchRequest,
)
from wasel.config import settings
from wasel.domain.matching import match_trips, search_cells
from wasel.infrastructure.repositories import TripRepository, to_candidate_trip

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/trips", tags=["trips"])


@router.post(
    "",
    status_code=201,
    response_model=TripResponse,
    summary="Offer a trip",
)
@limiter.limit(settings.rate_limit)
async def create_trip(
    request: Request,
    body: TripCreateRequest,
    repo: TripRepository = Depends(get_trip_repository),
):
    trip = await repo.create_trip(
        driver_id=body.driver_id,
        driver_name=body.driver_name,
        driver_rating=body.driver_rating,
        is_verified=body.is_verified,
        preferences=body.preferences.to_domain(),
        origin=body.origin.to_domain(),
        destination=body.destination.to_domain(),
        stops=[s.to_domain() for s in body.stops],
        price_per_seat=body.price_per_seat,
        departure_time=body.departure_time,
        available_seats=body.available_seats,
        vehicle_type=body.vehicle_type,
    )
    logger.info("Trip %s offered by driver %s", trip.id, trip.driver_id)
    return trip


@router.post(
    "/search",
    response_model=list[TripMatchResponse],
    summary="Find and rank stored trips for a rider",
    description=(
        "Narrows stored trips to those departing near the rider's origin "
        "(H3 rings) and, optionally, on a given date, then ranks them by "
        "compatibility."
    ),
)
@limiter.limit(settings.rate_limit)
async def search_trips(
    request: Request,
    body: TripSearchRequest,
    repo: TripRepository = Depends(get_trip_repository),
):
    query = body.query.to_domain()
    cells = search_cells(
        query.desired_route.origin,
        resolution=settings.h3_resolution,
        ring_size=settings.search_ring_size,
    )
    rows = await repo.find_candidates(cells, departure_date=body.departure_date)
    matches = match_trips(query, [to_candidate_trip(r) for r in rows])
    logger.info(
        "Trip search: %d candidates in %d cells, %d matches",
        len(rows), len(cells), len(matches),
    )
    return [TripMatchResponse.from_domain(m) for m in matches]


@router.get(
    "/{trip_id}",
    response_model=TripResponse,
    summary="Get a stored trip",
    responses={404: {"model": ErrorResponse}},
)
@limiter.limit(settings.rate_limit)
async def get_trip(
    request: Request,
    trip_id: int,
    repo: TripRepository = Depends(get_trip_repository),
):
    trip = await repo.get_by_id(trip_id)
    if not trip:
        raise HTTPException(status_code=404, detail="Trip not found")
    return trip

"""
FastAPI application factory.

* Registers routes for matching, trips and admin.
* Applies rate-limiting middleware.
* Swagger / OpenAPI UI available at ``/docs``.
"""

import logging

from fastapi import FastAPI
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from wasel.api.middleware import limiter
from wasel.api.routes import admin, matching, trips
from wasel.config import settings

logging.basicConfig(level=settings.log_level)


def create_app() -> FastAPI:
    app = FastAPI(
        title="Wasel Trip Matching API",
        description=(
            "Ranks offered trips against a rider's route, ride preferences, "
            "budget and minimum driver rating, and suggests recurring trips "
            "from a rider's history."
        ),
        version="1.0.0",
    )

    # Rate limiter
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    # Routers
    app.include_router(matching.router, prefix="/api/v1")
    app.include_router(trips.router, prefix="/api/v1")
    app.include_router(admin.router, prefix="/api/v1")

    return app

"""FastAPI dependency injection helpers."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from wasel.infrastructure.database import async_session_factory
from wasel.infrastructure.repositories import TripRepository


async def get_db() -> AsyncSession:  # type: ignore[misc]
    """Yield an async DB session; commit on success, rollback on error."""
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def get_trip_repository(
    db: AsyncSession = Depends(get_db),
) -> TripRepository:
    return TripRepository(db)

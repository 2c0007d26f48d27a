"""FastAPI dependency injection — provides DB sessions, the case service and the pathway registry.

Each request that touches the database gets a fresh ``AsyncSession`` via
``get_db()``.  The session is committed on success and rolled back on error,
matching the convention that the repository calls ``flush()`` but never
``commit()``.
"""

from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession

from intake_db.engine import get_session_factory
from intake_pathways.registry import PathwayRegistry
from intake_pathways.service import CaseService


# ------------------------------------------------------------------
# Database session; the transaction boundary lives here
# ------------------------------------------------------------------

async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield an async DB session; commit on success, rollback on error."""
    factory = get_session_factory()
    async with factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


# ------------------------------------------------------------------
# Service & registry, stashed on app.state during lifespan
# ------------------------------------------------------------------

def get_service(request: Request) -> CaseService:
    """Return the CaseService singleton from ``app.state``."""
    return request.app.state.service


def get_registry(request: Request) -> PathwayRegistry:
    """Return the PathwayRegistry singleton from ``app.state``."""
    return request.app.state.registry

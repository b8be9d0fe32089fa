"""FastAPI dependency injection — provides DB sessions, the catalog, and the service.

Each request that touches the database gets a fresh ``AsyncSession`` via
``get_db()``.  The session is committed on success and rolled back on
error; the repository only ever calls ``flush()``.
"""

from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession

from absence_db.engine import get_session_factory
from absence_questions.catalog import QuestionCatalog
from absence_questions.service import AbsenceQuestionService


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


def get_catalog(request: Request) -> QuestionCatalog:
    """Return the catalog singleton from ``app.state``."""
    return request.app.state.catalog


def get_service(request: Request) -> AbsenceQuestionService:
    """Return the service singleton from ``app.state``."""
    return request.app.state.service

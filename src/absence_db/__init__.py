"""absence_db — PostgreSQL persistence layer for absence question answers.

This package provides the ORM model, async engine factory, and repository
for appending and listing the answers recorded against an absence case.
It is consumed by the absence_questions service and the FastAPI server.
"""

from absence_db.models.answer import AbsenceAnswer
from absence_db.engine import get_engine, get_session_factory
from absence_db.repository import AnswerRepository

__all__ = [
    "AbsenceAnswer",
    "get_engine",
    "get_session_factory",
    "AnswerRepository",
]

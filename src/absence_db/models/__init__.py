"""ORM models for absence_db."""

from absence_db.models.answer import AbsenceAnswer
from absence_db.models.base import Base

__all__ = ["Base", "AbsenceAnswer"]

"""AbsenceAnswer ORM model — one row per recorded answer.

Rows are append-only: an answer is written once and never updated.  A case
(absence record) may hold several rows for the same question when a
follow-up re-asks it; readers order by ``answered_at`` to replay history.

The question catalog itself is YAML-backed and lives in memory, so
``question_template_id`` is a plain integer with no foreign key here.
"""

from datetime import datetime, timezone

from sqlalchemy import Index, Integer, Text
from sqlalchemy.dialects.postgresql import TIMESTAMP
from sqlalchemy.orm import Mapped, mapped_column

from absence_db.models.base import Base


class AbsenceAnswer(Base):
    """A single answer to a catalog question for one absence case."""

    __tablename__ = "absence_questions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # The absence record the answer belongs to
    absence_id: Mapped[int] = mapped_column(Integer, nullable=False)
    # Catalog id of the answered question
    question_template_id: Mapped[int] = mapped_column(Integer, nullable=False)
    # Raw answer; multi-select values are comma-joined
    answer: Mapped[str] = mapped_column(Text, nullable=False)
    answered_by_id: Mapped[int] = mapped_column(Integer, nullable=False)

    answered_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        # History reads are always per case, in time order
        Index("ix_absence_questions_absence_answered", "absence_id", "answered_at"),
    )

    def __repr__(self) -> str:
        return (
            f"<AbsenceAnswer(id={self.id}, absence={self.absence_id}, "
            f"question={self.question_template_id}, answer={self.answer!r})>"
        )

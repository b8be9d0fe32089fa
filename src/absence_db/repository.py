"""Async repository for recorded absence answers.

All public methods accept an ``AsyncSession`` so the caller controls
transaction boundaries.  Writes call ``flush()`` so that a subsequent
``list_answers`` in the same session sees them (read-your-writes); the
FastAPI dependency commits at the end of the request.

The repository performs no catalog validation — that belongs in the SDK
layer.
"""

from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from absence_db.models.answer import AbsenceAnswer


class AnswerRepository:
    """Append-only access to the ``absence_questions`` table."""

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    async def list_answers(
        self, db: AsyncSession, case_id: int
    ) -> list[AbsenceAnswer]:
        """Return every answer for a case, oldest first."""
        stmt = (
            select(AbsenceAnswer)
            .where(AbsenceAnswer.absence_id == case_id)
            .order_by(AbsenceAnswer.answered_at.asc(), AbsenceAnswer.id.asc())
        )
        result = await db.execute(stmt)
        return list(result.scalars().all())

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    async def append_answer(
        self,
        db: AsyncSession,
        case_id: int,
        *,
        question_id: int,
        value: str,
        answered_by: int,
    ) -> AbsenceAnswer:
        """Insert one answer row and return it with its id populated."""
        row = AbsenceAnswer(
            absence_id=case_id,
            question_template_id=question_id,
            answer=value,
            answered_by_id=answered_by,
            answered_at=datetime.now(timezone.utc),
        )
        db.add(row)
        await db.flush()
        return row

    async def append_answers(
        self,
        db: AsyncSession,
        case_id: int,
        answers: list[tuple[int, str]],
        *,
        answered_by: int,
    ) -> list[AbsenceAnswer]:
        """Insert several ``(question_id, value)`` answers in the given order."""
        rows = []
        for question_id, value in answers:
            rows.append(
                await self.append_answer(
                    db, case_id,
                    question_id=question_id,
                    value=value,
                    answered_by=answered_by,
                )
            )
        return rows

"""AbsenceQuestionService — composes the question engine with the answer store.

Stateless service pattern: each call loads the case's answer history from
the database, runs the pure engine (resolver / scorer / gate) over it, and
returns the result.  No in-memory state is kept between calls, so
concurrent requests for the same or different cases need no locking.

The service accepts an ``AsyncSession`` from the caller so that the caller
(typically a FastAPI endpoint) controls transaction boundaries.  Writes are
flushed, never committed, here.
"""

from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from absence_db.models.answer import AbsenceAnswer
from absence_db.repository import AnswerRepository

from absence_questions.catalog import QuestionCatalog
from absence_questions.models.answer import AnsweredQuestion, AnswerInput, AnswerView
from absence_questions.models.assessment import RiskAssessment, SaveAnswersResult
from absence_questions.models.question import QuestionDefinition
from absence_questions.risk import RiskScorer, requires_mental_health_follow_up
from absence_questions.visibility import VisibilityResolver

logger = logging.getLogger(__name__)


class AbsenceQuestionService:
    """Look up, compute, respond — for every case-scoped question operation.

    Args:
        catalog: a loaded :class:`QuestionCatalog` instance
    """

    def __init__(self, catalog: QuestionCatalog) -> None:
        self._catalog = catalog
        self._repo = AnswerRepository()
        self._resolver = VisibilityResolver(catalog)
        self._scorer = RiskScorer(catalog)

    @property
    def catalog(self) -> QuestionCatalog:
        return self._catalog

    # ==================================================================
    # Writes
    # ==================================================================

    async def save_answers(
        self,
        db: AsyncSession,
        *,
        case_id: int,
        answers: list[AnswerInput],
        answered_by: int,
    ) -> SaveAnswersResult:
        """Record *answers* for a case and return them with a fresh risk assessment.

        Every ``question_id`` must exist in the catalog; the whole batch is
        rejected with ``ValueError`` otherwise, before anything is written.
        """
        if not answers:
            raise ValueError("At least one answer is required")
        unknown = sorted(
            {a.question_id for a in answers if self._catalog.get(a.question_id) is None}
        )
        if unknown:
            raise ValueError(f"Unknown question_id(s): {unknown}")

        rows = await self._repo.append_answers(
            db,
            case_id,
            [(a.question_id, a.answer) for a in answers],
            answered_by=answered_by,
        )
        logger.info("Saved %d answers for case %d", len(rows), case_id)

        return SaveAnswersResult(
            saved_answers=[self._to_answered(r) for r in rows],
            risk_assessment=await self.assess_risk(db, case_id=case_id),
        )

    # ==================================================================
    # Reads
    # ==================================================================

    async def get_history(self, db: AsyncSession, *, case_id: int) -> list[AnsweredQuestion]:
        """Return the case's answer history, oldest first."""
        rows = await self._repo.list_answers(db, case_id)
        return [self._to_answered(r) for r in rows]

    async def get_answers(self, db: AsyncSession, *, case_id: int) -> list[AnswerView]:
        """Return the history joined with question text, type, and category."""
        views = []
        for answer in await self.get_history(db, case_id=case_id):
            question = self._catalog.get(answer.question_id)
            views.append(
                AnswerView(
                    id=answer.id,
                    question_id=answer.question_id,
                    answer=answer.value,
                    answered_by=answer.answered_by,
                    answered_at=answer.answered_at,
                    question_text=question.text if question else None,
                    question_type=question.question_type if question else None,
                    category=question.category if question else None,
                )
            )
        return views

    async def get_follow_up_questions(
        self, db: AsyncSession, *, case_id: int
    ) -> list[QuestionDefinition]:
        """Return only the dependent questions unlocked by the case's answers."""
        history = await self.get_history(db, case_id=case_id)
        return self._resolver.unlocked_questions(history)

    async def get_visible_questions(
        self,
        db: AsyncSession,
        *,
        case_id: int,
        absence_type: str,
        reason_category: str,
    ) -> list[QuestionDefinition]:
        """Return scenario roots plus every question the answers have unlocked."""
        history = await self.get_history(db, case_id=case_id)
        return self._resolver.visible_questions(history, absence_type, reason_category)

    async def assess_risk(self, db: AsyncSession, *, case_id: int) -> RiskAssessment:
        """Score the case's full answer history."""
        history = await self.get_history(db, case_id=case_id)
        assessment = self._scorer.assess(history)
        if assessment.requires_immediate_attention:
            logger.warning("Case %d assessed as %s", case_id, assessment.level)
        return assessment

    async def requires_mental_health_follow_up(
        self, db: AsyncSession, *, case_id: int
    ) -> bool:
        """True if any answered question touches on mental health."""
        history = await self.get_history(db, case_id=case_id)
        return requires_mental_health_follow_up(self._catalog, history)

    # ==================================================================
    # Helpers
    # ==================================================================

    @staticmethod
    def _to_answered(row: AbsenceAnswer) -> AnsweredQuestion:
        """Map an ORM row to the engine's answer model."""
        return AnsweredQuestion(
            id=row.id,
            case_id=row.absence_id,
            question_id=row.question_template_id,
            value=row.answer,
            answered_by=row.answered_by_id,
            answered_at=row.answered_at,
        )

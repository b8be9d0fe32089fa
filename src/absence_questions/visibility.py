"""VisibilityResolver — computes which questions are currently shown for a case.

Pure and idempotent: the result depends only on the catalog and the answer
history passed in.  No state is kept between calls.

Ordering of the result:
  1. scenario root questions, in catalog order
  2. questions unlocked by answers, in the order the triggering answers
     were recorded (catalog order within a single answer)

Only the most recent answer to each question is used to decide which
children are unlocked.  A question never appears twice.
"""

from __future__ import annotations

import logging
from typing import Iterable

from absence_questions.catalog import QuestionCatalog
from absence_questions.models.answer import AnsweredQuestion
from absence_questions.models.question import QuestionDefinition

logger = logging.getLogger(__name__)


def chronological(answers: Iterable[AnsweredQuestion]) -> list[AnsweredQuestion]:
    """Return *answers* sorted by ``answered_at`` (stable for equal timestamps)."""
    return sorted(answers, key=lambda a: a.answered_at)


class VisibilityResolver:
    """Resolves the visible question set against a loaded catalog."""

    def __init__(self, catalog: QuestionCatalog) -> None:
        self._catalog = catalog

    def visible_questions(
        self,
        answers: Iterable[AnsweredQuestion],
        absence_type: str,
        reason_category: str,
    ) -> list[QuestionDefinition]:
        """Return the ordered, de-duplicated list of visible questions."""
        visible = list(self._catalog.scenario_questions(absence_type, reason_category))
        seen = {q.id for q in visible}
        for q in self.unlocked_questions(answers):
            if q.id not in seen:
                seen.add(q.id)
                visible.append(q)
        return visible

    def unlocked_questions(
        self, answers: Iterable[AnsweredQuestion]
    ) -> list[QuestionDefinition]:
        """Return only the dependent questions unlocked by *answers*, de-duplicated."""
        history = chronological(answers)

        # Last answer wins: remember the position of the latest answer per question
        latest: dict[int, int] = {}
        for idx, answer in enumerate(history):
            latest[answer.question_id] = idx

        unlocked: list[QuestionDefinition] = []
        seen: set[int] = set()
        for idx, answer in enumerate(history):
            if latest[answer.question_id] != idx:
                continue
            if self._catalog.get(answer.question_id) is None:
                logger.debug(
                    "Skipping answer for unknown question %d", answer.question_id
                )
                continue
            for child in self._catalog.children_of(answer.question_id, answer.value):
                if child.id not in seen:
                    seen.add(child.id)
                    unlocked.append(child)
        return unlocked

"""Answer models — recorded answers and the enriched history view.

``AnsweredQuestion`` is the engine input: it always carries the
``question_id`` it answers, so children are resolved by id and never by
re-deriving the id from question text.  Answers are immutable once
recorded.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class AnsweredQuestion(BaseModel):
    """A single recorded answer for a case (absence record)."""

    question_id: int
    # Raw string answer; multi-select values are comma-joined
    value: str
    answered_by: int
    answered_at: datetime
    id: Optional[int] = None
    case_id: Optional[int] = None

    model_config = {"frozen": True}


class AnswerInput(BaseModel):
    """One answer in a save request, before it has been recorded."""

    question_id: int
    answer: str


class AnswerView(BaseModel):
    """History entry joined with its catalog definition for API consumers.

    Question fields are ``None`` when the answer references an id that is
    no longer in the catalog.
    """

    id: Optional[int] = None
    question_id: int
    answer: str
    answered_by: int
    answered_at: datetime
    question_text: Optional[str] = None
    question_type: Optional[str] = None
    category: Optional[str] = None

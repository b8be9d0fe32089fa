"""Derived result models — never persisted.

  - RiskAssessment: output of the risk scorer
  - FlowNode / DependentGroup: the static question flow for a scenario
  - SaveAnswersResult: what the save operation returns
"""

from typing import List, Literal

from pydantic import BaseModel, computed_field

from absence_questions.constants import RISK_LEVELS
from absence_questions.models.answer import AnsweredQuestion
from absence_questions.models.question import QuestionDefinition

RiskLevel = Literal["Low", "Moderate", "High", "Critical"]


class RiskAssessment(BaseModel):
    """Severity level, triggered flags, and recommended actions for a case."""

    level: RiskLevel = "Low"
    flags: List[str] = []
    recommended_actions: List[str] = []

    @computed_field
    @property
    def requires_immediate_attention(self) -> bool:
        return self.level == "Critical"

    @property
    def severity(self) -> int:
        """Index of ``level`` on the severity ladder (0 = Low, 3 = Critical)."""
        return RISK_LEVELS.index(self.level)


class DependentGroup(BaseModel):
    """Questions unlocked by one particular answer to a parent."""

    trigger_answer: str
    questions: List[QuestionDefinition]


class FlowNode(BaseModel):
    """A scenario question plus everything each of its options would unlock."""

    question: QuestionDefinition
    dependent_questions: List[DependentGroup] = []


class SaveAnswersResult(BaseModel):
    """Answers recorded by a save request and the refreshed risk assessment."""

    saved_answers: List[AnsweredQuestion]
    risk_assessment: RiskAssessment

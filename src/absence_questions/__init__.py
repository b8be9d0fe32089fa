"""absence_questions — dependent-question and risk engine for absence reporting.

Public API:
    QuestionCatalog        — loads the YAML catalog with scenario/child lookup helpers
    VisibilityResolver     — computes the visible question set from answer history
    RiskScorer             — derives a RiskAssessment from answer history
    AbsenceQuestionService — async service composing the engine with the answer store

Models:
    QuestionDefinition     — one catalog entry
    AnsweredQuestion       — one recorded answer
    RiskAssessment         — derived risk level, flags, and recommended actions
"""

from absence_questions.catalog import QuestionCatalog
from absence_questions.models.answer import AnsweredQuestion, AnswerInput, AnswerView
from absence_questions.models.assessment import (
    DependentGroup,
    FlowNode,
    RiskAssessment,
    SaveAnswersResult,
)
from absence_questions.models.question import QuestionDefinition
from absence_questions.risk import RiskScorer, requires_mental_health_follow_up
from absence_questions.service import AbsenceQuestionService
from absence_questions.visibility import VisibilityResolver

__all__ = [
    # Engine
    "QuestionCatalog",
    "VisibilityResolver",
    "RiskScorer",
    "requires_mental_health_follow_up",
    "AbsenceQuestionService",
    # Models
    "QuestionDefinition",
    "AnsweredQuestion",
    "AnswerInput",
    "AnswerView",
    "RiskAssessment",
    "DependentGroup",
    "FlowNode",
    "SaveAnswersResult",
]

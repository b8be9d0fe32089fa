"""Public model re-exports for absence_questions.

Consumers should import from ``absence_questions.models`` rather than
reaching into sub-modules directly.
"""

# --- Questions ---
from absence_questions.models.question import (
    QuestionCategory,
    QuestionDefinition,
    QuestionType,
    RiskTag,
)

# --- Answers ---
from absence_questions.models.answer import (
    AnsweredQuestion,
    AnswerInput,
    AnswerView,
)

# --- Derived results ---
from absence_questions.models.assessment import (
    DependentGroup,
    FlowNode,
    RiskAssessment,
    RiskLevel,
    SaveAnswersResult,
)

__all__ = [
    # Questions
    "QuestionCategory",
    "QuestionDefinition",
    "QuestionType",
    "RiskTag",
    # Answers
    "AnsweredQuestion",
    "AnswerInput",
    "AnswerView",
    # Results
    "DependentGroup",
    "FlowNode",
    "RiskAssessment",
    "RiskLevel",
    "SaveAnswersResult",
]

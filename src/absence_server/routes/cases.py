"""Case endpoints — record answers and compute derived views for one absence.

Every endpoint follows the same contract: look up the case's answer
history, compute, respond.  Only ``POST /answers`` writes.
"""

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from absence_questions.models.answer import AnswerInput, AnswerView
from absence_questions.models.assessment import RiskAssessment, SaveAnswersResult
from absence_questions.models.question import QuestionDefinition
from absence_questions.service import AbsenceQuestionService

from absence_server.dependencies import get_db, get_service

router = APIRouter(prefix="/questions", tags=["cases"])


# ------------------------------------------------------------------
# Request / response models
# ------------------------------------------------------------------

class SaveAnswersRequest(BaseModel):
    """Body for POST /questions/{case_id}/answers."""
    answers: list[AnswerInput] = Field(min_length=1)
    answered_by_id: int


class MentalHealthCheck(BaseModel):
    """Response for GET /questions/{case_id}/mental-health-check."""
    requires_mental_health_follow_up: bool


# ------------------------------------------------------------------
# Endpoints
# ------------------------------------------------------------------

@router.post("/{case_id}/answers")
async def save_answers(
    case_id: int,
    body: SaveAnswersRequest,
    db: AsyncSession = Depends(get_db),
    service: AbsenceQuestionService = Depends(get_service),
) -> SaveAnswersResult:
    """Record answers for a case and return them with the updated risk assessment."""
    return await service.save_answers(
        db,
        case_id=case_id,
        answers=body.answers,
        answered_by=body.answered_by_id,
    )


@router.get("/{case_id}/answers")
async def get_answers(
    case_id: int,
    db: AsyncSession = Depends(get_db),
    service: AbsenceQuestionService = Depends(get_service),
) -> list[AnswerView]:
    """Return the case's answers, oldest first, with question details."""
    return await service.get_answers(db, case_id=case_id)


@router.get("/{case_id}/follow-up")
async def get_follow_up_questions(
    case_id: int,
    db: AsyncSession = Depends(get_db),
    service: AbsenceQuestionService = Depends(get_service),
) -> list[QuestionDefinition]:
    """Return the dependent questions the case's answers have unlocked."""
    return await service.get_follow_up_questions(db, case_id=case_id)


@router.get("/{case_id}/visible")
async def get_visible_questions(
    case_id: int,
    absence_type: str = Query(...),
    reason_category: str = Query(...),
    db: AsyncSession = Depends(get_db),
    service: AbsenceQuestionService = Depends(get_service),
) -> list[QuestionDefinition]:
    """Return the full visible question set for the case's scenario."""
    return await service.get_visible_questions(
        db,
        case_id=case_id,
        absence_type=absence_type,
        reason_category=reason_category,
    )


@router.get("/{case_id}/risk-assessment")
async def get_risk_assessment(
    case_id: int,
    db: AsyncSession = Depends(get_db),
    service: AbsenceQuestionService = Depends(get_service),
) -> RiskAssessment:
    """Return the risk assessment for the case's answer history."""
    return await service.assess_risk(db, case_id=case_id)


@router.get("/{case_id}/mental-health-check")
async def mental_health_check(
    case_id: int,
    db: AsyncSession = Depends(get_db),
    service: AbsenceQuestionService = Depends(get_service),
) -> MentalHealthCheck:
    """Return whether the case needs a mental-health follow-up."""
    required = await service.requires_mental_health_follow_up(db, case_id=case_id)
    return MentalHealthCheck(requires_mental_health_follow_up=required)

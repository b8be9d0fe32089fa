"""Catalog endpoints — read-only views of the question catalog.

These never touch the database: the catalog is loaded once at startup and
is immutable for the lifetime of the process.
"""

from fastapi import APIRouter, Depends

from absence_questions.catalog import QuestionCatalog
from absence_questions.models.assessment import FlowNode
from absence_questions.models.question import QuestionDefinition

from absence_server.dependencies import get_catalog

router = APIRouter(prefix="/questions", tags=["catalog"])


@router.get("/catalog")
def list_catalog(
    catalog: QuestionCatalog = Depends(get_catalog),
) -> list[QuestionDefinition]:
    """Return every question definition in catalog order."""
    return catalog.all_questions()


@router.get("/return-to-work")
def return_to_work_questions(
    catalog: QuestionCatalog = Depends(get_catalog),
) -> list[QuestionDefinition]:
    """Return the root Return-to-Work questions."""
    return catalog.return_to_work_questions()


@router.get("/scenario/{absence_type}/{reason_category}")
def scenario_questions(
    absence_type: str,
    reason_category: str,
    catalog: QuestionCatalog = Depends(get_catalog),
) -> list[QuestionDefinition]:
    """Return the root questions for an absence type / reason pair."""
    return catalog.scenario_questions(absence_type, reason_category)


@router.get("/flow/{absence_type}/{reason_category}")
def question_flow(
    absence_type: str,
    reason_category: str,
    catalog: QuestionCatalog = Depends(get_catalog),
) -> list[FlowNode]:
    """Return the scenario questions with the follow-ups each option unlocks."""
    return catalog.question_flow(absence_type, reason_category)


@router.get("/dependent/{parent_id}/{answer}")
def dependent_questions(
    parent_id: int,
    answer: str,
    catalog: QuestionCatalog = Depends(get_catalog),
) -> list[QuestionDefinition]:
    """Return the questions unlocked by answering ``parent_id`` with ``answer``.

    An unknown parent yields an empty list rather than an error.
    """
    return catalog.children_of(parent_id, answer)

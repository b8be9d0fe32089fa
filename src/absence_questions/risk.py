"""RiskScorer — derives a RiskAssessment from a case's answer history.

Every recorded answer is checked against every rule in ``RISK_RULES``.  A
rule applies to a question when the question carries the rule's
``risk_tag`` or, failing that, when the question text contains the rule's
keyword.  The final level is the highest severity any rule reached; later
answers can raise it but never lower it.

Flags are reported in the order their answers were recorded and are not
de-duplicated: the same rule firing for two answers yields two flags.

Also provides :func:`requires_mental_health_follow_up`, the keyword gate
used to decide whether a case needs a mental-health follow-up.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable

from absence_questions.catalog import QuestionCatalog
from absence_questions.constants import MENTAL_HEALTH_KEYWORDS, RISK_LEVELS
from absence_questions.models.answer import AnsweredQuestion
from absence_questions.models.assessment import RiskAssessment
from absence_questions.models.question import QuestionDefinition
from absence_questions.visibility import chronological

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RiskRule:
    """One row of the risk table."""

    tag: str
    keyword: str
    severity: int
    flag: str
    triggered_by: Callable[[str], bool]

    def applies_to(self, question: QuestionDefinition) -> bool:
        if question.risk_tag is not None and question.risk_tag == self.tag:
            return True
        return self.keyword in question.text


RISK_RULES: list[RiskRule] = [
    RiskRule(
        tag="self-harm",
        keyword="self-harm",
        severity=3,
        flag="Self-harm risk identified",
        triggered_by=lambda v: v == "true",
    ),
    RiskRule(
        tag="stress-level",
        keyword="stress level",
        severity=2,
        flag="High stress level reported",
        triggered_by=lambda v: v in ("High", "Very High"),
    ),
    RiskRule(
        tag="respiratory-symptoms",
        keyword="respiratory symptoms",
        severity=1,
        flag="Respiratory symptoms present",
        triggered_by=lambda v: v != "None",
    ),
    RiskRule(
        tag="mobility",
        keyword="mobility",
        severity=1,
        flag="Mobility affected by injury",
        triggered_by=lambda v: v == "true",
    ),
    RiskRule(
        tag="condition-trend",
        keyword="feeling today",
        severity=2,
        flag="Condition worsening",
        triggered_by=lambda v: v in ("Slightly Worse", "Much Worse"),
    ),
]

# Actions added per level, and per flag.  Applied in this order.
LEVEL_ACTIONS: dict[str, list[str]] = {
    "Critical": [
        "Immediate supervisor contact required",
        "Emergency support services referral",
        "Safety plan development",
    ],
    "High": [
        "Manager follow-up within 24 hours",
        "EAP referral recommended",
        "Wellness check scheduled",
    ],
    "Moderate": [
        "Regular follow-up calls",
        "Peer support connection",
        "Monitor for changes",
    ],
}
FLAG_ACTIONS: dict[str, list[str]] = {
    "Respiratory symptoms present": [
        "Medical assessment recommended",
        "Consider communicable disease protocols",
    ],
    "Mobility affected by injury": [
        "Occupational health assessment",
        "Modified duty consideration",
    ],
}


def recommended_actions(level: str, flags: list[str]) -> list[str]:
    """Derive the recommended actions for a level and its flags."""
    actions = list(LEVEL_ACTIONS.get(level, []))
    for flag, extra in FLAG_ACTIONS.items():
        if flag in flags:
            actions.extend(extra)
    return actions


class RiskScorer:
    """Scores answer histories against the catalog."""

    def __init__(self, catalog: QuestionCatalog, rules: list[RiskRule] | None = None) -> None:
        self._catalog = catalog
        self._rules = RISK_RULES if rules is None else rules

    def assess(self, answers: Iterable[AnsweredQuestion]) -> RiskAssessment:
        """Return the risk assessment for a full answer history."""
        risk_index = 0
        flags: list[str] = []

        for answer in chronological(answers):
            question = self._catalog.get(answer.question_id)
            if question is None:
                logger.debug("Skipping answer for unknown question %d", answer.question_id)
                continue
            for rule in self._rules:
                if rule.applies_to(question) and rule.triggered_by(answer.value):
                    risk_index = max(risk_index, rule.severity)
                    flags.append(rule.flag)

        level = RISK_LEVELS[risk_index]
        return RiskAssessment(
            level=level,
            flags=flags,
            recommended_actions=recommended_actions(level, flags),
        )


def requires_mental_health_follow_up(
    catalog: QuestionCatalog, answers: Iterable[AnsweredQuestion]
) -> bool:
    """True if any answered question's text mentions a mental-health keyword.

    Matching is case-sensitive.  Answers to unknown questions are ignored.
    """
    for answer in answers:
        question = catalog.get(answer.question_id)
        if question is None:
            continue
        if any(keyword in question.text for keyword in MENTAL_HEALTH_KEYWORDS):
            return True
    return False

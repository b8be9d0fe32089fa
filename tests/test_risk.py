"""RiskScorer and mental-health gate tests.

Rule table (severity floor / flag):
    "self-harm"            + "true"                         -> Critical / Self-harm risk identified
    "stress level"         + High | Very High               -> High     / High stress level reported
    "respiratory symptoms" + anything but "None"            -> Moderate / Respiratory symptoms present
    "mobility"             + "true"                         -> Moderate / Mobility affected by injury
    "feeling today"        + Slightly Worse | Much Worse    -> High     / Condition worsening
"""

import pytest

from absence_questions.catalog import QuestionCatalog
from absence_questions.constants import RISK_LEVELS
from absence_questions.risk import RiskScorer, recommended_actions, requires_mental_health_follow_up

from helpers.factories import make_answer, make_question

SELF_HARM = "Are you currently experiencing thoughts of self-harm?"
RESPIRATORY = "Are you experiencing any respiratory symptoms?"
STRESS = "How would you rate your current stress level?"
MOBILITY = "Is your mobility affected by the injury?"
FEELING = "How are you feeling today?"


@pytest.fixture
def keyword_catalog():
    """Untagged questions whose prose carries the rule keywords."""
    return QuestionCatalog.from_definitions([
        make_question(1, SELF_HARM, question_type="boolean", category="Mental Health"),
        make_question(2, RESPIRATORY, question_type="select", category="Medical"),
        make_question(3, STRESS, question_type="select", category="Mental Health"),
        make_question(4, MOBILITY, question_type="boolean", category="Medical"),
        make_question(5, FEELING, question_type="select", category="Follow-up"),
        make_question(6, "Any other comments?"),
    ])


@pytest.fixture
def scorer(keyword_catalog):
    return RiskScorer(keyword_catalog)


# =====================================================================
# Single-rule scenarios
# =====================================================================


class TestSingleRules:
    """Each rule on its own."""

    def test_no_answers_is_low(self, scorer):
        result = scorer.assess([])
        assert result.level == "Low"
        assert result.flags == []
        assert result.recommended_actions == []
        assert result.requires_immediate_attention is False

    def test_self_harm_is_critical(self, scorer):
        result = scorer.assess([make_answer(1, "true")])
        assert result.level == "Critical"
        assert "Self-harm risk identified" in result.flags
        assert result.requires_immediate_attention is True
        assert "Safety plan development" in result.recommended_actions

    def test_self_harm_false_is_low(self, scorer):
        assert scorer.assess([make_answer(1, "false")]).level == "Low"

    def test_respiratory_symptoms_is_moderate(self, scorer):
        result = scorer.assess([make_answer(2, "Cough")])
        assert result.level == "Moderate"
        assert result.flags == ["Respiratory symptoms present"]
        assert "Medical assessment recommended" in result.recommended_actions
        assert result.requires_immediate_attention is False

    def test_respiratory_none_is_low(self, scorer):
        assert scorer.assess([make_answer(2, "None")]).flags == []

    @pytest.mark.parametrize("value", ["High", "Very High"])
    def test_high_stress(self, scorer, value):
        result = scorer.assess([make_answer(3, value)])
        assert result.level == "High"
        assert result.flags == ["High stress level reported"]

    def test_moderate_stress_is_low(self, scorer):
        assert scorer.assess([make_answer(3, "Moderate")]).level == "Low"

    def test_mobility(self, scorer):
        result = scorer.assess([make_answer(4, "true")])
        assert result.level == "Moderate"
        assert result.recommended_actions == [
            "Regular follow-up calls",
            "Peer support connection",
            "Monitor for changes",
            "Occupational health assessment",
            "Modified duty consideration",
        ]

    @pytest.mark.parametrize("value", ["Slightly Worse", "Much Worse"])
    def test_condition_worsening(self, scorer, value):
        result = scorer.assess([make_answer(5, value)])
        assert result.level == "High"
        assert result.flags == ["Condition worsening"]

    def test_unrelated_question_ignored(self, scorer):
        assert scorer.assess([make_answer(6, "true")]).level == "Low"

    def test_unknown_question_skipped(self, scorer):
        result = scorer.assess([make_answer(99, "true"), make_answer(2, "Fever", minute=1)])
        assert result.level == "Moderate"


# =====================================================================
# Combined histories
# =====================================================================


class TestCombined:
    """Levels take the maximum; flags keep answer order and duplicates."""

    def test_level_is_maximum(self, scorer):
        history = [
            make_answer(1, "true", minute=0),
            make_answer(2, "Cough", minute=1),
        ]
        result = scorer.assess(history)
        assert result.level == "Critical", "A later moderate answer must not lower the level"
        assert result.flags == ["Self-harm risk identified", "Respiratory symptoms present"]
        assert result.recommended_actions == [
            "Immediate supervisor contact required",
            "Emergency support services referral",
            "Safety plan development",
            "Medical assessment recommended",
            "Consider communicable disease protocols",
        ]

    def test_flags_follow_timestamp_order(self, scorer):
        history = [
            make_answer(4, "true", minute=9),
            make_answer(3, "High", minute=1),
        ]
        assert scorer.assess(history).flags == [
            "High stress level reported",
            "Mobility affected by injury",
        ]

    def test_repeated_answers_duplicate_flags(self, scorer):
        history = [make_answer(2, "Cough", minute=0), make_answer(2, "Fever", minute=3)]
        assert scorer.assess(history).flags == [
            "Respiratory symptoms present",
            "Respiratory symptoms present",
        ]

    def test_severity_is_monotonic(self, scorer):
        """Appending any answer never lowers the severity."""
        answers = [
            make_answer(2, "Cough", minute=0),
            make_answer(3, "Low", minute=1),
            make_answer(5, "Much Better", minute=2),
            make_answer(1, "true", minute=3),
            make_answer(2, "None", minute=4),
            make_answer(6, "fine", minute=5),
        ]
        previous = 0
        for n in range(1, len(answers) + 1):
            severity = scorer.assess(answers[:n]).severity
            assert severity >= previous, f"Severity dropped after answer {n}"
            previous = severity
        assert RISK_LEVELS[previous] == "Critical"


# =====================================================================
# Risk tags
# =====================================================================


def test_risk_tag_applies_without_keyword():
    """A tagged question fires its rule even when the prose is reworded."""
    catalog = QuestionCatalog.from_definitions([
        make_question(
            1, "Have you had thoughts of hurting yourself?",
            question_type="boolean", risk_tag="self-harm",
        ),
    ])
    result = RiskScorer(catalog).assess([make_answer(1, "true")])
    assert result.level == "Critical"


def test_v1_catalog_is_tagged(catalog):
    """Scoring the shipped catalog: stress then self-harm escalates to Critical."""
    history = [
        make_answer(1, "Mental Health", minute=0),
        make_answer(7, "Very High", minute=1),
        make_answer(8, "true", minute=2),
    ]
    result = RiskScorer(catalog).assess(history)
    assert result.level == "Critical"
    assert result.flags == ["High stress level reported", "Self-harm risk identified"]


def test_recommended_actions_high_with_respiratory_flag():
    assert recommended_actions("High", ["Respiratory symptoms present"]) == [
        "Manager follow-up within 24 hours",
        "EAP referral recommended",
        "Wellness check scheduled",
        "Medical assessment recommended",
        "Consider communicable disease protocols",
    ]


# =====================================================================
# Mental-health gate
# =====================================================================


class TestMentalHealthGate:
    """Keyword gate on answered question text (case-sensitive)."""

    def test_stress_question_requires_follow_up(self, keyword_catalog):
        assert requires_mental_health_follow_up(keyword_catalog, [make_answer(3, "Low")]) is True

    def test_self_harm_question_requires_follow_up(self, keyword_catalog):
        assert requires_mental_health_follow_up(keyword_catalog, [make_answer(1, "false")]) is True

    def test_unrelated_history(self, keyword_catalog):
        history = [make_answer(2, "Cough"), make_answer(6, "none", minute=1)]
        assert requires_mental_health_follow_up(keyword_catalog, history) is False

    def test_empty_history(self, keyword_catalog):
        assert requires_mental_health_follow_up(keyword_catalog, []) is False

    def test_unknown_question_ignored(self, keyword_catalog):
        """Answers to ids missing from the catalog are skipped, not raised."""
        history = [make_answer(404, "Mental Health"), make_answer(6, "fine", minute=1)]
        assert requires_mental_health_follow_up(keyword_catalog, history) is False

    def test_match_is_case_sensitive(self):
        catalog = QuestionCatalog.from_definitions([
            make_question(1, "Any mental health concerns?"),
            make_question(2, "Any Mental Health concerns?"),
        ])
        assert requires_mental_health_follow_up(catalog, [make_answer(1, "no")]) is False
        assert requires_mental_health_follow_up(catalog, [make_answer(2, "no")]) is True

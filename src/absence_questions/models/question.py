"""Question definition model for absence question catalogs.

Each definition maps to a single prompt in the absence reporting flow:

  - text: open-ended text input
  - select: pick one option
  - multi-select: pick one or more options (answer is comma-joined)
  - boolean: yes/no, answered as "true" / "false"

A definition with ``depends_on`` set is only shown once its parent has been
answered with one of its ``trigger_values``.  Root questions have
``depends_on = None``.

Malformed ``options`` / ``trigger_values`` payloads never raise; they are
logged and coerced to "no options" / "no trigger values".
"""

from __future__ import annotations

import json
import logging
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, field_validator

logger = logging.getLogger(__name__)

QuestionType = Literal["text", "select", "multi-select", "boolean"]
QuestionCategory = Literal[
    "Initial", "Follow-up", "Medical", "Mental Health", "Return-to-Work"
]
RiskTag = Literal[
    "self-harm", "stress-level", "respiratory-symptoms", "mobility", "condition-trend"
]


class QuestionDefinition(BaseModel):
    """A single catalog entry."""

    id: int
    text: str
    question_type: QuestionType
    options: List[str] = []
    depends_on: Optional[int] = None
    # Stored comma-joined, e.g. "Slightly Worse,Much Worse".
    # None means any answer to the parent triggers this question;
    # "" means nothing triggers it.
    trigger_values: Optional[str] = None
    required: bool = False
    category: QuestionCategory
    risk_tag: Optional[RiskTag] = None

    model_config = {"frozen": True}

    @field_validator("options", mode="before")
    @classmethod
    def _coerce_options(cls, v: Any) -> list[str]:
        if v is None:
            return []
        # Options may come from a JSONB column as an encoded string
        if isinstance(v, str):
            try:
                v = json.loads(v)
            except ValueError:
                logger.warning("Malformed options payload %r; treating as no options", v)
                return []
        if isinstance(v, list) and all(isinstance(o, str) for o in v):
            return v
        logger.warning("Malformed options payload %r; treating as no options", v)
        return []

    @field_validator("trigger_values", mode="before")
    @classmethod
    def _coerce_triggers(cls, v: Any) -> Optional[str]:
        if v is None or isinstance(v, str):
            return v
        if isinstance(v, list) and all(isinstance(t, str) for t in v):
            return ",".join(v)
        logger.warning("Malformed trigger_values payload %r; treating as no triggers", v)
        return ""

    @property
    def is_root(self) -> bool:
        """True if this question has no parent."""
        return self.depends_on is None

    @property
    def trigger_list(self) -> list[str]:
        """Trigger values split on commas (empty when unset)."""
        if not self.trigger_values:
            return []
        return [t.strip() for t in self.trigger_values.split(",") if t.strip()]

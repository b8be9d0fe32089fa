"""Absence question constants shared across the SDK.

These values are referenced by the catalog, resolver, and risk scorer.
They mirror conventions encoded in the YAML catalog under ``v1/``.

The trigger matching mode and the scenario root set can be overridden via
environment variables so that deployments can switch behaviour without
code changes.  Unrecognised values fall back to the default with a warning.
"""

import logging
import os

logger = logging.getLogger(__name__)


def mode_from_env(var: str, default: str, allowed: set[str]) -> str:
    """Read a mode switch from *var*, case-insensitively.

    Returns *default* when the variable is unset or holds a value outside
    *allowed*.
    """
    raw = os.getenv(var)
    if raw is None:
        return default
    mode = raw.strip().lower()
    if mode not in allowed:
        logger.warning(
            "Ignoring %s=%r (expected one of %s); using %r",
            var, raw, sorted(allowed), default,
        )
        return default
    return mode


# Risk levels ordered from least to most severe.
# The scorer only ever raises the index, never lowers it.
RISK_LEVELS: list[str] = ["Low", "Moderate", "High", "Critical"]

# Scenario rules, evaluated top-to-bottom; first match wins.
# Each entry is (absence_type or None for any, reason_category, allowed categories).
SCENARIO_RULES: list[tuple[str | None, str, set[str]]] = [
    (None, "Mental Health", {"Initial", "Mental Health"}),
    (None, "Injury", {"Initial", "Medical"}),
    ("Extended", "Medical", {"Initial", "Medical"}),
]
DEFAULT_SCENARIO_CATEGORIES: set[str] = {"Initial"}

# Which root questions the scenario rules filter.
# "initial" keeps only Initial roots, so every scenario yields the Initial
# roots; "all" lets the rules pull in Medical / Mental Health roots too.
# Overridable via SCENARIO_ROOTS env var.
SCENARIO_ROOT_MODES: set[str] = {"initial", "all"}
DEFAULT_SCENARIO_ROOTS = mode_from_env("SCENARIO_ROOTS", "initial", SCENARIO_ROOT_MODES)

# Case-sensitive substrings that mark a question as mental-health related.
MENTAL_HEALTH_KEYWORDS: tuple[str, ...] = ("Mental Health", "stress", "self-harm")

# "contains" reproduces the loose LIKE '%answer%' matching against the
# comma-joined trigger string; "exact" splits on commas first.
# Overridable via TRIGGER_MATCH_MODE env var.
TRIGGER_MATCH_MODES: set[str] = {"contains", "exact"}
DEFAULT_TRIGGER_MATCH = mode_from_env("TRIGGER_MATCH_MODE", "contains", TRIGGER_MATCH_MODES)

# Boolean questions without explicit options expose these values in flows.
BOOLEAN_OPTIONS: list[str] = ["true", "false"]

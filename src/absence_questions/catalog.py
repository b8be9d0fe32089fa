"""QuestionCatalog — loads the YAML question catalog from ``v1/`` into typed models.

This is the single source of truth for question definitions at runtime.
The catalog is loaded once at startup, treated as immutable afterwards, and
provides lookup by id, category, scenario, and parent answer.

Usage::

    catalog = QuestionCatalog()          # defaults to v1/ relative to repo root
    catalog.load()                       # parse questions.yaml

    roots = catalog.scenario_questions("Standard", "Injury")
    children = catalog.children_of(1, "Injury")
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterable, Optional

import yaml

from absence_questions.constants import (
    BOOLEAN_OPTIONS,
    DEFAULT_SCENARIO_CATEGORIES,
    DEFAULT_SCENARIO_ROOTS,
    DEFAULT_TRIGGER_MATCH,
    SCENARIO_ROOT_MODES,
    SCENARIO_RULES,
    TRIGGER_MATCH_MODES,
)
from absence_questions.models.assessment import DependentGroup, FlowNode
from absence_questions.models.question import QuestionDefinition

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Utility helpers
# ---------------------------------------------------------------------------

def find_repo_root(start: Optional[Path] = None) -> Path:
    """Walk upwards from *start* to find the repo root (dir with pyproject.toml or .git).

    Falls back to cwd if no marker is found.
    """
    p = (start or Path(__file__).resolve()).parent
    for parent in [p, *p.parents]:
        if (parent / "pyproject.toml").exists() or (parent / ".git").exists():
            return parent
    return Path.cwd()


def load_yaml(path: Path | str) -> Any:
    """Load a single YAML file and return the parsed contents."""
    if isinstance(path, str):
        path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Missing YAML file: {path}")
    with path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def trigger_matches(
    question: QuestionDefinition, answer: str, mode: str = "contains"
) -> bool:
    """Return True if *answer* to the parent unlocks *question*.

    ``contains`` tests substring containment against the comma-joined
    trigger string (``"Much Worse"`` matches ``"Slightly Worse,Much Worse"``,
    and so does ``"Worse"``).  ``exact`` requires the answer to equal one of
    the comma-separated trigger values.
    """
    if question.trigger_values is None:
        return True
    if not question.trigger_values:
        return False
    if mode == "exact":
        return answer in question.trigger_list
    return answer in question.trigger_values


# ---------------------------------------------------------------------------
# QuestionCatalog
# ---------------------------------------------------------------------------

class QuestionCatalog:
    """Loads ``questions.yaml`` and provides typed lookup.

    Attributes populated after :meth:`load` (or :meth:`from_definitions`):

        questions — dict[id, QuestionDefinition], ascending id order
    """

    def __init__(
        self,
        catalog_dir: str | Path | None = None,
        *,
        trigger_match: str = DEFAULT_TRIGGER_MATCH,
        scenario_roots: str = DEFAULT_SCENARIO_ROOTS,
    ) -> None:
        if catalog_dir is None:
            catalog_dir = find_repo_root() / "v1"
        if trigger_match not in TRIGGER_MATCH_MODES:
            raise ValueError(f"Unknown trigger match mode: {trigger_match!r}")
        if scenario_roots not in SCENARIO_ROOT_MODES:
            raise ValueError(f"Unknown scenario roots mode: {scenario_roots!r}")
        self._base = Path(catalog_dir)
        self.trigger_match = trigger_match
        self.scenario_roots = scenario_roots

        # Populated by load()
        self.questions: dict[int, QuestionDefinition] = {}
        # parent id -> children in ascending id order
        self._children: dict[int, list[QuestionDefinition]] = {}

    @classmethod
    def from_definitions(
        cls,
        definitions: Iterable[QuestionDefinition | dict],
        *,
        trigger_match: str = DEFAULT_TRIGGER_MATCH,
        scenario_roots: str = DEFAULT_SCENARIO_ROOTS,
    ) -> "QuestionCatalog":
        """Build a catalog from in-memory definitions instead of YAML."""
        catalog = cls(
            Path.cwd(), trigger_match=trigger_match, scenario_roots=scenario_roots,
        )
        catalog._index(
            d if isinstance(d, QuestionDefinition) else QuestionDefinition(**d)
            for d in definitions
        )
        return catalog

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self) -> None:
        """Parse ``questions.yaml`` under the catalog directory.

        Call this once at startup.  Raises ``FileNotFoundError`` if the file
        is missing and ``ValueError`` for duplicate ids or dependency cycles.
        """
        raw_list = load_yaml(self._base / "questions.yaml") or []
        self._index(QuestionDefinition(**raw) for raw in raw_list)
        logger.info(
            "QuestionCatalog loaded: %d questions, %d roots",
            len(self.questions),
            sum(1 for q in self.questions.values() if q.is_root),
        )

    def _index(self, definitions: Iterable[QuestionDefinition]) -> None:
        questions: dict[int, QuestionDefinition] = {}
        for q in definitions:
            if q.id in questions:
                raise ValueError(f"Duplicate question id {q.id} in catalog")
            questions[q.id] = q

        self.questions = dict(sorted(questions.items()))
        self._children = {}
        for q in self.questions.values():
            if q.depends_on is None:
                continue
            if q.depends_on not in self.questions:
                logger.warning(
                    "Question %d depends on missing question %d", q.id, q.depends_on
                )
            self._children.setdefault(q.depends_on, []).append(q)

        self._check_acyclic()

    def _check_acyclic(self) -> None:
        """Raise ``ValueError`` if the ``depends_on`` graph contains a cycle."""
        resolved: set[int] = set()
        for start in self.questions:
            path: list[int] = []
            current: int | None = start
            while current is not None and current in self.questions:
                if current in resolved:
                    break
                if current in path:
                    cycle = path[path.index(current):] + [current]
                    raise ValueError(
                        "Dependency cycle in catalog: "
                        + " -> ".join(str(c) for c in cycle)
                    )
                path.append(current)
                current = self.questions[current].depends_on
            resolved.update(path)

    # ------------------------------------------------------------------
    # Lookup helpers
    # ------------------------------------------------------------------

    def get(self, question_id: int) -> QuestionDefinition | None:
        """Look up a single question by id.  Returns None if unknown."""
        return self.questions.get(question_id)

    def all_questions(self) -> list[QuestionDefinition]:
        """Return every definition in catalog order."""
        return list(self.questions.values())

    def root_questions_for(self, category: str) -> list[QuestionDefinition]:
        """Return root questions (no parent) in *category*, in catalog order."""
        return [
            q for q in self.questions.values()
            if q.category == category and q.depends_on is None
        ]

    def scenario_questions(
        self, absence_type: str, reason_category: str
    ) -> list[QuestionDefinition]:
        """Return the root questions relevant to an absence scenario.

        Starts from the Initial roots (or every root when ``scenario_roots``
        is ``"all"``).  Rules are evaluated top-to-bottom and the first match
        decides which categories are kept:

          1. reason "Mental Health"             -> Initial + Mental Health
          2. reason "Injury"                    -> Initial + Medical
          3. type "Extended" + reason "Medical" -> Initial + Medical
          4. anything else                      -> Initial only
        """
        if self.scenario_roots == "all":
            candidates = [q for q in self.questions.values() if q.is_root]
        else:
            candidates = self.root_questions_for("Initial")

        allowed = DEFAULT_SCENARIO_CATEGORIES
        for rule_type, rule_reason, categories in SCENARIO_RULES:
            if reason_category == rule_reason and rule_type in (None, absence_type):
                allowed = categories
                break
        return [q for q in candidates if q.category in allowed]

    def children_of(self, parent_id: int, answer: str) -> list[QuestionDefinition]:
        """Return the questions unlocked by answering *parent_id* with *answer*.

        A dangling parent id yields no children; it is logged, never raised.
        """
        if parent_id not in self.questions:
            logger.warning("children_of: unknown parent question %s", parent_id)
            return []
        return [
            q for q in self._children.get(parent_id, [])
            if trigger_matches(q, answer, self.trigger_match)
        ]

    def return_to_work_questions(self) -> list[QuestionDefinition]:
        """Return the root Return-to-Work questions."""
        return self.root_questions_for("Return-to-Work")

    def question_flow(
        self, absence_type: str, reason_category: str
    ) -> list[FlowNode]:
        """Return the scenario questions with the dependents each option unlocks.

        Only select and boolean questions are expanded.  Boolean questions
        without explicit options use ``["true", "false"]``.
        """
        flow: list[FlowNode] = []
        for q in self.scenario_questions(absence_type, reason_category):
            node = FlowNode(question=q)
            if q.question_type in ("select", "boolean"):
                options = q.options
                if not options and q.question_type == "boolean":
                    options = BOOLEAN_OPTIONS
                for option in options:
                    dependents = self.children_of(q.id, option)
                    if dependents:
                        node.dependent_questions.append(
                            DependentGroup(trigger_answer=option, questions=dependents)
                        )
            flow.append(node)
        return flow

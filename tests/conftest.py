import pytest

from absence_questions.catalog import QuestionCatalog
from helpers.factories import make_answer


@pytest.fixture(scope="session")
def catalog():
    """Load the v1 catalog once for the entire test session."""
    c = QuestionCatalog()
    c.load()
    return c


@pytest.fixture
def answer():
    return make_answer


@pytest.fixture(scope="session")
def all_roots_catalog():
    """v1 catalog whose scenario rules filter every root, not just Initial."""
    c = QuestionCatalog(scenario_roots="all")
    c.load()
    return c

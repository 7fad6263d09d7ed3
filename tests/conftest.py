"""
Pytest Configuration and Fixtures.

This file configures pytest and provides shared fixtures for all tests.
"""
import random
import sys
from pathlib import Path

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from src.quizdeck.history_store import HistoryStore
from src.quizdeck.models import UserIdentity
from src.quizdeck.questions import (
    Blank,
    Difficulty,
    DropdownChoiceQuestion,
    FillBlanksQuestion,
    FreeTextQuestion,
    MatchPair,
    MatchPairsQuestion,
    MultiChoiceQuestion,
    SingleChoiceQuestion,
    matches,
)


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests (runner with scripted input)")
    config.addinivalue_line("markers", "smoke: Smoke tests for CLI commands")
    config.addinivalue_line("markers", "slow: Slow tests")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        # Mark based on test file location
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
        elif "smoke" in str(item.fspath):
            item.add_marker(pytest.mark.smoke)


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def rng():
    """Seeded random source so shuffles are repeatable."""
    return random.Random(1234)


@pytest.fixture
def user():
    return UserIdentity(name="Olena", group="KN-21")


@pytest.fixture
def history_store(tmp_path):
    """History store writing into a temporary directory."""
    return HistoryStore(tmp_path / "history.json", limit=30)


@pytest.fixture
def single_question():
    return SingleChoiceQuestion(
        id="t-single",
        difficulty=Difficulty.EASY,
        title="Which method returns an element by its id?",
        options=("getElementById", "querySelectorAll", "getElementsByTagName", "createElement"),
        correct_index=0,
    )


@pytest.fixture
def multi_question():
    return MultiChoiceQuestion(
        id="t-multi",
        difficulty=Difficulty.EASY,
        title="Select the array methods:",
        options=("map", "filter", "reduce", "appendChild"),
        correct_indexes={0, 1, 2},
    )


@pytest.fixture
def dropdown_question():
    return DropdownChoiceQuestion(
        id="t-dropdown",
        difficulty=Difficulty.EASY,
        title="How do you read a text input's value?",
        options=("input.value", "input.text", "input.innerHTML"),
        correct_value="input.value",
    )


@pytest.fixture
def free_text_question():
    return FreeTextQuestion(
        id="t-text",
        difficulty=Difficulty.EASY,
        title="Add the class 'active' to el.",
        validator=matches(r"classList\.add\(\s*['\"]active['\"]\s*\)"),
    )


@pytest.fixture
def blanks_question():
    return FillBlanksQuestion(
        id="t-blanks",
        difficulty=Difficulty.EASY,
        title="Fill the blanks",
        template="document.{0}('.box').{1}('click', fn);",
        blanks=(Blank("querySelector", "method"), Blank("addEventListener")),
        points=2,
    )


@pytest.fixture
def match_question():
    return MatchPairsQuestion(
        id="t-match",
        difficulty=Difficulty.EASY,
        title="Match each method with what it does",
        pairs=(
            MatchPair("getElementById", "By id"),
            MatchPair("querySelectorAll", "All matches"),
            MatchPair("appendChild", "Adds a child"),
        ),
        points=2,
    )


@pytest.fixture
def small_bank(single_question, multi_question, dropdown_question, free_text_question, blanks_question, match_question):
    """One question of every kind in the easy tier."""
    return (
        single_question,
        multi_question,
        dropdown_question,
        free_text_question,
        blanks_question,
        match_question,
    )


# Known-good text for free-text fixtures, by question id
TEXT_SOLUTIONS = {
    "t-text": "el.classList.add('active');",
}


def _solve(question, rng=None):
    """Present a question, fill in the correct input and return (answer, presentation)."""
    presentation = question.present(rng)
    if isinstance(question, SingleChoiceQuestion):
        presentation.select(presentation.order.index(question.correct_index))
    elif isinstance(question, MultiChoiceQuestion):
        for index in question.correct_indexes:
            presentation.select(presentation.order.index(index))
    elif isinstance(question, DropdownChoiceQuestion):
        presentation.choose(question.correct_value)
    elif isinstance(question, FreeTextQuestion):
        presentation.type(TEXT_SOLUTIONS[question.id])
    elif isinstance(question, FillBlanksQuestion):
        for slot, blank in enumerate(question.blanks):
            presentation.fill(slot, blank.answer)
    elif isinstance(question, MatchPairsQuestion):
        for left, right in question.key.items():
            presentation.assign(left, right)
    return question.collect(presentation), presentation


@pytest.fixture
def solve():
    """Callable that answers any fixture question correctly."""
    return _solve

"""
Question variants for QuizDeck sessions.

Each question kind (single choice, dropdown, fill-in-blanks, etc.) has its own
module with:
- present(): Build a fresh, randomized presentation for the controller
- collect(): Read the controller's input back in the kind's answer shape
- grade(): Compare an answer with the correctness key
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .base import Question


class Difficulty(str, Enum):
    """Difficulty tiers used to filter the bank."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @property
    def label(self) -> str:
        """Human label shown in results and history."""
        return DIFFICULTY_LABELS[self]


DIFFICULTY_LABELS = {
    Difficulty.EASY: "Beginner",
    Difficulty.MEDIUM: "Intermediate",
    Difficulty.HARD: "Advanced",
}


class QuestionKind(str, Enum):
    """The closed set of question variants."""
    SINGLE_CHOICE = "single_choice"
    MULTI_CHOICE = "multi_choice"
    DROPDOWN_CHOICE = "dropdown_choice"
    FREE_TEXT = "free_text"
    FILL_BLANKS = "fill_blanks"
    MATCH_PAIRS = "match_pairs"


# Variant registry - populated by @register decorator
QUESTION_TYPES: dict[QuestionKind, type["Question"]] = {}


def register(kind: QuestionKind):
    """Decorator to register a question variant."""
    def decorator(cls):
        QUESTION_TYPES[kind] = cls
        cls.kind = kind
        return cls
    return decorator


def get_question_type(kind: str | QuestionKind) -> type["Question"] | None:
    """Get the question class for a kind."""
    if isinstance(kind, str):
        try:
            kind = QuestionKind(kind.lower())
        except ValueError:
            return None
    return QUESTION_TYPES.get(kind)


# Import variants to trigger registration
from . import single_choice
from . import multi_choice
from . import dropdown_choice
from . import free_text
from . import fill_blanks
from . import match_pairs

from .base import (
    FILL_ALL_BLANKS,
    FILL_ALL_MATCHES,
    INVALID_CHOICE,
    NO_ANSWER,
    ChoicePresentation,
    GradeResult,
    Presentation,
    Question,
)
from .dropdown_choice import DropdownChoiceQuestion, DropdownPresentation
from .fill_blanks import Blank, BlankPresentation, FillBlanksQuestion
from .free_text import FreeTextQuestion, TextPresentation, contains_all, matches
from .match_pairs import (
    DragGesture,
    MatchAssignment,
    MatchPair,
    MatchPairsQuestion,
    MatchPresentation,
)
from .multi_choice import MultiChoiceQuestion
from .single_choice import SingleChoiceQuestion

__all__ = [
    "Blank",
    "BlankPresentation",
    "ChoicePresentation",
    "Difficulty",
    "DIFFICULTY_LABELS",
    "DragGesture",
    "DropdownChoiceQuestion",
    "DropdownPresentation",
    "FILL_ALL_BLANKS",
    "FILL_ALL_MATCHES",
    "FillBlanksQuestion",
    "FreeTextQuestion",
    "GradeResult",
    "INVALID_CHOICE",
    "MatchAssignment",
    "MatchPair",
    "MatchPairsQuestion",
    "MatchPresentation",
    "MultiChoiceQuestion",
    "NO_ANSWER",
    "Presentation",
    "Question",
    "QuestionKind",
    "QUESTION_TYPES",
    "SingleChoiceQuestion",
    "TextPresentation",
    "contains_all",
    "get_question_type",
    "matches",
    "register",
]

"""
Base contract and shared types for question variants.
"""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, ClassVar, TypeVar

from ..errors import PresentationMismatch
from . import Difficulty, QuestionKind

# Messages for incomplete input
NO_ANSWER = "no answer"
INVALID_CHOICE = "invalid choice"
FILL_ALL_BLANKS = "fill all blanks"
FILL_ALL_MATCHES = "fill all matches"

P = TypeVar("P", bound="Presentation")


@dataclass(frozen=True)
class GradeResult:
    """Result of grading one answer."""
    correct: bool
    earned: int
    message: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {"correct": self.correct, "earned": self.earned, "message": self.message}


def incomplete(message: str) -> GradeResult:
    """Result for missing or partial input."""
    return GradeResult(correct=False, earned=0, message=message)


@dataclass(kw_only=True, eq=False)
class Presentation:
    """
    Transient state of one presented question.

    Holds what the controller displays plus the input the user has entered
    so far. A new instance is created by every Question.present() call.
    """
    question_id: str
    kind: QuestionKind
    title: str
    help: str = ""
    points: int = 1


@dataclass(kw_only=True, eq=False)
class ChoicePresentation(Presentation):
    """Shuffled options with the original index remembered per slot."""
    options: tuple[str, ...] = ()
    order: tuple[int, ...] = ()  # order[slot] = original index
    multiple: bool = False
    selected: set[int] = field(default_factory=set)

    def _check_slot(self, slot: int) -> None:
        if not 0 <= slot < len(self.options):
            raise IndexError(f"No option at slot {slot} (have {len(self.options)})")

    def select(self, slot: int) -> None:
        """Select a slot. Single-choice boards keep only the latest selection."""
        self._check_slot(slot)
        if not self.multiple:
            self.selected.clear()
        self.selected.add(slot)

    def deselect(self, slot: int) -> None:
        self._check_slot(slot)
        self.selected.discard(slot)

    def toggle(self, slot: int) -> None:
        if slot in self.selected:
            self.deselect(slot)
        else:
            self.select(slot)

    def clear(self) -> None:
        self.selected.clear()


@dataclass(frozen=True, kw_only=True)
class Question(ABC):
    """
    A question in the bank.

    Immutable after construction. Everything that changes while the user
    answers lives on the Presentation returned by present().
    """
    id: str
    difficulty: Difficulty
    title: str
    points: int = 1
    help: str = ""

    kind: ClassVar[QuestionKind]

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Question id must be a non-empty string")
        object.__setattr__(self, "difficulty", Difficulty(self.difficulty))
        if isinstance(self.points, bool) or not isinstance(self.points, int) or self.points < 1:
            raise ValueError(f"{self.id}: points must be a positive integer, got {self.points!r}")

    @abstractmethod
    def present(self, rng: random.Random | None = None) -> Presentation:
        """Build a fresh presentation (re-randomized on every call)."""

    @abstractmethod
    def collect(self, presentation: Presentation) -> Any:
        """Read the user's input from a presentation. Never fails on empty input."""

    @abstractmethod
    def grade(self, answer: Any, presentation: Presentation | None = None) -> GradeResult:
        """Grade a collected answer against the correctness key."""

    def _presentation_fields(self) -> dict[str, Any]:
        return {
            "question_id": self.id,
            "kind": self.kind,
            "title": self.title,
            "help": self.help,
            "points": self.points,
        }

    def _own(self, presentation: Presentation | None, expected: type[P]) -> P:
        """Return the presentation if this question produced it."""
        if (
            not isinstance(presentation, expected)
            or presentation.question_id != self.id
            or presentation.kind != self.kind
        ):
            raise PresentationMismatch(
                f"{self.id}: expected a {expected.__name__} produced by this question"
            )
        return presentation

    def _result(self, correct: bool) -> GradeResult:
        return GradeResult(correct=correct, earned=self.points if correct else 0)

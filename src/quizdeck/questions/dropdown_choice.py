"""
Dropdown-choice question.

Options are shuffled for display only: the answer is the option value
itself, so grading needs no position mapping.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Any

from ..randomizer import shuffle
from . import QuestionKind, register
from .base import NO_ANSWER, GradeResult, Presentation, Question, incomplete


@dataclass(kw_only=True, eq=False)
class DropdownPresentation(Presentation):
    """Shuffled option values and the current selection ("" when unselected)."""
    options: tuple[str, ...] = ()
    value: str = ""

    def choose(self, value: str) -> None:
        if value and value not in self.options:
            raise ValueError(f"{value!r} is not one of the options")
        self.value = value

    def clear(self) -> None:
        self.value = ""


@register(QuestionKind.DROPDOWN_CHOICE)
@dataclass(frozen=True, kw_only=True)
class DropdownChoiceQuestion(Question):
    """Pick the correct value from a list."""
    options: tuple[str, ...]
    correct_value: str

    def __post_init__(self) -> None:
        super().__post_init__()
        object.__setattr__(self, "options", tuple(self.options))
        if self.correct_value not in self.options:
            raise ValueError(f"{self.id}: correct_value must be one of the options")

    def present(self, rng: random.Random | None = None) -> DropdownPresentation:
        return DropdownPresentation(
            **self._presentation_fields(),
            options=tuple(shuffle(self.options, rng)),
        )

    def collect(self, presentation: DropdownPresentation) -> str:
        return self._own(presentation, DropdownPresentation).value

    def grade(self, answer: Any, presentation: Presentation | None = None) -> GradeResult:
        if not answer:
            return incomplete(NO_ANSWER)
        return self._result(answer == self.correct_value)

"""
Multi-choice question.

The user ticks any number of presented slots. The answer is correct only
when the ticked options are exactly the correct set: no partial credit.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Any, Iterable

from loguru import logger

from . import QuestionKind, register
from .base import INVALID_CHOICE, NO_ANSWER, ChoicePresentation, GradeResult, Question, incomplete
from .single_choice import present_choices


@register(QuestionKind.MULTI_CHOICE)
@dataclass(frozen=True, kw_only=True)
class MultiChoiceQuestion(Question):
    """Several correct options; all of them, and only them, must be selected."""
    options: tuple[str, ...]
    correct_indexes: frozenset[int]

    def __post_init__(self) -> None:
        super().__post_init__()
        object.__setattr__(self, "options", tuple(self.options))
        object.__setattr__(self, "correct_indexes", frozenset(self.correct_indexes))
        if len(self.options) < 2:
            raise ValueError(f"{self.id}: needs at least two options")
        if not self.correct_indexes:
            raise ValueError(f"{self.id}: needs at least one correct index")
        if any(not 0 <= i < len(self.options) for i in self.correct_indexes):
            raise ValueError(f"{self.id}: correct_indexes out of range")

    def present(self, rng: random.Random | None = None) -> ChoicePresentation:
        presentation = present_choices(self, self.options, multiple=True, rng=rng)
        logger.debug(f"Presented {self.id} with order {presentation.order}")
        return presentation

    def collect(self, presentation: ChoicePresentation) -> list[int]:
        """Return the selected presented slots in display order."""
        board = self._own(presentation, ChoicePresentation)
        return sorted(board.selected)

    def grade(self, answer: Iterable[int] | None, presentation: ChoicePresentation | None = None) -> GradeResult:
        slots = list(answer or [])
        if not slots:
            return incomplete(NO_ANSWER)
        board = self._own(presentation, ChoicePresentation)
        if any(not 0 <= slot < len(board.order) for slot in slots):
            return incomplete(INVALID_CHOICE)
        chosen = {board.order[slot] for slot in slots}
        return self._result(chosen == self.correct_indexes)

    @property
    def correct_options(self) -> list[str]:
        return [self.options[i] for i in sorted(self.correct_indexes)]

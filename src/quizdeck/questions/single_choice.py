"""
Single-choice question.

- Options are shuffled on every presentation.
- The user selects exactly one presented slot.
- Correctness is judged on the option's original index, not its position.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Any

from loguru import logger

from ..randomizer import shuffle
from . import QuestionKind, register
from .base import INVALID_CHOICE, NO_ANSWER, ChoicePresentation, GradeResult, Question, incomplete


def present_choices(
    question: Question, options: tuple[str, ...], multiple: bool, rng: random.Random | None
) -> ChoicePresentation:
    """Shuffle options, remembering the original index of each presented slot."""
    mixed = shuffle(list(enumerate(options)), rng)
    return ChoicePresentation(
        **question._presentation_fields(),
        options=tuple(text for _, text in mixed),
        order=tuple(idx for idx, _ in mixed),
        multiple=multiple,
    )


@register(QuestionKind.SINGLE_CHOICE)
@dataclass(frozen=True, kw_only=True)
class SingleChoiceQuestion(Question):
    """One correct option among several."""
    options: tuple[str, ...]
    correct_index: int

    def __post_init__(self) -> None:
        super().__post_init__()
        object.__setattr__(self, "options", tuple(self.options))
        if len(self.options) < 2:
            raise ValueError(f"{self.id}: needs at least two options")
        if not 0 <= self.correct_index < len(self.options):
            raise ValueError(f"{self.id}: correct_index {self.correct_index} out of range")

    def present(self, rng: random.Random | None = None) -> ChoicePresentation:
        presentation = present_choices(self, self.options, multiple=False, rng=rng)
        logger.debug(f"Presented {self.id} with order {presentation.order}")
        return presentation

    def collect(self, presentation: ChoicePresentation) -> int | None:
        """Return the selected presented slot, or None."""
        board = self._own(presentation, ChoicePresentation)
        return min(board.selected) if board.selected else None

    def grade(self, answer: Any, presentation: ChoicePresentation | None = None) -> GradeResult:
        if answer is None:
            return incomplete(NO_ANSWER)
        board = self._own(presentation, ChoicePresentation)
        if not 0 <= answer < len(board.order):
            return incomplete(INVALID_CHOICE)
        return self._result(board.order[answer] == self.correct_index)

    @property
    def correct_option(self) -> str:
        return self.options[self.correct_index]

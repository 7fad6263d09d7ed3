"""
Free-text question graded by a validator predicate.

Used both for "write a line of code" prompts (pattern validators) and for
"fix the bug" prompts, where the text box is pre-filled with starter code
and the fix is recognised by the fragments it must contain.
"""

from __future__ import annotations

import random
import re
from dataclasses import dataclass, field
from typing import Any, Callable

from loguru import logger

from ..normalize import normalize
from . import QuestionKind, register
from .base import GradeResult, Presentation, Question

Validator = Callable[[str], bool]


def matches(pattern: str, flags: int = 0, collapse_whitespace: bool = False) -> Validator:
    """Validator that searches the text for a regex pattern."""
    compiled = re.compile(pattern, flags)

    def validate(text: str) -> bool:
        if collapse_whitespace:
            text = re.sub(r"\s+", " ", text)
        return compiled.search(text) is not None

    validate.__name__ = f"matches({pattern!r})"
    return validate


def contains_all(*fragments: str, normalized: bool = True) -> Validator:
    """Validator that requires every fragment to appear in the text."""
    if not fragments:
        raise ValueError("contains_all() needs at least one fragment")

    def validate(text: str) -> bool:
        if normalized:
            haystack = normalize(text)
            return all(normalize(f) in haystack for f in fragments)
        return all(f in text for f in fragments)

    validate.__name__ = f"contains_all{fragments!r}"
    return validate


@dataclass(kw_only=True, eq=False)
class TextPresentation(Presentation):
    """A text box, optionally pre-filled, with a live validity check."""
    placeholder: str = ""
    text: str = ""
    touched: bool = False
    validator: Validator = field(default=lambda text: False, repr=False)

    def type(self, text: str) -> None:
        """Replace the box contents."""
        self.text = text
        self.touched = True

    def live_check(self) -> bool | None:
        """Validator verdict for the current text, None until the user types."""
        if not self.touched:
            return None
        return bool(self.validator(self.text))


@register(QuestionKind.FREE_TEXT)
@dataclass(frozen=True, kw_only=True)
class FreeTextQuestion(Question):
    """Free-form answer accepted by a predicate."""
    validator: Validator
    placeholder: str = ""
    starter: str = ""

    def __post_init__(self) -> None:
        super().__post_init__()
        if not callable(self.validator):
            raise ValueError(f"{self.id}: validator must be callable")

    def present(self, rng: random.Random | None = None) -> TextPresentation:
        return TextPresentation(
            **self._presentation_fields(),
            placeholder=self.placeholder,
            text=self.starter,
            validator=self.validator,
        )

    def collect(self, presentation: TextPresentation) -> str:
        return self._own(presentation, TextPresentation).text

    def grade(self, answer: Any, presentation: Presentation | None = None) -> GradeResult:
        text = "" if answer is None else str(answer)
        ok = bool(self.validator(text))
        logger.debug(f"{self.id}: validator {getattr(self.validator, '__name__', '?')} -> {ok}")
        return self._result(ok)

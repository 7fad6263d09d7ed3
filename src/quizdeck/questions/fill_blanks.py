"""
Fill-in-the-blanks question.

The template marks slots as {0}, {1}, ...; each slot has an expected answer
compared after normalization (case and whitespace insensitive).
"""

from __future__ import annotations

import random
import re
from dataclasses import dataclass, field
from typing import Any, Sequence

from ..normalize import normalize
from . import QuestionKind, register
from .base import FILL_ALL_BLANKS, GradeResult, Presentation, Question, incomplete

SLOT_PATTERN = re.compile(r"\{(\d+)\}")


@dataclass(frozen=True)
class Blank:
    """Expected answer for one slot plus the hint shown inside it."""
    answer: str
    placeholder: str = ""


def split_template(template: str, slot_count: int) -> tuple[str | int, ...]:
    """Split a template into literal text and slot indices."""
    segments: list[str | int] = []
    last_end = 0
    for match in SLOT_PATTERN.finditer(template):
        index = int(match.group(1))
        if index >= slot_count:
            continue
        if match.start() > last_end:
            segments.append(template[last_end : match.start()])
        segments.append(index)
        last_end = match.end()
    if last_end < len(template):
        segments.append(template[last_end:])
    return tuple(segments)


@dataclass(kw_only=True, eq=False)
class BlankPresentation(Presentation):
    """Template segments and one input value per slot."""
    segments: tuple[str | int, ...] = ()
    placeholders: tuple[str, ...] = ()
    values: list[str] = field(default_factory=list)

    def fill(self, slot: int, text: str) -> None:
        if not 0 <= slot < len(self.values):
            raise IndexError(f"No blank at slot {slot} (have {len(self.values)})")
        self.values[slot] = text


@register(QuestionKind.FILL_BLANKS)
@dataclass(frozen=True, kw_only=True)
class FillBlanksQuestion(Question):
    """Code or text template with positional blanks."""
    template: str
    blanks: tuple[Blank, ...]

    def __post_init__(self) -> None:
        super().__post_init__()
        object.__setattr__(self, "blanks", tuple(self.blanks))
        if not self.blanks:
            raise ValueError(f"{self.id}: needs at least one blank")
        present = {int(m) for m in SLOT_PATTERN.findall(self.template)}
        missing = [i for i in range(len(self.blanks)) if i not in present]
        if missing:
            raise ValueError(f"{self.id}: template has no slot for blanks {missing}")

    def present(self, rng: random.Random | None = None) -> BlankPresentation:
        return BlankPresentation(
            **self._presentation_fields(),
            segments=split_template(self.template, len(self.blanks)),
            placeholders=tuple(b.placeholder for b in self.blanks),
            values=[""] * len(self.blanks),
        )

    def collect(self, presentation: BlankPresentation) -> list[str]:
        return list(self._own(presentation, BlankPresentation).values)

    def grade(self, answer: Sequence[str] | None, presentation: Presentation | None = None) -> GradeResult:
        values = list(answer or [])
        if len(values) != len(self.blanks) or any(not normalize(v) for v in values):
            return incomplete(FILL_ALL_BLANKS)
        ok = all(normalize(v) == normalize(b.answer) for v, b in zip(values, self.blanks))
        return self._result(ok)

    @property
    def expected(self) -> list[str]:
        return [b.answer for b in self.blanks]

"""
Match-pairs question (drag and drop board).

Left labels keep their declared order and act as drop slots. Right labels
are shuffled into a bank the user drags from. A drag is a sequence of
discrete events (start, over, leave, drop); only the drop changes what
collect() returns.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Mapping, Sequence

from loguru import logger

from ..randomizer import shuffle
from . import QuestionKind, register
from .base import FILL_ALL_MATCHES, GradeResult, Presentation, Question, incomplete


@dataclass(frozen=True)
class MatchPair:
    """A left label and the right label that belongs to it."""
    left: str
    right: str


@dataclass(frozen=True)
class MatchAssignment:
    """What the user placed in one left slot ("" when empty)."""
    left: str
    right: str = ""


@dataclass(kw_only=True, eq=False)
class MatchPresentation(Presentation):
    """Drop slots, the shuffled item bank and current assignments."""
    lefts: tuple[str, ...] = ()
    items: tuple[str, ...] = ()  # every right label, in shuffled display order
    assignments: dict[str, str] = field(default_factory=dict)

    @property
    def bank(self) -> list[str]:
        """Right labels not yet placed in any slot, in display order."""
        placed = set(self.assignments.values())
        return [item for item in self.items if item not in placed]

    def assign(self, left: str, right: str) -> None:
        """
        Place ``right`` into the ``left`` slot.

        The last assignment per slot wins. A label sits in at most one slot,
        so moving it vacates its previous slot; a label displaced from the
        target slot goes back to the bank.
        """
        if left not in self.lefts:
            raise KeyError(f"Unknown slot {left!r}")
        if right not in self.items:
            raise KeyError(f"Unknown item {right!r}")
        for other, placed in list(self.assignments.items()):
            if placed == right and other != left:
                del self.assignments[other]
        self.assignments[left] = right
        logger.debug(f"{self.question_id}: {left!r} <- {right!r}")

    def unassign(self, left: str) -> None:
        """Empty a slot, returning its label to the bank."""
        if left not in self.lefts:
            raise KeyError(f"Unknown slot {left!r}")
        self.assignments.pop(left, None)

    def drag(self, right: str) -> "DragGesture":
        """Start dragging a bank item."""
        if right not in self.bank:
            raise KeyError(f"{right!r} is not in the bank")
        return DragGesture(self, right)


class DragGesture:
    """
    One drag of a bank item over the board.

    over()/leave() only track hover state; drop() performs the single
    atomic assignment. A gesture ends with drop() or cancel().
    """

    def __init__(self, board: MatchPresentation, right: str):
        self.board = board
        self.right = right
        self.hovering: str | None = None
        self.finished = False

    def _ensure_active(self) -> None:
        if self.finished:
            raise RuntimeError("Drag gesture already finished")

    def over(self, left: str) -> None:
        self._ensure_active()
        if left not in self.board.lefts:
            raise KeyError(f"Unknown slot {left!r}")
        self.hovering = left

    def leave(self, left: str) -> None:
        self._ensure_active()
        if self.hovering == left:
            self.hovering = None

    def drop(self, left: str) -> None:
        self._ensure_active()
        self.board.assign(left, self.right)
        self.finished = True
        self.hovering = None

    def cancel(self) -> None:
        self._ensure_active()
        self.finished = True
        self.hovering = None


@register(QuestionKind.MATCH_PAIRS)
@dataclass(frozen=True, kw_only=True)
class MatchPairsQuestion(Question):
    """Match every left label with its right label. All-or-nothing."""
    pairs: tuple[MatchPair, ...]

    def __post_init__(self) -> None:
        super().__post_init__()
        object.__setattr__(self, "pairs", tuple(self.pairs))
        if len(self.pairs) < 2:
            raise ValueError(f"{self.id}: needs at least two pairs")
        lefts = [p.left for p in self.pairs]
        rights = [p.right for p in self.pairs]
        if len(set(lefts)) != len(lefts) or len(set(rights)) != len(rights):
            raise ValueError(f"{self.id}: left and right labels must be unique")

    def present(self, rng: random.Random | None = None) -> MatchPresentation:
        return MatchPresentation(
            **self._presentation_fields(),
            lefts=tuple(p.left for p in self.pairs),
            items=tuple(shuffle([p.right for p in self.pairs], rng)),
        )

    def collect(self, presentation: MatchPresentation) -> list[MatchAssignment]:
        board = self._own(presentation, MatchPresentation)
        return [MatchAssignment(left, board.assignments.get(left, "")) for left in board.lefts]

    def grade(
        self,
        answer: Sequence[MatchAssignment] | Mapping[str, str] | None,
        presentation: Presentation | None = None,
    ) -> GradeResult:
        if isinstance(answer, Mapping):
            answer = [MatchAssignment(left, right) for left, right in answer.items()]
        assigned = {a.left: a.right for a in (answer or []) if a.right}
        if not set(assigned) >= set(self.key):
            return incomplete(FILL_ALL_MATCHES)
        # Unknown extra labels make a complete answer wrong, not incomplete.
        return self._result(assigned == self.key)

    @property
    def key(self) -> dict[str, str]:
        """The correct left -> right mapping."""
        return {p.left: p.right for p in self.pairs}

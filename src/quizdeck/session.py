"""
Quiz session: the state machine behind one run through the quiz.

A session samples a fixed working set from one tier of the bank, keeps a
cursor into it and records one graded answer per question. Grading happens
as soon as an answer is recorded, so the running score is always current
while the user moves back and forth.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from datetime import datetime
from types import MappingProxyType
from typing import Any, Mapping

from loguru import logger

from .bank import QUESTION_BANK, questions_for
from .errors import EmptyTierError
from .models import HistoryRecord, UserIdentity
from .questions import Difficulty, GradeResult, Presentation, Question
from .randomizer import sample

DEFAULT_SESSION_SIZE = 10
DEFAULT_DATE_FORMAT = "%d.%m.%Y, %H:%M:%S"


@dataclass(frozen=True)
class AnswerRecord:
    """The latest answer given to a question and its grade."""
    raw_answer: Any
    result: GradeResult


@dataclass(frozen=True)
class QuestionOutcome:
    """Per-question line of the final report."""
    position: int  # 1-based
    question: Question
    correct: bool
    earned: int
    answered: bool


class QuizSession:
    """
    One quiz run for one user at one difficulty.

    The working set never changes after construction and the index only
    moves one step at a time within its bounds.
    """

    def __init__(
        self,
        user: UserIdentity,
        difficulty: Difficulty | str,
        bank: tuple[Question, ...] = QUESTION_BANK,
        size: int = DEFAULT_SESSION_SIZE,
        rng: random.Random | None = None,
    ):
        if isinstance(size, bool) or not isinstance(size, int) or size < 1:
            raise ValueError(f"Session size must be a positive integer, got {size!r}")
        self.user = user
        self.difficulty = Difficulty(difficulty)
        self._bank = bank
        self._size = size
        self._rng = rng
        self.pool: tuple[Question, ...] = tuple(questions_for(self.difficulty, bank))
        if not self.pool:
            raise EmptyTierError(f"No questions for difficulty {self.difficulty.value!r}")
        self.questions: tuple[Question, ...] = tuple(sample(self.pool, size, rng))
        self._index = 0
        self._answers: dict[str, AnswerRecord] = {}
        logger.info(
            f"Session for {user.name} ({user.group}): {self.difficulty.value}, "
            f"{len(self.questions)} of {len(self.pool)} questions"
        )

    # ------------------------------------------------------------------
    # Cursor
    # ------------------------------------------------------------------

    @property
    def index(self) -> int:
        return self._index

    @property
    def has_previous(self) -> bool:
        return self._index > 0

    @property
    def has_next(self) -> bool:
        return self._index < len(self.questions) - 1

    def current(self) -> Question:
        return self.questions[self._index]

    def go_next(self) -> bool:
        """Move forward one question. Returns False at the last question."""
        if not self.has_next:
            return False
        self._index += 1
        return True

    def go_previous(self) -> bool:
        """Move back one question. Returns False at the first question."""
        if not self.has_previous:
            return False
        self._index -= 1
        return True

    def progress_label(self) -> str:
        return f"{self._index + 1}/{len(self.questions)}"

    # ------------------------------------------------------------------
    # Answers and scoring
    # ------------------------------------------------------------------

    def answer_current(self, raw_answer: Any, presentation: Presentation | None = None) -> GradeResult:
        """Grade an answer to the current question and record it, replacing any earlier one."""
        question = self.current()
        result = question.grade(raw_answer, presentation)
        self._answers[question.id] = AnswerRecord(raw_answer=raw_answer, result=result)
        logger.debug(f"{question.id}: correct={result.correct} earned={result.earned} ({result.message})")
        return result

    @property
    def answers(self) -> Mapping[str, AnswerRecord]:
        return MappingProxyType(self._answers)

    @property
    def answered_count(self) -> int:
        return len(self._answers)

    def calc_score(self) -> int:
        return sum(record.result.earned for record in self._answers.values())

    def max_score(self) -> int:
        return sum(q.points for q in self.questions)

    def is_finished(self) -> bool:
        return len(self._answers) == len(self.questions)

    def details(self) -> list[QuestionOutcome]:
        """Outcome of every working-set question, unanswered ones counted as wrong."""
        outcomes = []
        for position, question in enumerate(self.questions, 1):
            record = self._answers.get(question.id)
            outcomes.append(
                QuestionOutcome(
                    position=position,
                    question=question,
                    correct=record.result.correct if record else False,
                    earned=record.result.earned if record else 0,
                    answered=record is not None,
                )
            )
        return outcomes

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def to_history_record(self, now: datetime | None = None, date_format: str = DEFAULT_DATE_FORMAT) -> HistoryRecord:
        """Summary of this session for the history log."""
        now = now or datetime.now()
        return HistoryRecord(
            date=now.strftime(date_format),
            user=self.user,
            level=self.difficulty.label,
            score=self.calc_score(),
            max=self.max_score(),
        )

    def restart(self) -> "QuizSession":
        """A fresh session for the same user, tier and bank."""
        return QuizSession(self.user, self.difficulty, bank=self._bank, size=self._size, rng=self._rng)

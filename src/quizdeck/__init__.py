"""
QuizDeck: randomized multi-format quizzes with grading and result history.

Components:
- questions: Question variants (single/multi choice, dropdown, free text,
  fill-in-blanks, match pairs) and their grading rules
- bank: The built-in question bank
- session: Quiz session state machine (navigation, answers, scoring)
- history_store: Bounded result history persistence
"""

from .bank import QUESTION_BANK, bank_summary, get_question, questions_for
from .errors import EmptyTierError, PresentationMismatch, QuizDeckError
from .history_store import HistoryStore
from .models import HistoryRecord, UserIdentity
from .normalize import normalize
from .questions import Difficulty, GradeResult, QuestionKind, QUESTION_TYPES
from .randomizer import sample, shuffle
from .session import AnswerRecord, QuestionOutcome, QuizSession

__all__ = [
    "AnswerRecord",
    "Difficulty",
    "EmptyTierError",
    "GradeResult",
    "HistoryRecord",
    "HistoryStore",
    "PresentationMismatch",
    "QUESTION_BANK",
    "QUESTION_TYPES",
    "QuestionKind",
    "QuestionOutcome",
    "QuizDeckError",
    "QuizSession",
    "UserIdentity",
    "bank_summary",
    "get_question",
    "normalize",
    "questions_for",
    "sample",
    "shuffle",
]

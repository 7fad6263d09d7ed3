"""
Exception types for the QuizDeck core.

Missing or partial user input is never an exception: it is reported as an
ordinary GradeResult. The errors below signal programming mistakes in the
caller or in a question declaration.
"""


class QuizDeckError(Exception):
    """Base class for QuizDeck errors."""


class PresentationMismatch(QuizDeckError):
    """A presentation was handed to a question that did not produce it."""


class EmptyTierError(QuizDeckError):
    """The bank holds no questions for the requested difficulty."""

"""
Terminal delivery for QuizDeck.

Components:
- quiz_visuals: Rich renderables for questions, results and history
- QuizRunner: Interactive controller driving one QuizSession
"""

from .quiz_runner import QuizRunner

__all__ = [
    "QuizRunner",
]

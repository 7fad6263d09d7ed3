"""
Entry point for running QuizDeck as a module.

Usage:
    python -m src.delivery start
    python -m src.delivery history
    python -m src.delivery --help
"""
from src.cli.quizdeck_cli import run

if __name__ == "__main__":
    run()

"""
QuizDeck CLI - JavaScript knowledge quiz in the terminal.

Usage:
    quizdeck start                      # Prompts for name, group and level
    quizdeck start -n Olena -g KN-21 -l hard
    quizdeck history                    # Past results, newest first
    quizdeck history --clear            # Forget all results
    quizdeck bank                       # Question counts per level and kind
    quizdeck status                     # Effective configuration
"""

from __future__ import annotations

import random
import re
import sys
from pathlib import Path
from typing import Annotated

import typer
from loguru import logger
from pydantic import BaseModel, ValidationError, field_validator
from rich.console import Console
from rich.table import Table

# Local imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))
from config import get_settings
from src.delivery import quiz_visuals as ui
from src.delivery.quiz_runner import QuizRunner
from src.quizdeck.bank import QUESTION_BANK, bank_summary
from src.quizdeck.errors import EmptyTierError
from src.quizdeck.history_store import HistoryStore
from src.quizdeck.models import UserIdentity
from src.quizdeck.questions import Difficulty, QuestionKind
from src.quizdeck.session import QuizSession

# =============================================================================
# CLI Setup
# =============================================================================

app = typer.Typer(
    name="quizdeck",
    help="QuizDeck - JavaScript quiz with three difficulty levels",
    add_completion=True,
    rich_markup_mode="rich",
)

console = Console()

GROUP_PATTERN = re.compile(r"^[A-Za-zА-ЯІЇЄҐа-яіїєґ]{2,4}-\d{2}$")
LOG_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {name}:{line} - {message}"


class StartForm(BaseModel):
    """Start screen input. Validated here, never inside the quiz core."""

    name: str
    group: str
    level: Difficulty

    @field_validator("name")
    @classmethod
    def _name_long_enough(cls, value: str) -> str:
        value = value.strip()
        if len(value) < 3:
            raise ValueError("name must have at least 3 characters")
        return value

    @field_validator("group")
    @classmethod
    def _group_format(cls, value: str) -> str:
        value = value.strip()
        if not GROUP_PATTERN.match(value):
            raise ValueError("group must look like KN-21 (2-4 letters, dash, 2 digits)")
        return value

    def identity(self) -> UserIdentity:
        return UserIdentity(name=self.name, group=self.group)


def configure_logging(level: str) -> None:
    """Send loguru output to stderr at the given level."""
    logger.remove()
    logger.add(sys.stderr, level=level, format=LOG_FORMAT)


def get_store() -> HistoryStore:
    settings = get_settings()
    return HistoryStore(settings.history_path, limit=settings.history_limit)


# =============================================================================
# Quiz Commands
# =============================================================================


@app.command()
def start(
    name: Annotated[
        str, typer.Option("--name", "-n", prompt="Your name", help="Name shown in the history")
    ],
    group: Annotated[
        str, typer.Option("--group", "-g", prompt="Your group", help="Study group, e.g. KN-21")
    ],
    level: Annotated[
        Difficulty, typer.Option("--level", "-l", prompt="Level", help="Difficulty tier")
    ] = Difficulty.EASY,
    seed: Annotated[
        int | None, typer.Option("--seed", help="Seed for a reproducible question order")
    ] = None,
    no_restart: Annotated[
        bool, typer.Option("--no-restart", help="Exit after one session without asking")
    ] = False,
) -> None:
    """
    Take a quiz.

    Examples:
        quizdeck start                          # Prompts for everything
        quizdeck start -n Olena -g KN-21 -l medium
    """
    try:
        form = StartForm(name=name, group=group, level=level)
    except ValidationError as exc:
        for error in exc.errors():
            console.print(f"[red]✗ {error['loc'][0]}: {error['msg']}[/]")
        raise typer.Exit(2)

    settings = get_settings()
    store = get_store()
    rng = random.Random(seed) if seed is not None else None

    try:
        session = QuizSession(
            form.identity(),
            form.level,
            bank=QUESTION_BANK,
            size=settings.session_size,
            rng=rng,
        )
    except EmptyTierError as exc:
        console.print(f"[red]✗ {exc}[/]")
        raise typer.Exit(1)

    while True:
        record = QuizRunner(session, store, console=console, date_format=settings.date_format).run()
        logger.info(f"Finished {record.level}: {record.score}/{record.max}")
        if no_restart or not typer.confirm("Take the quiz again?", default=False):
            break
        session = session.restart()


@app.command()
def history(
    clear: Annotated[
        bool, typer.Option("--clear", help="Delete all stored results")
    ] = False,
) -> None:
    """Show past results, newest first."""
    store = get_store()
    if clear:
        store.clear()
        console.print("[green]✓[/] History cleared")
        return
    console.print(ui.history_table(store.list()))


@app.command()
def bank() -> None:
    """Show how many questions each level holds, per kind."""
    summary = bank_summary(QUESTION_BANK)

    table = Table(title="Question Bank")
    table.add_column("Level", style="cyan")
    for kind in QuestionKind:
        table.add_column(ui.KIND_TITLES[kind].title(), justify="right")
    table.add_column("Total", justify="right", style="bold")

    for difficulty in Difficulty:
        counts = summary.get(difficulty)
        if not counts:
            continue
        table.add_row(
            difficulty.label,
            *(str(counts.get(kind, 0)) for kind in QuestionKind),
            str(sum(counts.values())),
        )
    console.print(table)


# =============================================================================
# Status Commands
# =============================================================================


@app.command()
def status() -> None:
    """Show current configuration."""
    settings = get_settings()
    store = get_store()

    table = Table(title="QuizDeck Status")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("History File", str(settings.history_path))
    table.add_row("Stored Results", f"{len(store.list())} / {settings.history_limit}")
    table.add_row("Questions per Session", str(settings.session_size))
    table.add_row("Date Format", settings.date_format)
    table.add_row("Log Level", settings.log_level)
    table.add_row("Questions in Bank", str(len(QUESTION_BANK)))

    console.print(table)


# =============================================================================
# Entry Point
# =============================================================================


@app.callback()
def main(
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Verbose output")
    ] = False,
) -> None:
    """
    QuizDeck - JavaScript quiz in the terminal

    \b
    Levels:
      easy    - Beginner
      medium  - Intermediate
      hard    - Advanced

    \b
    Quick Start:
      quizdeck start            # Take a quiz
      quizdeck history          # See past results
    """
    configure_logging("DEBUG" if verbose else get_settings().log_level)


def run() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    run()

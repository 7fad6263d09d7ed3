"""
QuizDeck terminal visual components.

Rich renderables for every presentation kind, plus the final report and
history table. Rendering is read-only: nothing here touches session state.
"""

from __future__ import annotations

from string import ascii_uppercase
from typing import Callable, Sequence

from rich import box
from rich.console import Group, RenderableType
from rich.markup import escape
from rich.panel import Panel
from rich.style import Style
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text

from src.quizdeck.models import HistoryRecord
from src.quizdeck.questions import (
    BlankPresentation,
    ChoicePresentation,
    DropdownPresentation,
    MatchPresentation,
    Presentation,
    QuestionKind,
    TextPresentation,
)
from src.quizdeck.session import QuestionOutcome, QuizSession

# =============================================================================
# THEME
# =============================================================================

QUIZ_THEME = {
    "primary": "#4FC3F7",  # Sky blue - titles
    "accent": "#FFB74D",  # Amber - slots and selections
    "success": "#00E676",  # Green - correct answers
    "error": "#FF5252",  # Red - incorrect
    "dim": "#78909C",  # Blue-gray - secondary text
    "white": "#ECEFF1",
}

STYLES = {
    "quiz_primary": Style(color=QUIZ_THEME["primary"], bold=True),
    "quiz_accent": Style(color=QUIZ_THEME["accent"], bold=True),
    "quiz_success": Style(color=QUIZ_THEME["success"], bold=True),
    "quiz_error": Style(color=QUIZ_THEME["error"], bold=True),
    "quiz_dim": Style(color=QUIZ_THEME["dim"]),
}

KIND_TITLES = {
    QuestionKind.SINGLE_CHOICE: "SINGLE CHOICE",
    QuestionKind.MULTI_CHOICE: "MULTIPLE CHOICE",
    QuestionKind.DROPDOWN_CHOICE: "SELECT AN OPTION",
    QuestionKind.FREE_TEXT: "WRITE CODE",
    QuestionKind.FILL_BLANKS: "FILL THE BLANKS",
    QuestionKind.MATCH_PAIRS: "MATCH PAIRS",
}

PROMPTS = {
    QuestionKind.SINGLE_CHOICE: ">_ SELECT",
    QuestionKind.MULTI_CHOICE: ">_ SELECT ALL",
    QuestionKind.DROPDOWN_CHOICE: ">_ OPTION",
    QuestionKind.FREE_TEXT: ">_ CODE",
    QuestionKind.FILL_BLANKS: ">_ BLANK",
    QuestionKind.MATCH_PAIRS: ">_ MATCH",
    "nav": ">_ NAVIGATE",
    "default": ">_ INPUT",
}

BLANK_MARK = "[____]"


def get_prompt(kind: QuestionKind | str, suffix: str = "") -> str:
    """Prompt string for a question kind, with an optional hint suffix like "[1-4]"."""
    base = PROMPTS.get(kind, PROMPTS["default"])
    if suffix:
        return f"[cyan]{base}[/cyan] {suffix}"
    return f"[cyan]{base}[/cyan]"


def item_letter(position: int) -> str:
    """Letter label for a match bank item (0 -> A)."""
    return ascii_uppercase[position]


# =============================================================================
# PRESENTATION BODIES
# =============================================================================


def _options_table(options: Sequence[str], selected: set[int] | None = None) -> Table:
    table = Table(box=box.MINIMAL, show_header=False)
    table.add_column("Index", style="cyan", justify="right", width=4)
    table.add_column("Option", style="white")
    for i, option in enumerate(options):
        mark = "●" if selected and i in selected else " "
        table.add_row(f"[{i + 1}]", Text(f"{mark} {option}"))
    return table


def _choice_body(p: ChoicePresentation) -> RenderableType:
    return _options_table(p.options, p.selected)


def _dropdown_body(p: DropdownPresentation) -> RenderableType:
    current = Text("Selected: ", style=STYLES["quiz_dim"])
    current.append(p.value or "(choose)", style=STYLES["quiz_accent"])
    return Group(_options_table(p.options), current)


def _text_body(p: TextPresentation) -> RenderableType:
    parts: list[RenderableType] = []
    if p.text:
        parts.append(Syntax(p.text, "javascript", theme="ansi_dark", line_numbers=False))
    elif p.placeholder:
        parts.append(Text(p.placeholder, style=STYLES["quiz_dim"]))
    verdict = p.live_check()
    if verdict is None:
        parts.append(Text("Check: nothing entered yet", style=STYLES["quiz_dim"]))
    elif verdict:
        parts.append(Text("Check: looks right ✓", style=STYLES["quiz_success"]))
    else:
        parts.append(Text("Check: has errors ✗", style=STYLES["quiz_error"]))
    return Group(*parts)


def _blanks_body(p: BlankPresentation) -> RenderableType:
    text = Text()
    for segment in p.segments:
        if isinstance(segment, int):
            value = p.values[segment]
            if value:
                text.append(f"[{value}]", style=STYLES["quiz_accent"])
            else:
                hint = p.placeholders[segment]
                text.append(f"[{segment + 1}: {hint}]" if hint else BLANK_MARK, style=STYLES["quiz_accent"])
        else:
            text.append(segment)
    note = Text("Answers are compared ignoring case and extra spaces", style=STYLES["quiz_dim"])
    return Group(Panel(text, box=box.ROUNDED, border_style=QUIZ_THEME["dim"]), note)


def _match_body(p: MatchPresentation) -> RenderableType:
    slots = Table(box=box.MINIMAL, show_header=False)
    slots.add_column("Index", style="cyan", justify="right", width=4)
    slots.add_column("Term", style="white")
    slots.add_column("Placed", style=STYLES["quiz_accent"])
    for i, left in enumerate(p.lefts, 1):
        slots.add_row(f"[{i}]", Text(left), Text(p.assignments.get(left, "drop here...")))

    bank = Text()
    waiting = set(p.bank)
    for position, item in enumerate(p.items):
        if item in waiting:
            bank.append(f"({item_letter(position)}) {item}\n")
    if not waiting:
        bank.append("(all items placed)", style=STYLES["quiz_dim"])
    return Group(slots, Panel(bank, title="ITEMS", box=box.ROUNDED, border_style=QUIZ_THEME["dim"]))


BODY_RENDERERS: dict[QuestionKind, Callable[[Presentation], RenderableType]] = {
    QuestionKind.SINGLE_CHOICE: _choice_body,
    QuestionKind.MULTI_CHOICE: _choice_body,
    QuestionKind.DROPDOWN_CHOICE: _dropdown_body,
    QuestionKind.FREE_TEXT: _text_body,
    QuestionKind.FILL_BLANKS: _blanks_body,
    QuestionKind.MATCH_PAIRS: _match_body,
}


def question_panel(presentation: Presentation, progress: str = "") -> Panel:
    """Full panel for a presented question: title, help and kind-specific body."""
    header = Text(presentation.title, style=STYLES["quiz_primary"])
    if presentation.help:
        header.append(f"\n{presentation.help}", style=STYLES["quiz_dim"])
    header.append(f"\nPoints: {presentation.points}", style=STYLES["quiz_dim"])

    body = BODY_RENDERERS[presentation.kind](presentation)
    title = f"[bold cyan]{KIND_TITLES[presentation.kind]}[/bold cyan]"
    if progress:
        title += f" [dim]{progress}[/dim]"
    return Panel(Group(header, Text(""), body), title=title, border_style="cyan", box=box.HEAVY, padding=(1, 2))


# =============================================================================
# RESULTS
# =============================================================================


def session_header(session: QuizSession) -> Panel:
    return Panel(
        f"[bold cyan]QUIZ: {session.difficulty.label.upper()}[/]\n"
        f"User: {escape(session.user.name)} ({escape(session.user.group)})\n"
        f"Questions: {len(session.questions)}",
        title="QuizDeck",
        border_style="cyan",
    )


def details_table(session: QuizSession) -> Table:
    """Per-question report shown at the end of a session."""
    outcomes: list[QuestionOutcome] = session.details()
    table = Table(title=f"Your result: {session.calc_score()} / {session.max_score()}", box=box.SIMPLE_HEAVY)
    table.add_column("#", justify="right", style="cyan")
    table.add_column("Question")
    table.add_column("Result", justify="center")
    table.add_column("Points", justify="right")
    for outcome in outcomes:
        if not outcome.answered:
            mark = "[dim]–[/dim]"
        elif outcome.correct:
            mark = "[green]✓[/green]"
        else:
            mark = "[red]✗[/red]"
        table.add_row(str(outcome.position), Text(outcome.question.title), mark, f"+{outcome.earned}")
    return table


def history_table(records: Sequence[HistoryRecord]) -> Table | Text:
    """Stored history, newest first."""
    if not records:
        return Text("History is empty.", style=STYLES["quiz_dim"])
    table = Table(title="History", box=box.SIMPLE_HEAVY)
    table.add_column("Date", style="dim")
    table.add_column("User")
    table.add_column("Group")
    table.add_column("Level")
    table.add_column("Result", justify="right")
    table.add_column("%", justify="right")
    for record in records:
        table.add_row(
            record.date,
            Text(record.user.name),
            Text(record.user.group),
            record.level,
            f"{record.score}/{record.max}",
            f"{record.percent:g}%",
        )
    return table

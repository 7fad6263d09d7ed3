"""
Terminal controller for a quiz session.

Drives a QuizSession the way the quiz screen does: show the current
question, read the user's input into its presentation, record the answer
on every navigation step and, on finish, report and store the result.

Input syntax per kind:
- single choice: option number (2)
- multiple choice: option numbers (1 3)
- dropdown: option number
- free text: one line of code (empty keeps the pre-filled text)
- fill blanks: one prompt per blank
- match pairs: slot number + item letter (1A 2C), 1- empties slot 1
"""

from __future__ import annotations

import re
from typing import Callable

from loguru import logger
from rich.console import Console
from rich.prompt import Prompt

from src.quizdeck.history_store import HistoryStore
from src.quizdeck.models import HistoryRecord
from src.quizdeck.questions import (
    BlankPresentation,
    ChoicePresentation,
    DropdownPresentation,
    MatchPresentation,
    Presentation,
    TextPresentation,
)
from src.quizdeck.session import DEFAULT_DATE_FORMAT, QuizSession

from . import quiz_visuals as ui

Ask = Callable[[str], str]

MATCH_TOKEN = re.compile(r"^(\d+)([A-Za-z]|-)$")
NAV_COMMANDS = {"n": "next", "p": "previous", "f": "finish"}


class QuizRunner:
    """
    Interactive loop over one session.

    ``ask`` reads one line of input for a prompt; it defaults to Rich's
    Prompt and is replaced by scripted input in tests. ``presentation`` is
    the question currently on screen.
    """

    def __init__(
        self,
        session: QuizSession,
        store: HistoryStore,
        console: Console | None = None,
        ask: Ask | None = None,
        date_format: str = DEFAULT_DATE_FORMAT,
    ):
        self.session = session
        self.store = store
        self.console = console or Console()
        self.ask = ask or self._prompt
        self.date_format = date_format
        self.presentation: Presentation | None = None

    def _prompt(self, prompt: str) -> str:
        return Prompt.ask(prompt, console=self.console, default="", show_default=False)

    # =========================================================================
    # Main loop
    # =========================================================================

    def run(self) -> HistoryRecord:
        """Run the session to the finish and return the stored history record."""
        self.console.print(ui.session_header(self.session))

        while True:
            question = self.session.current()
            presentation = self.presentation = question.present()
            self.console.print(ui.question_panel(presentation, self.session.progress_label()))

            touched = self.read_input(presentation)
            if touched or question.id not in self.session.answers:
                self.session.answer_current(question.collect(presentation), presentation)
            self.console.print(
                f"[dim]Score so far: {self.session.calc_score()} "
                f"({self.session.answered_count}/{len(self.session.questions)} answered)[/dim]"
            )

            command = self._ask_navigation()
            if command == "finish":
                break
            if command == "previous":
                if not self.session.go_previous():
                    self.console.print("[yellow]This is the first question[/yellow]")
            elif not self.session.go_next():
                self.console.print("[yellow]This is the last question, enter 'f' to finish[/yellow]")

        return self.finish()

    def finish(self) -> HistoryRecord:
        """Show the report, store the record and show the history."""
        if not self.session.is_finished():
            logger.info(
                f"Finishing with {self.session.answered_count}/{len(self.session.questions)} answered"
            )
        self.console.print(ui.details_table(self.session))
        record = self.session.to_history_record(date_format=self.date_format)
        self.store.append(record)
        self.console.print(ui.history_table(self.store.list()))
        return record

    def _ask_navigation(self) -> str:
        while True:
            choice = self.ask(ui.get_prompt("nav", "(n)ext / (p)revious / (f)inish")).strip().lower()
            if not choice:
                return "next"
            if choice[0] in NAV_COMMANDS:
                return NAV_COMMANDS[choice[0]]
            self.console.print("[yellow]Enter n, p or f[/yellow]")

    # =========================================================================
    # Input per presentation kind
    # =========================================================================

    def read_input(self, presentation: Presentation) -> bool:
        """Fill the presentation from user input. Returns False if nothing was entered."""
        if isinstance(presentation, ChoicePresentation):
            return self._read_choice(presentation)
        if isinstance(presentation, DropdownPresentation):
            return self._read_dropdown(presentation)
        if isinstance(presentation, TextPresentation):
            return self._read_text(presentation)
        if isinstance(presentation, BlankPresentation):
            return self._read_blanks(presentation)
        if isinstance(presentation, MatchPresentation):
            return self._read_matches(presentation)
        raise TypeError(f"No input reader for {type(presentation).__name__}")

    def _parse_numbers(self, raw: str, upper: int) -> list[int] | None:
        parts = raw.replace(",", " ").split()
        if not all(p.isdigit() and 1 <= int(p) <= upper for p in parts):
            self.console.print(f"[yellow]Enter numbers between 1 and {upper}[/yellow]")
            return None
        return [int(p) - 1 for p in parts]

    def _read_choice(self, p: ChoicePresentation) -> bool:
        count = len(p.options)
        suffix = f"[1-{count}] (e.g. 1 3)" if p.multiple else f"[1-{count}]"
        while True:
            raw = self.ask(ui.get_prompt(p.kind, suffix)).strip()
            if not raw:
                return False
            slots = self._parse_numbers(raw, count)
            if slots is None:
                continue
            if not p.multiple and len(slots) != 1:
                self.console.print("[yellow]Choose exactly one option[/yellow]")
                continue
            for slot in slots:
                p.select(slot)
            return True

    def _read_dropdown(self, p: DropdownPresentation) -> bool:
        while True:
            raw = self.ask(ui.get_prompt(p.kind, f"[1-{len(p.options)}]")).strip()
            if not raw:
                return False
            slots = self._parse_numbers(raw, len(p.options))
            if slots is None:
                continue
            if len(slots) != 1:
                self.console.print("[yellow]Choose exactly one option[/yellow]")
                continue
            p.choose(p.options[slots[0]])
            return True

    def _read_text(self, p: TextPresentation) -> bool:
        hint = "(Enter keeps the code shown)" if p.text else ""
        raw = self.ask(ui.get_prompt(p.kind, hint))
        if not raw.strip():
            return False
        p.type(raw)
        verdict = p.live_check()
        self.console.print("[green]Looks right ✓[/green]" if verdict else "[red]Has errors ✗[/red]")
        return True

    def _read_blanks(self, p: BlankPresentation) -> bool:
        touched = False
        for slot, placeholder in enumerate(p.placeholders):
            label = f"{slot + 1}/{len(p.placeholders)}" + (f" ({placeholder})" if placeholder else "")
            raw = self.ask(ui.get_prompt(p.kind, label))
            if raw.strip():
                p.fill(slot, raw)
                touched = True
        return touched

    def _read_matches(self, p: MatchPresentation) -> bool:
        touched = False
        while True:
            raw = self.ask(ui.get_prompt(p.kind, "(e.g. 1A 2C, 1- clears, Enter when done)")).strip()
            if not raw:
                return touched
            for token in raw.upper().split():
                if self._apply_match(p, token):
                    touched = True
            self.console.print(ui.question_panel(p, self.session.progress_label()))

    def _apply_match(self, p: MatchPresentation, token: str) -> bool:
        found = MATCH_TOKEN.match(token)
        if not found:
            self.console.print(f"[yellow]Cannot read {token!r}[/yellow]")
            return False
        slot, target = int(found.group(1)) - 1, found.group(2)
        if not 0 <= slot < len(p.lefts):
            self.console.print(f"[yellow]No slot {slot + 1}[/yellow]")
            return False
        left = p.lefts[slot]
        if target == "-":
            p.unassign(left)
            return True
        position = ord(target) - ord("A")
        if not 0 <= position < len(p.items):
            self.console.print(f"[yellow]No item {target}[/yellow]")
            return False
        right = p.items[position]
        if right in p.bank:
            gesture = p.drag(right)
            gesture.over(left)
            gesture.drop(left)
        else:
            p.assign(left, right)
        return True

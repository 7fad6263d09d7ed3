"""
Result history persistence for QuizDeck.

Finished sessions are summarised as HistoryRecords and kept newest-first in
a single JSON file (default ~/.quizdeck/history.json), capped at a fixed
number of entries. Reading never fails: a missing or corrupt file is an
empty history.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

from loguru import logger
from pydantic import ValidationError

from .models import HistoryRecord

# Default history location
HISTORY_PATH = Path.home() / ".quizdeck" / "history.json"
HISTORY_LIMIT = 30


class HistoryStore:
    """
    Bounded, newest-first log of finished sessions.

    append() puts a record at the head and evicts the oldest entries beyond
    the limit. Writes are best-effort.
    """

    def __init__(self, path: Optional[Path] = None, limit: int = HISTORY_LIMIT):
        self.path = Path(path) if path else HISTORY_PATH
        self.limit = limit

    def list(self) -> list[HistoryRecord]:
        """All stored records, newest first."""
        if not self.path.exists():
            return []

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            if not isinstance(data, list):
                raise TypeError(f"expected a list, got {type(data).__name__}")
            return [HistoryRecord.model_validate(item) for item in data]
        except (OSError, UnicodeDecodeError, json.JSONDecodeError, TypeError, ValidationError) as e:
            logger.warning(f"Ignoring unreadable history at {self.path}: {e}")
            return []

    def append(self, record: HistoryRecord) -> list[HistoryRecord]:
        """Store a record at the head. Returns the history as written."""
        history = [record, *self.list()][: self.limit]
        self._write(history)
        return history

    def clear(self) -> None:
        """Remove every stored record."""
        try:
            self.path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning(f"Could not clear history at {self.path}: {e}")

    def _write(self, history: list[HistoryRecord]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump([r.model_dump(mode="json") for r in history], f, indent=2, ensure_ascii=False)
        except OSError as e:
            logger.warning(f"Could not save history to {self.path}: {e}")

"""
Pydantic models shared by the session and the history store.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class UserIdentity(BaseModel):
    """Who is taking the quiz. Opaque to the core: no validation here."""

    model_config = ConfigDict(frozen=True)

    name: str
    group: str


class HistoryRecord(BaseModel):
    """Summary of one finished session, as kept in the history log."""

    date: str = Field(description="Display timestamp of when the session finished")
    user: UserIdentity
    level: str = Field(description="Human label of the difficulty tier")
    score: int
    max: int

    @property
    def percent(self) -> float:
        return round(100 * self.score / self.max, 1) if self.max else 0.0

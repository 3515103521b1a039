"""Persisted application state and mutation outcomes."""

from enum import Enum

from pydantic import BaseModel, Field

from reading_tracker.models.book import Book
from reading_tracker.models.goal import ReadingGoal


class StreakState(BaseModel):
    """Cached streak pair. Always re-derivable from the session history."""

    current: int = Field(default=0, ge=0)
    longest: int = Field(default=0, ge=0)


class PersistedState(BaseModel):
    """Everything written to storage on each mutation.

    The four groups (books, goal, daily goal, streak) are loaded
    independently; a malformed group falls back to its own default.
    """

    books: list[Book] = Field(default_factory=list)
    goal: ReadingGoal = Field(default_factory=ReadingGoal)
    daily_goal: int = Field(default=30, gt=0)
    streak: StreakState = Field(default_factory=StreakState)


class MutationStatus(str, Enum):
    OK = "ok"
    NOT_FOUND = "not_found"


class MutationResult(BaseModel):
    """Outcome of a Book Store mutation.

    ``persisted`` is False when the in-memory change succeeded but the
    write to storage failed; ``error`` then holds the reason.
    """

    status: MutationStatus = MutationStatus.OK
    book: Book | None = None
    persisted: bool = True
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == MutationStatus.OK

    @property
    def not_found(self) -> bool:
        return self.status == MutationStatus.NOT_FOUND

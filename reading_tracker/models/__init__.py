"""Data models for the Reading Tracker application."""

from reading_tracker.models.book import (
    Book,
    BookGenre,
    ReadingSession,
    ReadingStatus,
)
from reading_tracker.models.goal import ReadingGoal
from reading_tracker.models.state import (
    MutationResult,
    MutationStatus,
    PersistedState,
    StreakState,
)
from reading_tracker.models.stats import (
    Achievement,
    Challenge,
    GenreCount,
    MonthlyPages,
)

__all__ = [
    "Achievement",
    "Book",
    "BookGenre",
    "Challenge",
    "GenreCount",
    "MonthlyPages",
    "MutationResult",
    "MutationStatus",
    "PersistedState",
    "ReadingGoal",
    "ReadingSession",
    "ReadingStatus",
    "StreakState",
]

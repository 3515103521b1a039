"""Result models produced by the statistics engine."""

from datetime import date

from pydantic import BaseModel, Field

from reading_tracker.models.book import BookGenre


class GenreCount(BaseModel):
    """Number of books cataloged under one genre."""

    genre: BookGenre
    count: int


class MonthlyPages(BaseModel):
    """Session pages logged within one calendar month."""

    year: int
    month: int = Field(ge=1, le=12)
    pages: int = 0

    @property
    def label(self) -> str:
        """Abbreviated month name, e.g. ``"Oct"``."""
        return date(self.year, self.month, 1).strftime("%b")


class Achievement(BaseModel):
    """A badge unlocked by reaching a reading milestone."""

    key: str
    title: str
    description: str
    unlocked: bool = False


class Challenge(BaseModel):
    """A long-running target with partial progress."""

    key: str
    title: str
    description: str
    target: int = Field(gt=0)
    current_value: int = 0

    @property
    def progress(self) -> float:
        """Fraction of the target reached, capped at 1.0."""
        return min(1.0, self.current_value / self.target)

    @property
    def completed(self) -> bool:
        return self.progress >= 1.0

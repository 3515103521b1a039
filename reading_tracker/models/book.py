"""Book and reading session data models."""

import random
from datetime import datetime
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

COVER_COLORS: list[str] = [
    "6366F1", "8B5CF6", "EC4899", "F43F5E", "EF4444",
    "F97316", "EAB308", "22C55E", "14B8A6", "06B6D4",
    "3B82F6", "A855F7", "D946EF", "78716C", "1E293B",
]


def naive_local(value: datetime | None) -> datetime | None:
    """Convert timezone-aware timestamps to naive local time."""
    if value is not None and value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


def random_cover_color() -> str:
    """Pick a placeholder cover color for books without a photo."""
    return random.choice(COVER_COLORS)


class ReadingStatus(str, Enum):
    """Where a book sits in the reader's shelf."""

    WANT_TO_READ = "want_to_read"
    READING = "reading"
    FINISHED = "finished"
    ABANDONED = "abandoned"


class BookGenre(str, Enum):
    """Fixed genre enumeration. Declaration order is the tie-break order
    for genre statistics."""

    FICTION = "fiction"
    NON_FICTION = "non_fiction"
    MYSTERY = "mystery"
    SCI_FI = "sci_fi"
    FANTASY = "fantasy"
    ROMANCE = "romance"
    THRILLER = "thriller"
    BIOGRAPHY = "biography"
    SELF_HELP = "self_help"
    BUSINESS = "business"
    HISTORY = "history"
    SCIENCE = "science"
    POETRY = "poetry"
    OTHER = "other"


class ReadingSession(BaseModel):
    """An immutable record of pages read at a given moment."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid4()))
    date: datetime = Field(default_factory=datetime.now)
    pages_read: int = Field(gt=0)
    minutes_spent: int | None = Field(default=None, ge=0)
    note: str | None = None

    @field_validator("date")
    @classmethod
    def _local_date(cls, value: datetime) -> datetime:
        return naive_local(value)


class Book(BaseModel):
    """A cataloged book with its embedded reading-session log.

    ``reading_sessions`` is append-only. Insertion order is not assumed to
    be chronological; derivations sort or bucket by ``ReadingSession.date``.
    """

    id: str = Field(default_factory=lambda: str(uuid4()))
    title: str
    author: str = ""
    total_pages: int = 0
    current_page: int = 0
    genre: BookGenre = BookGenre.FICTION
    status: ReadingStatus = ReadingStatus.WANT_TO_READ
    cover_color_hex: str = Field(default_factory=random_cover_color)
    cover_image_filename: str | None = None  # photo storage reference
    rating: int | None = Field(default=None, ge=1, le=5)
    notes: str = ""
    date_added: datetime = Field(default_factory=datetime.now)
    date_started: datetime | None = None
    date_finished: datetime | None = None
    reading_sessions: list[ReadingSession] = Field(default_factory=list)

    @field_validator("date_added", "date_started", "date_finished")
    @classmethod
    def _local_timestamps(cls, value: datetime | None) -> datetime | None:
        return naive_local(value)

    @field_validator("total_pages")
    @classmethod
    def _non_negative_total(cls, value: int) -> int:
        return max(0, value)

    @model_validator(mode="after")
    def _clamp_current_page(self) -> "Book":
        self.current_page = max(0, min(self.current_page, self.total_pages))
        return self

    @property
    def has_cover_image(self) -> bool:
        return self.cover_image_filename is not None

    @property
    def is_finished(self) -> bool:
        return self.status == ReadingStatus.FINISHED

    @property
    def progress(self) -> float:
        """Fraction of the book read, 0.0 for books without pages."""
        if self.total_pages <= 0:
            return 0.0
        return self.current_page / self.total_pages

    @property
    def progress_percent(self) -> int:
        return int(self.progress * 100)

    @property
    def pages_remaining(self) -> int:
        return max(0, self.total_pages - self.current_page)

    @property
    def total_pages_read(self) -> int:
        """Pages logged through reading sessions."""
        return sum(session.pages_read for session in self.reading_sessions)

    @property
    def average_pages_per_session(self) -> float:
        if not self.reading_sessions:
            return 0.0
        return self.total_pages_read / len(self.reading_sessions)

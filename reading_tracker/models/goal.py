"""Reading goal data model."""

from datetime import datetime

from pydantic import BaseModel, Field


def _current_year() -> int:
    return datetime.now().year


class ReadingGoal(BaseModel):
    """Yearly targets for finished books and pages read.

    The goal carries its own year so goals from past years stay
    representable after the calendar rolls over.
    """

    year: int = Field(default_factory=_current_year)
    target_books: int = Field(default=12, gt=0)
    target_pages: int = Field(default=5000, gt=0)

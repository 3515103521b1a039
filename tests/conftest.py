"""Shared fixtures: a controllable clock and a store on a temporary database."""

from collections.abc import Callable
from datetime import datetime, timedelta
from pathlib import Path

import pytest

from reading_tracker.models import Book, PersistedState
from reading_tracker.storage import BookStore, StateRepository

NOW = datetime(2026, 10, 17, 12, 0)  # a Saturday

SeedStore = Callable[[list[Book]], BookStore]


class FakeClock:
    """Callable clock that tests can move around."""

    def __init__(self, now: datetime = NOW) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "reading.db"


@pytest.fixture
def repository(db_path: Path) -> StateRepository:
    return StateRepository(db_path)


@pytest.fixture
def store(repository: StateRepository, clock: FakeClock) -> BookStore:
    return BookStore(repository, clock=clock)


@pytest.fixture
def seed_store(repository: StateRepository, clock: FakeClock) -> SeedStore:
    """Build a store over previously saved books, dated sessions included."""

    def _seed(books: list[Book]) -> BookStore:
        repository.save(PersistedState(books=books))
        return BookStore(repository, clock=clock)

    return _seed

"""Tests for whole-state persistence."""

import sqlite3
from pathlib import Path
from unittest.mock import patch

import pytest

from reading_tracker.config import GoalDefaults
from reading_tracker.models import (
    Book,
    PersistedState,
    ReadingGoal,
    ReadingSession,
    StreakState,
)
from reading_tracker.storage.repository import (
    KEY_BOOKS,
    KEY_CURRENT_STREAK,
    KEY_DAILY_GOAL,
    KEY_GOAL,
    PersistenceError,
    StateRepository,
)


def _write_raw(db_path: Path, key: str, value: str) -> None:
    conn = sqlite3.connect(str(db_path))
    conn.execute(
        "UPDATE app_state SET value = ? WHERE key = ?",
        (value, key),
    )
    conn.commit()
    conn.close()


@pytest.fixture
def saved_state(repository: StateRepository) -> PersistedState:
    state = PersistedState(
        books=[
            Book(
                title="Dune",
                author="Herbert",
                total_pages=400,
                current_page=20,
                reading_sessions=[ReadingSession(pages_read=20)],
            )
        ],
        goal=ReadingGoal(year=2026, target_books=20, target_pages=8000),
        daily_goal=45,
        streak=StreakState(current=3, longest=9),
    )
    repository.save(state)
    return state


class TestLoad:
    def test_missing_database_gives_defaults(self, repository: StateRepository) -> None:
        state = repository.load()
        assert state.books == []
        assert state.daily_goal == 30
        assert state.goal.target_books == 12

    def test_defaults_come_from_goal_defaults(self, db_path: Path) -> None:
        repository = StateRepository(
            db_path, goal_defaults=GoalDefaults(target_books=3, target_pages=700, daily_pages=10)
        )
        state = repository.load()
        assert state.goal.target_books == 3
        assert state.goal.target_pages == 700
        assert state.daily_goal == 10

    def test_round_trip(self, repository: StateRepository, saved_state: PersistedState) -> None:
        loaded = repository.load()
        assert loaded == saved_state

    def test_malformed_books_fall_back_alone(
        self, repository: StateRepository, db_path: Path, saved_state: PersistedState
    ) -> None:
        _write_raw(db_path, KEY_BOOKS, "{not json")

        loaded = repository.load()
        assert loaded.books == []
        assert loaded.goal == saved_state.goal
        assert loaded.daily_goal == 45
        assert loaded.streak == saved_state.streak

    def test_malformed_goal_falls_back_alone(
        self, repository: StateRepository, db_path: Path, saved_state: PersistedState
    ) -> None:
        _write_raw(db_path, KEY_GOAL, '{"year": 2026, "target_books": -1}')

        loaded = repository.load()
        assert loaded.goal.target_books == 12
        assert len(loaded.books) == 1

    def test_malformed_daily_goal_falls_back(
        self, repository: StateRepository, db_path: Path, saved_state: PersistedState
    ) -> None:
        _write_raw(db_path, KEY_DAILY_GOAL, "lots")
        assert repository.load().daily_goal == 30

    def test_zero_daily_goal_falls_back(
        self, repository: StateRepository, db_path: Path, saved_state: PersistedState
    ) -> None:
        _write_raw(db_path, KEY_DAILY_GOAL, "0")
        assert repository.load().daily_goal == 30

    def test_malformed_streak_falls_back(
        self, repository: StateRepository, db_path: Path, saved_state: PersistedState
    ) -> None:
        _write_raw(db_path, KEY_CURRENT_STREAK, "-4")

        loaded = repository.load()
        assert loaded.streak == StreakState()
        assert loaded.daily_goal == 45

    def test_corrupt_database_file_gives_defaults(self, db_path: Path) -> None:
        db_path.write_bytes(b"this is not a sqlite database" * 100)
        state = StateRepository(db_path).load()
        assert state.books == []


class TestSave:
    def test_save_overwrites_previous_state(
        self, repository: StateRepository, saved_state: PersistedState
    ) -> None:
        repository.save(PersistedState())
        loaded = repository.load()
        assert loaded.books == []
        assert loaded.daily_goal == 30

    def test_save_creates_parent_directories(self, tmp_path: Path) -> None:
        repository = StateRepository(tmp_path / "nested" / "reading.db")
        repository.save(PersistedState(daily_goal=12))
        assert repository.load().daily_goal == 12

    def test_sqlite_error_raises_persistence_error(self, repository: StateRepository) -> None:
        with patch(
            "reading_tracker.storage.repository.get_connection",
            side_effect=sqlite3.OperationalError("disk I/O error"),
        ):
            with pytest.raises(PersistenceError, match="disk I/O error"):
                repository.save(PersistedState())

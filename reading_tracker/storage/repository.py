"""Whole-state persistence for the reading library."""

import logging
import sqlite3
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from reading_tracker.config import GoalDefaults
from reading_tracker.models import Book, PersistedState, ReadingGoal, StreakState
from reading_tracker.storage.database import get_connection, initialize_database

logger = logging.getLogger(__name__)

KEY_BOOKS = "books"
KEY_GOAL = "reading_goal"
KEY_DAILY_GOAL = "daily_reading_goal"
KEY_CURRENT_STREAK = "current_streak"
KEY_LONGEST_STREAK = "longest_streak"

_BOOKS_ADAPTER = TypeAdapter(list[Book])


class PersistenceError(RuntimeError):
    """Raised when the state could not be written to storage."""


class StateRepository:
    """Reads and writes the full application state as key/value rows.

    Every save rewrites all groups in a single transaction. Loading never
    raises: each group that is missing or cannot be decoded is replaced by
    its default, independently of the others.

    Args:
        db_path: Path to the SQLite database file.
        goal_defaults: Targets used when no goal or daily goal is stored.
    """

    def __init__(
        self, db_path: str | Path, goal_defaults: GoalDefaults | None = None
    ) -> None:
        self._db_path = Path(db_path)
        self._goal_defaults = goal_defaults or GoalDefaults()

    @property
    def db_path(self) -> Path:
        return self._db_path

    def default_state(self) -> PersistedState:
        return PersistedState(
            goal=ReadingGoal(
                target_books=self._goal_defaults.target_books,
                target_pages=self._goal_defaults.target_pages,
            ),
            daily_goal=self._goal_defaults.daily_pages,
        )

    def load(self) -> PersistedState:
        """Load the persisted state, substituting defaults for bad groups."""
        state = self.default_state()
        try:
            rows = self._read_rows()
        except (sqlite3.Error, OSError):
            logger.exception("Failed to read state from %s; using defaults", self._db_path)
            return state

        if KEY_BOOKS in rows:
            try:
                state.books = _BOOKS_ADAPTER.validate_json(rows[KEY_BOOKS])
            except ValidationError:
                logger.warning("Discarding malformed persisted books")

        if KEY_GOAL in rows:
            try:
                state.goal = ReadingGoal.model_validate_json(rows[KEY_GOAL])
            except ValidationError:
                logger.warning("Discarding malformed persisted reading goal")

        if KEY_DAILY_GOAL in rows:
            try:
                daily_goal = int(rows[KEY_DAILY_GOAL])
                if daily_goal <= 0:
                    raise ValueError(f"daily goal must be positive, got {daily_goal}")
                state.daily_goal = daily_goal
            except ValueError:
                logger.warning("Discarding malformed persisted daily goal")

        if KEY_CURRENT_STREAK in rows or KEY_LONGEST_STREAK in rows:
            try:
                state.streak = StreakState(
                    current=int(rows.get(KEY_CURRENT_STREAK, "0")),
                    longest=int(rows.get(KEY_LONGEST_STREAK, "0")),
                )
            except ValueError:  # ValidationError is a ValueError subclass
                logger.warning("Discarding malformed persisted streak")

        logger.debug("Loaded %d books from %s", len(state.books), self._db_path)
        return state

    def save(self, state: PersistedState) -> None:
        """Write the full state.

        Raises:
            PersistenceError: If the database write fails.
        """
        rows = [
            (KEY_BOOKS, _BOOKS_ADAPTER.dump_json(state.books).decode()),
            (KEY_GOAL, state.goal.model_dump_json()),
            (KEY_DAILY_GOAL, str(state.daily_goal)),
            (KEY_CURRENT_STREAK, str(state.streak.current)),
            (KEY_LONGEST_STREAK, str(state.streak.longest)),
        ]
        try:
            initialize_database(self._db_path)
            conn = get_connection(self._db_path)
            try:
                with conn:
                    conn.executemany(
                        """
                        INSERT INTO app_state (key, value, updated_at)
                        VALUES (?, ?, CURRENT_TIMESTAMP)
                        ON CONFLICT(key) DO UPDATE SET
                            value = excluded.value,
                            updated_at = excluded.updated_at
                        """,
                        rows,
                    )
            finally:
                conn.close()
        except (sqlite3.Error, OSError) as e:
            raise PersistenceError(f"Failed to save reading state: {e}") from e

    def _read_rows(self) -> dict[str, str]:
        if not self._db_path.exists():
            return {}
        initialize_database(self._db_path)
        conn = get_connection(self._db_path)
        try:
            cursor = conn.execute("SELECT key, value FROM app_state")
            return {row["key"]: row["value"] for row in cursor.fetchall()}
        finally:
            conn.close()

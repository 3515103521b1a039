"""Persistence and the Book Store."""

from reading_tracker.storage.book_store import BookStore
from reading_tracker.storage.database import get_connection, initialize_database
from reading_tracker.storage.repository import PersistenceError, StateRepository

__all__ = [
    "BookStore",
    "PersistenceError",
    "StateRepository",
    "get_connection",
    "initialize_database",
]

"""The Book Store: canonical book collection and its only mutation surface."""

import logging
import threading
from collections.abc import Callable
from datetime import datetime
from uuid import uuid4

from reading_tracker.models import (
    Book,
    MutationResult,
    MutationStatus,
    ReadingGoal,
    ReadingSession,
    ReadingStatus,
    StreakState,
)
from reading_tracker.storage.repository import PersistenceError, StateRepository

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]
SessionListener = Callable[[], None]


class BookStore:
    """Holds the book collection, goals and streak cache in memory and
    mirrors them to storage after every mutation.

    All mutations run under one re-entrant lock and persist the whole state
    before returning. Queries hand out copies, so the only way to change a
    book is through this class.

    Args:
        repository: Persistence backend. Loaded once at construction.
        clock: Source of the current local time.
    """

    def __init__(self, repository: StateRepository, clock: Clock = datetime.now) -> None:
        self._repository = repository
        self._clock = clock
        self._lock = threading.RLock()
        self._session_listeners: list[SessionListener] = []
        self._state = repository.load()

    # ── Queries ──────────────────────────────────────────────────────────

    @property
    def books(self) -> list[Book]:
        with self._lock:
            return [book.model_copy(deep=True) for book in self._state.books]

    @property
    def goal(self) -> ReadingGoal:
        with self._lock:
            return self._state.goal.model_copy()

    @property
    def daily_goal(self) -> int:
        with self._lock:
            return self._state.daily_goal

    @property
    def streak(self) -> StreakState:
        with self._lock:
            return self._state.streak.model_copy()

    def now(self) -> datetime:
        return self._clock()

    def get(self, book_id: str) -> Book | None:
        with self._lock:
            book = self._find(book_id)
            return book.model_copy(deep=True) if book else None

    def by_status(self, status: ReadingStatus) -> list[Book]:
        return [book for book in self.books if book.status == status]

    @property
    def currently_reading(self) -> list[Book]:
        return self.by_status(ReadingStatus.READING)

    @property
    def want_to_read(self) -> list[Book]:
        return self.by_status(ReadingStatus.WANT_TO_READ)

    @property
    def finished_books(self) -> list[Book]:
        return self.by_status(ReadingStatus.FINISHED)

    @property
    def abandoned_books(self) -> list[Book]:
        return self.by_status(ReadingStatus.ABANDONED)

    def finished_in_year(self, year: int) -> list[Book]:
        return [
            book
            for book in self.finished_books
            if book.date_finished is not None and book.date_finished.year == year
        ]

    def all_sessions(self) -> list[ReadingSession]:
        """Flatten every book's sessions. Sessions are immutable."""
        with self._lock:
            return [
                session for book in self._state.books for session in book.reading_sessions
            ]

    def search(self, text: str, status: ReadingStatus | None = None) -> list[Book]:
        """Case-insensitive substring match on title or author."""
        books = self.books if status is None else self.by_status(status)
        needle = text.strip().casefold()
        if not needle:
            return books
        return [
            book
            for book in books
            if needle in book.title.casefold() or needle in book.author.casefold()
        ]

    # ── Listeners ────────────────────────────────────────────────────────

    def add_session_listener(self, listener: SessionListener) -> None:
        """Register a callback run whenever the set of sessions changes:
        a session is recorded, or a book holding sessions is deleted.

        Callbacks run inside the mutation, before the state is persisted.
        """
        self._session_listeners.append(listener)

    # ── Book mutations ───────────────────────────────────────────────────

    def add(self, book: Book) -> MutationResult:
        """Insert a new book, assigning an id if it has none.

        Sessions are only ever created by ``record_progress``, so a new
        book must arrive with an empty session log.

        Raises:
            ValueError: If a book with the same id is already stored, or
                the book already carries reading sessions.
        """
        if book.reading_sessions:
            raise ValueError("New books cannot carry reading sessions")
        with self._lock:
            stored = self._normalized(book)
            if not stored.id:
                stored.id = str(uuid4())
            if self._find(stored.id) is not None:
                raise ValueError(f"Book already exists: {stored.id}")
            self._state.books.append(stored)
            logger.info("Added book %s (%r)", stored.id, stored.title)
            return self._commit(stored)

    def update(self, book: Book) -> MutationResult:
        """Replace the stored book with the same id, wholesale.

        The session log is not part of the replacement: the stored
        sessions are kept whatever the caller's copy holds.
        """
        with self._lock:
            index = self._index_of(book.id)
            if index is None:
                return self._not_found(book.id, "update")
            sessions = self._state.books[index].reading_sessions
            stored = self._normalized(book.model_copy(update={"reading_sessions": sessions}))
            self._state.books[index] = stored
            return self._commit(stored)

    def delete(self, book_id: str) -> MutationResult:
        with self._lock:
            index = self._index_of(book_id)
            if index is None:
                return self._not_found(book_id, "delete")
            removed = self._state.books.pop(index)
            logger.info("Deleted book %s (%r)", removed.id, removed.title)
            if removed.reading_sessions:
                self._notify_session_listeners()
            return self._commit(removed)

    def record_progress(
        self,
        book_id: str,
        new_page: int,
        minutes_spent: int | None = None,
        note: str | None = None,
    ) -> MutationResult:
        """Move a book's bookmark to ``new_page``.

        Forward movement logs a reading session for the pre-clamp delta and
        notifies session listeners. The status transition is evaluated on
        the clamped page: reaching the last page finishes the book, leaving
        it reopens a finished book, and any other positive page starts a
        book that was not started yet.
        """
        with self._lock:
            book = self._find(book_id)
            if book is None:
                return self._not_found(book_id, "record_progress")

            now = self._clock()
            pages_read = max(0, new_page - book.current_page)
            if pages_read > 0:
                book.reading_sessions.append(
                    ReadingSession(
                        date=now,
                        pages_read=pages_read,
                        minutes_spent=minutes_spent,
                        note=note,
                    )
                )
                self._notify_session_listeners()

            book.current_page = max(0, min(new_page, book.total_pages))

            if book.current_page >= book.total_pages:
                if book.status != ReadingStatus.FINISHED or book.date_finished is None:
                    book.status = ReadingStatus.FINISHED
                    book.date_finished = now
                book.date_started = book.date_started or now
            elif book.status == ReadingStatus.FINISHED:
                # Bookmark moved back off the last page: reopen. date_finished
                # keeps the last finish, which still backs the rating.
                book.status = ReadingStatus.READING
                book.date_started = book.date_started or now
            elif book.current_page > 0 and book.status == ReadingStatus.WANT_TO_READ:
                book.status = ReadingStatus.READING
                book.date_started = book.date_started or now

            return self._commit(book)

    def start_reading(self, book_id: str) -> MutationResult:
        with self._lock:
            book = self._find(book_id)
            if book is None:
                return self._not_found(book_id, "start_reading")
            book.status = ReadingStatus.READING
            book.date_started = self._clock()
            return self._commit(book)

    def finish_book(self, book_id: str, rating: int | None = None) -> MutationResult:
        """Mark a book finished, jumping the bookmark to the last page.

        Raises:
            ValueError: If rating is outside 1..5.
        """
        if rating is not None and not 1 <= rating <= 5:
            raise ValueError(f"Rating must be between 1 and 5, got {rating}")
        with self._lock:
            book = self._find(book_id)
            if book is None:
                return self._not_found(book_id, "finish_book")
            now = self._clock()
            book.status = ReadingStatus.FINISHED
            book.current_page = book.total_pages
            book.date_finished = now
            book.date_started = book.date_started or now
            book.rating = rating
            return self._commit(book)

    def abandon(self, book_id: str) -> MutationResult:
        """Flip the status only; progress fields are left untouched."""
        with self._lock:
            book = self._find(book_id)
            if book is None:
                return self._not_found(book_id, "abandon")
            book.status = ReadingStatus.ABANDONED
            return self._commit(book)

    # ── Goals and streak cache ───────────────────────────────────────────

    def update_goal(self, books: int | None = None, pages: int | None = None) -> MutationResult:
        """Change the yearly targets that were given, leaving the others.

        Raises:
            ValueError: If a given target is not positive.
        """
        for name, value in (("books", books), ("pages", pages)):
            if value is not None and value <= 0:
                raise ValueError(f"Goal target for {name} must be positive, got {value}")
        with self._lock:
            if books is not None:
                self._state.goal.target_books = books
            if pages is not None:
                self._state.goal.target_pages = pages
            return self._commit(None)

    def update_daily_goal(self, pages: int) -> MutationResult:
        if pages <= 0:
            raise ValueError(f"Daily goal must be positive, got {pages}")
        with self._lock:
            self._state.daily_goal = pages
            return self._commit(None)

    def cache_streak(self, streak: StreakState, persist: bool = True) -> MutationResult:
        """Store a freshly computed streak pair."""
        with self._lock:
            self._state.streak = streak.model_copy()
            if not persist:
                return MutationResult()
            return self._commit(None)

    # ── Internals ────────────────────────────────────────────────────────

    def _find(self, book_id: str) -> Book | None:
        index = self._index_of(book_id)
        return None if index is None else self._state.books[index]

    def _index_of(self, book_id: str) -> int | None:
        for index, book in enumerate(self._state.books):
            if book.id == book_id:
                return index
        return None

    def _normalized(self, book: Book) -> Book:
        """Revalidate a caller-supplied book and fill status timestamps.

        Raises:
            ValueError: If a book that was never finished carries a rating.
        """
        stored = Book.model_validate(book.model_dump())
        if (
            stored.rating is not None
            and stored.status != ReadingStatus.FINISHED
            and stored.date_finished is None
        ):
            raise ValueError(f"Book {stored.id} has a rating but was never finished")
        now = self._clock()
        if stored.status == ReadingStatus.FINISHED:
            stored.current_page = stored.total_pages
            stored.date_finished = stored.date_finished or now
        elif stored.status == ReadingStatus.READING:
            stored.date_started = stored.date_started or now
        return stored

    def _notify_session_listeners(self) -> None:
        for listener in self._session_listeners:
            listener()

    def _not_found(self, book_id: str, operation: str) -> MutationResult:
        logger.warning("%s: book not found: %s", operation, book_id)
        return MutationResult(status=MutationStatus.NOT_FOUND)

    def _commit(self, book: Book | None) -> MutationResult:
        """Persist the whole state and build the caller's result."""
        snapshot = book.model_copy(deep=True) if book is not None else None
        try:
            self._repository.save(self._state)
        except PersistenceError as e:
            logger.exception("Changes kept in memory but not saved")
            return MutationResult(book=snapshot, persisted=False, error=str(e))
        return MutationResult(book=snapshot)

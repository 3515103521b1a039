"""Statistics derived from the Book Store's current collection."""

import calendar
import logging
from collections import Counter
from datetime import date, datetime, timedelta

from reading_tracker.config import StatsConfig
from reading_tracker.models import (
    Book,
    BookGenre,
    GenreCount,
    MonthlyPages,
    ReadingSession,
    StreakState,
)
from reading_tracker.stats.streak import calculate_streak
from reading_tracker.storage import BookStore

logger = logging.getLogger(__name__)

# Tie-break order for genre counts
_GENRE_ORDER: dict[BookGenre, int] = {genre: i for i, genre in enumerate(BookGenre)}


def _start_of_day(moment: datetime) -> datetime:
    return datetime.combine(moment.date(), datetime.min.time())


def _shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    """Move (year, month) by ``delta`` months."""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def _sum_pages(sessions: list[ReadingSession]) -> int:
    return sum(session.pages_read for session in sessions)


class StatisticsEngine:
    """Read-only aggregations over the Book Store, plus the streak cache.

    Every figure is recomputed on each call against the store's clock.
    The only cached value is the streak pair, which is refreshed whenever
    the store records a reading session and once at construction.

    Two page metrics coexist and are deliberately kept apart:

    * ``total_pages_read_this_year`` / ``total_pages_read_all_time`` count
      the full size of finished books.
    * ``pages_read_today`` / ``_this_week`` / ``_this_month``, the monthly
      trend and the daily average count pages logged through sessions.

    Args:
        store: The Book Store to read from.
        config: Week start and trend length settings.
    """

    def __init__(self, store: BookStore, config: StatsConfig | None = None) -> None:
        self._store = store
        self._config = config or StatsConfig()
        store.add_session_listener(lambda: self.refresh_streak(persist=False))
        self.refresh_streak()

    # ── Streak ───────────────────────────────────────────────────────────

    def refresh_streak(self, persist: bool = True) -> StreakState:
        """Recompute the streak from every session and update the cache."""
        streak = calculate_streak(
            self._store.all_sessions(),
            today=self._store.now().date(),
            previous_longest=self._store.streak.longest,
        )
        self._store.cache_streak(streak, persist=persist)
        logger.debug("Streak refreshed: current=%d longest=%d", streak.current, streak.longest)
        return streak

    @property
    def current_streak(self) -> int:
        return self._store.streak.current

    @property
    def longest_streak(self) -> int:
        return self._store.streak.longest

    # ── Partitions ───────────────────────────────────────────────────────

    @property
    def currently_reading_count(self) -> int:
        return len(self._store.currently_reading)

    @property
    def want_to_read_count(self) -> int:
        return len(self._store.want_to_read)

    @property
    def finished_count(self) -> int:
        return len(self._store.finished_books)

    @property
    def abandoned_count(self) -> int:
        return len(self._store.abandoned_books)

    @property
    def books_finished_this_year(self) -> list[Book]:
        return self._store.finished_in_year(self._store.now().year)

    # ── Book-size page totals ────────────────────────────────────────────

    @property
    def total_pages_read_this_year(self) -> int:
        return sum(book.total_pages for book in self.books_finished_this_year)

    @property
    def total_pages_read_all_time(self) -> int:
        return sum(book.total_pages for book in self._store.finished_books)

    # ── Session page totals ──────────────────────────────────────────────

    def pages_read_on(self, day: date) -> int:
        return _sum_pages(
            [s for s in self._store.all_sessions() if s.date.date() == day]
        )

    def pages_read_since(self, start: datetime) -> int:
        return _sum_pages([s for s in self._store.all_sessions() if s.date >= start])

    @property
    def pages_read_today(self) -> int:
        return self.pages_read_on(self._store.now().date())

    @property
    def pages_read_this_week(self) -> int:
        today = _start_of_day(self._store.now())
        offset = (today.weekday() - self._config.first_weekday) % 7
        return self.pages_read_since(today - timedelta(days=offset))

    @property
    def pages_read_this_month(self) -> int:
        return self.pages_read_since(_start_of_day(self._store.now()).replace(day=1))

    @property
    def average_pages_per_day(self) -> float:
        """Session pages divided by the days since the first session.

        The divisor is at least one day, so a history that only covers
        today is not inflated.
        """
        sessions = self._store.all_sessions()
        if not sessions:
            return 0.0
        first = min(session.date for session in sessions)
        days = max(1, (self._store.now().date() - first.date()).days)
        return _sum_pages(sessions) / days

    def monthly_stats(self, months: int | None = None) -> list[MonthlyPages]:
        """Session pages per calendar month, oldest to newest.

        Args:
            months: How many months to report, counting back from the
                current month inclusive. Defaults to the configured length.
        """
        if months is None:
            months = self._config.monthly_trend_months
        totals: Counter[tuple[int, int]] = Counter()
        for session in self._store.all_sessions():
            totals[(session.date.year, session.date.month)] += session.pages_read

        now = self._store.now()
        stats = []
        for back in range(months - 1, -1, -1):
            year, month = _shift_month(now.year, now.month, -back)
            stats.append(MonthlyPages(year=year, month=month, pages=totals[(year, month)]))
        return stats

    def reading_activity_for_month(self, day: date) -> dict[date, int]:
        """Map every calendar day of ``day``'s month to its session pages."""
        totals: Counter[date] = Counter()
        for session in self._store.all_sessions():
            totals[session.date.date()] += session.pages_read

        days_in_month = calendar.monthrange(day.year, day.month)[1]
        return {
            date(day.year, day.month, d): totals[date(day.year, day.month, d)]
            for d in range(1, days_in_month + 1)
        }

    # ── Genres ───────────────────────────────────────────────────────────

    @property
    def genre_breakdown(self) -> list[GenreCount]:
        """Book counts per genre, most common first.

        Equal counts keep the genre enumeration order.
        """
        counts = Counter(book.genre for book in self._store.books)
        ordered = sorted(counts.items(), key=lambda item: (-item[1], _GENRE_ORDER[item[0]]))
        return [GenreCount(genre=genre, count=count) for genre, count in ordered]

    @property
    def favorite_genre(self) -> BookGenre | None:
        breakdown = self.genre_breakdown
        return breakdown[0].genre if breakdown else None

    # ── Goals ────────────────────────────────────────────────────────────

    @property
    def goal_progress(self) -> float:
        """Books finished this calendar year over the target. Not capped at 1.0.

        The stored goal is applied as-is: its ``year`` is not compared with
        the current year, so after a year rollover the previous year's
        targets keep applying until the goal is updated.
        """
        return len(self.books_finished_this_year) / self._store.goal.target_books

    @property
    def pages_goal_progress(self) -> float:
        """Book-size pages finished this calendar year over the target.

        Not capped, and like ``goal_progress`` it ignores the goal's ``year``.
        """
        return self.total_pages_read_this_year / self._store.goal.target_pages

    @property
    def daily_goal_progress(self) -> float:
        return self.pages_read_today / self._store.daily_goal

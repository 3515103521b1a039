"""Tests for reading streak detection."""

from datetime import date, datetime, timedelta

from reading_tracker.models import ReadingSession, StreakState
from reading_tracker.stats.streak import (
    calculate_current_streak,
    calculate_streak,
    reading_days,
)

TODAY = date(2026, 10, 17)


def _session_on(day: date, hour: int = 12, pages: int = 10) -> ReadingSession:
    return ReadingSession(
        date=datetime.combine(day, datetime.min.time()) + timedelta(hours=hour),
        pages_read=pages,
    )


def _days_ago(*offsets: int) -> list[ReadingSession]:
    return [_session_on(TODAY - timedelta(days=offset)) for offset in offsets]


class TestCalculateCurrentStreak:
    def test_no_sessions(self) -> None:
        assert calculate_current_streak([], TODAY) == 0

    def test_streak_including_today(self) -> None:
        assert calculate_current_streak(_days_ago(0, 1, 2), TODAY) == 3

    def test_today_not_read_yet(self) -> None:
        assert calculate_current_streak(_days_ago(1, 2), TODAY) == 2

    def test_last_read_two_days_ago(self) -> None:
        assert calculate_current_streak(_days_ago(2), TODAY) == 0

    def test_gap_ends_streak(self) -> None:
        assert calculate_current_streak(_days_ago(0, 1, 3, 4, 5), TODAY) == 2

    def test_several_sessions_one_day_count_once(self) -> None:
        sessions = _days_ago(0, 0, 0, 1)
        assert calculate_current_streak(sessions, TODAY) == 2

    def test_compares_calendar_days_not_instants(self) -> None:
        sessions = [
            _session_on(TODAY, hour=0),
            ReadingSession(
                date=datetime.combine(TODAY, datetime.min.time()) - timedelta(minutes=1),
                pages_read=3,
            ),
        ]
        assert calculate_current_streak(sessions, TODAY) == 2

    def test_order_of_sessions_does_not_matter(self) -> None:
        assert calculate_current_streak(_days_ago(2, 0, 1), TODAY) == 3

    def test_future_sessions_ignored_for_walk(self) -> None:
        assert calculate_current_streak(_days_ago(-1, 1), TODAY) == 1


class TestCalculateStreak:
    def test_longest_follows_current(self) -> None:
        assert calculate_streak(_days_ago(0, 1, 2), TODAY) == StreakState(current=3, longest=3)

    def test_longest_never_decreases(self) -> None:
        streak = calculate_streak(_days_ago(5), TODAY, previous_longest=12)
        assert streak == StreakState(current=0, longest=12)

    def test_empty_history_keeps_longest(self) -> None:
        assert calculate_streak([], TODAY, previous_longest=4) == StreakState(current=0, longest=4)


class TestReadingDays:
    def test_collapses_same_day(self) -> None:
        assert reading_days(_days_ago(0, 0, 3)) == {TODAY, TODAY - timedelta(days=3)}

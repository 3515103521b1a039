"""Reading streak detection.

A streak is the number of consecutive calendar days, ending today or
yesterday, with at least one reading session. Sessions are compared by
calendar day, never by exact instant, and several sessions on the same
day count as a single day read.
"""

from collections.abc import Iterable
from datetime import date, timedelta

from reading_tracker.models import ReadingSession, StreakState


def reading_days(sessions: Iterable[ReadingSession]) -> set[date]:
    """Return the set of calendar days on which any session was logged."""
    return {session.date.date() for session in sessions}


def calculate_current_streak(sessions: Iterable[ReadingSession], today: date) -> int:
    """Count consecutive reading days walking back from today.

    If nothing was read today the walk starts at yesterday: an unread
    today does not break a streak that ended yesterday, but it does not
    count either.

    Args:
        sessions: All reading sessions across the library, in any order.
        today: The calendar day considered "today".

    Returns:
        Length of the current streak, 0 when there are no sessions.
    """
    days = reading_days(sessions)
    if not days:
        return 0

    cursor = today
    if cursor not in days:
        cursor -= timedelta(days=1)

    streak = 0
    while cursor in days:
        streak += 1
        cursor -= timedelta(days=1)
    return streak


def calculate_streak(
    sessions: Iterable[ReadingSession],
    today: date,
    previous_longest: int = 0,
) -> StreakState:
    """Recompute the streak pair from the full session history.

    The longest streak never decreases: it is the maximum of the previous
    longest value and the new current streak.
    """
    current = calculate_current_streak(sessions, today)
    return StreakState(current=current, longest=max(previous_longest, current))

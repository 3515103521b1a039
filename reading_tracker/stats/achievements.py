"""Achievement badges and reading challenges."""

from collections.abc import Callable
from enum import Enum

from reading_tracker.models import Achievement, Challenge
from reading_tracker.stats.engine import StatisticsEngine


class ChallengeType(str, Enum):
    BOOKS_PER_YEAR = "books_per_year"
    PAGES_PER_YEAR = "pages_per_year"
    STREAK = "streak"
    GENRES = "genres"


_CHALLENGE_VALUES: dict[ChallengeType, Callable[[StatisticsEngine], int]] = {
    ChallengeType.BOOKS_PER_YEAR: lambda engine: len(engine.books_finished_this_year),
    ChallengeType.PAGES_PER_YEAR: lambda engine: engine.total_pages_read_this_year,
    ChallengeType.STREAK: lambda engine: engine.longest_streak,
    ChallengeType.GENRES: lambda engine: len(engine.genre_breakdown),
}

# (key, title, description, type, target)
CHALLENGES: list[tuple[str, str, str, ChallengeType, int]] = [
    ("book_marathon", "Book Marathon", "Read 52 books this year", ChallengeType.BOOKS_PER_YEAR, 52),
    ("page_turner", "Page Turner", "Read 10,000 pages this year", ChallengeType.PAGES_PER_YEAR, 10_000),
    ("consistency_king", "Consistency King", "Reach a 30-day reading streak", ChallengeType.STREAK, 30),
    ("genre_explorer", "Genre Explorer", "Read from 8 different genres", ChallengeType.GENRES, 8),
]


def evaluate_achievements(engine: StatisticsEngine) -> list[Achievement]:
    """Return every badge with its current unlock state."""
    finished = engine.finished_count
    return [
        Achievement(
            key="on_fire",
            title="On Fire",
            description="7-day streak",
            unlocked=engine.current_streak >= 7,
        ),
        Achievement(
            key="first_book",
            title="First Book",
            description="Finish 1 book",
            unlocked=finished >= 1,
        ),
        Achievement(
            key="bookworm",
            title="Bookworm",
            description="Finish 10 books",
            unlocked=finished >= 10,
        ),
        Achievement(
            key="dedicated",
            title="Dedicated",
            description="30-day streak",
            unlocked=engine.longest_streak >= 30,
        ),
        Achievement(
            key="champion",
            title="Champion",
            description="Reach yearly goal",
            unlocked=engine.goal_progress >= 1.0,
        ),
    ]


def unlocked_count(engine: StatisticsEngine) -> int:
    return sum(1 for achievement in evaluate_achievements(engine) if achievement.unlocked)


def evaluate_challenges(engine: StatisticsEngine) -> list[Challenge]:
    """Return every challenge with the reader's current value."""
    return [
        Challenge(
            key=key,
            title=title,
            description=description,
            target=target,
            current_value=_CHALLENGE_VALUES[challenge_type](engine),
        )
        for key, title, description, challenge_type, target in CHALLENGES
    ]

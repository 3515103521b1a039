"""Statistics engine, streak detection and achievements."""

from reading_tracker.stats.achievements import (
    evaluate_achievements,
    evaluate_challenges,
    unlocked_count,
)
from reading_tracker.stats.engine import StatisticsEngine
from reading_tracker.stats.streak import calculate_current_streak, calculate_streak

__all__ = [
    "StatisticsEngine",
    "calculate_current_streak",
    "calculate_streak",
    "evaluate_achievements",
    "evaluate_challenges",
    "unlocked_count",
]

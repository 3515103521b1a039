"""Wiring of the Book Store and Statistics Engine."""

from dataclasses import dataclass
from datetime import datetime

from reading_tracker.config import AppConfig
from reading_tracker.storage import BookStore, StateRepository
from reading_tracker.storage.book_store import Clock
from reading_tracker.stats import StatisticsEngine


@dataclass
class ReadingTracker:
    """The single store/engine pair handed to UI collaborators."""

    config: AppConfig
    store: BookStore
    stats: StatisticsEngine


def build_app(config: AppConfig, clock: Clock | None = None) -> ReadingTracker:
    """Load persisted state and build the store and engine over it.

    The engine computes the streak once on construction, so the cached
    streak is fresh as soon as this returns.
    """
    repository = StateRepository(config.storage.sqlite_path, goal_defaults=config.goals)
    store = BookStore(repository, clock=clock or datetime.now)
    stats = StatisticsEngine(store, config=config.stats)
    return ReadingTracker(config=config, store=store, stats=stats)

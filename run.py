"""Entry point for the Reading Tracker application."""

import logging

from reading_tracker.app import build_app
from reading_tracker.config import configure_logging, load_config
from reading_tracker.storage import initialize_database

logger = logging.getLogger(__name__)


def main() -> None:
    """Initialize storage, load the library and log a summary."""
    config = load_config()
    configure_logging(config)

    initialize_database(config.storage.sqlite_path)

    tracker = build_app(config)
    stats = tracker.stats
    logger.info(
        "%s %s: %d books (%d reading, %d finished this year), streak %d (longest %d)",
        config.app.name,
        config.app.version,
        len(tracker.store.books),
        stats.currently_reading_count,
        len(stats.books_finished_this_year),
        stats.current_streak,
        stats.longest_streak,
    )


if __name__ == "__main__":
    main()

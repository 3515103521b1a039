"""Reading Tracker: book catalog, reading sessions and reading statistics."""

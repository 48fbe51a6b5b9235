"""Infrastructure: settings, database and logging."""

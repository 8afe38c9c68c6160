"""sculpt: single-user workout logger with history and personal records."""

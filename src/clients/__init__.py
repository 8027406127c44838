"""Domain clients: expense extraction, submission, and review."""

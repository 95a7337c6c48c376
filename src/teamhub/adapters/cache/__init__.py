"""Cache-backed storage."""

"""Project persistence."""

"""teamhub - team and project collaboration backend."""

__version__ = "1.0.0"

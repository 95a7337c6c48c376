"""Sentinel for optional update fields."""

from typing import Any

# Distinguishes "not provided" from an explicit None (which clears the field)
UNSET: Any = object()

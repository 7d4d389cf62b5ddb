"""
Taskboard API - Request Field Coercion

Shared "before" validators for loosely typed JSON request fields.
"""

from typing import Any


def scalar_to_str(value: Any) -> Any:
    """
    Read a JSON scalar as text.

    Numbers and booleans become strings. Objects and arrays count as
    absent, so they fail the presence checks instead of request parsing.
    """
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return None


def blank_to_none(value: Any) -> Any:
    """Treat an empty or whitespace-only string as a missing value."""
    if isinstance(value, str) and not value.strip():
        return None
    return value

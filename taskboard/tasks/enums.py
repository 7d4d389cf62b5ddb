"""
Taskboard API - Task Enums
"""

from enum import Enum
from typing import Any, Optional


class TaskStatus(str, Enum):
    """Task status values. Any status may move directly to any other."""
    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"

    @classmethod
    def parse(cls, value: Any) -> Optional["TaskStatus"]:
        """Return the matching status, or None when value is not one of them."""
        for member in cls:
            if member.value == value:
                return member
        return None

"""
Taskboard API - Task Models

Internal task model for database operations.
"""

import datetime as dt
from dataclasses import dataclass, field
from typing import Optional

from taskboard.tasks.enums import TaskStatus


def _utcnow() -> dt.datetime:
    """Get current UTC time as timezone-aware datetime."""
    return dt.datetime.now(dt.timezone.utc)


@dataclass
class Task:
    """Task entity for database storage."""

    id: int
    user_id: int
    name: str
    status: TaskStatus = TaskStatus.PENDING
    description: Optional[str] = None
    date: Optional[dt.date] = None
    created_at: dt.datetime = field(default_factory=_utcnow)
    updated_at: dt.datetime = field(default_factory=_utcnow)

    def validation_errors(self) -> list[str]:
        """Messages for every constraint this task breaks."""
        errors = []
        if not self.name or not self.name.strip():
            errors.append("Name can't be blank")
        if TaskStatus.parse(self.status) is None:
            errors.append("Status is not included in the list")
        return errors

    def to_dict(self) -> dict:
        """Convert task to dictionary for MongoDB storage."""
        return {
            "_id": self.id,
            "user_id": self.user_id,
            "name": self.name,
            "status": self.status.value,
            "description": self.description,
            # BSON has no plain date type
            "date": self.date.isoformat() if self.date else None,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Task":
        """Create task from MongoDB document."""
        return cls(
            id=data["_id"],
            user_id=data["user_id"],
            name=data["name"],
            status=TaskStatus(data["status"]),
            description=data.get("description"),
            date=dt.date.fromisoformat(data["date"]) if data.get("date") else None,
            created_at=data["created_at"],
            updated_at=data["updated_at"],
        )

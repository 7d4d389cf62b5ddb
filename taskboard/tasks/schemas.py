"""
Taskboard API - Task Schemas

Pydantic models for task API requests and responses.
"""

import datetime as dt
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from taskboard.tasks.enums import TaskStatus
from taskboard.validators import blank_to_none, scalar_to_str


class TaskCreateRequest(BaseModel):
    """
    Request model for creating a task.

    Status is not accepted here: new tasks always start as Pending and any
    status sent in the body is ignored.
    """

    name: Optional[str] = Field(default=None, description="Task name")
    description: Optional[str] = Field(default=None, description="Task description")
    date: Optional[dt.date] = Field(default=None, description="Task date (YYYY-MM-DD)")

    @field_validator("name", "description", mode="before")
    @classmethod
    def coerce_text(cls, value):
        return scalar_to_str(value)

    @field_validator("date", mode="before")
    @classmethod
    def empty_date_is_none(cls, value):
        return blank_to_none(value)


class TaskStatusUpdateRequest(BaseModel):
    """
    Request model for setting an arbitrary status value.

    Any JSON value is accepted here; values that are not a known status
    are rejected after the task lookup.
    """

    status: Any = Field(default=None, description="New task status")


class TaskResponse(BaseModel):
    """Response model for a single task."""

    id: int = Field(description="Task ID")
    name: str = Field(description="Task name")
    description: Optional[str] = Field(default=None, description="Task description")
    date: Optional[dt.date] = Field(default=None, description="Task date")
    status: TaskStatus = Field(description="Task status")
    user_id: int = Field(description="Owner user ID")
    created_at: dt.datetime = Field(description="Creation timestamp")
    updated_at: dt.datetime = Field(description="Last update timestamp")

"""
Taskboard API - Task Service

Business logic for task operations. Every call is scoped to one owner.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Optional, List

from taskboard.tasks.models import Task
from taskboard.tasks.repository import TaskRepositoryInterface
from taskboard.tasks.enums import TaskStatus
from taskboard.tasks.schemas import TaskCreateRequest, TaskResponse

logger = logging.getLogger(__name__)


@dataclass
class TaskCreateResult:
    """Outcome of a create: the new task, or the reasons it was refused."""

    task: Optional[TaskResponse] = None
    errors: List[str] = field(default_factory=list)


@dataclass
class StatusUpdateResult:
    """
    Outcome of a status change.

    Exactly one of these holds: not_found is set, errors is non-empty,
    or task carries the updated record.
    """

    task: Optional[TaskResponse] = None
    not_found: bool = False
    errors: dict[str, List[str]] = field(default_factory=dict)


class TaskService:
    """Service layer for task business logic."""

    def __init__(self, repository: TaskRepositoryInterface):
        self.repository = repository

    @staticmethod
    def _task_to_response(task: Task) -> TaskResponse:
        return TaskResponse(
            id=task.id,
            name=task.name,
            description=task.description,
            date=task.date,
            status=task.status,
            user_id=task.user_id,
            created_at=task.created_at,
            updated_at=task.updated_at,
        )

    async def list_tasks(
        self,
        user_id: int,
        status: Optional[TaskStatus] = None,
    ) -> List[TaskResponse]:
        """List the owner's tasks in the order they were created."""
        tasks = await self.repository.list_by_owner(user_id=user_id, status=status)
        return [self._task_to_response(task) for task in tasks]

    async def get_task(self, task_id: int, user_id: int) -> Optional[TaskResponse]:
        """Get a task by ID, scoped to owner."""
        task = await self.repository.get_by_id(task_id, user_id)
        if task is None:
            return None
        return self._task_to_response(task)

    async def create_task(self, user_id: int, request: TaskCreateRequest) -> TaskCreateResult:
        """Create a new Pending task for the owner."""
        task = Task(
            id=0,
            user_id=user_id,
            name=request.name,
            status=TaskStatus.PENDING,
            description=request.description,
            date=request.date,
        )
        errors = task.validation_errors()
        if errors:
            return TaskCreateResult(errors=errors)

        task.id = await self.repository.next_id()
        await self.repository.create(task)
        logger.info(f"User {user_id} created task {task.id}")
        return TaskCreateResult(task=self._task_to_response(task))

    async def update_status(
        self,
        task_id: int,
        user_id: int,
        status: Any,
    ) -> StatusUpdateResult:
        """
        Set a task's status.

        Lookup happens first, so a missing task wins over a bad status.
        An invalid status leaves the stored task untouched.
        """
        current = await self.repository.get_by_id(task_id, user_id)
        if current is None:
            return StatusUpdateResult(not_found=True)
        previous = current.status

        new_status = TaskStatus.parse(status)
        if new_status is None:
            return StatusUpdateResult(errors={"status": ["is not included in the list"]})

        task = await self.repository.update_status(task_id, user_id, new_status)
        if task is None:
            return StatusUpdateResult(not_found=True)

        logger.info(
            f"User {user_id} moved task {task_id} from '{previous.value}' to '{new_status.value}'"
        )
        return StatusUpdateResult(task=self._task_to_response(task))

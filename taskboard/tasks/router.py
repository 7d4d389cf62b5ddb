"""
Taskboard API - Task Router

Endpoints for task management.
All endpoints require a bearer token and only see the caller's tasks.
"""

from typing import Any, Optional, Annotated, List, TypeVar

from fastapi import APIRouter, status, Depends, Query, Request
from fastapi.exceptions import RequestValidationError
from motor.motor_asyncio import AsyncIOMotorDatabase
from pydantic import BaseModel, ValidationError

from taskboard.database import get_database
from taskboard.errors import FieldErrorsError, TaskNotFoundError, ValidationFailedError
from taskboard.auth.dependencies import CurrentUser
from taskboard.tasks.service import TaskService
from taskboard.tasks.repository import TaskRepository, TaskRepositoryInterface
from taskboard.tasks.schemas import (
    TaskCreateRequest,
    TaskStatusUpdateRequest,
    TaskResponse,
)
from taskboard.tasks.enums import TaskStatus


router = APIRouter(prefix="/tasks", tags=["Tasks"])

# Largest id a BSON int64 can hold
MAX_TASK_ID = 2**63 - 1

BodyT = TypeVar("BodyT", bound=BaseModel)


async def get_task_repository(
    db: Annotated[AsyncIOMotorDatabase, Depends(get_database)]
) -> TaskRepositoryInterface:
    """Dependency to get task repository instance."""
    return TaskRepository(db)


async def get_task_service(
    repository: Annotated[TaskRepositoryInterface, Depends(get_task_repository)]
) -> TaskService:
    """Dependency to get task service instance."""
    return TaskService(repository)


def _parse_task_id(task_id: str) -> int:
    # Ids that can't name a stored task are reported like any missing task
    if not task_id.isdecimal():
        raise TaskNotFoundError()
    value = int(task_id)
    if value > MAX_TASK_ID:
        raise TaskNotFoundError()
    return value


async def _parse_body(request: Request, model: type[BodyT]) -> BodyT:
    """
    Validate the JSON body into `model`.

    Handlers call this themselves so the token check always runs before
    the body is looked at. An empty body counts as an empty object.
    """
    raw = await request.body()
    if not raw.strip():
        return model()
    try:
        return model.model_validate_json(raw)
    except ValidationError as e:
        raise RequestValidationError(
            [{**error, "loc": ("body", *error["loc"])} for error in e.errors(include_url=False)]
        )


@router.get(
    "",
    response_model=List[TaskResponse],
    summary="List tasks",
)
async def list_tasks(
    current_user: CurrentUser,
    service: Annotated[TaskService, Depends(get_task_service)],
    status_filter: Optional[TaskStatus] = Query(
        default=None,
        alias="status",
        description="Only return tasks with this status",
    ),
) -> List[TaskResponse]:
    """List the caller's tasks in creation order."""
    return await service.list_tasks(user_id=current_user.id, status=status_filter)


@router.post(
    "",
    response_model=TaskResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new task",
)
async def create_task(
    current_user: CurrentUser,
    service: Annotated[TaskService, Depends(get_task_service)],
    request: Request,
) -> TaskResponse:
    """
    Create a new task for the authenticated user.

    New tasks always start as Pending.
    """
    result = await service.create_task(
        user_id=current_user.id,
        request=await _parse_body(request, TaskCreateRequest),
    )
    if result.task is None:
        raise ValidationFailedError(result.errors)
    return result.task


@router.get(
    "/{task_id}",
    response_model=TaskResponse,
    summary="Get a task by ID",
)
async def get_task(
    task_id: str,
    current_user: CurrentUser,
    service: Annotated[TaskService, Depends(get_task_service)],
) -> TaskResponse:
    """
    Get a specific task by ID.

    Returns 404 if the task doesn't exist or belongs to another user.
    """
    task = await service.get_task(_parse_task_id(task_id), current_user.id)
    if task is None:
        raise TaskNotFoundError()
    return task


async def _set_status(
    service: TaskService,
    task_id: str,
    user_id: int,
    new_status: Any,
) -> TaskResponse:
    result = await service.update_status(_parse_task_id(task_id), user_id, new_status)
    if result.not_found:
        raise TaskNotFoundError()
    if result.errors:
        raise FieldErrorsError(result.errors)
    return result.task


@router.patch(
    "/{task_id}/complete",
    response_model=TaskResponse,
    summary="Mark a task as Completed",
)
async def complete_task(
    task_id: str,
    current_user: CurrentUser,
    service: Annotated[TaskService, Depends(get_task_service)],
) -> TaskResponse:
    return await _set_status(service, task_id, current_user.id, TaskStatus.COMPLETED.value)


@router.patch(
    "/{task_id}/in-progress",
    response_model=TaskResponse,
    summary="Mark a task as In Progress",
)
async def start_task(
    task_id: str,
    current_user: CurrentUser,
    service: Annotated[TaskService, Depends(get_task_service)],
) -> TaskResponse:
    return await _set_status(service, task_id, current_user.id, TaskStatus.IN_PROGRESS.value)


@router.patch(
    "/{task_id}/pending",
    response_model=TaskResponse,
    summary="Mark a task as Pending",
)
async def reset_task(
    task_id: str,
    current_user: CurrentUser,
    service: Annotated[TaskService, Depends(get_task_service)],
) -> TaskResponse:
    return await _set_status(service, task_id, current_user.id, TaskStatus.PENDING.value)


@router.patch(
    "/{task_id}/status",
    response_model=TaskResponse,
    summary="Set a task's status",
)
async def update_task_status(
    task_id: str,
    current_user: CurrentUser,
    service: Annotated[TaskService, Depends(get_task_service)],
    request: Request,
) -> TaskResponse:
    """
    Set the status to any value given in the body.

    Values outside Pending / In Progress / Completed are rejected with 400
    and the task keeps its current status.
    """
    body = await _parse_body(request, TaskStatusUpdateRequest)
    return await _set_status(service, task_id, current_user.id, body.status)

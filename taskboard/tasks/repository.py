"""
Taskboard API - Task Repository

Repository pattern for task data access.
Includes MongoDB implementation for runtime and an in-memory one for testing.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Optional, List

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING, ReturnDocument

from taskboard.database import next_sequence
from taskboard.tasks.models import Task
from taskboard.tasks.enums import TaskStatus


class TaskRepositoryInterface(ABC):
    """
    Abstract interface for task repository.

    Enables swapping implementations (MongoDB for runtime, in-memory for tests).
    All lookups are scoped by user_id to enforce ownership isolation.
    """

    @abstractmethod
    async def next_id(self) -> int:
        pass

    @abstractmethod
    async def create(self, task: Task) -> Task:
        pass

    @abstractmethod
    async def get_by_id(self, task_id: int, user_id: int) -> Optional[Task]:
        pass

    @abstractmethod
    async def list_by_owner(
        self,
        user_id: int,
        status: Optional[TaskStatus] = None,
    ) -> List[Task]:
        """List tasks for owner in id order, optionally by status."""
        pass

    @abstractmethod
    async def update_status(self, task_id: int, user_id: int, status: TaskStatus) -> Optional[Task]:
        pass

    @abstractmethod
    async def delete_by_owner(self, user_id: int) -> int:
        """Remove every task a user owns. Returns how many were removed."""
        pass


class TaskRepository(TaskRepositoryInterface):
    """
    MongoDB implementation of the task repository.

    All queries are scoped by user_id to enforce ownership isolation.
    """

    COLLECTION_NAME = "tasks"

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db[self.COLLECTION_NAME]

    async def next_id(self) -> int:
        return await next_sequence(self.db, self.COLLECTION_NAME)

    async def create(self, task: Task) -> Task:
        await self.collection.insert_one(task.to_dict())
        return task

    async def get_by_id(self, task_id: int, user_id: int) -> Optional[Task]:
        doc = await self.collection.find_one({"_id": task_id, "user_id": user_id})
        if doc is None:
            return None
        return Task.from_dict(doc)

    async def list_by_owner(
        self,
        user_id: int,
        status: Optional[TaskStatus] = None,
    ) -> List[Task]:
        query: dict = {"user_id": user_id}
        if status is not None:
            query["status"] = status.value

        cursor = self.collection.find(query).sort("_id", ASCENDING)
        tasks: List[Task] = []
        async for doc in cursor:
            tasks.append(Task.from_dict(doc))
        return tasks

    async def update_status(self, task_id: int, user_id: int, status: TaskStatus) -> Optional[Task]:
        result = await self.collection.find_one_and_update(
            {"_id": task_id, "user_id": user_id},
            {"$set": {"status": status.value, "updated_at": datetime.now(timezone.utc)}},
            return_document=ReturnDocument.AFTER,
        )
        if result is None:
            return None
        return Task.from_dict(result)

    async def delete_by_owner(self, user_id: int) -> int:
        result = await self.collection.delete_many({"user_id": user_id})
        return result.deleted_count


class InMemoryTaskRepository(TaskRepositoryInterface):
    """
    In-memory implementation for CI-safe testing.
    """

    def __init__(self):
        self._tasks: dict[int, Task] = {}
        self._last_id = 0

    def clear(self) -> None:
        self._tasks.clear()
        self._last_id = 0

    async def next_id(self) -> int:
        self._last_id += 1
        return self._last_id

    async def create(self, task: Task) -> Task:
        self._tasks[task.id] = task
        return task

    async def get_by_id(self, task_id: int, user_id: int) -> Optional[Task]:
        task = self._tasks.get(task_id)
        if task is None or task.user_id != user_id:
            return None
        return task

    async def list_by_owner(
        self,
        user_id: int,
        status: Optional[TaskStatus] = None,
    ) -> List[Task]:
        results = [
            task for task in self._tasks.values()
            if task.user_id == user_id and (status is None or task.status == status)
        ]
        results.sort(key=lambda t: t.id)
        return results

    async def update_status(self, task_id: int, user_id: int, status: TaskStatus) -> Optional[Task]:
        task = await self.get_by_id(task_id, user_id)
        if task is None:
            return None
        task.status = status
        task.updated_at = datetime.now(timezone.utc)
        return task

    async def delete_by_owner(self, user_id: int) -> int:
        owned = [task_id for task_id, task in self._tasks.items() if task.user_id == user_id]
        for task_id in owned:
            del self._tasks[task_id]
        return len(owned)

"""
Taskboard API - Model and Service Tests

Validation rules, storage mapping and service results without HTTP.
"""

import asyncio
from datetime import date, datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from taskboard.auth.repository import MongoUserRepository
from taskboard.errors import ApiError, TaskNotFoundError, ValidationFailedError, format_request_error
from taskboard.tasks.enums import TaskStatus
from taskboard.tasks.models import Task
from taskboard.tasks.repository import InMemoryTaskRepository
from taskboard.tasks.schemas import TaskCreateRequest, TaskStatusUpdateRequest
from taskboard.tasks.service import TaskService


class TestTaskStatus:
    @pytest.mark.parametrize("value", ["Pending", "In Progress", "Completed"])
    def test_parse_known_values(self, value):
        assert TaskStatus.parse(value).value == value

    @pytest.mark.parametrize("value", [None, "", "pending", "Done", "InProgress"])
    def test_parse_unknown_values(self, value):
        assert TaskStatus.parse(value) is None


class TestTaskModel:
    def test_valid_task(self):
        task = Task(id=1, user_id=1, name="Buy milk")
        assert task.status == TaskStatus.PENDING
        assert task.validation_errors() == []

    @pytest.mark.parametrize("name", [None, "", "  "])
    def test_blank_name(self, name):
        task = Task(id=1, user_id=1, name=name)
        assert task.validation_errors() == ["Name can't be blank"]

    def test_status_outside_enum(self):
        task = Task(id=1, user_id=1, name="Odd", status="Archived")
        assert task.validation_errors() == ["Status is not included in the list"]

    def test_document_mapping(self):
        now = datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc)
        task = Task(
            id=7,
            user_id=3,
            name="Taxes",
            status=TaskStatus.IN_PROGRESS,
            description="Before April",
            date=date(2025, 4, 15),
            created_at=now,
            updated_at=now,
        )
        doc = task.to_dict()
        assert doc["_id"] == 7
        assert doc["status"] == "In Progress"
        assert doc["date"] == "2025-04-15"
        assert Task.from_dict(doc) == task

    def test_document_without_date(self):
        doc = Task(id=1, user_id=1, name="Someday").to_dict()
        assert doc["date"] is None
        assert Task.from_dict(doc).date is None


class TestTaskService:
    @pytest.fixture
    def service(self):
        return TaskService(InMemoryTaskRepository())

    def test_create_refuses_blank_name(self, service):
        result = asyncio.run(service.create_task(1, TaskCreateRequest(name="")))
        assert result.task is None
        assert result.errors == ["Name can't be blank"]

    def test_create_does_not_consume_ids_on_failure(self, service):
        asyncio.run(service.create_task(1, TaskCreateRequest(name="")))
        result = asyncio.run(service.create_task(1, TaskCreateRequest(name="First")))
        assert result.task.id == 1

    def test_update_status_results(self, service):
        created = asyncio.run(service.create_task(1, TaskCreateRequest(name="Work"))).task

        missing = asyncio.run(service.update_status(created.id, 2, "Completed"))
        assert missing.not_found is True
        assert missing.task is None

        invalid = asyncio.run(service.update_status(created.id, 1, "Finished"))
        assert invalid.not_found is False
        assert invalid.errors == {"status": ["is not included in the list"]}
        assert asyncio.run(service.get_task(created.id, 1)).status == TaskStatus.PENDING

        done = asyncio.run(service.update_status(created.id, 1, "Completed"))
        assert done.errors == {}
        assert done.task.status == TaskStatus.COMPLETED


class TestRequestErrorFormatting:
    def test_body_field(self):
        error = {"loc": ("body", "date"), "msg": "Input should be a valid date"}
        assert format_request_error(error) == "Date input should be a valid date"

    def test_query_field(self):
        error = {"loc": ("query", "status"), "msg": "Input should be 'Pending'"}
        assert format_request_error(error) == "Status input should be 'Pending'"

    def test_decode_offset_is_not_a_field(self):
        error = {"loc": ("body", 1), "msg": "JSON decode error"}
        assert format_request_error(error) == "Request JSON decode error"

    def test_list_index_is_skipped(self):
        error = {"loc": ("body", "name", 0), "msg": "Input should be a valid string"}
        assert format_request_error(error) == "Name input should be a valid string"


class TestApiError:
    def test_body_is_abstract(self):
        assert ApiError.__abstractmethods__ == frozenset({"body"})

    def test_subclasses_render_their_body(self):
        assert TaskNotFoundError().body() == {"error": "Task not found"}
        assert ValidationFailedError(["Name can't be blank"]).body() == {"errors": ["Name can't be blank"]}


class TestRequestSchemas:
    @pytest.mark.parametrize("value", ["", "   "])
    def test_blank_date_means_no_date(self, value):
        assert TaskCreateRequest(name="x", date=value).date is None

    def test_numbers_read_as_text(self):
        assert TaskCreateRequest(name=42).name == "42"

    def test_structured_values_count_as_missing(self):
        assert TaskCreateRequest(name={"text": "x"}).name is None

    def test_status_accepts_any_json_value(self):
        assert TaskStatusUpdateRequest(status=5).status == 5
        assert TaskStatus.parse(5) is None


class TestMongoUserRepositoryDelete:
    """Cascade ordering against mocked Motor collections."""

    @pytest.fixture
    def calls(self):
        return []

    @pytest.fixture
    def db(self, calls):
        users = MagicMock()
        tasks = MagicMock()

        async def delete_many(query):
            calls.append(("tasks.delete_many", query))
            return MagicMock(deleted_count=2)

        async def delete_one(query):
            calls.append(("users.delete_one", query))
            return MagicMock(deleted_count=1)

        users.find_one = AsyncMock(return_value={"_id": 1})
        users.delete_one = AsyncMock(side_effect=delete_one)
        tasks.delete_many = AsyncMock(side_effect=delete_many)

        database = MagicMock()
        database.__getitem__.side_effect = lambda name: {"users": users, "tasks": tasks}[name]
        return database

    def test_tasks_removed_before_user(self, db, calls):
        repository = MongoUserRepository(db)
        assert asyncio.run(repository.delete(1)) is True
        assert calls == [
            ("tasks.delete_many", {"user_id": 1}),
            ("users.delete_one", {"_id": 1}),
        ]

    def test_unknown_user_deletes_nothing(self, db, calls):
        db["users"].find_one = AsyncMock(return_value=None)
        repository = MongoUserRepository(db)
        assert asyncio.run(repository.delete(99)) is False
        assert calls == []

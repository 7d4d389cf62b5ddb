"""
Taskboard API - Test Configuration

Shared fixtures for CI-safe testing without MongoDB.
"""

import pytest
from typing import Dict, Optional
from unittest.mock import MagicMock

from fastapi.testclient import TestClient

from taskboard.main import app
from taskboard.auth.models import User
from taskboard.auth.repository import UserRepositoryInterface, UsernameTakenError
from taskboard.auth.service import AuthService
from taskboard.auth.dependencies import get_auth_service
from taskboard.config import settings
from taskboard.tasks.repository import InMemoryTaskRepository
from taskboard.tasks.router import get_task_repository
from taskboard.database import get_database

# Hashing at full cost makes every register/login noticeably slow
settings.BCRYPT_ROUNDS = 4


class InMemoryUserRepository(UserRepositoryInterface):
    """In-memory user repository for testing."""

    def __init__(self, task_repository: InMemoryTaskRepository):
        self._users: Dict[int, User] = {}
        self._last_id = 0
        self._task_repository = task_repository

    def clear(self) -> None:
        self._users.clear()
        self._last_id = 0

    async def next_id(self) -> int:
        self._last_id += 1
        return self._last_id

    async def create(self, user: User) -> User:
        if await self.exists_by_username(user.username):
            raise UsernameTakenError(user.username)
        self._users[user.id] = user
        return user

    async def get_by_username(self, username: str) -> Optional[User]:
        for user in self._users.values():
            if user.username == username:
                return user
        return None

    async def get_by_auth_token(self, token: str) -> Optional[User]:
        for user in self._users.values():
            if user.auth_token is not None and user.auth_token == token:
                return user
        return None

    async def exists_by_username(self, username: str) -> bool:
        return await self.get_by_username(username) is not None

    async def set_auth_token(self, user_id: int, token: str) -> None:
        self._users[user_id].auth_token = token

    async def delete(self, user_id: int) -> bool:
        if self._users.pop(user_id, None) is None:
            return False
        await self._task_repository.delete_by_owner(user_id)
        return True


@pytest.fixture
def task_repository():
    """Provide a fresh in-memory task repository for each test."""
    return InMemoryTaskRepository()


@pytest.fixture
def user_repository(task_repository):
    """Provide a fresh in-memory user repository for each test."""
    return InMemoryUserRepository(task_repository)


@pytest.fixture
def auth_service(user_repository):
    return AuthService(user_repository)


@pytest.fixture
def client(task_repository, auth_service):
    """Create test client with in-memory repositories."""

    async def override_get_task_repository():
        return task_repository

    async def override_get_auth_service():
        return auth_service

    async def override_get_database():
        # Nothing reaches MongoDB once the repositories are overridden
        return MagicMock()

    app.dependency_overrides[get_task_repository] = override_get_task_repository
    app.dependency_overrides[get_auth_service] = override_get_auth_service
    app.dependency_overrides[get_database] = override_get_database

    # No context manager: entering it would run the lifespan and dial MongoDB
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def registered_user(client):
    """Register a test user and return credentials."""
    credentials = {"username": "testuser", "password": "testpassword123"}
    client.post("/register", json=credentials)
    return credentials


@pytest.fixture
def auth_token(client, registered_user):
    """Get an auth token for the registered user."""
    response = client.post("/login", json=registered_user)
    return response.json()["token"]


@pytest.fixture
def auth_headers(auth_token):
    """Create Authorization headers for authenticated requests."""
    return {"Authorization": f"Bearer {auth_token}"}


@pytest.fixture
def second_user_credentials():
    """Credentials for a second test user."""
    return {"username": "seconduser", "password": "secondpassword123"}


@pytest.fixture
def second_auth_headers(client, second_user_credentials):
    """Register a second user and build their Authorization headers."""
    client.post("/register", json=second_user_credentials)
    response = client.post("/login", json=second_user_credentials)
    return {"Authorization": f"Bearer {response.json()['token']}"}

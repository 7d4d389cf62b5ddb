import logging
from abc import ABC, abstractmethod
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError

from taskboard.auth.models import User
from taskboard.database import next_sequence

logger = logging.getLogger(__name__)


class UsernameTakenError(Exception):
    """Raised when a write collides with an existing username."""


class UserRepositoryInterface(ABC):
    """Abstract interface for user repository.

    This interface allows swapping implementations (in-memory -> MongoDB).
    Username and token lookups are exact matches.
    """

    @abstractmethod
    async def next_id(self) -> int:
        """Reserve the id for a new user."""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create a new user. Raises UsernameTakenError on a duplicate."""
        pass

    @abstractmethod
    async def get_by_username(self, username: str) -> Optional[User]:
        pass

    @abstractmethod
    async def get_by_auth_token(self, token: str) -> Optional[User]:
        pass

    @abstractmethod
    async def exists_by_username(self, username: str) -> bool:
        pass

    @abstractmethod
    async def set_auth_token(self, user_id: int, token: str) -> None:
        """Overwrite the user's stored token."""
        pass

    @abstractmethod
    async def delete(self, user_id: int) -> bool:
        """Delete a user together with every task they own."""
        pass


class MongoUserRepository(UserRepositoryInterface):
    """MongoDB implementation of the user repository."""

    COLLECTION_NAME = "users"

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db[self.COLLECTION_NAME]

    async def next_id(self) -> int:
        return await next_sequence(self.db, self.COLLECTION_NAME)

    async def create(self, user: User) -> User:
        try:
            await self.collection.insert_one(user.to_dict())
        except DuplicateKeyError as e:
            raise UsernameTakenError(user.username) from e
        logger.info(f"[MongoUserRepository] Created user: username={user.username}, id={user.id}")
        return user

    async def get_by_username(self, username: str) -> Optional[User]:
        doc = await self.collection.find_one({"username": username})
        if doc is None:
            return None
        return User.from_dict(doc)

    async def get_by_auth_token(self, token: str) -> Optional[User]:
        doc = await self.collection.find_one({"auth_token": token})
        if doc is None:
            return None
        return User.from_dict(doc)

    async def exists_by_username(self, username: str) -> bool:
        doc = await self.collection.find_one({"username": username}, {"_id": 1})
        return doc is not None

    async def set_auth_token(self, user_id: int, token: str) -> None:
        await self.collection.update_one({"_id": user_id}, {"$set": {"auth_token": token}})

    async def delete(self, user_id: int) -> bool:
        if await self.collection.find_one({"_id": user_id}, {"_id": 1}) is None:
            return False
        # Local import: the taskboard.tasks package imports taskboard.auth
        from taskboard.tasks.repository import TaskRepository

        # Tasks go first so an interrupted delete never leaves orphaned tasks
        removed = await TaskRepository(self.db).delete_by_owner(user_id)
        await self.collection.delete_one({"_id": user_id})
        logger.info(
            f"[MongoUserRepository] Deleted user id={user_id} and {removed} task(s)"
        )
        return True

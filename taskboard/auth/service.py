import logging
import secrets
from typing import Optional

import bcrypt

from taskboard.config import settings
from taskboard.auth.models import User
from taskboard.auth.repository import UserRepositoryInterface, UsernameTakenError

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72

USERNAME_TAKEN = "Username has already been taken"


class AuthService:
    """Authentication service with password hashing and token issuing."""

    def __init__(self, repository: UserRepositoryInterface):
        self.repository = repository

    def hash_password(self, password: str) -> str:
        """Hash a password using bcrypt."""
        password_bytes = password.encode("utf-8")
        salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
        return bcrypt.hashpw(password_bytes, salt).decode("utf-8")

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """Verify a password against its hash."""
        password_bytes = plain_password.encode("utf-8")
        if len(password_bytes) > MAX_PASSWORD_BYTES:
            return False
        return bcrypt.checkpw(password_bytes, hashed_password.encode("utf-8"))

    @staticmethod
    def generate_token() -> str:
        """New opaque login token: AUTH_TOKEN_BYTES random bytes as hex."""
        return secrets.token_hex(settings.AUTH_TOKEN_BYTES)

    async def validate_registration(
        self, username: Optional[str], password: Optional[str]
    ) -> list[str]:
        """Collect the validation messages for a registration attempt."""
        errors: list[str] = []
        if not username or not username.strip():
            errors.append("Username can't be blank")
        elif await self.repository.exists_by_username(username):
            errors.append(USERNAME_TAKEN)

        if not password:
            errors.append("Password can't be blank")
        elif len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            errors.append(f"Password is too long (maximum is {MAX_PASSWORD_BYTES} bytes)")
        return errors

    async def register_user(
        self, username: Optional[str], password: Optional[str]
    ) -> tuple[Optional[User], list[str]]:
        """
        Register a new user.

        Returns the created user and an empty list, or None and the
        validation messages explaining why nothing was stored.
        """
        errors = await self.validate_registration(username, password)
        if errors:
            return None, errors

        user = User(
            id=await self.repository.next_id(),
            username=username,
            password_digest=self.hash_password(password),
        )
        try:
            await self.repository.create(user)
        except UsernameTakenError:
            return None, [USERNAME_TAKEN]

        logger.info(f"Registered user {user.username} (id={user.id})")
        return user, []

    async def authenticate_user(
        self, username: Optional[str], password: Optional[str]
    ) -> Optional[User]:
        """Authenticate user by exact username and password."""
        if not username or not password:
            return None
        user = await self.repository.get_by_username(username)
        if user is None:
            return None
        if not self.verify_password(password, user.password_digest):
            return None
        return user

    async def login(self, username: Optional[str], password: Optional[str]) -> Optional[User]:
        """
        Authenticate and issue a fresh token.

        The new token replaces the stored one, so any earlier token for
        this user stops working.
        """
        user = await self.authenticate_user(username, password)
        if user is None:
            logger.info("Rejected login attempt")
            return None

        token = self.generate_token()
        await self.repository.set_auth_token(user.id, token)
        user.auth_token = token
        logger.info(f"User {user.username} logged in")
        return user

    async def get_user_by_token(self, token: Optional[str]) -> Optional[User]:
        """Resolve a bearer token to its user. Empty tokens never match."""
        if not token:
            return None
        return await self.repository.get_by_auth_token(token)

    async def delete_user(self, user_id: int) -> bool:
        """Administrative removal of a user and all of their tasks."""
        deleted = await self.repository.delete(user_id)
        if deleted:
            logger.info(f"Deleted user id={user_id}")
        return deleted

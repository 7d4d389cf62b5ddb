import logging
from typing import Annotated, Optional

from fastapi import Depends, Header
from motor.motor_asyncio import AsyncIOMotorDatabase

from taskboard.database import get_database
from taskboard.errors import UnauthorizedError
from taskboard.auth.models import User
from taskboard.auth.service import AuthService
from taskboard.auth.repository import MongoUserRepository

logger = logging.getLogger(__name__)


def get_auth_service(
    db: Annotated[AsyncIOMotorDatabase, Depends(get_database)]
) -> AuthService:
    """Dependency to get AuthService instance with MongoDB repository."""
    user_repo = MongoUserRepository(db)
    return AuthService(user_repo)


def extract_token(authorization: Optional[str]) -> Optional[str]:
    """
    Pull the token out of an Authorization header.

    The header reads "<scheme> <token>"; only the last whitespace-separated
    segment is used, whatever the scheme.
    """
    if not authorization:
        return None
    parts = authorization.split()
    return parts[-1] if parts else None


async def get_current_user(
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
    authorization: Annotated[Optional[str], Header()] = None,
) -> User:
    token = extract_token(authorization)
    user = await auth_service.get_user_by_token(token)
    if user is None:
        logger.debug("Rejected request with missing or unknown token")
        raise UnauthorizedError()
    return user


# Type alias for cleaner dependency injection
CurrentUser = Annotated[User, Depends(get_current_user)]

"""
Taskboard API - Authentication Router

Endpoints for user registration and login.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, status

from taskboard.errors import InvalidCredentialsError, ValidationFailedError
from taskboard.auth.schemas import (
    UserRegisterRequest,
    UserLoginRequest,
    RegisterResponse,
    TokenResponse,
)
from taskboard.auth.service import AuthService
from taskboard.auth.dependencies import get_auth_service


router = APIRouter(tags=["Authentication"])


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
)
async def register(
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
    request: Optional[UserRegisterRequest] = None,
) -> RegisterResponse:
    """
    Register a new user with username and password.

    Missing fields or a taken username return 409 with the list of problems.
    """
    request = request or UserRegisterRequest()
    user, errors = await auth_service.register_user(
        username=request.username,
        password=request.password,
    )

    if user is None:
        raise ValidationFailedError(errors, status_code=status.HTTP_409_CONFLICT)

    return RegisterResponse(message="User registered", user_id=user.id)


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Login and get an access token",
)
async def login(
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
    request: Optional[UserLoginRequest] = None,
) -> TokenResponse:
    """
    Authenticate user and return a new access token.

    Use the returned token in the Authorization header:
    `Authorization: Bearer <token>`. Logging in again replaces the token.
    """
    request = request or UserLoginRequest()
    user = await auth_service.login(
        username=request.username,
        password=request.password,
    )

    if user is None:
        raise InvalidCredentialsError()

    return TokenResponse(token=user.auth_token, username=user.username)

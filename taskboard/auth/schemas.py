"""
Taskboard API - Authentication Schemas

Pydantic models for authentication requests and responses.
Request fields are optional so that missing values reach the model
validation and come back as readable messages.
"""

from typing import Optional

from pydantic import BaseModel, field_validator

from taskboard.validators import scalar_to_str


class UserRegisterRequest(BaseModel):
    """Request schema for user registration."""

    username: Optional[str] = None
    password: Optional[str] = None

    @field_validator("username", "password", mode="before")
    @classmethod
    def coerce_text(cls, value):
        return scalar_to_str(value)


class UserLoginRequest(BaseModel):
    """Request schema for user login."""

    username: Optional[str] = None
    password: Optional[str] = None

    @field_validator("username", "password", mode="before")
    @classmethod
    def coerce_text(cls, value):
        return scalar_to_str(value)


class RegisterResponse(BaseModel):
    """Response schema for a successful registration."""

    message: str
    user_id: int


class TokenResponse(BaseModel):
    """Response schema for successful authentication."""

    token: str
    username: str

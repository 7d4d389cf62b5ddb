"""
Taskboard API - Authentication Module

Register/login with opaque bearer tokens.
"""

from taskboard.auth.router import router as auth_router
from taskboard.auth.dependencies import get_current_user

__all__ = ["auth_router", "get_current_user"]

"""
Taskboard API - Error Responses

API error types and the FastAPI handlers that render them.
Every failure is terminal for the request and reported in the body.
"""

import logging
from abc import ABC, abstractmethod

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ApiError(ABC, Exception):
    """Base class for errors rendered straight into a JSON response."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    @abstractmethod
    def body(self) -> dict:
        """JSON payload for the response."""
        pass


class _MessageError(ApiError):
    """Error rendered as `{"error": <message>}`."""

    message: str = ""

    def body(self) -> dict:
        return {"error": self.message}


class UnauthorizedError(_MessageError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Unauthorized"


class InvalidCredentialsError(_MessageError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Invalid credentials"


class TaskNotFoundError(_MessageError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Task not found"


class ValidationFailedError(ApiError):
    """Model validation failure, rendered as `{"errors": [<messages>]}`."""

    def __init__(self, messages: list[str], status_code: int = status.HTTP_422_UNPROCESSABLE_ENTITY):
        super().__init__(", ".join(messages))
        self.messages = messages
        self.status_code = status_code

    def body(self) -> dict:
        return {"errors": self.messages}


class FieldErrorsError(ApiError):
    """Per-field validation failure, rendered as `{<field>: [<messages>]}`."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, errors: dict[str, list[str]]):
        super().__init__(str(errors))
        self.errors = errors

    def body(self) -> dict:
        return self.errors


def format_request_error(error: dict) -> str:
    """Turn a pydantic error entry into a "<Field> <message>" string."""
    # Integer parts are list indexes or JSON decode offsets, not field names
    loc = [
        part for part in error.get("loc", ())
        if isinstance(part, str) and part not in ("body", "query", "path")
    ]
    field = loc[-1].replace("_", " ").capitalize() if loc else "Request"
    message = error.get("msg", "is invalid")
    if message[1:2].islower():
        message = message[:1].lower() + message[1:]
    return f"{field} {message}"


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.body())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    messages = [format_request_error(error) for error in exc.errors()]
    logger.debug(f"Rejected request to {request.url.path}: {messages}")
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"errors": messages},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install the JSON error handlers on the application."""
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

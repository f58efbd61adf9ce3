# =============================================================================
# app/exceptions.py - Custom Exceptions and Handlers
# =============================================================================
# Centralized exception handling for the API.
# Every error leaves the API as {"message": ..., "data": ...} with the
# status code assigned where the error was raised.
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class BlogApiException(Exception):
    """
    Base exception for the Blog API.

    All domain errors inherit from this class and carry their own status
    code. `data` holds optional structured detail (e.g. field errors).
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        data: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.data = data

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result: dict[str, Any] = {"message": self.message}
        if self.data is not None:
            result["data"] = self.data
        return result


# =============================================================================
# Request Exceptions
# =============================================================================

class RequestValidationFailed(BlogApiException):
    """Raised when a request body fails validation."""

    def __init__(self, errors: list[dict[str, Any]], message: str = "Validation error!"):
        super().__init__(message=message, status_code=400, data=errors)


# =============================================================================
# Auth Exceptions
# =============================================================================

class UnauthenticatedError(BlogApiException):
    """Raised when a request carries no usable bearer token."""

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message=message, status_code=401)


class UnauthorizedError(BlogApiException):
    """Raised when supplied credentials are wrong."""

    def __init__(self, message: str = "Wrong password!"):
        super().__init__(message=message, status_code=401)


class ForbiddenError(BlogApiException):
    """Raised when the acting user does not own the resource."""

    def __init__(self, message: str = "Creator ID didn't match!"):
        super().__init__(message=message, status_code=403)


class ConflictError(BlogApiException):
    """Raised when signing up with an email that is already registered."""

    def __init__(self, message: str = "User already exists!"):
        # 403 rather than 409 to keep the existing client contract
        super().__init__(message=message, status_code=403)


# =============================================================================
# Not Found Exceptions
# =============================================================================

class NotFoundError(BlogApiException):
    """Raised when a referenced document doesn't exist."""

    def __init__(self, message: str = "Not found"):
        super().__init__(message=message, status_code=404)


class UserNotFoundError(NotFoundError):
    def __init__(self, message: str = "Invalid user ID!"):
        super().__init__(message)


class PostNotFoundError(NotFoundError):
    def __init__(self, message: str = "Post not found!"):
        super().__init__(message)


class CommentNotFoundError(NotFoundError):
    def __init__(self, message: str = "Comment not found"):
        super().__init__(message)


# =============================================================================
# Exception Handlers
# =============================================================================

async def blog_api_exception_handler(
    request: Request,
    exc: BlogApiException
) -> JSONResponse:
    """Convert BlogApiException to its JSON response."""
    return JSONResponse(
        status_code=exc.status_code,
        content=jsonable_encoder(exc.to_dict())
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle request validation errors.

    Responds 400 with the field errors under `data`.
    """
    error = RequestValidationFailed(errors=jsonable_encoder(exc.errors()))
    return await blog_api_exception_handler(request, error)


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException
) -> JSONResponse:
    """
    Handle framework HTTP errors (unmatched routes, wrong methods).
    """
    message = "Not found" if exc.status_code == 404 else str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": message},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """
    Handle unexpected exceptions.

    The exception message is forwarded to the client as-is.
    """
    logger.exception(f"Unexpected error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content={"message": str(exc) or exc.__class__.__name__}
    )

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette import status

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base for errors that map onto a JSON ``{"error": ...}`` response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class AuthorizationError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "User not authenticated."


class ForbiddenError(AuthorizationError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Unauthorized. Teacher or admin access required."


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class SignatureError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid signature"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class UpstreamError(AppError):
    # The message is what the client sees; keep upstream detail in the logs.
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Video service request failed"


class ServiceNotConfiguredError(AppError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Video service not properly configured. Please contact administrator."


async def _app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse({"error": exc.message}, status_code=exc.status_code)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, _app_error_handler)

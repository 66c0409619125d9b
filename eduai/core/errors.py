# eduai/core/errors.py
"""
Service-level errors.

Services raise these; the API layer turns them into JSON responses with a
generic message. The only classification callers get is "auth" vs "other".
"""

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    status_code = status.HTTP_400_BAD_REQUEST
    kind = "other"
    public_message = "Request failed"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.public_message)
        self.message = message or self.public_message


class AuthError(ServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    kind = "auth"
    public_message = "Authentication failed"


class PermissionDeniedError(ServiceError):
    status_code = status.HTTP_403_FORBIDDEN
    public_message = "Not allowed"


class NotFoundError(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    public_message = "Not found"


class ConflictError(ServiceError):
    status_code = status.HTTP_409_CONFLICT
    public_message = "Already exists"


class ValidationFailedError(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    public_message = "Invalid request"


class GenerationConfigError(ServiceError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    public_message = "Content generation is not configured"


class GenerationError(ServiceError):
    status_code = status.HTTP_502_BAD_GATEWAY
    public_message = "Failed to generate content. Please try again."


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    logger.warning(
        f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}"
    )
    headers = {"WWW-Authenticate": "Bearer"} if exc.kind == "auth" else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "kind": exc.kind},
        headers=headers,
    )

"""Error taxonomy and the FastAPI handlers that turn it into responses."""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger


class ResumeStudioError(Exception):
    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthorized(ResumeStudioError):
    status_code = 401
    default_message = "Unauthorized"


class Forbidden(ResumeStudioError):
    status_code = 403
    default_message = "Forbidden"


class NotFound(ResumeStudioError):
    status_code = 404
    default_message = "Not found"


class ValidationFailure(ResumeStudioError):
    """
    Malformed payload or edit. ``field`` names the first violated field.
    """

    status_code = 400
    default_message = "Invalid input"

    def __init__(self, message: str | None = None, field: str | None = None):
        self.field = field
        if field and message:
            message = f"{field}: {message}"
        super().__init__(message)


class GenerationFailure(ResumeStudioError):
    status_code = 500
    default_message = "Failed to generate resume"

    def __init__(self, message: str | None = None, reason: str | None = None):
        self.reason = reason
        super().__init__(message)


class OperationPending(ResumeStudioError):
    status_code = 409
    default_message = "Operation already in progress"

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"'{operation}' is already in progress")


def first_validation_message(errors: list[dict]) -> tuple[str | None, str]:
    """Return (field, message) for the first pydantic error."""
    if not errors:
        return None, ValidationFailure.default_message
    first = errors[0]
    loc = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]
    return (".".join(loc) or None), first.get("msg", ValidationFailure.default_message)


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ResumeStudioError)
    async def _studio_error(request: Request, exc: ResumeStudioError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message} ({exc!r})")
        else:
            logger.debug(f"{request.method} {request.url.path} -> {exc.status_code} {exc.message}")
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

    @app.exception_handler(RequestValidationError)
    async def _request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
        field, message = first_validation_message(exc.errors())
        failure = ValidationFailure(message, field=field)
        return JSONResponse(status_code=failure.status_code, content={"message": failure.message})

    @app.exception_handler(Exception)
    async def _unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.opt(exception=exc).error(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(status_code=500, content={"message": "Internal server error"})

"""HTTP plumbing shared by all routers: error mapping, domain context and request log context."""

from typing import Annotated
from uuid import uuid4

import structlog
from fastapi import FastAPI, Path, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError
from sqlalchemy.exc import SQLAlchemyError

from shared.domain import crm
from shared.exceptions import AuthenticationError, ConflictError, PermissionDeniedError
from shared.logging import add_context, clear_context

logger = structlog.get_logger(__name__)

# Identifiers are UUID strings
ResourceId = Annotated[str, Path(min_length=1, max_length=36)]


def _error_response(request: Request, status_code: int, error, headers=None) -> JSONResponse:
    logger.warning(
        "request_failed",
        method=request.method,
        path=request.url.path,
        status_code=status_code,
        error=error,
    )
    return JSONResponse(status_code=status_code, content={"error": error}, headers=headers)


def _server_error(request: Request, event: str, exc: Exception, message: str) -> JSONResponse:
    logger.error(event, method=request.method, path=request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"error": message})


def not_found_message(exc: ObjectNotFoundError):
    """Unwrap Protean's ``{"_entity": ...}`` payload into a plain message."""
    messages = exc.messages
    if isinstance(messages, dict) and "_entity" in messages:
        messages = messages["_entity"]
    if isinstance(messages, list | tuple) and len(messages) == 1:
        messages = messages[0]
    return messages


def register_exception_handlers(app: FastAPI) -> None:
    """Map domain and application errors onto HTTP status codes."""

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        return _error_response(request, 400, exc.messages)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        errors = {}
        for error in exc.errors():
            field = ".".join(str(part) for part in error["loc"] if part != "body") or "body"
            errors.setdefault(field, []).append(error["msg"])
        return _error_response(request, 400, errors)

    @app.exception_handler(ObjectNotFoundError)
    async def handle_not_found(request: Request, exc: ObjectNotFoundError):
        return _error_response(request, 404, not_found_message(exc))

    @app.exception_handler(ConflictError)
    async def handle_conflict(request: Request, exc: ConflictError):
        return _error_response(request, 409, exc.message)

    @app.exception_handler(AuthenticationError)
    async def handle_authentication_error(request: Request, exc: AuthenticationError):
        return _error_response(request, 401, exc.message, headers={"WWW-Authenticate": "Bearer"})

    @app.exception_handler(PermissionDeniedError)
    async def handle_permission_denied(request: Request, exc: PermissionDeniedError):
        return _error_response(request, 403, exc.message)

    @app.exception_handler(SQLAlchemyError)
    async def handle_database_error(request: Request, exc: SQLAlchemyError):
        return _server_error(request, "database_error", exc, "An error occurred while processing the request")

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        return _server_error(request, "unhandled_error", exc, "An unexpected error occurred")


def register_domain_context(app: FastAPI) -> None:
    """Push the ``crm`` domain context for the duration of each request."""

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        with crm.domain_context():
            return await call_next(request)


def register_request_context(app: FastAPI) -> None:
    """Bind a request id, method and path into the structlog context of every request."""

    @app.middleware("http")
    async def request_context_middleware(request: Request, call_next):
        clear_context()
        request_id = request.headers.get("X-Request-ID") or str(uuid4())
        add_context(request_id=request_id, method=request.method, path=request.url.path)
        try:
            response = await call_next(request)
        finally:
            clear_context()
        response.headers["X-Request-ID"] = request_id
        return response

"""
Structured error handling for the MyWebApp service.

``WebAppError`` wraps a frozen ``ErrorDetail`` model; the ``raise_*`` factories
build the detail and raise in one call. ``register_error_handlers`` installs
the Quart handlers that turn unexpected request errors into JSON 500 responses
while leaving HTTP errors (404, 405, ...) to the framework defaults.
"""

from __future__ import annotations

import traceback
from datetime import UTC, datetime
from enum import Enum
from typing import Any, NoReturn
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field
from quart import Quart, Response, g, jsonify
from werkzeug.exceptions import InternalServerError

from mywebapp.service_libs.logging_utils import create_service_logger

logger = create_service_logger("mywebapp.error_handling")


class ErrorCode(str, Enum):
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    SERVER_BIND_FAILED = "SERVER_BIND_FAILED"
    INITIALIZATION_FAILED = "INITIALIZATION_FAILED"
    PROCESSING_ERROR = "PROCESSING_ERROR"


class ErrorDetail(BaseModel):
    """Canonical data model for an error raised by the service."""

    error_code: ErrorCode
    message: str
    correlation_id: UUID
    timestamp: datetime
    service: str
    operation: str
    details: dict[str, Any] = Field(default_factory=dict)
    stack_trace: str | None = None

    model_config = ConfigDict(frozen=True)


class WebAppError(Exception):
    """Exception carrying a structured ErrorDetail."""

    def __init__(self, error_detail: ErrorDetail) -> None:
        super().__init__(error_detail.message)
        self.error_detail = error_detail

    @property
    def error_code(self) -> ErrorCode:
        return self.error_detail.error_code

    @property
    def correlation_id(self) -> UUID:
        return self.error_detail.correlation_id

    def to_dict(self) -> dict[str, Any]:
        return self.error_detail.model_dump(mode="json", exclude={"stack_trace"})

    def __str__(self) -> str:
        return f"[{self.error_code.value}] {self.error_detail.message}"


class ServerStartupError(WebAppError):
    """The embedded server could not be started (bind or lifespan failure)."""


def _create_error_detail(
    error_code: ErrorCode,
    message: str,
    service: str,
    operation: str,
    correlation_id: UUID | None = None,
    capture_stack: bool = False,
    **details: Any,
) -> ErrorDetail:
    return ErrorDetail(
        error_code=error_code,
        message=message,
        correlation_id=correlation_id or uuid4(),
        timestamp=datetime.now(UTC),
        service=service,
        operation=operation,
        details=details,
        stack_trace=traceback.format_exc() if capture_stack else None,
    )


def raise_server_bind_error(
    service: str,
    operation: str,
    bind: list[str],
    reason: str,
    correlation_id: UUID | None = None,
) -> NoReturn:
    """Raise ServerStartupError for a listening socket that could not be bound."""
    detail = _create_error_detail(
        ErrorCode.SERVER_BIND_FAILED,
        f"Cannot bind {', '.join(bind)}: {reason}",
        service,
        operation,
        correlation_id,
        capture_stack=True,
        bind=bind,
        reason=reason,
    )
    raise ServerStartupError(detail)


def raise_initialization_error(
    service: str,
    operation: str,
    message: str,
    correlation_id: UUID | None = None,
    **details: Any,
) -> NoReturn:
    """Raise ServerStartupError for an application startup (lifespan) failure."""
    detail = _create_error_detail(
        ErrorCode.INITIALIZATION_FAILED,
        message,
        service,
        operation,
        correlation_id,
        capture_stack=True,
        **details,
    )
    raise ServerStartupError(detail)


def raise_configuration_error(
    service: str,
    operation: str,
    message: str,
    correlation_id: UUID | None = None,
    **details: Any,
) -> NoReturn:
    detail = _create_error_detail(
        ErrorCode.CONFIGURATION_ERROR, message, service, operation, correlation_id, **details
    )
    raise WebAppError(detail)


def register_error_handlers(app: Quart, service_name: str) -> None:
    """Install JSON handlers for service errors and unexpected exceptions."""

    def _current_correlation_id() -> UUID:
        return getattr(g, "correlation_id", None) or uuid4()

    @app.errorhandler(WebAppError)
    async def handle_webapp_error(error: WebAppError) -> tuple[Response, int]:
        logger.error(f"Service error: {error}", error_code=error.error_code.value)
        return jsonify({"error": error.to_dict()}), 500

    # Unhandled exceptions arrive wrapped in InternalServerError; other HTTP
    # errors (404 Not Found, 405, ...) keep the framework default response.
    @app.errorhandler(InternalServerError)
    async def handle_general_error(error: InternalServerError) -> tuple[Response, int]:
        original = error.original_exception or error
        correlation_id = _current_correlation_id()
        logger.error(f"Unexpected error: {original}", exc_info=original)
        detail = _create_error_detail(
            ErrorCode.PROCESSING_ERROR,
            "An unexpected error occurred during request processing",
            service_name,
            "request_processing",
            correlation_id,
            error_type=original.__class__.__name__,
        )
        return jsonify({"error": WebAppError(detail).to_dict()}), 500

"""
Process entry point for MyWebApp.

Binds the embedded Hypercorn server (``0.0.0.0:80`` unless overridden by
settings) and serves the application until SIGINT/SIGTERM.

Exit codes:
    0  clean shutdown
    1  the server could not start (port not bindable, startup hook failed)
    2  invalid configuration
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable

import hypercorn.asyncio
from hypercorn.config import Config
from hypercorn.utils import LifespanFailureError, LifespanTimeoutError
from pydantic import ValidationError

from mywebapp.app import create_app
from mywebapp.config import Settings
from mywebapp.customizers import build_server_config
from mywebapp.error_handling import (
    ServerStartupError,
    WebAppError,
    raise_configuration_error,
    raise_initialization_error,
    raise_server_bind_error,
)
from mywebapp.protocols import ServerConfigCustomizer
from mywebapp.service_libs.logging_utils import configure_service_logging, create_service_logger
from mywebapp.service_libs.quart_app import WebApp

EXIT_OK = 0
EXIT_STARTUP_FAILURE = 1
EXIT_CONFIGURATION_ERROR = 2

logger = create_service_logger("mywebapp.server")


def check_bindable(config: Config) -> None:
    """Bind and release every configured listening socket.

    Raises OSError before the application starts if any address is taken or
    not permitted.
    """
    sockets = config.create_sockets()
    for sock in sockets.secure_sockets + sockets.insecure_sockets + sockets.quic_sockets:
        sock.close()


async def serve_app(
    app: WebApp,
    settings: Settings,
    customizers: list[ServerConfigCustomizer] | None = None,
    shutdown_trigger: Callable[..., Awaitable[None]] | None = None,
) -> None:
    """Serve ``app`` on the embedded server until shutdown.

    Without a ``shutdown_trigger`` Hypercorn installs SIGINT/SIGTERM handlers.

    Raises:
        ServerStartupError: the listening socket could not be bound or the
            application startup hooks failed.
    """
    config = build_server_config(settings, customizers)

    try:
        check_bindable(config)
    except OSError as e:
        raise_server_bind_error(
            settings.SERVICE_NAME, "serve_app", list(config.bind), e.strerror or str(e)
        )

    logger.info("Starting embedded server", addresses=config.bind)
    try:
        await hypercorn.asyncio.serve(app, config, shutdown_trigger=shutdown_trigger)
    except OSError as e:
        raise_server_bind_error(
            settings.SERVICE_NAME, "serve_app", list(config.bind), e.strerror or str(e)
        )
    except (LifespanFailureError, LifespanTimeoutError) as e:
        raise_initialization_error(
            settings.SERVICE_NAME, "serve_app", f"Application startup failed: {e}"
        )
    logger.info("Embedded server stopped")


def load_settings() -> Settings:
    """Build Settings from the environment.

    Raises:
        WebAppError: CONFIGURATION_ERROR listing the invalid fields.
    """
    try:
        return Settings()
    except ValidationError as e:
        raise_configuration_error(
            "mywebapp",
            "load_settings",
            f"Invalid configuration: {e.error_count()} invalid field(s)",
            fields=[".".join(str(part) for part in err["loc"]) for err in e.errors()],
            errors=[err["msg"] for err in e.errors()],
        )


def main() -> int:
    """Run the service and return the process exit code."""
    try:
        settings = load_settings()
    except WebAppError as e:
        configure_service_logging("mywebapp")
        logger.critical(
            str(e),
            error_code=e.error_code.value,
            correlation_id=str(e.correlation_id),
            **e.error_detail.details,
        )
        return EXIT_CONFIGURATION_ERROR

    configure_service_logging(
        settings.SERVICE_NAME,
        environment=settings.ENVIRONMENT.value,
        log_level=settings.LOG_LEVEL,
    )
    app = create_app(settings)

    try:
        asyncio.run(serve_app(app, settings))
    except ServerStartupError as e:
        logger.critical(
            f"Failed to start MyWebApp: {e}",
            error_code=e.error_code.value,
            correlation_id=str(e.correlation_id),
        )
        return EXIT_STARTUP_FAILURE
    except KeyboardInterrupt:
        logger.info("Interrupted")

    return EXIT_OK

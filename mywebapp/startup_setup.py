"""Startup and shutdown logic for MyWebApp."""

from __future__ import annotations

from dishka import AsyncContainer, make_async_container
from prometheus_client import CollectorRegistry

from mywebapp.config import Settings
from mywebapp.di import MyWebAppProvider
from mywebapp.service_libs.logging_utils import create_service_logger
from mywebapp.service_libs.metrics_middleware import create_http_metrics
from mywebapp.service_libs.quart_app import WebApp


def create_di_container(settings: Settings) -> AsyncContainer:
    """Creates and returns the DI AsyncContainer."""
    logger = create_service_logger("mywebapp.startup")
    container = make_async_container(MyWebAppProvider(settings))
    logger.info("DI AsyncContainer created.")
    return container


async def initialize_services(app: WebApp, settings: Settings) -> None:
    """Initialize HTTP metrics from the app's DI registry."""
    logger = create_service_logger("mywebapp.startup")

    try:
        registry = await app.container.get(CollectorRegistry)
        app.extensions["metrics"] = create_http_metrics(registry)
        logger.info(
            "MyWebApp services initialized",
            ops_endpoints_enabled=settings.OPS_ENDPOINTS_ENABLED,
        )
    except Exception as e:
        logger.critical(f"Failed to initialize MyWebApp: {e}", exc_info=True)
        raise


async def shutdown_services(app: WebApp) -> None:
    """Gracefully close the app's DI container."""
    logger = create_service_logger("mywebapp.startup")

    try:
        await app.container.close()
        logger.info("MyWebApp DI container closed")
    except Exception as e:
        logger.error(f"Error during MyWebApp shutdown: {e}", exc_info=True)

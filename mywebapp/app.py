"""
MyWebApp application factory.

The application declares no business routes: every path is answered by the
framework defaults (404 Not Found). Operational endpoints (/healthz, /metrics)
are registered only when enabled in settings.
"""

from __future__ import annotations

from quart_dishka import QuartDishka

from mywebapp import startup_setup
from mywebapp.api.health_routes import health_bp
from mywebapp.config import Settings
from mywebapp.error_handling import register_error_handlers
from mywebapp.middleware import setup_correlation_id_middleware
from mywebapp.service_libs.logging_utils import create_service_logger
from mywebapp.service_libs.metrics_middleware import setup_metrics_middleware
from mywebapp.service_libs.quart_app import WebApp

logger = create_service_logger("mywebapp.app")


def create_app(settings: Settings | None = None) -> WebApp:
    """Create and configure the Quart application.

    Args:
        settings: Optional settings override for testing

    Returns:
        Configured application, ready to be served by Hypercorn
    """
    if settings is None:
        settings = Settings()

    app = WebApp(__name__)
    app.config.update({"DEBUG": settings.LOG_LEVEL == "DEBUG"})

    app.container = startup_setup.create_di_container(settings)
    QuartDishka(app=app, container=app.container)

    setup_correlation_id_middleware(app)
    setup_metrics_middleware(app, logger_name="mywebapp.metrics")
    register_error_handlers(app, settings.SERVICE_NAME)

    if settings.OPS_ENDPOINTS_ENABLED:
        app.register_blueprint(health_bp)

    @app.before_serving
    async def startup() -> None:
        """Initialize services and middleware."""
        try:
            await startup_setup.initialize_services(app, settings)
            logger.info("MyWebApp startup completed successfully")
        except Exception as e:
            logger.critical(f"Failed to start MyWebApp: {e}", exc_info=True)
            raise

    @app.after_serving
    async def shutdown() -> None:
        """Gracefully shutdown all services."""
        try:
            await startup_setup.shutdown_services(app)
            logger.info("MyWebApp shutdown completed")
        except Exception as e:
            logger.error(f"Error during service shutdown: {e}", exc_info=True)

    return app

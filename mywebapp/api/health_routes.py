"""Health and metrics routes for MyWebApp.

Registered only when ``OPS_ENDPOINTS_ENABLED`` is set.
"""

from __future__ import annotations

from dishka import FromDishka
from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, generate_latest
from quart import Blueprint, Response, g, jsonify
from quart_dishka import inject

from mywebapp.config import Settings
from mywebapp.service_libs.logging_utils import create_service_logger

logger = create_service_logger("mywebapp.api.health")
health_bp = Blueprint("health_routes", __name__)


@health_bp.route("/healthz")
@inject
async def health_check(settings: FromDishka[Settings]) -> tuple[Response, int]:
    """Standardized health check endpoint."""
    health_response = {
        "service": settings.SERVICE_NAME,
        "status": "healthy",
        "message": "MyWebApp is healthy",
        "version": settings.SERVICE_VERSION,
        "checks": {"service_responsive": True},
        "environment": settings.ENVIRONMENT.value,
        "correlation_id": str(g.correlation_id),
    }
    return jsonify(health_response), 200


@health_bp.route("/metrics")
@inject
async def metrics(registry: FromDishka[CollectorRegistry]) -> Response:
    """Prometheus metrics endpoint."""
    try:
        metrics_data = generate_latest(registry)
        return Response(metrics_data, content_type=CONTENT_TYPE_LATEST)
    except Exception as e:
        logger.error(f"Error generating metrics: {e}", exc_info=True)
        return Response("Error generating metrics", status=500)

"""Prometheus metrics middleware for Quart applications.

Request counters and duration histograms are looked up in
``app.extensions["metrics"]`` at request time, so the middleware can be
installed before the metrics themselves are created during startup.
"""

from __future__ import annotations

import time

from prometheus_client import CollectorRegistry, Counter, Histogram
from quart import Quart, Response, current_app, g, request

from mywebapp.service_libs.logging_utils import create_service_logger

logger = create_service_logger("mywebapp.metrics_middleware")

REQUEST_COUNT_METRIC = "http_requests_total"
REQUEST_DURATION_METRIC = "http_request_duration_seconds"


def create_http_metrics(registry: CollectorRegistry) -> dict:
    """Create Prometheus metrics instances for HTTP middleware."""
    return {
        REQUEST_COUNT_METRIC: Counter(
            REQUEST_COUNT_METRIC,
            "Total HTTP requests",
            ["method", "endpoint", "status_code"],
            registry=registry,
        ),
        REQUEST_DURATION_METRIC: Histogram(
            REQUEST_DURATION_METRIC,
            "HTTP request duration in seconds",
            ["method", "endpoint"],
            registry=registry,
        ),
    }


def setup_metrics_middleware(app: Quart, logger_name: str | None = None) -> None:
    """Setup Prometheus metrics middleware for a Quart application.

    Args:
        app: The Quart application to configure
        logger_name: Optional custom logger name for this service

    Note:
        Unmatched paths are recorded under the endpoint label ``<unmatched>``
        so that requests to arbitrary unrouted paths cannot grow the label set
        without bound.
    """
    service_logger = create_service_logger(logger_name) if logger_name else logger

    @app.before_request
    async def before_request() -> None:
        """Record request start time for duration metrics."""
        g.start_time = time.perf_counter()

    @app.after_request
    async def after_request(response: Response) -> Response:
        """Record metrics after each request."""
        try:
            start_time = getattr(g, "start_time", None)
            metrics = current_app.extensions.get("metrics", {})

            if start_time is not None and metrics:
                duration = time.perf_counter() - start_time
                endpoint = request.url_rule.rule if request.url_rule else "<unmatched>"
                method = request.method

                metrics[REQUEST_COUNT_METRIC].labels(
                    method=method,
                    endpoint=endpoint,
                    status_code=str(response.status_code),
                ).inc()
                metrics[REQUEST_DURATION_METRIC].labels(
                    method=method, endpoint=endpoint
                ).observe(duration)

        except Exception as e:
            service_logger.error(f"Error recording request metrics: {e}")

        return response

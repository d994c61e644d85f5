"""
ASGI entry point for container-hosted deployments.

    hypercorn -c python:mywebapp.hypercorn_config mywebapp.asgi:app
"""

from __future__ import annotations

from mywebapp.app import create_app
from mywebapp.config import Settings
from mywebapp.service_libs.logging_utils import configure_service_logging

settings = Settings()

configure_service_logging(
    settings.SERVICE_NAME,
    environment=settings.ENVIRONMENT.value,
    log_level=settings.LOG_LEVEL,
)

app = create_app(settings)

"""Hypercorn config module for container-hosted deployments.

    hypercorn -c python:mywebapp.hypercorn_config mywebapp.asgi:app

Values come from the same ``Settings`` as the embedded entry point.
"""

from mywebapp.config import Settings
from mywebapp.customizers import ACCESS_LOG_FORMAT, stderr_error_logger

_settings = Settings()

bind = [f"{_settings.HOST}:{_settings.PORT}"]
workers = _settings.WEB_CONCURRENCY
worker_class = "asyncio"

loglevel = _settings.LOG_LEVEL.lower()
accesslog = "-" if _settings.ACCESS_LOG else None
errorlog = stderr_error_logger(_settings.LOG_LEVEL)
access_log_format = ACCESS_LOG_FORMAT

graceful_timeout = _settings.GRACEFUL_TIMEOUT
keep_alive_timeout = _settings.KEEP_ALIVE_TIMEOUT
startup_timeout = _settings.STARTUP_TIMEOUT

"""
Embedded server customizers.

Each customizer mutates a Hypercorn ``Config`` before the server binds.
``default_customizers`` returns them in application order; a later customizer
wins when two touch the same field.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass

from hypercorn.config import Config

from mywebapp.config import Settings
from mywebapp.protocols import ServerConfigCustomizer

DEFAULT_PORT = 80
DEFAULT_HOST = "0.0.0.0"
ACCESS_LOG_FORMAT = '%(h)s %(l)s %(u)s %(t)s "%(r)s" %(s)s %(b)s "%(f)s" "%(a)s"'
ERROR_LOG_FORMAT = "%(asctime)s [%(process)d] [%(levelname)s] %(message)s"


@dataclass(frozen=True)
class PortCustomizer:
    """Bind the server to a single ``host:port`` address."""

    port: int = DEFAULT_PORT
    host: str = DEFAULT_HOST

    def customize(self, config: Config) -> None:
        config.bind = [f"{self.host}:{self.port}"]


@dataclass(frozen=True)
class TimeoutCustomizer:
    graceful_timeout: float
    keep_alive_timeout: float
    startup_timeout: float

    def customize(self, config: Config) -> None:
        config.graceful_timeout = self.graceful_timeout
        config.keep_alive_timeout = self.keep_alive_timeout
        config.startup_timeout = self.startup_timeout


@dataclass(frozen=True)
class LoggingCustomizer:
    """Send Hypercorn's error log to stderr and its access log to stdout."""

    log_level: str
    access_log: bool = True

    def customize(self, config: Config) -> None:
        config.loglevel = self.log_level.lower()
        config.errorlog = stderr_error_logger(self.log_level)
        config.accesslog = "-" if self.access_log else None
        config.access_log_format = ACCESS_LOG_FORMAT


def stderr_error_logger(log_level: str) -> logging.Logger:
    """Hypercorn's error logger, writing to stderr only.

    Hypercorn's ``"-"`` target leaves the logger propagating to the root
    handlers, which ``configure_service_logging`` points at stdout.
    """
    error_logger = logging.getLogger("hypercorn.error")
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(ERROR_LOG_FORMAT, "[%Y-%m-%d %H:%M:%S %z]"))
    error_logger.handlers = [handler]
    error_logger.propagate = False
    error_logger.setLevel(log_level.upper())
    return error_logger


def default_customizers(settings: Settings) -> list[ServerConfigCustomizer]:
    """Customizers for the embedded server, in application order."""
    return [
        PortCustomizer(port=settings.PORT, host=settings.HOST),
        TimeoutCustomizer(
            graceful_timeout=settings.GRACEFUL_TIMEOUT,
            keep_alive_timeout=settings.KEEP_ALIVE_TIMEOUT,
            startup_timeout=settings.STARTUP_TIMEOUT,
        ),
        LoggingCustomizer(log_level=settings.LOG_LEVEL, access_log=settings.ACCESS_LOG),
    ]


def build_server_config(
    settings: Settings, customizers: list[ServerConfigCustomizer] | None = None
) -> Config:
    """Start from a fresh Hypercorn config and apply every customizer in order."""
    config = Config()
    if customizers is None:
        customizers = default_customizers(settings)
    for customizer in customizers:
        customizer.customize(config)
    return config

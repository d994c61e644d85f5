"""
Configuration module for the MyWebApp service.

Defines the settings for the embedded HTTP server: bind address, timeouts,
logging level and the optional operational endpoints.
"""

from __future__ import annotations

import logging
from enum import Enum

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Defines application environments."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class Settings(BaseSettings):
    """
    Configuration settings for the MyWebApp service.

    Settings are loaded from .env files and environment variables.
    """

    # Service identity
    SERVICE_NAME: str = "mywebapp"
    SERVICE_VERSION: str = "0.0.1"

    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: Environment = Field(
        default=Environment.DEVELOPMENT,
        validation_alias="ENVIRONMENT",  # Read from global ENVIRONMENT var
        description="Runtime environment for the service",
    )

    # Embedded server
    HOST: str = "0.0.0.0"
    PORT: int = 80
    WEB_CONCURRENCY: int = 1
    GRACEFUL_TIMEOUT: int = 30
    KEEP_ALIVE_TIMEOUT: int = 5
    STARTUP_TIMEOUT: int = 60
    ACCESS_LOG: bool = True

    # /healthz and /metrics
    OPS_ENDPOINTS_ENABLED: bool = False

    @field_validator("PORT")
    @classmethod
    def validate_port(cls, v: int) -> int:
        if not 1 <= v <= 65535:
            raise ValueError("PORT must be between 1 and 65535")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalise and reject unknown logging level names."""
        level = v.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown LOG_LEVEL: {v}")
        return level

    @field_validator("WEB_CONCURRENCY", "GRACEFUL_TIMEOUT", "KEEP_ALIVE_TIMEOUT", "STARTUP_TIMEOUT")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("value must be a positive integer")
        return v

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_prefix="MYWEBAPP_",  # e.g. MYWEBAPP_PORT, MYWEBAPP_LOG_LEVEL
    )

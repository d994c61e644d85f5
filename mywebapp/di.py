"""
MyWebApp dependency injection configuration.
"""

from __future__ import annotations

from dishka import Provider, Scope, provide
from prometheus_client import CollectorRegistry

from mywebapp.config import Settings


class MyWebAppProvider(Provider):
    """DI provider for MyWebApp dependencies."""

    def __init__(self, settings: Settings) -> None:
        super().__init__()
        self._settings = settings

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide service settings."""
        return self._settings

    @provide(scope=Scope.APP)
    def provide_collector_registry(self) -> CollectorRegistry:
        """Provide a per-application Prometheus collector registry."""
        return CollectorRegistry()

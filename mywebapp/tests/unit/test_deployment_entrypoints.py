"""Tests for the DI container and the container-hosted ASGI entry points."""

from __future__ import annotations

import importlib

import pytest
from prometheus_client import CollectorRegistry

from mywebapp.config import Settings
from mywebapp.service_libs.quart_app import WebApp
from mywebapp.startup_setup import create_di_container


class TestDIContainer:
    async def test_provides_settings_and_registry(self) -> None:
        settings = Settings(_env_file=None, PORT=8080)
        container = create_di_container(settings)
        try:
            assert await container.get(Settings) is settings
            registry = await container.get(CollectorRegistry)
            assert await container.get(CollectorRegistry) is registry
        finally:
            await container.close()


class TestHypercornConfigModule:
    def test_defaults_to_port_80(self) -> None:
        import mywebapp.hypercorn_config as hypercorn_config

        module = importlib.reload(hypercorn_config)

        assert module.bind == ["0.0.0.0:80"]
        assert module.worker_class == "asyncio"
        assert module.workers == 1

    def test_reads_prefixed_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MYWEBAPP_PORT", "8081")
        monkeypatch.setenv("MYWEBAPP_ACCESS_LOG", "false")
        import mywebapp.hypercorn_config as hypercorn_config

        module = importlib.reload(hypercorn_config)

        assert module.bind == ["0.0.0.0:8081"]
        assert module.accesslog is None


class TestAsgiModule:
    def test_exposes_application(self) -> None:
        import mywebapp.asgi as asgi

        module = importlib.reload(asgi)

        assert isinstance(module.app, WebApp)
        assert module.settings.PORT == 80

"""
Shared fixtures for MyWebApp tests.
"""

from __future__ import annotations

import os
import socket
from collections.abc import Iterator

import pytest

from mywebapp.app import create_app
from mywebapp.config import Settings
from mywebapp.service_libs.quart_app import WebApp


def find_free_port() -> int:
    """Ask the OS for a currently unused TCP port on the loopback interface."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep host environment variables out of Settings."""
    monkeypatch.delenv("ENVIRONMENT", raising=False)
    for key in list(os.environ):
        if key.startswith("MYWEBAPP_"):
            monkeypatch.delenv(key)


@pytest.fixture
def free_port() -> int:
    return find_free_port()


@pytest.fixture
def held_port() -> Iterator[int]:
    """A loopback port held by a listening socket for the duration of the test."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        sock.listen()
        yield sock.getsockname()[1]


@pytest.fixture
def test_settings() -> Settings:
    return Settings(_env_file=None, LOG_LEVEL="INFO", ACCESS_LOG=False)


@pytest.fixture
def ops_settings() -> Settings:
    return Settings(_env_file=None, OPS_ENDPOINTS_ENABLED=True, ACCESS_LOG=False)


@pytest.fixture
def app(test_settings: Settings) -> WebApp:
    return create_app(test_settings)


@pytest.fixture
def ops_app(ops_settings: Settings) -> WebApp:
    return create_app(ops_settings)

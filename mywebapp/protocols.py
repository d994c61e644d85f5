"""
Protocol definitions for MyWebApp.
"""

from __future__ import annotations

from typing import Protocol

from hypercorn.config import Config


class ServerConfigCustomizer(Protocol):
    """Callback that adjusts the embedded server's config before it binds."""

    def customize(self, config: Config) -> None:
        """Mutate ``config`` in place."""
        ...

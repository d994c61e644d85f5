"""
Type-safe Quart application class for the MyWebApp service.

Replaces setattr()/getattr() access to app-level infrastructure with typed
attributes.
"""

from __future__ import annotations

from typing import Any

from dishka import AsyncContainer
from quart import Quart


class WebApp(Quart):
    """Quart application with guaranteed service infrastructure.

    GUARANTEED INFRASTRUCTURE:
        container: Dishka async container for dependency injection
        extensions: Standard Quart extensions dictionary (metrics live here)

    The container is NOT created here. It MUST be set in the create_app
    factory immediately after construction.
    """

    container: AsyncContainer
    extensions: dict[str, Any]

    def __init__(self, import_name: str, *args: Any, **kwargs: Any) -> None:
        super().__init__(import_name, *args, **kwargs)
        self.extensions = {}

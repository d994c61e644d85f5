"""
Shared service infrastructure: structured logging, metrics middleware and the
typed Quart application class.
"""

from .quart_app import WebApp

__all__ = ["WebApp"]

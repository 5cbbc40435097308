"""FastAPI application and routes."""

from oraclerelay.api.app import create_app

__all__ = [
    "create_app",
]

"""FastAPI dependency injection."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from oraclerelay.client import OracleRelay
from oraclerelay.config import RelaySettings


async def get_relay(request: Request) -> OracleRelay:
    """Get the running relay from app state."""
    return request.app.state.relay


async def get_relay_settings(request: Request) -> RelaySettings:
    """Get the settings the relay was built with."""
    return request.app.state.relay.settings


# Type aliases for cleaner dependency injection
Relay = Annotated[OracleRelay, Depends(get_relay)]
Settings = Annotated[RelaySettings, Depends(get_relay_settings)]

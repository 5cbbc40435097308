"""Integration test fixtures for the HTTP API."""

from __future__ import annotations

from typing import AsyncIterator

import pytest
import respx
from httpx import ASGITransport, AsyncClient

from oraclerelay.api.app import create_app
from oraclerelay.client import OracleRelay
from oraclerelay.config import RelaySettings


# ============================================================================
# Relay Fixtures
# ============================================================================


@pytest.fixture
async def relay(mock_settings: RelaySettings, fake_chain, directory) -> AsyncIterator[OracleRelay]:
    """An initialised relay on the fake chain; the poll loop is not started."""
    async with OracleRelay(mock_settings, chain=fake_chain, directory=directory) as relay:
        yield relay


@pytest.fixture
def gateways():
    """Mock the IPFS gateways; unmatched requests fail the test."""
    with respx.mock(assert_all_called=False) as router:
        yield router


# ============================================================================
# FastAPI Test Client Fixtures
# ============================================================================


@pytest.fixture
def test_app(relay: OracleRelay):
    """Create test FastAPI application around the relay."""
    return create_app(relay=relay, cors_origins=["http://localhost:3000"])


@pytest.fixture
async def test_client(test_app) -> AsyncIterator[AsyncClient]:
    """Create async HTTP test client."""
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

"""Unit test fixtures with HTTP mocking."""

from __future__ import annotations

from typing import Any

import pytest
import respx
from httpx import Response

from oraclerelay.resolution.base import SourceConfig

# ============================================================================
# HTTP Mocking Fixtures
# ============================================================================


@pytest.fixture
def respx_mock():
    """Provide a respx mock router for HTTP mocking.

    Use this when you need fine-grained control over mocked responses.
    The mock is automatically started and stopped by respx.
    """
    with respx.mock(assert_all_called=False) as router:
        yield router


# ============================================================================
# Source Configuration Fixtures
# ============================================================================


@pytest.fixture
def source_config() -> SourceConfig:
    """Create a source config for testing."""
    return SourceConfig(timeout=1.0, value_field="creditScore")


@pytest.fixture
def source_config_disabled() -> SourceConfig:
    """Create a disabled source config."""
    return SourceConfig(enabled=False)


# ============================================================================
# Mock Response Helpers
# ============================================================================


def mock_json_response(data: Any, status_code: int = 200) -> Response:
    """Create a mock JSON response."""
    return Response(
        status_code=status_code,
        json=data,
        headers={"Content-Type": "application/json"},
    )


def mock_error_response(status_code: int, message: str = "Error") -> Response:
    """Create a mock error response."""
    return Response(
        status_code=status_code,
        json={"error": message},
        headers={"Content-Type": "application/json"},
    )


@pytest.fixture
def mock_responses():
    """Provide helper functions for creating mock responses."""
    return {
        "json": mock_json_response,
        "error": mock_error_response,
    }


# ============================================================================
# Payload Fixtures
# ============================================================================


@pytest.fixture
def score_payload() -> dict[str, Any]:
    """A credit score document as stored on IPFS."""
    return {
        "userId": "alice",
        "creditScore": 720,
        "factors": {"paymentHistory": 0.35, "utilization": 0.3},
        "lastUpdated": "2024-01-15T12:00:00Z",
    }

"""Tests for gateway sources and payload extraction."""

from __future__ import annotations

import httpx
import pytest
import respx
from httpx import Response

from oraclerelay.core.types import AttemptStatus
from oraclerelay.resolution.base import SourceConfig, extract_value
from oraclerelay.resolution.gateway import GatewaySource

CID = "bafyalice"
URL = f"https://gw1.test/ipfs/{CID}"


@pytest.fixture
def source(source_config: SourceConfig) -> GatewaySource:
    """Create a gateway source."""
    return GatewaySource("https://gw1.test/ipfs/{locator}", config=source_config)


# ============================================================================
# Configuration Tests
# ============================================================================


class TestGatewaySourceConfig:
    """Tests for gateway source construction."""

    def test_name_defaults_to_hostname(self, source: GatewaySource):
        """Name should be the template's hostname."""
        assert source.name == "gw1.test"

    def test_explicit_name(self):
        """An explicit name should win over the hostname."""
        source = GatewaySource("https://gw1.test/ipfs/{locator}", name="primary")
        assert source.name == "primary"

    def test_url_for_substitutes_locator(self, source: GatewaySource):
        """The locator should be substituted into the template."""
        assert source.url_for(CID) == URL

    def test_template_without_placeholder_rejected(self):
        """Templates must contain the locator placeholder."""
        with pytest.raises(ValueError):
            GatewaySource("https://gw1.test/ipfs/")

    def test_default_priority(self, source: GatewaySource):
        """Default priority should be 100."""
        assert source.priority == 100

    def test_disabled(self, source_config_disabled: SourceConfig):
        """Disabled config should be reflected."""
        source = GatewaySource("https://gw1.test/ipfs/{locator}", config=source_config_disabled)
        assert source.is_enabled is False


# ============================================================================
# Fetch Tests
# ============================================================================


class TestGatewayFetch:
    """Tests for classifying gateway responses."""

    @respx.mock
    async def test_success(self, source: GatewaySource, score_payload: dict):
        """A JSON payload with the value field should succeed."""
        respx.get(URL).mock(return_value=Response(200, json=score_payload))

        attempt = await source.fetch(CID)

        assert attempt.status == AttemptStatus.SUCCESS
        assert attempt.success is True
        assert attempt.value == 720
        assert attempt.source == "gw1.test"
        assert attempt.url == URL
        assert attempt.status_code == 200

    @respx.mock
    async def test_timeout(self, source: GatewaySource):
        """A timeout should be classified as TIMEOUT."""
        respx.get(URL).mock(side_effect=httpx.ReadTimeout("timed out"))

        attempt = await source.fetch(CID)

        assert attempt.status == AttemptStatus.TIMEOUT
        assert attempt.success is False
        assert "Timed out" in attempt.error_message

    @respx.mock
    async def test_connection_error(self, source: GatewaySource):
        """A transport failure should be classified as TRANSPORT_ERROR."""
        respx.get(URL).mock(side_effect=httpx.ConnectError("refused"))

        attempt = await source.fetch(CID)

        assert attempt.status == AttemptStatus.TRANSPORT_ERROR
        assert attempt.answered is False

    @respx.mock
    async def test_http_error(self, source: GatewaySource):
        """A non-2xx status should be classified as HTTP_ERROR."""
        respx.get(URL).mock(return_value=Response(504))

        attempt = await source.fetch(CID)

        assert attempt.status == AttemptStatus.HTTP_ERROR
        assert attempt.status_code == 504

    @respx.mock
    async def test_non_json_body(self, source: GatewaySource):
        """A body that is not JSON should be classified as UNPARSEABLE."""
        respx.get(URL).mock(return_value=Response(200, text="<html>gateway page</html>"))

        attempt = await source.fetch(CID)

        assert attempt.status == AttemptStatus.UNPARSEABLE
        assert attempt.answered is False

    @respx.mock
    async def test_missing_value_field(self, source: GatewaySource):
        """JSON without the value field should be INVALID_PAYLOAD."""
        respx.get(URL).mock(return_value=Response(200, json={"userId": "alice"}))

        attempt = await source.fetch(CID)

        assert attempt.status == AttemptStatus.INVALID_PAYLOAD
        assert attempt.answered is True
        assert attempt.value is None

    @respx.mock
    async def test_custom_value_field(self):
        """The value field should be configurable."""
        source = GatewaySource(
            "https://gw1.test/ipfs/{locator}",
            config=SourceConfig(value_field="score"),
        )
        respx.get(URL).mock(return_value=Response(200, json={"score": 640}))

        attempt = await source.fetch(CID)

        assert attempt.value == 640

    async def test_close_without_client(self, source: GatewaySource):
        """Closing a source that never fetched should be a no-op."""
        await source.close()


# ============================================================================
# Value Extraction Tests
# ============================================================================


class TestExtractValue:
    """Tests for pulling the unsigned value out of a payload."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            (720, 720),
            (0, 0),
            (720.0, 720),
            ("720", 720),
            (" 85 ", 85),
            (2**256 - 1, 2**256 - 1),
        ],
    )
    def test_accepted_values(self, raw, expected):
        """Integers, integral floats and digit strings should be accepted."""
        assert extract_value({"creditScore": raw}, "creditScore") == expected

    @pytest.mark.parametrize(
        "raw",
        [
            -1,
            720.5,
            "abc",
            "-5",
            "\u00b2",
            "\u0667\u0662\u0660",
            "9" * 5000,
            2**256,
            True,
            None,
            [720],
            {"value": 720},
        ],
    )
    def test_rejected_values(self, raw):
        """Negative, fractional, oversized, boolean and non-numeric values should be rejected."""
        assert extract_value({"creditScore": raw}, "creditScore") is None

    def test_missing_field(self):
        """A missing field should yield None."""
        assert extract_value({"score": 1}, "creditScore") is None

    def test_non_object_payload(self):
        """A payload that is not an object should yield None."""
        assert extract_value([720], "creditScore") is None

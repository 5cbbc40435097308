"""Tests for API request/response schemas."""

from __future__ import annotations

from datetime import datetime, timezone

from oraclerelay.api.schemas import (
    DeploymentConfigResponse,
    EntityResponse,
    LastScoreResponse,
    ManualTestRequest,
    SourceAttemptResponse,
)
from oraclerelay.api.schemas.base import to_camel_case
from oraclerelay.core.types import AttemptStatus
from oraclerelay.resolution.base import SourceAttempt

# ============================================================================
# Alias Tests
# ============================================================================


class TestCamelCase:
    """Tests for the alias generator."""

    def test_single_word(self):
        assert to_camel_case("status") == "status"

    def test_multiple_words(self):
        assert to_camel_case("credit_score") == "creditScore"
        assert to_camel_case("last_tick_at") == "lastTickAt"


# ============================================================================
# Request Schema Tests
# ============================================================================


class TestManualTestRequest:
    """Tests for ManualTestRequest schema."""

    def test_camel_case_input(self):
        """camelCase keys should populate the fields."""
        request = ManualTestRequest.model_validate({"userId": "alice", "userName": "Alice"})
        assert request.user_id == "alice"
        assert request.user_name == "Alice"

    def test_missing_fields_allowed(self):
        """Missing fields should parse as None so the route can answer 400."""
        request = ManualTestRequest.model_validate({"userId": "alice"})
        assert request.user_name is None


# ============================================================================
# Response Schema Tests
# ============================================================================


class TestResponseSerialization:
    """Tests for JSON field names."""

    def test_last_score_aliases(self):
        """Score response should use the dashboard's field names."""
        response = LastScoreResponse(
            user_id="alice",
            credit_score=720,
            ipfs_cid="bafyalice",
            timestamp=datetime(2024, 1, 15, tzinfo=timezone.utc),
            tx_hash="0xabc",
        )
        data = response.model_dump(mode="json", by_alias=True)
        assert set(data) == {"userId", "creditScore", "ipfsCID", "timestamp", "txHash"}

    def test_entity_aliases(self):
        data = EntityResponse(user_id="alice", name="Alice", ipfs_cid="bafyalice").model_dump(
            by_alias=True
        )
        assert data == {"userId": "alice", "name": "Alice", "ipfsCID": "bafyalice"}

    def test_deployment_abi_alias(self):
        data = DeploymentConfigResponse(network="sepolia", contract_abi=[{"type": "event"}]).model_dump(
            by_alias=True
        )
        assert data["contractABI"] == [{"type": "event"}]
        assert "contractAddress" in data

    def test_attempt_from_domain_model(self):
        """Attempts should convert from the resolver's model by attribute."""
        attempt = SourceAttempt(
            source="gw1.test",
            status=AttemptStatus.HTTP_ERROR,
            status_code=504,
            error_message="Unexpected status 504",
        )
        response = SourceAttemptResponse.model_validate(attempt)
        data = response.model_dump(mode="json", by_alias=True)
        assert data["statusCode"] == 504
        assert data["status"] == "http_error"

"""Shared test fixtures for all tests."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from oraclerelay.cache.store import ResultCache
from oraclerelay.config import RelaySettings
from oraclerelay.core.exceptions import ChainQueryError
from oraclerelay.core.models import EntityRecord, OracleRequest
from oraclerelay.events import RecordingEventSink
from oraclerelay.onchain.client import FulfillmentCall
from oraclerelay.onchain.submitter import Submitter
from oraclerelay.resolution.base import SourceConfig
from oraclerelay.resolution.chain import ResolutionChain
from oraclerelay.resolution.registry import SourceRegistry
from oraclerelay.services.pipeline import RelayPipeline
from oraclerelay.validation.directory import EntityDirectory
from oraclerelay.validation.validator import RequestValidator

# Gateways used throughout the tests, in priority order.
GATEWAY_TEMPLATES = [
    "https://gw1.test/ipfs/{locator}",
    "https://gw2.test/ipfs/{locator}",
    "https://gw3.test/ipfs/{locator}",
]

ALICE_CID = "bafyalice"
BOB_CID = "bafybob"


# ============================================================================
# Fake Chain
# ============================================================================


class FakeChainClient:
    """In-memory chain: a settable height, a list of request events and a send log."""

    address = "0x" + "ab" * 20

    def __init__(self, height: int = 100) -> None:
        self.height = height
        self.events: list[OracleRequest] = []
        self.fail_height = False
        self.fail_events = False
        self.estimate_error: Exception | None = None
        self.send_error: Exception | None = None
        self.gas = 150_000
        self.height_calls = 0
        self.queries: list[tuple[int, int]] = []
        self.estimated: list[FulfillmentCall] = []
        self.sent: list[tuple[FulfillmentCall, int]] = []

    async def get_height(self) -> int:
        self.height_calls += 1
        if self.fail_height:
            raise ChainQueryError("RPC unavailable")
        return self.height

    async def get_request_events(self, from_block: int, to_block: int) -> list[OracleRequest]:
        self.queries.append((from_block, to_block))
        if self.fail_events:
            raise ChainQueryError("eth_getLogs failed")
        return [e for e in self.events if from_block <= e.source_block <= to_block]

    async def estimate_cost(self, call: FulfillmentCall) -> int:
        self.estimated.append(call)
        if self.estimate_error is not None:
            raise self.estimate_error
        return self.gas

    async def send(self, call: FulfillmentCall, gas: int) -> str:
        if self.send_error is not None:
            raise self.send_error
        self.sent.append((call, gas))
        return "0x" + f"{len(self.sent):064x}"


@pytest.fixture
def fake_chain() -> FakeChainClient:
    """A fake chain at height 100 with no events."""
    return FakeChainClient(height=100)


# ============================================================================
# Sample Data Fixtures
# ============================================================================


@pytest.fixture
def directory() -> EntityDirectory:
    """Two-entity directory."""
    return EntityDirectory(
        [
            EntityRecord(entity_id="alice", display_name="Alice", data_locator=ALICE_CID),
            EntityRecord(entity_id="bob", display_name="Bob", data_locator=BOB_CID),
        ]
    )


@pytest.fixture
def make_request() -> Callable[..., OracleRequest]:
    """Factory for request events; ids are derived from a counter unless given."""
    counter = iter(range(1, 10_000))

    def _make(
        entity_id: str = "alice",
        entity_name: str = "Alice",
        source_block: int = 101,
        request_id: bytes | None = None,
        log_index: int | None = None,
    ) -> OracleRequest:
        return OracleRequest(
            request_id=request_id or next(counter).to_bytes(32, "big"),
            entity_id=entity_id,
            entity_name=entity_name,
            source_block=source_block,
            requester="0x" + "cd" * 20,
            log_index=log_index,
        )

    return _make


@pytest.fixture
def recorder() -> RecordingEventSink:
    """In-memory event sink."""
    return RecordingEventSink()


# ============================================================================
# Settings Fixtures
# ============================================================================


@pytest.fixture
def mock_settings(tmp_path: Path) -> RelaySettings:
    """Settings with test values and no deployment file."""
    return RelaySettings(
        _env_file=None,
        rpc_url="http://localhost:8545",
        private_key="0x" + "11" * 32,
        contract_address="0x" + "22" * 20,
        deployment_config_path=tmp_path / "deployment.json",
        gateway_templates=list(GATEWAY_TEMPLATES),
        source_timeout=1.0,
        poll_interval=0.01,
    )


@pytest.fixture
def mock_settings_minimal(tmp_path: Path) -> RelaySettings:
    """Settings with nothing chain-related configured."""
    return RelaySettings(
        _env_file=None,
        deployment_config_path=tmp_path / "missing.json",
    )


# ============================================================================
# Pipeline Fixtures
# ============================================================================


@pytest.fixture
def resolution_chain() -> ResolutionChain:
    """Gateway chain over the three test gateways."""
    registry = SourceRegistry.from_templates(GATEWAY_TEMPLATES, SourceConfig(timeout=1.0))
    return registry.get_chain()


@pytest.fixture
def result_cache() -> ResultCache:
    return ResultCache()


@pytest.fixture
def pipeline(
    directory: EntityDirectory,
    resolution_chain: ResolutionChain,
    fake_chain: FakeChainClient,
    result_cache: ResultCache,
    recorder: RecordingEventSink,
) -> RelayPipeline:
    """A pipeline wired to the fake chain and the test gateways."""
    return RelayPipeline(
        validator=RequestValidator(directory),
        resolver=resolution_chain,
        submitter=Submitter(fake_chain, recorder),
        cache=result_cache,
        events=recorder,
    )

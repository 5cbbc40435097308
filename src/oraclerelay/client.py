"""Main relay client wiring every component together."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from oraclerelay.cache.store import ResultCache
from oraclerelay.config import RelaySettings
from oraclerelay.core.exceptions import ChainQueryError
from oraclerelay.events import (
    CompositeEventSink,
    EventSink,
    LoggingEventSink,
    RecordingEventSink,
)
from oraclerelay.onchain.client import Web3ChainClient
from oraclerelay.onchain.deployment import DeploymentConfig, load_deployment_config
from oraclerelay.onchain.submitter import Submitter
from oraclerelay.resolution.registry import SourceRegistry
from oraclerelay.services.pipeline import RelayPipeline
from oraclerelay.services.poller import Poller
from oraclerelay.validation.directory import EntityDirectory
from oraclerelay.validation.validator import RequestValidator

if TYPE_CHECKING:
    from oraclerelay.core.models import CachedOutcome, ProcessingResult
    from oraclerelay.onchain.client import ChainClient
    from oraclerelay.resolution.chain import ResolutionReport

logger = logging.getLogger(__name__)


class OracleRelay:
    """
    The relay process: owns the chain client, entity directory, data
    sources, result cache, pipeline and poller.

    Usage:
        async with OracleRelay() as relay:
            await relay.start()
            ...
            outcome = relay.get_latest_outcome("user001")

    Settings are loaded from environment variables or can be passed
    explicitly. A chain client and entity directory may be injected; when
    omitted they are built from settings.
    """

    def __init__(
        self,
        settings: RelaySettings | None = None,
        *,
        chain: "ChainClient | None" = None,
        directory: EntityDirectory | None = None,
        events: EventSink | None = None,
        recent_events: int = 100,
    ) -> None:
        self._settings = settings or RelaySettings()
        self._chain = chain
        self._owns_chain = chain is None
        self._directory = directory
        self.recorder = RecordingEventSink(maxlen=recent_events)
        sinks: list[EventSink] = [LoggingEventSink(), self.recorder]
        if events is not None:
            sinks.append(events)
        self._events = CompositeEventSink(sinks)

        self._registry: SourceRegistry | None = None
        self._pipeline: RelayPipeline | None = None
        self._poller: Poller | None = None
        self._poll_task: asyncio.Task | None = None
        self.cache = ResultCache()
        self.deployment: DeploymentConfig | None = None

    async def __aenter__(self) -> OracleRelay:
        """Initialize resources on context entry."""
        await self._initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Clean up resources on context exit."""
        await self.close()

    async def _initialize(self) -> None:
        """Build every component from settings."""
        self.deployment = load_deployment_config(self._settings)

        if self._chain is None:
            self._chain = Web3ChainClient.from_settings(self._settings, self.deployment)

        if self._directory is None:
            if self._settings.entity_directory_path:
                self._directory = EntityDirectory.from_file(self._settings.entity_directory_path)
            else:
                self._directory = EntityDirectory.default()
        logger.info(f"Entity directory: {', '.join(self._directory.entity_ids)}")

        self._registry = SourceRegistry.from_settings(self._settings)
        self._pipeline = RelayPipeline(
            validator=RequestValidator(self._directory),
            resolver=self._registry.get_chain(),
            submitter=Submitter(self._chain, self._events),
            cache=self.cache,
            events=self._events,
        )
        self._poller = Poller(
            self._chain,
            self._pipeline,
            interval=self._settings.poll_interval,
            events=self._events,
        )

    def _ensure_initialized(self) -> None:
        """Ensure client is initialized."""
        if self._pipeline is None:
            raise RuntimeError(
                "Relay not initialized. Use 'async with OracleRelay() as relay:'"
            )

    @property
    def settings(self) -> RelaySettings:
        return self._settings

    @property
    def directory(self) -> EntityDirectory:
        self._ensure_initialized()
        return self._directory

    @property
    def pipeline(self) -> RelayPipeline:
        self._ensure_initialized()
        return self._pipeline

    @property
    def poller(self) -> Poller:
        self._ensure_initialized()
        return self._poller

    @property
    def chain(self) -> "ChainClient":
        self._ensure_initialized()
        return self._chain

    @property
    def account_address(self) -> str | None:
        return getattr(self._chain, "address", None)

    async def start(self) -> None:
        """Initialise the watermark and start polling in the background."""
        self._ensure_initialized()
        if self._poll_task is not None:
            return

        try:
            await self._poller.initialize(self._settings.start_block)
        except ChainQueryError as e:
            # The first tick initialises the watermark instead.
            logger.error(f"Could not read starting block: {e.message}")

        self._poll_task = self._poller.start()

    async def stop(self) -> None:
        """Stop polling and wait for the current tick to finish."""
        if self._poll_task is None:
            return
        self._poller.stop()
        await self._poll_task
        self._poll_task = None

    async def close(self) -> None:
        """Stop polling and close all resources."""
        await self.stop()

        if self._registry:
            await self._registry.close_all()
            self._registry = None

        if self._owns_chain and self._chain is not None:
            close = getattr(self._chain, "close", None)
            if close is not None:
                await close()

    def get_latest_outcome(self, entity_id: str) -> "CachedOutcome":
        """Latest submitted outcome. Raises OutcomeNotFoundError."""
        return self.cache.get(entity_id)

    async def trigger_manual_resolution(
        self,
        entity_id: str,
        display_name: str,
    ) -> "ProcessingResult":
        """Run validate -> resolve -> submit for a request not seen on-chain."""
        self._ensure_initialized()
        return await self._pipeline.trigger_manual_resolution(entity_id, display_name)

    async def preview(self, entity_id: str) -> "ResolutionReport":
        """Resolve an entity's value without submitting it."""
        self._ensure_initialized()
        return await self._pipeline.preview(entity_id)

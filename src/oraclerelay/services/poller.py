"""Block-range poller driving the relay pipeline."""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from oraclerelay.core.exceptions import ChainQueryError
from oraclerelay.core.models import OracleRequest, ProcessingResult
from oraclerelay.core.types import ProcessingStatus, SkipReason, TickStatus
from oraclerelay.events import EventSink, LoggingEventSink, RelayEventType, emit

if TYPE_CHECKING:
    from oraclerelay.onchain.client import ChainClient
    from oraclerelay.services.pipeline import RelayPipeline

logger = logging.getLogger(__name__)


@dataclass
class TickReport:
    """What a single tick did."""

    status: TickStatus
    height: int | None = None
    from_block: int | None = None
    to_block: int | None = None
    results: list[ProcessingResult] = field(default_factory=list)
    error: str | None = None

    @property
    def scanned(self) -> bool:
        return self.status == TickStatus.COMPLETED


@dataclass
class PollerStats:
    """Counters for monitoring."""

    ticks_completed: int = 0
    ticks_failed: int = 0
    ticks_skipped: int = 0
    events_processed: int = 0
    events_skipped: int = 0
    last_tick_at: float | None = None
    last_error: str | None = None


class Poller:
    """
    Advances a watermark over the chain's blocks and relays request events.

    The watermark is the highest block already scanned. Each tick scans
    ``[watermark + 1, height]`` and then moves the watermark to ``height``,
    whatever happened to the individual events. A failed height or event
    query leaves the watermark untouched so the range is retried.

    Ticks never overlap: a tick requested while another is running is
    skipped.
    """

    def __init__(
        self,
        chain: "ChainClient",
        pipeline: "RelayPipeline",
        *,
        interval: float = 5.0,
        watermark: int | None = None,
        events: EventSink | None = None,
    ) -> None:
        self._chain = chain
        self._pipeline = pipeline
        self._interval = interval
        self._watermark = watermark
        self._events = events or LoggingEventSink()
        self._ticking = False
        self._running = False
        self._stop_event = asyncio.Event()
        self.stats = PollerStats()

    @property
    def watermark(self) -> int | None:
        return self._watermark

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def is_ticking(self) -> bool:
        return self._ticking

    @property
    def is_running(self) -> bool:
        return self._running

    async def initialize(self, start_block: int | None = None) -> int:
        """
        Set the starting watermark.

        With ``start_block`` the first tick scans from that block; otherwise
        only requests emitted after the current height are relayed.

        Raises:
            ChainQueryError: the current height could not be read
        """
        if start_block is not None:
            self._watermark = start_block - 1
        else:
            self._watermark = await self._chain.get_height()
        logger.info(f"Starting from block: {self._watermark + 1}")
        return self._watermark

    async def tick(self) -> TickReport:
        """Run one polling cycle, or skip if one is already running."""
        if self._ticking:
            self.stats.ticks_skipped += 1
            emit(self._events, RelayEventType.TICK_SKIPPED, watermark=self._watermark)
            return TickReport(status=TickStatus.SKIPPED)

        self._ticking = True
        try:
            return await self._tick()
        finally:
            self._ticking = False
            self.stats.last_tick_at = time.time()

    async def _tick(self) -> TickReport:
        emit(self._events, RelayEventType.TICK_STARTED, watermark=self._watermark)

        try:
            if self._watermark is None:
                await self.initialize()
            height = await self._chain.get_height()
        except Exception as e:
            return self._query_failed(e)

        if height <= self._watermark:
            logger.debug(f"No new blocks (height {height}, watermark {self._watermark})")
            emit(self._events, RelayEventType.NO_NEW_BLOCKS, height=height, watermark=self._watermark)
            return TickReport(status=TickStatus.NO_NEW_BLOCKS, height=height)

        from_block = self._watermark + 1
        logger.info(f"Checking blocks {from_block} to {height} for events...")

        try:
            requests = await self._chain.get_request_events(from_block, height)
        except Exception as e:
            return self._query_failed(e, from_block=from_block, to_block=height)

        if requests:
            logger.info(f"Found {len(requests)} new event(s)")
        else:
            logger.debug("No new events found")

        results = []
        for request in requests:
            result = await self._process_one(request)
            results.append(result)
            if result.success:
                self.stats.events_processed += 1
            else:
                self.stats.events_skipped += 1

        self._watermark = height
        self.stats.ticks_completed += 1
        emit(
            self._events,
            RelayEventType.TICK_COMPLETED,
            from_block=from_block,
            to_block=height,
            events=len(requests),
            submitted=sum(1 for r in results if r.success),
        )
        return TickReport(
            status=TickStatus.COMPLETED,
            height=height,
            from_block=from_block,
            to_block=height,
            results=results,
        )

    async def _process_one(self, request: OracleRequest) -> ProcessingResult:
        """Process a request, containing any unexpected failure."""
        try:
            return await self._pipeline.process(request)
        except Exception as e:
            logger.exception(f"Unexpected error processing request {request.request_id_hex}: {e}")
            emit(
                self._events,
                RelayEventType.EVENT_SKIPPED,
                request_id=request.request_id_hex,
                entity_id=request.entity_id,
                reason=SkipReason.UNEXPECTED_ERROR.value,
            )
            return ProcessingResult(
                request_id=request.request_id_hex,
                entity_id=request.entity_id,
                status=ProcessingStatus.ERROR,
                reason=SkipReason.UNEXPECTED_ERROR,
                message=str(e),
            )

    def _query_failed(
        self,
        error: Exception,
        from_block: int | None = None,
        to_block: int | None = None,
    ) -> TickReport:
        if isinstance(error, ChainQueryError):
            logger.warning(f"Polling error: {error.message}")
        else:
            logger.exception(f"Polling error: {error}")
        self.stats.ticks_failed += 1
        self.stats.last_error = str(error)
        emit(
            self._events,
            RelayEventType.TICK_FAILED,
            watermark=self._watermark,
            error=str(error),
        )
        return TickReport(
            status=TickStatus.QUERY_FAILED,
            from_block=from_block,
            to_block=to_block,
            error=str(error),
        )

    async def run(self) -> None:
        """
        Tick on a fixed interval until ``stop()`` is called.

        The next tick is scheduled only after the current one has finished,
        so a slow tick delays the schedule instead of overlapping.
        """
        self._running = True
        logger.info(f"Polling for events every {self._interval} seconds")

        try:
            while not self._stop_event.is_set():
                await self.tick()
                try:
                    await asyncio.wait_for(self._stop_event.wait(), timeout=self._interval)
                except TimeoutError:
                    pass
        finally:
            self._running = False

        logger.info("Poller stopped")

    def start(self) -> asyncio.Task:
        """Re-arm after any earlier ``stop()`` and run in a background task."""
        self._stop_event.clear()
        return asyncio.create_task(self.run(), name="oraclerelay-poller")

    def stop(self) -> None:
        """Ask ``run()`` to exit after the current tick."""
        self._stop_event.set()

"""Relay pipeline: validate -> resolve -> submit -> cache."""

from __future__ import annotations

import logging
import secrets
import time
from typing import TYPE_CHECKING

from oraclerelay.core.exceptions import (
    EntityNotFoundError,
    EstimationFailedError,
    InvalidPayloadError,
    NameMismatchError,
    ResolutionFailedError,
    SubmissionFailedError,
    TransactionUnconfirmedError,
    ValidationRejectedError,
)
from oraclerelay.core.models import (
    CachedOutcome,
    OracleRequest,
    ProcessingResult,
    ResolutionOutcome,
)
from oraclerelay.core.types import ProcessingStatus, SkipReason
from oraclerelay.events import EventSink, LoggingEventSink, RelayEventType, emit

if TYPE_CHECKING:
    from oraclerelay.cache.store import ResultCache
    from oraclerelay.onchain.submitter import Submitter
    from oraclerelay.resolution.chain import ResolutionChain, ResolutionReport
    from oraclerelay.validation.validator import RequestValidator

logger = logging.getLogger(__name__)

MANUAL_REQUESTER = "manual-test"


class RelayPipeline:
    """
    Drives a single request through the relay.

    Orchestrates:
    1. Validate the request against the entity directory
    2. Resolve the entity's value from the data sources
    3. Submit the value on-chain
    4. Cache the outcome

    Failures at any step are contained: the request is reported as skipped
    and nothing is cached.
    """

    def __init__(
        self,
        validator: "RequestValidator",
        resolver: "ResolutionChain",
        submitter: "Submitter",
        cache: "ResultCache",
        events: EventSink | None = None,
    ) -> None:
        self._validator = validator
        self._resolver = resolver
        self._submitter = submitter
        self._cache = cache
        self._events = events or LoggingEventSink()

    @property
    def cache(self) -> "ResultCache":
        return self._cache

    async def process(self, request: OracleRequest) -> ProcessingResult:
        """Process one request. Expected failures are returned, not raised."""
        start = time.monotonic()
        request_id = request.request_id_hex
        logger.info(f"Processing {request.entity_id} ({request.entity_name}), request {request_id}")

        try:
            record = self._validator.validate(request)
        except ValidationRejectedError as e:
            reason = (
                SkipReason.NAME_MISMATCH
                if isinstance(e, NameMismatchError)
                else SkipReason.NOT_FOUND
            )
            logger.warning(f"Rejected request {request_id}: {e.message}")
            return self._skipped(request, ProcessingStatus.REJECTED, reason, e.message)

        report = await self._resolver.resolve(record.entity_id, record.data_locator)
        try:
            value = report.raise_for_status()
        except ResolutionFailedError as e:
            reason = (
                SkipReason.INVALID_PAYLOAD
                if isinstance(e, InvalidPayloadError)
                else SkipReason.ALL_SOURCES_UNAVAILABLE
            )
            logger.warning(f"Resolution failed for request {request_id}: {e.message}")
            return self._skipped(
                request,
                ProcessingStatus.RESOLUTION_FAILED,
                reason,
                e.message,
                sources_tried=e.sources_tried,
            )

        try:
            tx_hash = await self._submitter.submit(
                request.request_id,
                record.entity_id,
                value,
                record.data_locator,
            )
        except SubmissionFailedError as e:
            sent_tx = None
            if isinstance(e, EstimationFailedError):
                reason = SkipReason.ESTIMATION_FAILED
            elif isinstance(e, TransactionUnconfirmedError):
                reason = SkipReason.UNCONFIRMED
                sent_tx = e.tx_hash
            else:
                reason = SkipReason.SEND_FAILED
            return self._skipped(
                request,
                ProcessingStatus.SUBMISSION_FAILED,
                reason,
                e.message,
                sources_tried=report.sources_tried,
                tx_hash=sent_tx,
            )

        outcome = ResolutionOutcome(
            entity_id=record.entity_id,
            value=value,
            data_locator=record.data_locator,
        )
        self._cache.put(record.entity_id, outcome, tx_hash)

        duration = time.monotonic() - start
        logger.info(f"Request {request_id} fulfilled in {duration:.2f}s: tx {tx_hash}")
        emit(
            self._events,
            RelayEventType.EVENT_PROCESSED,
            request_id=request_id,
            entity_id=record.entity_id,
            value=value,
            source=report.source,
            tx_hash=tx_hash,
        )

        return ProcessingResult(
            request_id=request_id,
            entity_id=record.entity_id,
            status=ProcessingStatus.SUBMITTED,
            outcome=outcome,
            tx_hash=tx_hash,
            sources_tried=report.sources_tried,
        )

    async def trigger_manual_resolution(
        self,
        entity_id: str,
        display_name: str,
    ) -> ProcessingResult:
        """
        Run the pipeline for an externally supplied request, bypassing the
        event log. A random request id is generated.
        """
        request = OracleRequest(
            request_id=secrets.token_bytes(32),
            entity_id=entity_id,
            entity_name=display_name,
            source_block=0,
            requester=MANUAL_REQUESTER,
        )
        logger.info(f"Manual resolution for {entity_id}")
        return await self.process(request)

    def get_latest_outcome(self, entity_id: str) -> CachedOutcome:
        """Latest cached outcome. Raises OutcomeNotFoundError."""
        return self._cache.get(entity_id)

    async def preview(self, entity_id: str) -> "ResolutionReport":
        """Resolve an entity's value without submitting it. Raises EntityNotFoundError."""
        record = self._validator.directory.get(entity_id)
        if record is None:
            raise EntityNotFoundError(f"Entity not found: {entity_id}", entity_id=entity_id)
        return await self._resolver.resolve(record.entity_id, record.data_locator)

    def _skipped(
        self,
        request: OracleRequest,
        status: ProcessingStatus,
        reason: SkipReason,
        message: str,
        sources_tried: list[str] | None = None,
        tx_hash: str | None = None,
    ) -> ProcessingResult:
        emit(
            self._events,
            RelayEventType.EVENT_SKIPPED,
            request_id=request.request_id_hex,
            entity_id=request.entity_id,
            reason=reason.value,
        )
        return ProcessingResult(
            request_id=request.request_id_hex,
            entity_id=request.entity_id,
            status=status,
            reason=reason,
            message=message,
            sources_tried=sources_tried or [],
            tx_hash=tx_hash,
        )

"""Pushes resolved outcomes on-chain."""

from __future__ import annotations

import asyncio
import logging

from oraclerelay.core.exceptions import (
    EstimationFailedError,
    SendFailedError,
    SubmissionFailedError,
    TransactionUnconfirmedError,
)
from oraclerelay.events import EventSink, LoggingEventSink, RelayEventType, emit
from oraclerelay.onchain.client import ChainClient, FulfillmentCall

logger = logging.getLogger(__name__)


class Submitter:
    """
    Estimates gas for the fulfilment call, then sends it.

    Submissions are serialised on an internal lock so concurrent callers
    (the poller and a manual trigger) cannot race on the account nonce.
    There is no retry; a failure is reported and raised.
    """

    def __init__(self, chain: ChainClient, events: EventSink | None = None) -> None:
        self._chain = chain
        self._events = events or LoggingEventSink()
        self._lock = asyncio.Lock()

    async def submit(
        self,
        request_id: bytes,
        entity_id: str,
        value: int,
        data_locator: str,
    ) -> str:
        """
        Submit an outcome and return the transaction hash.

        Raises:
            EstimationFailedError: the chain rejected the call during estimation
            SendFailedError: the transaction could not be sent or was reverted
            TransactionUnconfirmedError: the transaction was sent but no receipt arrived
        """
        call = FulfillmentCall(
            request_id=request_id,
            entity_id=entity_id,
            value=value,
            data_locator=data_locator,
        )

        async with self._lock:
            try:
                gas = await self._estimate(call)
                logger.debug(f"Estimated gas for {call.request_id_hex}: {gas}")
                tx_hash = await self._send(call, gas)
            except TransactionUnconfirmedError as e:
                logger.error(
                    f"Submission for {entity_id} ({call.request_id_hex}) sent as tx {e.tx_hash} "
                    f"but not confirmed, check it before resubmitting: {e.message}"
                )
                emit(
                    self._events,
                    RelayEventType.SUBMISSION_FAILED,
                    request_id=call.request_id_hex,
                    entity_id=entity_id,
                    error=type(e).__name__,
                    message=e.message,
                    tx_hash=e.tx_hash,
                )
                raise
            except SubmissionFailedError as e:
                logger.error(
                    f"Submission failed for {entity_id} ({call.request_id_hex}), "
                    f"needs operator attention: {e.message}"
                )
                emit(
                    self._events,
                    RelayEventType.SUBMISSION_FAILED,
                    request_id=call.request_id_hex,
                    entity_id=entity_id,
                    error=type(e).__name__,
                    message=e.message,
                )
                raise

        logger.info(f"Submitted {entity_id}={value} in tx {tx_hash}")
        emit(
            self._events,
            RelayEventType.SUBMISSION_SUCCEEDED,
            request_id=call.request_id_hex,
            entity_id=entity_id,
            value=value,
            tx_hash=tx_hash,
        )
        return tx_hash

    async def _estimate(self, call: FulfillmentCall) -> int:
        try:
            return await self._chain.estimate_cost(call)
        except EstimationFailedError:
            raise
        except Exception as e:
            raise EstimationFailedError(
                f"Gas estimation failed: {e}", request_id=call.request_id_hex
            ) from e

    async def _send(self, call: FulfillmentCall, gas: int) -> str:
        try:
            return await self._chain.send(call, gas)
        except SendFailedError:
            raise
        except Exception as e:
            raise SendFailedError(
                f"Failed to send transaction: {e}", request_id=call.request_id_hex
            ) from e

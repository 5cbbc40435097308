"""Manual trigger and diagnostic resolution endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException

from oraclerelay.api.dependencies import Relay
from oraclerelay.api.schemas import (
    APIError,
    IpfsTestResponse,
    ManualTestRequest,
    ManualTestResponse,
    SourceAttemptResponse,
)
from oraclerelay.core.exceptions import EntityNotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["manual"])


@router.get(
    "/ipfs-test/{entity_id}",
    response_model=IpfsTestResponse,
    responses={404: {"model": APIError}, 502: {"model": APIError}},
    operation_id="testIpfsResolution",
    summary="Test resolution",
    description=(
        "Resolve an entity's value through the gateway chain without "
        "submitting anything on-chain."
    ),
)
async def ipfs_test(entity_id: str, relay: Relay) -> IpfsTestResponse:
    """Run the resolver for one entity and report every attempt."""
    logger.info(f"Manual resolution test for: {entity_id}")
    try:
        report = await relay.preview(entity_id)
    except EntityNotFoundError:
        raise HTTPException(status_code=404, detail="User not found")

    attempts = [SourceAttemptResponse.model_validate(a) for a in report.attempts]

    if not report.success:
        raise HTTPException(
            status_code=502,
            detail={
                "error": "IPFS fetch failed",
                "status": report.status.value,
                "attempts": [a.model_dump(mode="json", by_alias=True) for a in attempts],
            },
        )

    return IpfsTestResponse(
        success=True,
        user_id=entity_id,
        ipfs_cid=report.data_locator,
        status=report.status,
        credit_score=report.value,
        source=report.source,
        attempts=attempts,
    )


@router.post(
    "/test-manual",
    response_model=ManualTestResponse,
    responses={400: {"model": APIError}},
    operation_id="triggerManualRequest",
    summary="Manual request",
    description=(
        "Run validate, resolve and submit for an entity as if it had been "
        "requested on-chain. A random request id is used."
    ),
)
async def test_manual(body: ManualTestRequest, relay: Relay) -> ManualTestResponse:
    """Trigger the relay pipeline by hand."""
    if not body.user_id or not body.user_name:
        raise HTTPException(status_code=400, detail="userId and userName required")

    result = await relay.trigger_manual_resolution(body.user_id, body.user_name)

    outcome = result.outcome
    return ManualTestResponse(
        message="Manual test completed!" if result.success else "Manual test did not submit",
        request_id=result.request_id,
        user_id=result.entity_id,
        status=result.status,
        success=result.success,
        reason=result.reason,
        error=result.message,
        credit_score=outcome.value if outcome else None,
        ipfs_cid=outcome.data_locator if outcome else None,
        tx_hash=result.tx_hash,
        sources_tried=result.sources_tried,
    )

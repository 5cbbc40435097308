"""Poller status endpoint."""

from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Query

from oraclerelay.api.dependencies import Relay
from oraclerelay.api.schemas import RelayEventResponse, StatusResponse

router = APIRouter(tags=["status"])


@router.get(
    "/status",
    response_model=StatusResponse,
    operation_id="getStatus",
    summary="Relay status",
    description="Watermark, tick counters and the most recent relay events.",
)
async def relay_status(
    relay: Relay,
    limit: int = Query(20, ge=0, le=500, description="Number of recent events to include"),
) -> StatusResponse:
    poller = relay.poller
    stats = poller.stats
    events = relay.recorder.events[-limit:] if limit else []

    last_tick_at = None
    if stats.last_tick_at is not None:
        last_tick_at = datetime.fromtimestamp(stats.last_tick_at, tz=timezone.utc)

    return StatusResponse(
        running=poller.is_running,
        ticking=poller.is_ticking,
        watermark=poller.watermark,
        interval=poller.interval,
        ticks_completed=stats.ticks_completed,
        ticks_failed=stats.ticks_failed,
        ticks_skipped=stats.ticks_skipped,
        events_processed=stats.events_processed,
        events_skipped=stats.events_skipped,
        last_tick_at=last_tick_at,
        last_error=stats.last_error,
        cached_entities=len(relay.cache),
        recent_events=[
            RelayEventResponse(type=e.type.value, timestamp=e.timestamp, data=e.data)
            for e in events
        ],
    )

"""Response schemas for API endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import Field

from oraclerelay.api.schemas.base import APIBaseSchema
from oraclerelay.core.types import AttemptStatus, ProcessingStatus, ResolutionStatus, SkipReason


class ServiceInfoResponse(APIBaseSchema):
    """Service overview shown on the root endpoint."""

    message: str
    account: str | None = None
    contract: str | None = None
    network: str
    deployed_at: str | None = None
    status: str
    polling: bool
    entities: list[str] = Field(default_factory=list)


class HealthResponse(APIBaseSchema):
    """Health check response."""

    status: Literal["healthy", "degraded", "unhealthy"]
    version: str
    services: dict[str, Literal["up", "down", "unknown"]]
    block_height: int | None = None


class DeploymentConfigResponse(APIBaseSchema):
    """Deployment details for the frontend."""

    contract_address: str | None = None
    network: str
    deployed_at: str | None = None
    frontend_config: dict[str, Any] = Field(default_factory=dict)
    contract_abi: list[dict[str, Any]] = Field(default_factory=list, alias="contractABI")


class EntityResponse(APIBaseSchema):
    """A directory entry."""

    user_id: str
    name: str
    ipfs_cid: str = Field(alias="ipfsCID")


class EntitiesResponse(APIBaseSchema):
    """The entity directory."""

    total: int
    entities: list[EntityResponse]


class LastScoreResponse(APIBaseSchema):
    """Latest value submitted for an entity."""

    user_id: str
    credit_score: int
    ipfs_cid: str = Field(alias="ipfsCID")
    timestamp: datetime
    tx_hash: str


class SourceAttemptResponse(APIBaseSchema):
    """One source attempt during resolution."""

    source: str
    url: str | None = None
    status: AttemptStatus
    value: int | None = None
    error_message: str | None = None
    status_code: int | None = None
    duration_ms: float = 0.0


class IpfsTestResponse(APIBaseSchema):
    """Diagnostic resolution run for an entity."""

    success: bool
    user_id: str
    ipfs_cid: str = Field(alias="ipfsCID")
    status: ResolutionStatus
    credit_score: int | None = None
    source: str | None = None
    attempts: list[SourceAttemptResponse] = Field(default_factory=list)


class ManualTestResponse(APIBaseSchema):
    """Outcome of a manually triggered request."""

    message: str
    request_id: str
    user_id: str
    status: ProcessingStatus
    success: bool
    reason: SkipReason | None = None
    error: str | None = None
    credit_score: int | None = None
    ipfs_cid: str | None = Field(default=None, alias="ipfsCID")
    tx_hash: str | None = None
    sources_tried: list[str] = Field(default_factory=list)


class RelayEventResponse(APIBaseSchema):
    """A recorded relay event."""

    type: str
    timestamp: datetime
    data: dict[str, Any] = Field(default_factory=dict)


class StatusResponse(APIBaseSchema):
    """Poller progress and recent activity."""

    running: bool
    ticking: bool
    watermark: int | None = None
    interval: float
    ticks_completed: int
    ticks_failed: int
    ticks_skipped: int
    events_processed: int
    events_skipped: int
    last_tick_at: datetime | None = None
    last_error: str | None = None
    cached_entities: int
    recent_events: list[RelayEventResponse] = Field(default_factory=list)

"""Domain models for requests, entities and outcomes."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .types import ProcessingStatus, SkipReason


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class OracleRequest(BaseModel):
    """A request event observed on-chain. Immutable once observed."""

    model_config = ConfigDict(frozen=True)

    request_id: bytes = Field(..., description="Opaque 32-byte request identifier")
    entity_id: str = Field(..., description="Entity the request is about")
    entity_name: str = Field(..., description="Display name supplied on-chain")
    source_block: int = Field(..., ge=0, description="Block the request was emitted in")
    requester: str | None = Field(default=None, description="Address that made the request")
    log_index: int | None = Field(default=None, description="Position within the block")

    @field_validator("request_id")
    @classmethod
    def _check_request_id(cls, value: bytes) -> bytes:
        if len(value) != 32:
            raise ValueError(f"request_id must be 32 bytes, got {len(value)}")
        return value

    @property
    def request_id_hex(self) -> str:
        """Request id as 0x-prefixed hex."""
        return "0x" + self.request_id.hex()


class EntityRecord(BaseModel):
    """A known entity and the locator of its external data."""

    model_config = ConfigDict(frozen=True)

    entity_id: str = Field(..., min_length=1, description="Unique entity identifier")
    display_name: str = Field(..., description="Name the on-chain request must match")
    data_locator: str = Field(..., min_length=1, description="Content identifier of the entity's data")


class ResolutionOutcome(BaseModel):
    """A resolved value plus provenance."""

    model_config = ConfigDict(frozen=True)

    entity_id: str
    value: int = Field(..., ge=0, description="Resolved unsigned value")
    data_locator: str
    resolved_at: datetime = Field(default_factory=utcnow)


class CachedOutcome(BaseModel):
    """An outcome that has been pushed on-chain."""

    model_config = ConfigDict(frozen=True)

    outcome: ResolutionOutcome
    tx_hash: str = Field(..., description="Hash of the fulfilling transaction")

    @property
    def entity_id(self) -> str:
        return self.outcome.entity_id


class ProcessingResult(BaseModel):
    """Result of driving one request through validate -> resolve -> submit."""

    request_id: str
    entity_id: str
    status: ProcessingStatus
    reason: SkipReason | None = None
    message: str | None = None
    outcome: ResolutionOutcome | None = None
    tx_hash: str | None = None
    sources_tried: list[str] = Field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.status == ProcessingStatus.SUBMITTED

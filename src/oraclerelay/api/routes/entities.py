"""Entity directory and cached score endpoints."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException

from oraclerelay.api.dependencies import Relay
from oraclerelay.api.schemas import (
    APIError,
    EntitiesResponse,
    EntityResponse,
    LastScoreResponse,
)
from oraclerelay.core.exceptions import OutcomeNotFoundError
from oraclerelay.core.models import CachedOutcome

router = APIRouter(tags=["entities"])


@router.get(
    "/entities",
    response_model=EntitiesResponse,
    operation_id="listEntities",
    summary="List entities",
    description="All entities the relay will answer requests for.",
)
async def list_entities(relay: Relay) -> EntitiesResponse:
    entities = [
        EntityResponse(
            user_id=record.entity_id,
            name=record.display_name,
            ipfs_cid=record.data_locator,
        )
        for record in relay.directory
    ]
    return EntitiesResponse(total=len(entities), entities=entities)


@router.get(
    "/users",
    response_model=dict[str, dict[str, str]],
    operation_id="listUsers",
    summary="Entity directory map",
    description="The directory as an id to {name, ipfsCID} map.",
)
async def list_users(relay: Relay) -> dict[str, dict[str, str]]:
    return relay.directory.to_mapping()


@router.get(
    "/scores",
    response_model=list[LastScoreResponse],
    operation_id="listScores",
    summary="All cached scores",
    description="The latest value submitted on-chain for every entity that has one.",
)
async def list_scores(relay: Relay) -> list[LastScoreResponse]:
    return [_last_score_response(cached) for cached in relay.cache.snapshot().values()]


@router.get(
    "/last-score/{entity_id}",
    response_model=LastScoreResponse,
    responses={404: {"model": APIError}},
    operation_id="getLastScore",
    summary="Latest score",
    description="The most recent value submitted on-chain for an entity.",
)
async def last_score(entity_id: str, relay: Relay) -> LastScoreResponse:
    """Return the cached outcome for an entity."""
    try:
        cached = relay.get_latest_outcome(entity_id)
    except OutcomeNotFoundError:
        raise HTTPException(status_code=404, detail="No score yet for this user")

    return _last_score_response(cached)


def _last_score_response(cached: CachedOutcome) -> LastScoreResponse:
    return LastScoreResponse(
        user_id=cached.entity_id,
        credit_score=cached.outcome.value,
        ipfs_cid=cached.outcome.data_locator,
        timestamp=cached.outcome.resolved_at,
        tx_hash=cached.tx_hash,
    )

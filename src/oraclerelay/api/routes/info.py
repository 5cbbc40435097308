"""Service info, health and deployment endpoints."""

from __future__ import annotations

import logging
from typing import Literal

from fastapi import APIRouter

from oraclerelay import __version__
from oraclerelay.api.dependencies import Relay, Settings
from oraclerelay.api.schemas import (
    DeploymentConfigResponse,
    HealthResponse,
    ServiceInfoResponse,
)
from oraclerelay.core.exceptions import ChainQueryError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["info"])


@router.get(
    "/",
    response_model=ServiceInfoResponse,
    operation_id="getServiceInfo",
    summary="Service info",
    description="Relay account, contract, network and polling status.",
)
async def service_info(relay: Relay, settings: Settings) -> ServiceInfoResponse:
    """Describe the running relay."""
    deployment = relay.deployment
    return ServiceInfoResponse(
        message="Credit score oracle relay",
        account=relay.account_address,
        contract=deployment.contract_address if deployment else None,
        network=deployment.network if deployment else settings.network,
        deployed_at=deployment.deployed_at if deployment else None,
        status=f"Polling for events every {settings.poll_interval:g} seconds",
        polling=relay.poller.is_running,
        entities=relay.directory.entity_ids,
    )


@router.get(
    "/api/health",
    response_model=HealthResponse,
    operation_id="getHealth",
    summary="Health check",
    description="Check the relay and its connection to the chain.",
)
async def health_check(relay: Relay) -> HealthResponse:
    """Check relay health status."""
    services: dict[str, Literal["up", "down", "unknown"]] = {}
    overall_status: Literal["healthy", "degraded", "unhealthy"] = "healthy"
    height = None

    # Check chain
    try:
        height = await relay.chain.get_height()
        services["chain"] = "up"
    except ChainQueryError as e:
        logger.warning(f"Health check could not reach chain: {e.message}")
        services["chain"] = "down"
        overall_status = "unhealthy"

    # Check poller
    if relay.poller.is_running:
        services["poller"] = "up"
    else:
        services["poller"] = "down"
        if overall_status == "healthy":
            overall_status = "degraded"

    return HealthResponse(
        status=overall_status,
        version=__version__,
        services=services,
        block_height=height,
    )


@router.get(
    "/api/config",
    response_model=DeploymentConfigResponse,
    operation_id="getDeploymentConfig",
    summary="Deployment config",
    description="Contract address, network and ABI for the frontend.",
)
@router.get(
    "/config",
    response_model=DeploymentConfigResponse,
    operation_id="getDeploymentConfigLegacy",
    include_in_schema=False,
)
async def deployment_config(relay: Relay) -> DeploymentConfigResponse:
    deployment = relay.deployment
    return DeploymentConfigResponse(
        contract_address=deployment.contract_address,
        network=deployment.network,
        deployed_at=deployment.deployed_at,
        frontend_config=deployment.frontend_config,
        contract_abi=deployment.abi,
    )

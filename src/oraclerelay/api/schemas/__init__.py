"""API schema definitions."""

from oraclerelay.api.schemas.base import APIBaseSchema, APIError
from oraclerelay.api.schemas.requests import ManualTestRequest
from oraclerelay.api.schemas.responses import (
    DeploymentConfigResponse,
    EntitiesResponse,
    EntityResponse,
    HealthResponse,
    IpfsTestResponse,
    LastScoreResponse,
    ManualTestResponse,
    RelayEventResponse,
    ServiceInfoResponse,
    SourceAttemptResponse,
    StatusResponse,
)

__all__ = [
    # Base
    "APIBaseSchema",
    "APIError",
    # Requests
    "ManualTestRequest",
    # Responses
    "DeploymentConfigResponse",
    "EntitiesResponse",
    "EntityResponse",
    "HealthResponse",
    "IpfsTestResponse",
    "LastScoreResponse",
    "ManualTestResponse",
    "RelayEventResponse",
    "ServiceInfoResponse",
    "SourceAttemptResponse",
    "StatusResponse",
]

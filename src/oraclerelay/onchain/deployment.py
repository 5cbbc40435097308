"""Deployment configuration (contract address, network, ABI)."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from oraclerelay.core.exceptions import ConfigurationError
from oraclerelay.onchain.abi import ORACLE_ABI

if TYPE_CHECKING:
    from oraclerelay.config import RelaySettings

logger = logging.getLogger(__name__)


class DeploymentConfig(BaseModel):
    """Contents of ``deployment.json`` as written by the deploy scripts."""

    model_config = ConfigDict(populate_by_name=True)

    contract_address: str | None = Field(default=None, alias="contractAddress")
    network: str = "sepolia"
    deployed_at: str | None = Field(default=None, alias="deployedAt")
    contract_abi: list[dict[str, Any]] = Field(default_factory=list, alias="contractABI")
    frontend_config: dict[str, Any] = Field(default_factory=dict, alias="frontendConfig")

    @property
    def abi(self) -> list[dict[str, Any]]:
        """The deployed ABI, or the built-in one when none was recorded."""
        return self.contract_abi or ORACLE_ABI

    def require_contract_address(self) -> str:
        if not self.contract_address:
            raise ConfigurationError(
                "No contract address: set ORACLE_RELAY_CONTRACT_ADDRESS or provide a deployment file"
            )
        return self.contract_address


def load_deployment_config(settings: "RelaySettings") -> DeploymentConfig:
    """
    Load the deployment file, falling back to environment settings.

    A missing or unreadable file is not an error; the contract address then
    comes from settings and the built-in ABI is used.
    """
    path = Path(settings.deployment_config_path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        config = DeploymentConfig.model_validate(data)
        logger.info(f"Loaded deployment config from {path}")
        return config
    except FileNotFoundError:
        logger.warning(f"Deployment config {path} not found, using environment settings")
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        logger.warning(f"Failed to load deployment config {path}: {e}; using environment settings")

    return DeploymentConfig(
        contract_address=settings.contract_address,
        network=settings.network,
        deployed_at=datetime.now(timezone.utc).isoformat(),
        frontend_config={
            "rpcUrl": settings.rpc_url,
            "chainId": settings.chain_id,
            "networkName": settings.network,
        },
    )

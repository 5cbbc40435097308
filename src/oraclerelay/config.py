"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from oraclerelay.core.exceptions import ConfigurationError

DEFAULT_GATEWAY_TEMPLATES = [
    "https://ipfs.io/ipfs/{locator}",
    "https://cloudflare-ipfs.com/ipfs/{locator}",
    "https://gateway.pinata.cloud/ipfs/{locator}",
]

PLACEHOLDER_VALUES = frozenset({"", "your_private_key_here"})


class RelaySettings(BaseSettings):
    """Application configuration from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="ORACLE_RELAY_",
        extra="ignore",
    )

    # Chain
    rpc_url: str | None = Field(
        default=None,
        description="JSON-RPC endpoint of the chain",
    )
    private_key: SecretStr | None = Field(
        default=None,
        description="Private key of the sending account",
    )
    contract_address: str | None = Field(
        default=None,
        description="Oracle contract address (overridden by the deployment file)",
    )
    network: str = Field(
        default="sepolia",
        description="Network name",
    )
    chain_id: int = Field(
        default=11155111,
        description="Chain id used when signing transactions",
    )
    deployment_config_path: Path = Field(
        default=Path("config/deployment.json"),
        description="Deployment file with contract address and ABI",
    )
    chain_call_timeout: float = Field(
        default=30.0,
        gt=0,
        description="Timeout in seconds for every chain RPC call",
    )
    wait_for_receipt: bool = Field(
        default=True,
        description="Wait for the fulfilling transaction to be mined before caching",
    )
    receipt_timeout: float = Field(
        default=120.0,
        gt=0,
        description="Seconds to wait for a transaction receipt",
    )

    # Polling
    poll_interval: float = Field(
        default=5.0,
        gt=0,
        description="Seconds between poller ticks",
    )
    start_block: int | None = Field(
        default=None,
        ge=0,
        description="First block to scan (default: chain height at start-up)",
    )

    # Data sources
    gateway_templates: list[str] = Field(
        default_factory=lambda: list(DEFAULT_GATEWAY_TEMPLATES),
        description="Gateway URL templates in priority order; {locator} is substituted",
    )
    source_timeout: float = Field(
        default=10.0,
        gt=0,
        description="Timeout in seconds for a single source attempt",
    )
    value_field: str = Field(
        default="creditScore",
        description="Payload field holding the resolved value",
    )

    # Entity directory
    entity_directory_path: Path | None = Field(
        default=None,
        description="JSON file with the entity directory (built-in directory if unset)",
    )

    # API
    api_host: str = Field(default="0.0.0.0", description="Host to bind the API to")
    api_port: int = Field(default=3001, description="Port to bind the API to")
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000"],
        description="Allowed CORS origins",
    )

    # App settings
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )

    def require_chain_credentials(self) -> None:
        """Raise ConfigurationError unless RPC URL and sending key are usable."""
        if not self.rpc_url:
            raise ConfigurationError("ORACLE_RELAY_RPC_URL is not configured")
        key = self.private_key.get_secret_value() if self.private_key else ""
        if key in PLACEHOLDER_VALUES:
            raise ConfigurationError("ORACLE_RELAY_PRIVATE_KEY is not configured")


@lru_cache
def get_settings() -> RelaySettings:
    """Get cached settings instance."""
    return RelaySettings()

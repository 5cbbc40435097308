"""Tests for application settings."""

from __future__ import annotations

from pathlib import Path

import pytest

from oraclerelay.config import DEFAULT_GATEWAY_TEMPLATES, RelaySettings
from oraclerelay.core.exceptions import ConfigurationError


class TestRelaySettings:
    """Tests for defaults and environment loading."""

    def test_defaults(self, mock_settings_minimal: RelaySettings):
        settings = mock_settings_minimal
        assert settings.poll_interval == 5.0
        assert settings.start_block is None
        assert settings.gateway_templates == DEFAULT_GATEWAY_TEMPLATES
        assert settings.value_field == "creditScore"
        assert settings.api_port == 3001
        assert settings.chain_id == 11155111

    def test_env_prefix(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
        """Settings should be read from ORACLE_RELAY_ variables."""
        monkeypatch.setenv("ORACLE_RELAY_POLL_INTERVAL", "2.5")
        monkeypatch.setenv("ORACLE_RELAY_START_BLOCK", "1234")
        monkeypatch.setenv(
            "ORACLE_RELAY_GATEWAY_TEMPLATES",
            '["https://gw.test/ipfs/{locator}"]',
        )

        settings = RelaySettings(_env_file=None)

        assert settings.poll_interval == 2.5
        assert settings.start_block == 1234
        assert settings.gateway_templates == ["https://gw.test/ipfs/{locator}"]

    def test_private_key_is_secret(self, mock_settings: RelaySettings):
        """The key should not appear in the settings repr."""
        assert "11111111" not in repr(mock_settings)


class TestRequireChainCredentials:
    """Tests for the credential check."""

    def test_complete(self, mock_settings: RelaySettings):
        mock_settings.require_chain_credentials()

    def test_missing_rpc_url(self, mock_settings_minimal: RelaySettings):
        with pytest.raises(ConfigurationError):
            mock_settings_minimal.require_chain_credentials()

    def test_placeholder_key(self, tmp_path: Path):
        """The example placeholder key should count as unset."""
        settings = RelaySettings(
            _env_file=None,
            rpc_url="http://localhost:8545",
            private_key="your_private_key_here",
        )
        with pytest.raises(ConfigurationError):
            settings.require_chain_credentials()

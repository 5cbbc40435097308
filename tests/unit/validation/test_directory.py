"""Tests for the entity directory."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from oraclerelay.core.exceptions import ConfigurationError
from oraclerelay.core.models import EntityRecord
from oraclerelay.validation.directory import DEFAULT_ENTITIES, EntityDirectory


class TestEntityDirectory:
    """Tests for lookups and the uniqueness invariant."""

    def test_lookup(self, directory: EntityDirectory):
        """Known ids should return their record."""
        record = directory.get("alice")
        assert record is not None
        assert record.display_name == "Alice"
        assert record.data_locator == "bafyalice"

    def test_unknown_id(self, directory: EntityDirectory):
        """Unknown ids should return None."""
        assert directory.get("mallory") is None
        assert "mallory" not in directory

    def test_len_and_ids(self, directory: EntityDirectory):
        """Length and ids should reflect the records."""
        assert len(directory) == 2
        assert directory.entity_ids == ["alice", "bob"]

    def test_duplicate_id_rejected(self):
        """Duplicate entity ids should fail at load time."""
        records = [
            EntityRecord(entity_id="alice", display_name="Alice", data_locator="a"),
            EntityRecord(entity_id="alice", display_name="Alicia", data_locator="b"),
        ]
        with pytest.raises(ConfigurationError):
            EntityDirectory(records)


class TestEntityDirectoryLoading:
    """Tests for building directories from mappings and files."""

    def test_default(self):
        """The default directory should hold the provisioned entities."""
        directory = EntityDirectory.default()
        assert directory.entity_ids == ["user001", "user002", "user003"]
        assert directory.get("user002").display_name == "Jane Smith"

    def test_from_mapping_alternative_keys(self):
        """displayName/dataLocator keys should be accepted."""
        directory = EntityDirectory.from_mapping(
            {"carol": {"displayName": "Carol", "dataLocator": "bafycarol"}}
        )
        assert directory.get("carol").data_locator == "bafycarol"

    def test_from_mapping_incomplete_entry(self):
        """Entries without a locator should be rejected."""
        with pytest.raises(ConfigurationError):
            EntityDirectory.from_mapping({"carol": {"name": "Carol"}})

    def test_round_trip_mapping(self):
        """to_mapping should produce the same shape from_mapping reads."""
        assert EntityDirectory.default().to_mapping() == DEFAULT_ENTITIES

    def test_from_file(self, tmp_path: Path):
        """A JSON file should load into a directory."""
        path = tmp_path / "entities.json"
        path.write_text(json.dumps({"dave": {"name": "Dave", "ipfsCID": "bafydave"}}))

        directory = EntityDirectory.from_file(path)

        assert directory.get("dave").display_name == "Dave"

    def test_from_missing_file(self, tmp_path: Path):
        """A missing file should be a configuration error."""
        with pytest.raises(ConfigurationError):
            EntityDirectory.from_file(tmp_path / "nope.json")

    def test_from_file_not_object(self, tmp_path: Path):
        """A JSON array should be rejected."""
        path = tmp_path / "entities.json"
        path.write_text("[]")
        with pytest.raises(ConfigurationError):
            EntityDirectory.from_file(path)

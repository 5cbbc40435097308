"""Static entity directory."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Iterator, Mapping
from pathlib import Path
from typing import Any

from oraclerelay.core.exceptions import ConfigurationError
from oraclerelay.core.models import EntityRecord

logger = logging.getLogger(__name__)

# Entities provisioned with the reference deployment.
DEFAULT_ENTITIES: dict[str, dict[str, str]] = {
    "user001": {
        "name": "John Doe",
        "ipfsCID": "bafkreihk3tuljsvgt7wihn54l7mcw4arghonptohbgenj7kd67rkvaq3ly",
    },
    "user002": {
        "name": "Jane Smith",
        "ipfsCID": "bafkreihtsurn7px5fs3neo7tsjbzkmaxp5oyydvywipe5nscpk7h2omn2a",
    },
    "user003": {
        "name": "Bob Johnson",
        "ipfsCID": "bafkreibliejl6jhs2xrmd5g4gxgncm7nqrk7dh3gzrqnal2t6jhsfsp6hq",
    },
}


class EntityDirectory:
    """
    Read-only mapping of entity id to entity record.

    Entity ids are unique; building a directory with a duplicate id fails.
    """

    def __init__(self, records: Iterable[EntityRecord]) -> None:
        entries: dict[str, EntityRecord] = {}
        for record in records:
            if record.entity_id in entries:
                raise ConfigurationError(
                    f"Duplicate entity id in directory: {record.entity_id}"
                )
            entries[record.entity_id] = record
        self._entries = entries

    def get(self, entity_id: str) -> EntityRecord | None:
        return self._entries.get(entity_id)

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._entries

    def __iter__(self) -> Iterator[EntityRecord]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entity_ids(self) -> list[str]:
        return list(self._entries)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Mapping[str, Any]]) -> EntityDirectory:
        """
        Build a directory from ``{entity_id: {"name": ..., "ipfsCID": ...}}``.

        ``displayName`` and ``dataLocator`` are accepted as alternative keys.
        """
        records = []
        for entity_id, entry in data.items():
            name = entry.get("name", entry.get("displayName"))
            locator = entry.get("ipfsCID", entry.get("dataLocator"))
            if name is None or locator is None:
                raise ConfigurationError(
                    f"Entity {entity_id} needs a name and a data locator",
                    details={"entry": dict(entry)},
                )
            records.append(
                EntityRecord(entity_id=entity_id, display_name=name, data_locator=locator)
            )
        return cls(records)

    @classmethod
    def from_file(cls, path: Path) -> EntityDirectory:
        """Load a directory from a JSON file."""
        try:
            data = json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Cannot load entity directory {path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigurationError(f"Entity directory {path} must be a JSON object")
        directory = cls.from_mapping(data)
        logger.info(f"Loaded {len(directory)} entities from {path}")
        return directory

    @classmethod
    def default(cls) -> EntityDirectory:
        return cls.from_mapping(DEFAULT_ENTITIES)

    def to_mapping(self) -> dict[str, dict[str, str]]:
        """Inverse of ``from_mapping``."""
        return {
            r.entity_id: {"name": r.display_name, "ipfsCID": r.data_locator}
            for r in self._entries.values()
        }

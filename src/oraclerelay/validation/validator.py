"""Eligibility check for on-chain requests."""

from __future__ import annotations

from oraclerelay.core.exceptions import EntityNotFoundError, NameMismatchError
from oraclerelay.core.models import EntityRecord, OracleRequest
from oraclerelay.validation.directory import EntityDirectory


class RequestValidator:
    """Checks requests against the entity directory. Pure lookup and comparison."""

    def __init__(self, directory: EntityDirectory) -> None:
        self._directory = directory

    @property
    def directory(self) -> EntityDirectory:
        return self._directory

    def validate(self, request: OracleRequest) -> EntityRecord:
        """
        Return the entity record a request refers to.

        Names are compared exactly; no case or whitespace normalization.

        Raises:
            EntityNotFoundError: entity id unknown
            NameMismatchError: supplied name differs from the stored one
        """
        return self.check(request.entity_id, request.entity_name)

    def check(self, entity_id: str, entity_name: str) -> EntityRecord:
        record = self._directory.get(entity_id)
        if record is None:
            raise EntityNotFoundError(f"Entity not found: {entity_id}", entity_id=entity_id)

        if record.display_name != entity_name:
            raise NameMismatchError(
                f"Name does not match for entity {entity_id}",
                entity_id=entity_id,
                supplied_name=entity_name,
                expected_name=record.display_name,
            )

        return record

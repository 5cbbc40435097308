"""In-memory cache of the latest submitted outcome per entity."""

from __future__ import annotations

import threading
from collections.abc import Mapping
from types import MappingProxyType

from oraclerelay.core.exceptions import OutcomeNotFoundError
from oraclerelay.core.models import CachedOutcome, ResolutionOutcome


class ResultCache:
    """
    Latest-wins map of entity id to cached outcome.

    Writers build a new mapping and swap it in under a lock; readers take the
    current mapping reference without locking, so reads never block and
    always see a consistent snapshot. Entries never expire.
    """

    def __init__(self) -> None:
        self._entries: Mapping[str, CachedOutcome] = MappingProxyType({})
        self._write_lock = threading.Lock()

    def put(self, entity_id: str, outcome: ResolutionOutcome, tx_hash: str) -> CachedOutcome:
        """Store an outcome, overwriting any previous one for the entity."""
        if outcome.entity_id != entity_id:
            raise ValueError(
                f"Outcome is for {outcome.entity_id}, cannot store under {entity_id}"
            )
        entry = CachedOutcome(outcome=outcome, tx_hash=tx_hash)
        with self._write_lock:
            updated = dict(self._entries)
            updated[entity_id] = entry
            self._entries = MappingProxyType(updated)
        return entry

    def get(self, entity_id: str) -> CachedOutcome:
        """Return the cached outcome or raise OutcomeNotFoundError."""
        entry = self._entries.get(entity_id)
        if entry is None:
            raise OutcomeNotFoundError(entity_id)
        return entry

    def snapshot(self) -> Mapping[str, CachedOutcome]:
        """Read-only view of all entries at this moment."""
        return self._entries

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)

"""Chain resolver for sequential source fallback."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from oraclerelay.core.exceptions import AllSourcesUnavailableError, InvalidPayloadError
from oraclerelay.core.types import AttemptStatus, ResolutionStatus
from oraclerelay.resolution.base import AbstractSource, SourceAttempt

logger = logging.getLogger(__name__)


@dataclass
class ResolutionReport:
    """Result of resolving one locator across the source chain."""

    entity_id: str
    data_locator: str
    status: ResolutionStatus
    value: int | None = None
    source: str | None = None
    attempts: list[SourceAttempt] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.status == ResolutionStatus.SUCCESS

    @property
    def sources_tried(self) -> list[str]:
        return [a.source for a in self.attempts]

    def raise_for_status(self) -> int:
        """Return the value, or raise the matching resolution error."""
        if self.success and self.value is not None:
            return self.value

        if self.status == ResolutionStatus.INVALID_PAYLOAD:
            raise InvalidPayloadError(
                f"Invalid payload for {self.entity_id} from {self.source}",
                entity_id=self.entity_id,
                source=self.source or "unknown",
                sources_tried=self.sources_tried,
                details={"locator": self.data_locator},
            )

        raise AllSourcesUnavailableError(
            f"All sources failed for {self.entity_id}",
            entity_id=self.entity_id,
            sources_tried=self.sources_tried,
            details={
                "locator": self.data_locator,
                "errors": {a.source: a.error_message for a in self.attempts},
            },
        )


class ResolutionChain:
    """
    Tries sources in priority order, first success wins.

    A source that answers with a parseable payload lacking the value field
    ends resolution with INVALID_PAYLOAD; the remaining sources are not
    asked. Anything else (timeout, transport error, non-2xx, non-JSON body)
    falls through to the next source.
    """

    def __init__(self, sources: list[AbstractSource]) -> None:
        # Sort by priority (lower = higher priority); sorted() is stable
        self._sources = sorted(sources, key=lambda s: s.priority)

    @property
    def sources(self) -> list[AbstractSource]:
        return list(self._sources)

    async def resolve(self, entity_id: str, data_locator: str) -> ResolutionReport:
        """Resolve a locator, returning a report rather than raising."""
        attempts: list[SourceAttempt] = []

        for source in self._sources:
            if not source.is_enabled:
                continue

            logger.debug(f"Trying source {source.name} for {entity_id} ({data_locator})")
            attempt = await self._try_source(source, data_locator)
            attempts.append(attempt)

            if attempt.success:
                logger.info(f"Resolved {entity_id} from {source.name}: {attempt.value}")
                return ResolutionReport(
                    entity_id=entity_id,
                    data_locator=data_locator,
                    status=ResolutionStatus.SUCCESS,
                    value=attempt.value,
                    source=source.name,
                    attempts=attempts,
                )

            if attempt.answered:
                logger.warning(
                    f"Source {source.name} returned an invalid payload for {entity_id}: "
                    f"{attempt.error_message}"
                )
                return ResolutionReport(
                    entity_id=entity_id,
                    data_locator=data_locator,
                    status=ResolutionStatus.INVALID_PAYLOAD,
                    source=source.name,
                    attempts=attempts,
                )

            logger.warning(f"Source {source.name} failed for {entity_id}: {attempt.error_message}")

        return ResolutionReport(
            entity_id=entity_id,
            data_locator=data_locator,
            status=ResolutionStatus.ALL_SOURCES_UNAVAILABLE,
            attempts=attempts,
        )

    async def _try_source(self, source: AbstractSource, data_locator: str) -> SourceAttempt:
        """Try a single source with error handling."""
        try:
            return await source.fetch(data_locator)
        except Exception as e:
            logger.exception(f"Source {source.name} failed unexpectedly: {e}")
            return SourceAttempt(
                source=source.name,
                status=AttemptStatus.TRANSPORT_ERROR,
                error_message=str(e),
            )

    async def close(self) -> None:
        """Close all sources."""
        for source in self._sources:
            await source.close()

    async def __aenter__(self) -> "ResolutionChain":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

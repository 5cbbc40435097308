"""Source registry for building the resolution chain."""

from __future__ import annotations

from typing import TYPE_CHECKING

from oraclerelay.resolution.base import AbstractSource, SourceConfig
from oraclerelay.resolution.chain import ResolutionChain
from oraclerelay.resolution.gateway import GatewaySource

if TYPE_CHECKING:
    from oraclerelay.config import RelaySettings


class SourceRegistry:
    """
    Factory for creating and managing data source instances.

    Sources derived from settings are registered in template order, which is
    also their fallback priority.
    """

    def __init__(self) -> None:
        self._sources: list[AbstractSource] = []

    def register(self, source: AbstractSource) -> None:
        """Register a data source."""
        self._sources.append(source)

    @property
    def sources(self) -> list[AbstractSource]:
        return list(self._sources)

    def get_chain(self) -> ResolutionChain:
        """Get a resolution chain over the registered sources."""
        return ResolutionChain(self._sources)

    @classmethod
    def from_templates(
        cls,
        templates: list[str],
        config: SourceConfig | None = None,
    ) -> "SourceRegistry":
        registry = cls()
        for priority, template in enumerate(templates):
            registry.register(GatewaySource(template, config=config, priority=priority))
        return registry

    @classmethod
    def from_settings(cls, settings: "RelaySettings") -> "SourceRegistry":
        """Create a registry with gateway sources configured from settings."""
        config = SourceConfig(
            timeout=settings.source_timeout,
            value_field=settings.value_field,
        )
        return cls.from_templates(settings.gateway_templates, config)

    async def close_all(self) -> None:
        """Close all registered sources."""
        for source in self._sources:
            await source.close()

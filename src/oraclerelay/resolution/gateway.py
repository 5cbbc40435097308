"""Content gateway source (e.g. public IPFS gateways)."""

from __future__ import annotations

from urllib.parse import urlsplit

from oraclerelay.resolution.base import AbstractSource, SourceConfig

LOCATOR_PLACEHOLDER = "{locator}"


class GatewaySource(AbstractSource):
    """
    Serves a locator from a URL template such as
    ``https://ipfs.io/ipfs/{locator}``.
    """

    def __init__(
        self,
        url_template: str,
        config: SourceConfig | None = None,
        priority: int = 100,
        name: str | None = None,
    ) -> None:
        if LOCATOR_PLACEHOLDER not in url_template:
            raise ValueError(f"Gateway template lacks {LOCATOR_PLACEHOLDER}: {url_template}")
        super().__init__(name or urlsplit(url_template).hostname or url_template, config, priority)
        self.url_template = url_template

    def url_for(self, locator: str) -> str:
        return self.url_template.replace(LOCATOR_PLACEHOLDER, locator)

"""Abstract data source with HTTP client management."""

from __future__ import annotations

import asyncio
import time
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

import httpx
from pydantic import BaseModel, Field

from oraclerelay.core.types import AttemptStatus

# Largest value the oracle contract can store (uint256)
MAX_VALUE = 2**256 - 1


class SourceConfig(BaseModel):
    """Configuration for a data source."""

    timeout: float = Field(default=10.0, gt=0, description="Per-attempt timeout in seconds")
    value_field: str = Field(default="creditScore", description="Payload field holding the value")
    enabled: bool = True


class SourceAttempt(BaseModel):
    """Result of asking a single source for a locator."""

    source: str
    url: str | None = None
    status: AttemptStatus
    value: int | None = None
    error_message: str | None = None
    status_code: int | None = None
    duration_ms: float = 0.0

    @property
    def success(self) -> bool:
        return self.status == AttemptStatus.SUCCESS and self.value is not None

    @property
    def answered(self) -> bool:
        """Whether the source returned a parseable payload (valid or not)."""
        return self.status in (AttemptStatus.SUCCESS, AttemptStatus.INVALID_PAYLOAD)


def extract_value(payload: Any, field: str) -> int | None:
    """
    Pull an unsigned integer out of a decoded payload.

    Accepts ints, integral floats and ASCII digit strings. Returns None when
    the field is missing, boolean, negative, wider than uint256 or otherwise
    not an unsigned integer.
    """
    if not isinstance(payload, dict) or field not in payload:
        return None

    raw = payload[field]
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        value = raw
    elif isinstance(raw, float) and raw.is_integer():
        value = int(raw)
    elif isinstance(raw, str):
        text = raw.strip()
        if not (text.isascii() and text.isdigit()):
            return None
        try:
            value = int(text)
        except ValueError:
            # Exceeds the interpreter's int conversion limit
            return None
    else:
        return None

    return value if 0 <= value <= MAX_VALUE else None


class AbstractSource(ABC):
    """
    Abstract base class for data sources.

    Provides:
    - HTTP client management with connection pooling
    - Per-attempt timeout
    - Consistent error classification
    """

    def __init__(self, name: str, config: SourceConfig | None = None, priority: int = 100) -> None:
        self.config = config or SourceConfig()
        self._name = name
        self._priority = priority
        self._client: httpx.AsyncClient | None = None

    @property
    def name(self) -> str:
        return self._name

    @property
    def priority(self) -> int:
        """Priority for fallback ordering (lower = higher priority)."""
        return self._priority

    @property
    def is_enabled(self) -> bool:
        return self.config.enabled

    @asynccontextmanager
    async def _get_client(self) -> AsyncIterator[httpx.AsyncClient]:
        """Get or create HTTP client with proper lifecycle."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.config.timeout),
                headers=self._get_default_headers(),
                follow_redirects=True,
            )
        yield self._client

    def _get_default_headers(self) -> dict[str, str]:
        return {
            "User-Agent": "oraclerelay/1.0",
            "Accept": "application/json",
        }

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    @abstractmethod
    def url_for(self, locator: str) -> str:
        """Build the URL this source serves the locator from."""
        ...

    async def fetch(self, locator: str) -> SourceAttempt:
        """Fetch and classify the payload for a locator. Never raises for I/O errors."""
        url = self.url_for(locator)
        start = time.monotonic()

        def attempt(status: AttemptStatus, **kwargs: Any) -> SourceAttempt:
            return SourceAttempt(
                source=self.name,
                url=url,
                status=status,
                duration_ms=(time.monotonic() - start) * 1000,
                **kwargs,
            )

        try:
            async with asyncio.timeout(self.config.timeout):
                async with self._get_client() as client:
                    response = await client.get(url)
        except (TimeoutError, httpx.TimeoutException):
            return attempt(
                AttemptStatus.TIMEOUT,
                error_message=f"Timed out after {self.config.timeout}s",
            )
        except httpx.HTTPError as e:
            return attempt(AttemptStatus.TRANSPORT_ERROR, error_message=f"HTTP error: {e}")

        if not response.is_success:
            return attempt(
                AttemptStatus.HTTP_ERROR,
                status_code=response.status_code,
                error_message=f"Unexpected status {response.status_code}",
            )

        try:
            payload = response.json()
        except ValueError as e:
            return attempt(
                AttemptStatus.UNPARSEABLE,
                status_code=response.status_code,
                error_message=f"Body is not JSON: {e}",
            )

        value = extract_value(payload, self.config.value_field)
        if value is None:
            return attempt(
                AttemptStatus.INVALID_PAYLOAD,
                status_code=response.status_code,
                error_message=f"Payload has no usable '{self.config.value_field}' field",
            )

        return attempt(AttemptStatus.SUCCESS, status_code=response.status_code, value=value)

    async def __aenter__(self) -> "AbstractSource":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

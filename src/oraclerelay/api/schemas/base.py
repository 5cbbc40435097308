"""Base schema configuration for API models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


def to_camel_case(string: str) -> str:
    """Convert snake_case to camelCase."""
    components = string.split("_")
    return components[0] + "".join(word.capitalize() for word in components[1:])


class APIBaseSchema(BaseModel):
    """
    Base schema for all API models.

    Configured with camelCase aliases so the dashboard can consume the JSON
    as-is.
    """

    model_config = ConfigDict(
        alias_generator=to_camel_case,
        populate_by_name=True,
        from_attributes=True,
    )


class APIError(APIBaseSchema):
    """Standard API error response."""

    detail: Any

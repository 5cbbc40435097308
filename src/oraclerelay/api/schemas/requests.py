"""Request schemas for API endpoints."""

from __future__ import annotations

from typing import Annotated

from pydantic import Field

from oraclerelay.api.schemas.base import APIBaseSchema


class ManualTestRequest(APIBaseSchema):
    """Trigger the relay for an entity without an on-chain request."""

    # Optional so a missing field is reported as 400 by the route.
    user_id: Annotated[
        str | None,
        Field(default=None, description="Entity identifier, e.g. user001"),
    ]

    user_name: Annotated[
        str | None,
        Field(default=None, description="Display name that must match the directory"),
    ]

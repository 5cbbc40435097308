"""Request validation against the entity directory."""

from .directory import DEFAULT_ENTITIES, EntityDirectory
from .validator import RequestValidator

__all__ = [
    "DEFAULT_ENTITIES",
    "EntityDirectory",
    "RequestValidator",
]

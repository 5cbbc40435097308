"""Result cache for submitted outcomes."""

from .store import ResultCache

__all__ = [
    "ResultCache",
]

"""Multi-source data resolution with fallback."""

from .base import AbstractSource, SourceAttempt, SourceConfig, extract_value
from .chain import ResolutionChain, ResolutionReport
from .gateway import GatewaySource
from .registry import SourceRegistry

__all__ = [
    "AbstractSource",
    "GatewaySource",
    "ResolutionChain",
    "ResolutionReport",
    "SourceAttempt",
    "SourceConfig",
    "SourceRegistry",
    "extract_value",
]

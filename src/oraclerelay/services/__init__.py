"""Service layer for orchestrating the relay."""

from oraclerelay.services.pipeline import RelayPipeline
from oraclerelay.services.poller import Poller, PollerStats, TickReport

__all__ = [
    "Poller",
    "PollerStats",
    "RelayPipeline",
    "TickReport",
]

"""Oracle Relay - relays on-chain credit score requests to off-chain data and back."""

from oraclerelay.cache.store import ResultCache
from oraclerelay.client import OracleRelay
from oraclerelay.core.models import (
    CachedOutcome,
    EntityRecord,
    OracleRequest,
    ProcessingResult,
    ResolutionOutcome,
)
from oraclerelay.core.types import ProcessingStatus, ResolutionStatus, SkipReason
from oraclerelay.resolution.chain import ResolutionChain, ResolutionReport

__version__ = "0.1.0"
__all__ = [
    # Client
    "OracleRelay",
    # Types
    "ProcessingStatus",
    "ResolutionStatus",
    "SkipReason",
    # Models
    "CachedOutcome",
    "EntityRecord",
    "OracleRequest",
    "ProcessingResult",
    "ResolutionOutcome",
    # Components
    "ResolutionChain",
    "ResolutionReport",
    "ResultCache",
    # Version
    "__version__",
]

"""Core types, models, and exceptions."""

from .exceptions import (
    AllSourcesUnavailableError,
    ChainQueryError,
    ConfigurationError,
    EntityNotFoundError,
    EstimationFailedError,
    InvalidPayloadError,
    NameMismatchError,
    OutcomeNotFoundError,
    RelayError,
    ResolutionFailedError,
    SendFailedError,
    SubmissionFailedError,
    TransactionUnconfirmedError,
    ValidationRejectedError,
)
from .models import (
    CachedOutcome,
    EntityRecord,
    OracleRequest,
    ProcessingResult,
    ResolutionOutcome,
)
from .types import (
    AttemptStatus,
    ProcessingStatus,
    ResolutionStatus,
    SkipReason,
    TickStatus,
)

__all__ = [
    # Types
    "AttemptStatus",
    "ProcessingStatus",
    "ResolutionStatus",
    "SkipReason",
    "TickStatus",
    # Models
    "CachedOutcome",
    "EntityRecord",
    "OracleRequest",
    "ProcessingResult",
    "ResolutionOutcome",
    # Exceptions
    "AllSourcesUnavailableError",
    "ChainQueryError",
    "ConfigurationError",
    "EntityNotFoundError",
    "EstimationFailedError",
    "InvalidPayloadError",
    "NameMismatchError",
    "OutcomeNotFoundError",
    "RelayError",
    "ResolutionFailedError",
    "SendFailedError",
    "SubmissionFailedError",
    "TransactionUnconfirmedError",
    "ValidationRejectedError",
]

"""Custom exception hierarchy for oraclerelay."""

from typing import Any


class RelayError(Exception):
    """Base exception for all oraclerelay errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(RelayError):
    """Required configuration is missing or invalid."""

    pass


class ChainQueryError(RelayError):
    """Reading chain state (height or event log) failed."""

    pass


class ValidationRejectedError(RelayError):
    """An on-chain request is not eligible for resolution."""

    def __init__(
        self,
        message: str,
        entity_id: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.entity_id = entity_id


class EntityNotFoundError(ValidationRejectedError):
    """The requested entity is not in the directory."""

    pass


class NameMismatchError(ValidationRejectedError):
    """The display name supplied on-chain does not match the directory."""

    def __init__(
        self,
        message: str,
        entity_id: str,
        supplied_name: str,
        expected_name: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, entity_id, details)
        self.supplied_name = supplied_name
        self.expected_name = expected_name


class ResolutionFailedError(RelayError):
    """Failed to resolve a value for an entity."""

    def __init__(
        self,
        message: str,
        entity_id: str,
        sources_tried: list[str] | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.entity_id = entity_id
        self.sources_tried = sources_tried or []


class AllSourcesUnavailableError(ResolutionFailedError):
    """Every data source failed to answer."""

    pass


class InvalidPayloadError(ResolutionFailedError):
    """A data source answered, but without a usable value."""

    def __init__(
        self,
        message: str,
        entity_id: str,
        source: str,
        sources_tried: list[str] | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, entity_id, sources_tried, details)
        self.source = source


class SubmissionFailedError(RelayError):
    """Failed to push an outcome on-chain."""

    def __init__(
        self,
        message: str,
        request_id: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.request_id = request_id


class EstimationFailedError(SubmissionFailedError):
    """Gas estimation was rejected, usually by a contract revert."""

    def __init__(
        self,
        message: str,
        request_id: str,
        reverted: bool = False,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, request_id, details)
        self.reverted = reverted


class SendFailedError(SubmissionFailedError):
    """Sending the signed transaction failed."""

    pass


class TransactionUnconfirmedError(SendFailedError):
    """The transaction was accepted by the node but its receipt never arrived.

    It may still be mined; check ``tx_hash`` before resubmitting.
    """

    def __init__(
        self,
        message: str,
        request_id: str,
        tx_hash: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, request_id, {"tx_hash": tx_hash, **(details or {})})
        self.tx_hash = tx_hash


class OutcomeNotFoundError(RelayError):
    """No outcome has been cached for the entity yet."""

    def __init__(self, entity_id: str) -> None:
        super().__init__(f"No outcome cached for entity: {entity_id}")
        self.entity_id = entity_id

"""Core enums and type definitions."""

from enum import StrEnum


class ResolutionStatus(StrEnum):
    """Final status of a resolution across all sources."""

    SUCCESS = "success"
    INVALID_PAYLOAD = "invalid_payload"
    ALL_SOURCES_UNAVAILABLE = "all_sources_unavailable"


class AttemptStatus(StrEnum):
    """Status of a single source attempt."""

    SUCCESS = "success"
    TIMEOUT = "timeout"
    HTTP_ERROR = "http_error"
    TRANSPORT_ERROR = "transport_error"
    UNPARSEABLE = "unparseable"
    INVALID_PAYLOAD = "invalid_payload"


class ProcessingStatus(StrEnum):
    """Outcome of driving one request through the pipeline."""

    SUBMITTED = "submitted"
    REJECTED = "rejected"
    RESOLUTION_FAILED = "resolution_failed"
    SUBMISSION_FAILED = "submission_failed"
    ERROR = "error"


class SkipReason(StrEnum):
    """Why a request was skipped."""

    NOT_FOUND = "not_found"
    NAME_MISMATCH = "name_mismatch"
    ALL_SOURCES_UNAVAILABLE = "all_sources_unavailable"
    INVALID_PAYLOAD = "invalid_payload"
    ESTIMATION_FAILED = "estimation_failed"
    SEND_FAILED = "send_failed"
    UNCONFIRMED = "unconfirmed"
    UNEXPECTED_ERROR = "unexpected_error"


class TickStatus(StrEnum):
    """Outcome of a single poller tick."""

    COMPLETED = "completed"
    NO_NEW_BLOCKS = "no_new_blocks"
    QUERY_FAILED = "query_failed"
    SKIPPED = "skipped"

"""Structured relay events.

Every significant step of the relay (tick lifecycle, per-request outcome,
submission result) is emitted as a ``RelayEvent`` to an ``EventSink``. The
default sink writes to the log; ``RecordingEventSink`` keeps events in
memory so tests and the status endpoint can inspect them.
"""

from __future__ import annotations

import logging
from collections import deque
from datetime import datetime
from enum import StrEnum
from typing import Any, Iterable, Protocol

from pydantic import BaseModel, ConfigDict, Field

from oraclerelay.core.models import utcnow

logger = logging.getLogger("oraclerelay.events")


class RelayEventType(StrEnum):
    """Kinds of relay events."""

    TICK_STARTED = "tick_started"
    TICK_COMPLETED = "tick_completed"
    TICK_FAILED = "tick_failed"
    TICK_SKIPPED = "tick_skipped"
    NO_NEW_BLOCKS = "no_new_blocks"
    EVENT_PROCESSED = "event_processed"
    EVENT_SKIPPED = "event_skipped"
    SUBMISSION_SUCCEEDED = "submission_succeeded"
    SUBMISSION_FAILED = "submission_failed"


_LEVELS: dict[RelayEventType, int] = {
    RelayEventType.TICK_STARTED: logging.DEBUG,
    RelayEventType.NO_NEW_BLOCKS: logging.DEBUG,
    RelayEventType.TICK_SKIPPED: logging.DEBUG,
    RelayEventType.TICK_COMPLETED: logging.INFO,
    RelayEventType.EVENT_PROCESSED: logging.INFO,
    RelayEventType.SUBMISSION_SUCCEEDED: logging.INFO,
    RelayEventType.TICK_FAILED: logging.WARNING,
    RelayEventType.EVENT_SKIPPED: logging.WARNING,
    RelayEventType.SUBMISSION_FAILED: logging.ERROR,
}


class RelayEvent(BaseModel):
    """A single structured relay event."""

    model_config = ConfigDict(frozen=True)

    type: RelayEventType
    timestamp: datetime = Field(default_factory=utcnow)
    data: dict[str, Any] = Field(default_factory=dict)


class EventSink(Protocol):
    """Anything that accepts relay events."""

    def emit(self, event: RelayEvent) -> None: ...


class LoggingEventSink:
    """Writes relay events to the ``oraclerelay.events`` logger."""

    def emit(self, event: RelayEvent) -> None:
        level = _LEVELS.get(event.type, logging.INFO)
        details = " ".join(f"{k}={v}" for k, v in event.data.items())
        logger.log(level, f"{event.type.value} {details}".rstrip())


class RecordingEventSink:
    """Keeps emitted events in memory, optionally bounded."""

    def __init__(self, maxlen: int | None = None) -> None:
        self._events: deque[RelayEvent] = deque(maxlen=maxlen)

    def emit(self, event: RelayEvent) -> None:
        self._events.append(event)

    @property
    def events(self) -> list[RelayEvent]:
        return list(self._events)

    def of_type(self, event_type: RelayEventType) -> list[RelayEvent]:
        """Return recorded events of the given type, oldest first."""
        return [e for e in self._events if e.type == event_type]

    def clear(self) -> None:
        self._events.clear()


class CompositeEventSink:
    """Fans every event out to several sinks."""

    def __init__(self, sinks: Iterable[EventSink]) -> None:
        self._sinks = list(sinks)

    def emit(self, event: RelayEvent) -> None:
        for sink in self._sinks:
            sink.emit(event)


def emit(sink: EventSink, event_type: RelayEventType, **data: Any) -> None:
    """Build and emit an event in one call."""
    sink.emit(RelayEvent(type=event_type, data=data))

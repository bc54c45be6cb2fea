"""Observability sinks for pipeline audit events."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Protocol


if TYPE_CHECKING:
    from collections.abc import Iterable


logger = logging.getLogger(__name__)


class EventSink(Protocol):
    """Receiver for audit events emitted by pipeline components."""

    def record(self, event: str, fields: dict[str, Any]) -> None: ...


class LoggingSink:
    """Sink that writes events to the standard logger."""

    def __init__(self, level: int = logging.INFO) -> None:
        self.level = level

    def record(self, event: str, fields: dict[str, Any]) -> None:
        details = ", ".join(f"{k}={v!r}" for k, v in fields.items())
        logger.log(self.level, "%s: %s", event, details)


class MemorySink:
    """Sink that keeps events in memory."""

    def __init__(self) -> None:
        self.events: list[tuple[str, dict[str, Any]]] = []

    def record(self, event: str, fields: dict[str, Any]) -> None:
        self.events.append((event, dict(fields)))

    def of_type(self, event: str) -> list[dict[str, Any]]:
        return [fields for name, fields in self.events if name == event]


class CompositeSink:
    """Fan out each event to several sinks."""

    def __init__(self, sinks: Iterable[EventSink]) -> None:
        self.sinks = list(sinks)

    def record(self, event: str, fields: dict[str, Any]) -> None:
        for sink in self.sinks:
            sink.record(event, fields)


class NullSink:
    """Sink that drops every event."""

    def record(self, event: str, fields: dict[str, Any]) -> None:
        return None

"""Event collector — the recording side of the event log.

The builder records parse and write events; the rebuild scheduler records
one event per settled rebuild.  Both go through a single collector so a
watch session keeps one timeline.
"""

from __future__ import annotations

from folio.observability.events import (
    BuildEvent,
    BuildKind,
    ContentParsed,
    RebuildEvent,
    now_ns,
)
from folio.observability.log import EventLog


class EventCollector:
    """Records folio events into an :class:`EventLog`.

    Args:
        log: The EventLog to store events in.

    """

    __slots__ = ("_log",)

    def __init__(self, log: EventLog | None = None) -> None:
        self._log = log if log is not None else EventLog()

    @property
    def log(self) -> EventLog:
        """The underlying event log."""
        return self._log

    def record_parse(self, path: str, *, parse_ms: float = 0.0) -> None:
        """Record a content parse event."""
        self._log.append(
            ContentParsed(path=path, parse_ms=parse_ms, timestamp_ns=now_ns())
        )

    def record_build(
        self,
        kind: BuildKind,
        source: str,
        target: str,
        *,
        duration_ms: float = 0.0,
    ) -> None:
        """Record a build action."""
        self._log.append(
            BuildEvent(
                kind=kind,
                source=source,
                target=target,
                duration_ms=duration_ms,
                timestamp_ns=now_ns(),
            )
        )

    def record_rebuild(
        self,
        trigger: str,
        *,
        succeeded: bool,
        duration_ms: float = 0.0,
        error: str = "",
    ) -> None:
        """Record a settled watch-mode rebuild."""
        self._log.append(
            RebuildEvent(
                trigger=trigger,
                succeeded=succeeded,
                duration_ms=duration_ms,
                error=error,
                timestamp_ns=now_ns(),
            )
        )

"""Event log — bounded store for parse, build, and rebuild events.

The builder writes from the rebuild worker thread while the watch loop
reads from the event loop, so every access goes through one lock.
"""

import threading
from collections import Counter, deque
from typing import Any

from folio.observability.events import BuildEvent, ContentParsed, RebuildEvent, StackEvent


def event_subject(event: StackEvent) -> str:
    """Return the file or change description an event is about."""
    if isinstance(event, ContentParsed):
        return event.path
    if isinstance(event, BuildEvent):
        return f"{event.source} {event.target}"
    if isinstance(event, RebuildEvent):
        return event.trigger
    return ""


class EventLog:
    """Ring buffer of the most recent ``max_events`` events.

    Once full, appending drops the oldest event.
    """

    __slots__ = ("_buffer", "_lock", "_capacity")

    def __init__(self, max_events: int = 10_000) -> None:
        self._capacity = max_events
        self._buffer: deque[StackEvent] = deque(maxlen=max_events)
        self._lock = threading.Lock()

    def append(self, event: StackEvent) -> None:
        with self._lock:
            self._buffer.append(event)

    def _snapshot(self) -> list[StackEvent]:
        with self._lock:
            return list(self._buffer)

    def query(
        self,
        *,
        event_type: type | None = None,
        since_ns: int = 0,
        path: str | None = None,
        limit: int = 100,
    ) -> list[StackEvent]:
        """Return matching events, newest first.

        Args:
            event_type: Keep only instances of this event class.
            since_ns: Keep only events stamped at or after this time.
            path: Keep only events whose subject (content path, build
                source or target, rebuild trigger) contains this text.
            limit: Stop after this many matches.

        """
        matches: list[StackEvent] = []
        for event in reversed(self._snapshot()):
            if len(matches) >= limit:
                break
            if event_type is not None and not isinstance(event, event_type):
                continue
            if event.timestamp_ns < since_ns:
                continue
            if path is not None and path not in event_subject(event):
                continue
            matches.append(event)
        return matches

    def recent(self, n: int = 20) -> list[StackEvent]:
        """The last ``n`` events, oldest first."""
        return self._snapshot()[-n:]

    def clear(self) -> int:
        """Drop every stored event; returns how many were dropped."""
        with self._lock:
            dropped = len(self._buffer)
            self._buffer.clear()
        return dropped

    def __len__(self) -> int:
        with self._lock:
            return len(self._buffer)

    def stats(self) -> dict[str, Any]:
        events = self._snapshot()
        by_type = Counter(type(event).__name__ for event in events)
        return {
            "total": len(events),
            "max_events": self._capacity,
            "by_type": dict(by_type),
        }

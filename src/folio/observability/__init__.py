"""Build and watch observability.

Aggregates events from:
- **Collector**: one event per parsed content file
- **Builder**: clean, render, and asset-copy actions
- **Scheduler**: one event per settled watch-mode rebuild

All events are frozen dataclasses with nanosecond timestamps, safe to
record from the rebuild worker thread.

Quick Start:
    >>> from folio.observability import EventCollector, EventLog
    >>> log = EventLog()
    >>> collector = EventCollector(log)
    >>> collector.record_build("render", "/", "build/index.html")
    >>> len(log)
    1

"""

from folio.observability.collector import EventCollector
from folio.observability.events import (
    BuildEvent,
    ContentParsed,
    RebuildEvent,
    StackEvent,
    now_ns,
)
from folio.observability.log import EventLog

__all__ = [
    "BuildEvent",
    "ContentParsed",
    "EventCollector",
    "EventLog",
    "RebuildEvent",
    "StackEvent",
    "now_ns",
]

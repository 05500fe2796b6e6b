"""Event model for build and watch observability.

All events are frozen dataclasses with:
- ``timestamp_ns``: Monotonic nanosecond timestamp
- Descriptive fields for the specific event type

Thread Safety:
    All events are frozen (immutable) and safe to share across threads.
    Watch-mode rebuilds run in a worker thread and record into the same log.

"""

import time
from dataclasses import dataclass
from typing import Literal, TypeAlias

BuildKind: TypeAlias = Literal["clean", "render", "copy_asset"]


# ---------------------------------------------------------------------------
# Content events
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ContentParsed:
    """A content file was read, split and converted to HTML.

    Attributes:
        path: Absolute path to the content file.
        parse_ms: Time spent reading and converting in milliseconds.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    path: str
    parse_ms: float
    timestamp_ns: int


# ---------------------------------------------------------------------------
# Build events
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class BuildEvent:
    """A build action occurred.

    Attributes:
        kind: The type of build action.
        source: Source route, file path, or description.
        target: Output file path (or description).
        duration_ms: Time taken in milliseconds.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    kind: BuildKind
    source: str
    target: str
    duration_ms: float
    timestamp_ns: int


# ---------------------------------------------------------------------------
# Watch events
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class RebuildEvent:
    """A watch-mode rebuild settled.

    Attributes:
        trigger: Reason string of the change that scheduled the rebuild.
        succeeded: False if the build raised.
        duration_ms: Wall-clock time of the rebuild.
        error: Error message when the rebuild failed, else empty.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    trigger: str
    succeeded: bool
    duration_ms: float
    error: str
    timestamp_ns: int


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

StackEvent: TypeAlias = ContentParsed | BuildEvent | RebuildEvent


def now_ns() -> int:
    """Return the current monotonic clock value in nanoseconds."""
    return time.monotonic_ns()

"""Rebuild scheduler — debounces change bursts into a single rebuild.

State machine::

    IDLE --schedule--> PENDING --timer fires--> REBUILDING --settles--> IDLE
                        ^   |                        |
                        +---+ schedule (reset)       +--> PENDING (timer armed meanwhile)

Only the most recent ``schedule()`` call's timer matters.  Rebuilds never
overlap: a timer that fires while a rebuild is in flight marks a single
rerun, which starts as soon as the current rebuild settles.

A failed rebuild is logged and swallowed.  There is no retry; the next
change event schedules the next attempt.
"""

from __future__ import annotations

import asyncio
import enum
import sys
import time
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from folio.observability.collector import EventCollector


class RebuildState(enum.Enum):
    """Lifecycle state of a :class:`RebuildScheduler`."""

    IDLE = "idle"
    PENDING = "pending"
    REBUILDING = "rebuilding"


class RebuildScheduler:
    """Owns the single pending-rebuild timer for watch mode.

    Must be used from within a running event loop.  The rebuild callable is
    synchronous and runs in a worker thread so that change notifications
    keep flowing while it works.

    Args:
        rebuild: Callable performing a full build.  Its return value is
            passed to ``describe`` for the completion line.
        delay_ms: Quiet period after the last change before rebuilding.
        collector: Optional event collector; every settled rebuild is
            recorded as a ``RebuildEvent``.
        describe: Optional formatter for a successful result.

    """

    def __init__(
        self,
        rebuild: Callable[[], Any],
        *,
        delay_ms: int = 150,
        collector: EventCollector | None = None,
        describe: Callable[[Any], str] | None = None,
    ) -> None:
        self._rebuild = rebuild
        self._delay = delay_ms / 1000
        self._collector = collector
        self._describe = describe
        self._timer: asyncio.TimerHandle | None = None
        self._task: asyncio.Task[None] | None = None
        self._reason = ""
        self._rerun = False
        self._rebuilds = 0
        self._failures = 0

    @property
    def state(self) -> RebuildState:
        """Current state of the scheduler."""
        if self._task is not None and not self._task.done():
            return RebuildState.REBUILDING
        if self._timer is not None:
            return RebuildState.PENDING
        return RebuildState.IDLE

    @property
    def rebuild_count(self) -> int:
        """Number of rebuilds that have settled (successful or not)."""
        return self._rebuilds

    @property
    def failure_count(self) -> int:
        """Number of rebuilds that raised."""
        return self._failures

    def schedule(self, reason: str) -> None:
        """(Re)start the debounce timer.

        Args:
            reason: Free-text description of the triggering change.

        """
        loop = asyncio.get_running_loop()
        if self._timer is not None:
            self._timer.cancel()
        self._reason = reason
        self._timer = loop.call_later(self._delay, self._fire)

    def cancel(self) -> None:
        """Disarm the pending timer, if any.  An in-flight rebuild is not aborted."""
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        self._rerun = False

    async def drain(self) -> None:
        """Wait for the in-flight rebuild (and its queued rerun) to settle."""
        if self._task is not None:
            await asyncio.shield(self._task)

    def _fire(self) -> None:
        self._timer = None
        if self._task is not None and not self._task.done():
            self._rerun = True
            return
        self._task = asyncio.get_running_loop().create_task(self._run())

    async def _run(self) -> None:
        while True:
            self._rerun = False
            await self._rebuild_once(self._reason)
            if not self._rerun:
                break

    async def _rebuild_once(self, reason: str) -> None:
        print(f"[watch] change detected ({reason}). Rebuilding...", file=sys.stderr)
        t0 = time.perf_counter()
        try:
            result = await asyncio.to_thread(self._rebuild)
        except Exception as exc:
            elapsed = (time.perf_counter() - t0) * 1000
            self._rebuilds += 1
            self._failures += 1
            print(f"[watch] rebuild failed: {exc}", file=sys.stderr)
            self._record(reason, succeeded=False, duration_ms=elapsed, error=str(exc))
            return

        elapsed = (time.perf_counter() - t0) * 1000
        self._rebuilds += 1
        detail = f" ({self._describe(result)})" if self._describe is not None else ""
        print(f"[watch] rebuild complete{detail}", file=sys.stderr)
        self._record(reason, succeeded=True, duration_ms=elapsed)

    def _record(
        self, reason: str, *, succeeded: bool, duration_ms: float, error: str = "",
    ) -> None:
        if self._collector is not None:
            self._collector.record_rebuild(
                reason, succeeded=succeeded, duration_ms=duration_ms, error=error,
            )

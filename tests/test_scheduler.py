"""Tests for folio.reactive.scheduler — debounced, serialized rebuilds."""

from __future__ import annotations

import asyncio
import threading
import time

import pytest

from folio.observability import EventCollector, EventLog, RebuildEvent
from folio.reactive.scheduler import RebuildScheduler, RebuildState


class Recorder:
    """Synchronous rebuild stand-in that counts calls and overlap."""

    def __init__(self, *, sleep: float = 0.0, fail: bool = False) -> None:
        self.calls = 0
        self.active = 0
        self.max_active = 0
        self._sleep = sleep
        self._fail = fail
        self._lock = threading.Lock()

    def __call__(self) -> str:
        with self._lock:
            self.calls += 1
            self.active += 1
            self.max_active = max(self.max_active, self.active)
        try:
            if self._sleep:
                time.sleep(self._sleep)
            if self._fail:
                msg = "boom"
                raise RuntimeError(msg)
            return "ok"
        finally:
            with self._lock:
                self.active -= 1


async def _settle(scheduler: RebuildScheduler, count: int, timeout: float = 5.0) -> None:
    """Wait until ``count`` rebuilds have settled and the scheduler is idle."""
    async def _wait() -> None:
        while scheduler.rebuild_count < count or scheduler.state is not RebuildState.IDLE:
            await asyncio.sleep(0.01)

    await asyncio.wait_for(_wait(), timeout)


class TestRebuildScheduler:
    """RebuildScheduler — state machine, debounce, and failure handling."""

    @pytest.mark.asyncio
    async def test_starts_idle(self) -> None:
        scheduler = RebuildScheduler(Recorder(), delay_ms=10)
        assert scheduler.state is RebuildState.IDLE
        assert scheduler.rebuild_count == 0

    @pytest.mark.asyncio
    async def test_schedule_moves_to_pending(self) -> None:
        scheduler = RebuildScheduler(Recorder(), delay_ms=1000)
        scheduler.schedule("content: modified a.md")
        assert scheduler.state is RebuildState.PENDING
        scheduler.cancel()

    @pytest.mark.asyncio
    async def test_single_change_single_rebuild(self) -> None:
        rebuild = Recorder()
        scheduler = RebuildScheduler(rebuild, delay_ms=10)
        scheduler.schedule("content: modified a.md")
        await _settle(scheduler, 1)
        assert rebuild.calls == 1
        assert scheduler.state is RebuildState.IDLE

    @pytest.mark.asyncio
    async def test_burst_collapses_into_one_rebuild(self) -> None:
        rebuild = Recorder()
        scheduler = RebuildScheduler(rebuild, delay_ms=100)

        for i in range(10):
            scheduler.schedule(f"content: modified {i}.md")
            await asyncio.sleep(0.005)
        assert rebuild.calls == 0

        await _settle(scheduler, 1)
        await asyncio.sleep(0.2)
        assert rebuild.calls == 1
        assert scheduler.rebuild_count == 1

    @pytest.mark.asyncio
    async def test_latest_reason_reported(self, capsys: pytest.CaptureFixture[str]) -> None:
        scheduler = RebuildScheduler(Recorder(), delay_ms=50)
        scheduler.schedule("content: modified first.md")
        scheduler.schedule("templates: modified layout.html")
        await _settle(scheduler, 1)

        err = capsys.readouterr().err
        assert "change detected (templates: modified layout.html). Rebuilding..." in err
        assert "first.md" not in err
        assert "[watch] rebuild complete" in err

    @pytest.mark.asyncio
    async def test_describe_appended(self, capsys: pytest.CaptureFixture[str]) -> None:
        scheduler = RebuildScheduler(Recorder(), delay_ms=10, describe=lambda r: f"result={r}")
        scheduler.schedule("x")
        await _settle(scheduler, 1)
        assert "[watch] rebuild complete (result=ok)" in capsys.readouterr().err

    @pytest.mark.asyncio
    async def test_failure_logged_and_swallowed(self, capsys: pytest.CaptureFixture[str]) -> None:
        rebuild = Recorder(fail=True)
        scheduler = RebuildScheduler(rebuild, delay_ms=10)
        scheduler.schedule("content: modified a.md")
        await _settle(scheduler, 1)

        assert scheduler.failure_count == 1
        assert scheduler.state is RebuildState.IDLE
        assert "[watch] rebuild failed: boom" in capsys.readouterr().err

    @pytest.mark.asyncio
    async def test_no_retry_after_failure(self) -> None:
        rebuild = Recorder(fail=True)
        scheduler = RebuildScheduler(rebuild, delay_ms=10)
        scheduler.schedule("a")
        await _settle(scheduler, 1)
        await asyncio.sleep(0.1)
        assert rebuild.calls == 1

    @pytest.mark.asyncio
    async def test_keeps_working_after_failure(self) -> None:
        rebuild = Recorder(fail=True)
        scheduler = RebuildScheduler(rebuild, delay_ms=10)
        scheduler.schedule("a")
        await _settle(scheduler, 1)
        scheduler.schedule("b")
        await _settle(scheduler, 2)
        assert rebuild.calls == 2

    @pytest.mark.asyncio
    async def test_rebuilds_never_overlap(self) -> None:
        rebuild = Recorder(sleep=0.2)
        scheduler = RebuildScheduler(rebuild, delay_ms=10)

        scheduler.schedule("first")
        while scheduler.state is not RebuildState.REBUILDING:
            await asyncio.sleep(0.005)

        # Several timers fire while the first rebuild is running.
        for _ in range(3):
            scheduler.schedule("during")
            await asyncio.sleep(0.03)

        await _settle(scheduler, 2)
        assert rebuild.max_active == 1
        assert rebuild.calls == 2

    @pytest.mark.asyncio
    async def test_schedule_during_rebuild_is_not_dropped(self) -> None:
        rebuild = Recorder(sleep=0.1)
        scheduler = RebuildScheduler(rebuild, delay_ms=10)

        scheduler.schedule("first")
        while scheduler.state is not RebuildState.REBUILDING:
            await asyncio.sleep(0.005)
        scheduler.schedule("second")

        await _settle(scheduler, 2)
        assert rebuild.calls == 2

    @pytest.mark.asyncio
    async def test_cancel_disarms_timer(self) -> None:
        rebuild = Recorder()
        scheduler = RebuildScheduler(rebuild, delay_ms=20)
        scheduler.schedule("a")
        scheduler.cancel()
        await asyncio.sleep(0.1)
        assert rebuild.calls == 0
        assert scheduler.state is RebuildState.IDLE

    @pytest.mark.asyncio
    async def test_drain_waits_for_rebuild(self) -> None:
        rebuild = Recorder(sleep=0.05)
        scheduler = RebuildScheduler(rebuild, delay_ms=5)
        scheduler.schedule("a")
        while scheduler.state is not RebuildState.REBUILDING:
            await asyncio.sleep(0.005)
        await scheduler.drain()
        assert scheduler.rebuild_count == 1

    @pytest.mark.asyncio
    async def test_records_rebuild_events(self) -> None:
        collector = EventCollector()
        ok = RebuildScheduler(Recorder(), delay_ms=5, collector=collector)
        bad = RebuildScheduler(Recorder(fail=True), delay_ms=5, collector=collector)

        ok.schedule("content: modified a.md")
        await _settle(ok, 1)
        bad.schedule("templates: modified layout.html")
        await _settle(bad, 1)

        events = collector.log.query(event_type=RebuildEvent)
        assert [e.succeeded for e in events] == [False, True]
        assert events[0].error == "boom"
        assert events[1].trigger == "content: modified a.md"
        assert (ok.rebuild_count, bad.failure_count) == (1, 1)

    @pytest.mark.asyncio
    async def test_counts_survive_log_eviction(self) -> None:
        collector = EventCollector(EventLog(max_events=2))
        scheduler = RebuildScheduler(Recorder(), delay_ms=5, collector=collector)

        for i in range(5):
            scheduler.schedule(f"content: modified {i}.md")
            await _settle(scheduler, i + 1)

        assert len(collector.log) == 2
        assert scheduler.rebuild_count == 5
        assert scheduler.failure_count == 0

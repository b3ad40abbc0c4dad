"""
Tests for the schedulers and the single-slot debouncer.
"""

import asyncio

from range_picker.scheduling import AsyncioScheduler, Debouncer, ImmediateScheduler, ManualScheduler


class TestManualScheduler:
    """Deterministic clock."""

    def test_runs_only_due_callbacks(self):
        scheduler = ManualScheduler()
        calls = []
        scheduler.call_later(10, lambda: calls.append("a"))
        scheduler.call_later(20, lambda: calls.append("b"))

        assert scheduler.advance(15) == 1
        assert calls == ["a"]
        assert scheduler.now_ms == 15
        assert scheduler.pending_count == 1

        scheduler.advance(5)
        assert calls == ["a", "b"]

    def test_ties_run_in_scheduling_order(self):
        scheduler = ManualScheduler()
        calls = []
        for name in "xyz":
            scheduler.call_later(5, lambda name=name: calls.append(name))
        scheduler.advance(5)
        assert calls == ["x", "y", "z"]

    def test_cancelled_callbacks_skipped(self):
        scheduler = ManualScheduler()
        calls = []
        handle = scheduler.call_later(5, lambda: calls.append(1))
        handle.cancel()
        assert scheduler.pending_count == 0
        assert scheduler.advance(10) == 0
        assert calls == []

    def test_flush_runs_everything(self):
        scheduler = ManualScheduler(start_ms=100)
        calls = []
        scheduler.call_later(1000, lambda: calls.append(1))
        scheduler.call_later(5, lambda: calls.append(2))
        assert scheduler.flush() == 2
        assert calls == [2, 1]
        assert scheduler.now_ms == 1100


class TestImmediateScheduler:

    def test_runs_synchronously(self):
        calls = []
        handle = ImmediateScheduler().call_later(16, lambda: calls.append(1))
        assert calls == [1]
        handle.cancel()


class TestAsyncioScheduler:

    def test_schedules_on_loop(self):
        calls = []

        async def run():
            AsyncioScheduler().call_later(1, lambda: calls.append("fired"))
            await asyncio.sleep(0.05)

        asyncio.run(run())
        assert calls == ["fired"]

    def test_cancel(self):
        calls = []

        async def run():
            handle = AsyncioScheduler().call_later(10, lambda: calls.append("fired"))
            handle.cancel()
            await asyncio.sleep(0.05)

        asyncio.run(run())
        assert calls == []


class TestDebouncer:
    """At most one pending callback; newest wins."""

    def test_burst_collapses_to_last(self):
        scheduler = ManualScheduler()
        debouncer = Debouncer(scheduler, 16)
        calls = []
        for value in range(5):
            debouncer.schedule(lambda value=value: calls.append(value))
            scheduler.advance(5)

        assert calls == []
        assert debouncer.pending
        scheduler.advance(16)
        assert calls == [4]
        assert not debouncer.pending

    def test_new_delay_applies_to_next_schedule(self):
        scheduler = ManualScheduler()
        debouncer = Debouncer(scheduler, 16)
        debouncer.delay_ms = 100
        calls = []
        debouncer.schedule(lambda: calls.append("fired"))

        scheduler.advance(16)
        assert calls == []
        scheduler.advance(84)
        assert calls == ["fired"]
        assert debouncer.delay_ms == 100

    def test_cancel(self):
        scheduler = ManualScheduler()
        debouncer = Debouncer(scheduler, 16)
        calls = []
        debouncer.schedule(lambda: calls.append(1))

        assert debouncer.cancel() is True
        assert debouncer.cancel() is False
        scheduler.flush()
        assert calls == []

    def test_stale_timer_ignored_when_scheduler_cannot_cancel(self):
        """A timer that fires after being replaced does nothing."""

        class IgnoredHandle:
            def cancel(self):
                pass

        class DeferredNoCancel:
            def __init__(self):
                self.callbacks = []

            def call_later(self, delay_ms, callback):
                self.callbacks.append(callback)
                return IgnoredHandle()

        scheduler = DeferredNoCancel()
        debouncer = Debouncer(scheduler, 16)
        calls = []
        debouncer.schedule(lambda: calls.append("old"))
        debouncer.schedule(lambda: calls.append("new"))
        for callback in scheduler.callbacks:
            callback()
        assert calls == ["new"]

    def test_immediate_scheduler_passes_through(self):
        debouncer = Debouncer(ImmediateScheduler(), 16)
        calls = []
        debouncer.schedule(lambda: calls.append(1))
        assert calls == [1]
        assert not debouncer.pending

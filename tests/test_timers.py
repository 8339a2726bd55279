"""Tests for the generation-keyed timer."""

import asyncio
import threading

from stillwater.timers import GenerationTimer, default_scheduler


class ManualScheduler:
    def __init__(self):
        self.pending = []

    def __call__(self, delay, callback):
        self.pending.append(callback)
        return None


class TestGenerationTimer:
    """Only the most recently scheduled callback may fire."""

    def test_callback_fires_when_current(self):
        scheduler = ManualScheduler()
        timer = GenerationTimer(scheduler)
        fired = []

        timer.schedule(1.0, lambda: fired.append("a"))
        scheduler.pending[0]()

        assert fired == ["a"]
        assert not timer.pending

    def test_reschedule_drops_previous_callback(self):
        scheduler = ManualScheduler()
        timer = GenerationTimer(scheduler)
        fired = []

        first_generation = timer.schedule(1.0, lambda: fired.append("first"))
        second_generation = timer.schedule(1.0, lambda: fired.append("second"))
        for callback in scheduler.pending:
            callback()

        assert second_generation > first_generation
        assert fired == ["second"]

    def test_cancel_drops_callback(self):
        scheduler = ManualScheduler()
        timer = GenerationTimer(scheduler)
        fired = []

        timer.schedule(1.0, lambda: fired.append("x"))
        timer.cancel()
        scheduler.pending[0]()

        assert fired == []

    def test_default_scheduler_uses_running_loop(self):
        fired = []

        async def run():
            timer = GenerationTimer()
            timer.schedule(0, lambda: fired.append("loop"))
            await asyncio.sleep(0.01)

        asyncio.run(run())
        assert fired == ["loop"]

    def test_default_scheduler_falls_back_to_thread_timer(self):
        done = threading.Event()

        handle = default_scheduler(0, done.set)

        assert isinstance(handle, threading.Timer)
        assert done.wait(timeout=2)

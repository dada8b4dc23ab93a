# -*- coding: utf-8 -*-

from __future__ import annotations

import asyncio
import unittest

from fittrack.workouts.timer import Debouncer, RestTimer, WorkoutTimer


class TestWorkoutTimer(unittest.TestCase):
    def test_manual_ticks(self) -> None:
        timer = WorkoutTimer()
        seen = []
        timer.subscribe(lambda t: seen.append(t.time_remaining))

        timer.start(3)
        self.assertTrue(timer.is_running)
        self.assertEqual(timer.formatted_time, "0:03")
        timer.tick()
        timer.tick()
        self.assertEqual(timer.time_remaining, 1)
        self.assertAlmostEqual(timer.progress, 2 / 3)
        timer.tick()
        self.assertFalse(timer.is_running)
        self.assertEqual(timer.time_remaining, 0)
        self.assertIn(2, seen)

    def test_pause_and_resume(self) -> None:
        timer = RestTimer()
        timer.start(90)
        self.assertEqual(timer.formatted_time, "1:30")
        timer.pause()
        timer.tick()
        self.assertEqual(timer.time_remaining, 90)
        timer.resume()
        timer.tick()
        self.assertEqual(timer.time_remaining, 89)

    def test_stop_keeps_total_when_asked(self) -> None:
        timer = WorkoutTimer(persists_total_duration=True)
        timer.start(60)
        timer.stop()
        self.assertEqual(timer.total_duration, 60)
        plain = WorkoutTimer()
        plain.start(60)
        plain.stop()
        self.assertEqual(plain.total_duration, 0)

    def test_unsubscribe(self) -> None:
        timer = WorkoutTimer()
        calls = []
        unsubscribe = timer.subscribe(lambda t: calls.append(1))
        unsubscribe()
        timer.start(5)
        self.assertEqual(calls, [])

    def test_runs_on_event_loop(self) -> None:
        async def scenario() -> WorkoutTimer:
            timer = WorkoutTimer(interval=0.01)
            timer.start(2)
            await asyncio.sleep(0.2)
            return timer

        timer = asyncio.run(scenario())
        self.assertFalse(timer.is_running)
        self.assertEqual(timer.time_remaining, 0)


class TestDebouncer(unittest.TestCase):
    def test_only_last_action_runs(self) -> None:
        calls = []

        async def scenario() -> None:
            debouncer = Debouncer(0.05)
            debouncer.debounce(lambda: calls.append("a"))
            debouncer.debounce(lambda: calls.append("b"))
            self.assertTrue(debouncer.pending)
            await asyncio.sleep(0.15)
            self.assertFalse(debouncer.pending)

        asyncio.run(scenario())
        self.assertEqual(calls, ["b"])

    def test_cancel(self) -> None:
        calls = []

        async def scenario() -> None:
            debouncer = Debouncer(0.02)
            debouncer.debounce(lambda: calls.append("a"))
            debouncer.cancel()
            await asyncio.sleep(0.06)

        asyncio.run(scenario())
        self.assertEqual(calls, [])

    def test_cancel_stops_running_action(self) -> None:
        events = []

        async def slow_search() -> None:
            events.append("started")
            try:
                await asyncio.sleep(1)
                events.append("finished")
            except asyncio.CancelledError:
                events.append("cancelled")
                raise

        async def scenario() -> None:
            debouncer = Debouncer(0.01)
            debouncer.debounce(slow_search)
            await asyncio.sleep(0.05)
            self.assertFalse(debouncer.pending)
            self.assertTrue(debouncer.running)
            debouncer.cancel()
            await asyncio.sleep(0.01)
            self.assertFalse(debouncer.running)

        asyncio.run(scenario())
        self.assertEqual(events, ["started", "cancelled"])

    def test_new_query_replaces_running_action(self) -> None:
        events = []

        def search(name: str, seconds: float):
            async def run() -> None:
                await asyncio.sleep(seconds)
                events.append(name)

            return run

        async def scenario() -> None:
            debouncer = Debouncer(0.01)
            debouncer.debounce(search("old", 0.2))
            await asyncio.sleep(0.05)
            debouncer.debounce(search("new", 0.01))
            await asyncio.sleep(0.3)

        asyncio.run(scenario())
        self.assertEqual(events, ["new"])


if __name__ == "__main__":
    unittest.main()

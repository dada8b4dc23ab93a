# -*- coding: utf-8 -*-
"""Rest/exercise countdown timers and a small debouncer.

Both are driven by asyncio. Ticks are cosmetic: they fire roughly once per
interval and nothing else is ordered against them.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, List, Optional, Union

logger = logging.getLogger(__name__)

TimerListener = Callable[["WorkoutTimer"], None]


class WorkoutTimer:
    def __init__(self, *, persists_total_duration: bool = False, interval: float = 1.0) -> None:
        self.time_remaining = 0
        self.total_duration = 0
        self.is_running = False
        self.interval = interval
        self._persists_total_duration = persists_total_duration
        self._task: Optional[asyncio.Task] = None
        self._listeners: List[TimerListener] = []

    def subscribe(self, listener: TimerListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    @property
    def formatted_time(self) -> str:
        return f"{self.time_remaining // 60}:{self.time_remaining % 60:02d}"

    @property
    def progress(self) -> float:
        if self.total_duration <= 0:
            return 0.0
        return 1.0 - self.time_remaining / self.total_duration

    def start(self, duration: int) -> None:
        self.stop()
        self.total_duration = int(duration)
        self.time_remaining = int(duration)
        self.is_running = True
        self._schedule()
        self._notify()

    def pause(self) -> None:
        self._cancel()
        self.is_running = False
        self._notify()

    def resume(self) -> None:
        if self.time_remaining <= 0:
            return
        self.is_running = True
        self._schedule()
        self._notify()

    def stop(self) -> None:
        self._cancel()
        self.is_running = False
        self.time_remaining = 0
        if not self._persists_total_duration:
            self.total_duration = 0
        self._notify()

    def tick(self) -> None:
        """Advance one second; stops itself once the countdown is exhausted."""
        if not self.is_running:
            return
        if self.time_remaining > 0:
            self.time_remaining -= 1
            self._notify()
        if self.time_remaining <= 0:
            self.stop()

    async def run(self) -> None:
        while self.is_running:
            await asyncio.sleep(self.interval)
            self.tick()

    def _schedule(self) -> None:
        # Without a running loop the owner drives the timer through tick().
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return
        self._task = loop.create_task(self.run())

    def _cancel(self) -> None:
        if self._task is not None and not self._task.done():
            current = None
            try:
                current = asyncio.current_task()
            except RuntimeError:
                pass
            if self._task is not current:
                self._task.cancel()
        self._task = None


# Rest periods use the plain countdown.
RestTimer = WorkoutTimer


class Debouncer:
    """Runs only the last callback submitted within ``delay`` seconds."""

    def __init__(self, delay: float = 0.5) -> None:
        self.delay = delay
        self._pending: Optional[asyncio.TimerHandle] = None
        self._task: Optional[asyncio.Task] = None

    def debounce(self, action: Callable[[], Union[None, Awaitable[None]]], *, delay: Optional[float] = None) -> None:
        self.cancel()
        loop = asyncio.get_running_loop()
        self._pending = loop.call_later(self.delay if delay is None else delay, self._fire, action)

    def _fire(self, action: Callable[[], Union[None, Awaitable[None]]]) -> None:
        self._pending = None
        result = action()
        if asyncio.iscoroutine(result):
            self._task = asyncio.get_running_loop().create_task(result)
            self._task.add_done_callback(self._finished)

    def _finished(self, task: asyncio.Task) -> None:
        if self._task is task:
            self._task = None
        if not task.cancelled() and task.exception() is not None:
            logger.warning("debounced action failed: %s", task.exception())

    def cancel(self) -> None:
        """Drop the scheduled action and cancel one that is still running."""
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    @property
    def pending(self) -> bool:
        return self._pending is not None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

"""Deterministic timer and animation-frame scheduler."""

from __future__ import annotations

from dataclasses import dataclass
from heapq import heappop, heappush

from flingscroll.api.host import FrameCallback, TimerCallback


@dataclass(slots=True)
class _Task:
    task_id: int
    due_ms: float
    callback: TimerCallback
    cancelled: bool = False


class Scheduler:
    """Single-threaded scheduler owning a millisecond clock.

    Timers fire in due order. Frame callbacks requested before a frame run
    once in that frame; callbacks requested while a frame runs wait for the
    next one.
    """

    def __init__(self, *, start_ms: float = 0.0) -> None:
        self._now_ms = float(start_ms)
        self._next_task_id = 1
        self._tasks: dict[int, _Task] = {}
        self._queue: list[tuple[float, int]] = []
        self._next_frame_id = 1
        self._frame_callbacks: dict[int, FrameCallback] = {}
        self._frame_index = 0

    @property
    def now_ms(self) -> float:
        return self._now_ms

    @property
    def frame_index(self) -> int:
        return self._frame_index

    @property
    def queued_task_count(self) -> int:
        """Return count of active queued timers."""
        return sum(1 for task in self._tasks.values() if not task.cancelled)

    @property
    def pending_frame_count(self) -> int:
        return len(self._frame_callbacks)

    def call_later(self, delay_ms: float, callback: TimerCallback) -> int:
        """Schedule a one-shot callback after delay."""
        if delay_ms < 0.0:
            raise ValueError("delay_ms must be >= 0")
        task_id = self._next_task_id
        self._next_task_id += 1
        due_ms = self._now_ms + delay_ms
        self._tasks[task_id] = _Task(task_id=task_id, due_ms=due_ms, callback=callback)
        heappush(self._queue, (due_ms, task_id))
        return task_id

    def cancel(self, task_id: int) -> None:
        """Cancel a scheduled timer if it exists."""
        task = self._tasks.get(task_id)
        if task is not None:
            task.cancelled = True

    def request_frame(self, callback: FrameCallback) -> int:
        """Register callback for the next frame."""
        frame_id = self._next_frame_id
        self._next_frame_id += 1
        self._frame_callbacks[frame_id] = callback
        return frame_id

    def cancel_frame(self, frame_id: int) -> None:
        """Drop a pending frame callback if present."""
        self._frame_callbacks.pop(frame_id, None)

    def advance(self, delta_ms: float) -> int:
        """Advance the clock, run due timers, then run one frame.

        Returns the number of timers and frame callbacks executed.
        """
        if delta_ms < 0.0:
            raise ValueError("delta_ms must be >= 0")
        target_ms = self._now_ms + delta_ms
        executed = self.run_due(target_ms)
        executed += self.run_frame()
        return executed

    def run_due(self, now_ms: float) -> int:
        """Run timers due at or before `now_ms`."""
        if now_ms < self._now_ms:
            raise ValueError("now_ms cannot move backwards")
        executed = 0
        while self._queue and self._queue[0][0] <= now_ms:
            due_ms, task_id = heappop(self._queue)
            task = self._tasks.pop(task_id, None)
            if task is None or task.cancelled:
                continue
            # Timers observe their own due time as "now".
            self._now_ms = max(self._now_ms, due_ms)
            task.callback()
            executed += 1
        self._now_ms = now_ms
        return executed

    def run_frame(self) -> int:
        """Run callbacks registered before this frame with the current time."""
        self._frame_index += 1
        if not self._frame_callbacks:
            return 0
        callbacks = self._frame_callbacks
        self._frame_callbacks = {}
        for callback in callbacks.values():
            callback(self._now_ms)
        return len(callbacks)

    def run_until_idle(self, *, frame_ms: float = 16.0, max_frames: int = 10_000) -> int:
        """Step frames until no timers or frame callbacks remain.

        Returns number of frames stepped.
        """
        if frame_ms <= 0.0:
            raise ValueError("frame_ms must be > 0")
        frames = 0
        while (self.queued_task_count or self._frame_callbacks) and frames < max_frames:
            self.advance(frame_ms)
            frames += 1
        return frames

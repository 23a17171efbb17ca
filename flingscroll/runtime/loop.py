"""Real-time frame loop driving the deterministic scheduler."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from flingscroll.runtime.scheduler import Scheduler
from flingscroll.runtime.time import NOMINAL_FRAME_MS, FrameClock

_LOG = logging.getLogger(__name__)


class FrameLoop:
    """Advance a `Scheduler` once per display frame from a monotonic clock."""

    def __init__(
        self,
        scheduler: Scheduler,
        *,
        clock: FrameClock | None = None,
        frame_interval_ms: float = NOMINAL_FRAME_MS,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if frame_interval_ms <= 0.0:
            raise ValueError("frame_interval_ms must be > 0")
        self._scheduler = scheduler
        self._clock = clock or FrameClock()
        self._frame_interval_ms = frame_interval_ms
        self._sleep = sleep
        self._frame_index = 0

    def step(self) -> int:
        """Run one frame; return callbacks executed."""
        context = self._clock.next(self._frame_index)
        self._frame_index += 1
        return self._scheduler.advance(context.delta_ms)

    def run(
        self,
        *,
        should_continue: Callable[[], bool],
        max_frames: int | None = None,
    ) -> int:
        """Loop until `should_continue` is false; return frames run."""
        frames = 0
        while should_continue():
            if max_frames is not None and frames >= max_frames:
                break
            self.step()
            frames += 1
            self._sleep(self._frame_interval_ms / 1000.0)
        _LOG.debug("frame_loop_stopped frames=%d", frames)
        return frames

"""Friction-decayed momentum animation driven by display frames."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from flingscroll.api.events import EventBus, FlingFinished, FlingStarted
from flingscroll.api.host import HostScheduler
from flingscroll.runtime.errors import RECOVERABLE_RUNTIME_ERRORS, log_recoverable
from flingscroll.runtime.time import MAX_FRAME_MS, NOMINAL_FRAME_MS, normalize_frame_delta

_LOG = logging.getLogger(__name__)


class DisplacementSink(Protocol):
    def apply(self, target: object, dx: float, dy: float) -> bool: ...


class FlingPhase(str, Enum):
    IDLE = "IDLE"
    RUNNING = "RUNNING"


@dataclass(slots=True)
class FlingState:
    """Mutable state of the single live fling."""

    velocity_x: float
    velocity_y: float
    target: object
    last_frame_time_ms: float
    remainder_x: float = 0.0
    remainder_y: float = 0.0
    active: bool = True
    frame_count: int = 0


class FlingAnimator:
    """Idle/Running state machine continuing a scroll after input stops."""

    def __init__(
        self,
        sink: DisplacementSink,
        scheduler: HostScheduler,
        *,
        friction: float = 0.95,
        threshold: float = 1.0,
        stop_speed: float = 0.05,
        nominal_frame_ms: float = NOMINAL_FRAME_MS,
        max_frame_ms: float = MAX_FRAME_MS,
        events: EventBus | None = None,
    ) -> None:
        self._sink = sink
        self._scheduler = scheduler
        self._friction = 0.95
        self._threshold = 1.0
        self.configure(friction=friction, threshold=threshold)
        if stop_speed <= 0.0:
            raise ValueError("stop_speed must be > 0")
        self._stop_speed = float(stop_speed)
        self._nominal_frame_ms = float(nominal_frame_ms)
        self._max_frame_ms = float(max_frame_ms)
        self._events = events
        self._state: FlingState | None = None
        self._frame_id: int | None = None

    @property
    def phase(self) -> FlingPhase:
        if self._state is not None and self._state.active:
            return FlingPhase.RUNNING
        return FlingPhase.IDLE

    @property
    def is_running(self) -> bool:
        return self.phase is FlingPhase.RUNNING

    @property
    def state(self) -> FlingState | None:
        return self._state

    @property
    def friction(self) -> float:
        return self._friction

    @property
    def threshold(self) -> float:
        return self._threshold

    def configure(self, *, friction: float | None = None, threshold: float | None = None) -> None:
        """Update decay parameters; a running fling picks them up next frame."""
        if friction is not None:
            if not 0.0 < friction < 1.0:
                raise ValueError("friction must be in (0, 1)")
            self._friction = float(friction)
        if threshold is not None:
            if threshold < 0.0:
                raise ValueError("threshold must be >= 0")
            self._threshold = float(threshold)

    def start(self, target: object, vx: float, vy: float, now_ms: float) -> bool:
        """Enter Running when the speed clears the threshold."""
        speed = math.hypot(vx, vy)
        if not math.isfinite(speed) or speed < self._threshold:
            _LOG.debug("fling_rejected speed=%.4f threshold=%.4f", speed, self._threshold)
            return False
        self.stop()
        self._state = FlingState(
            velocity_x=float(vx),
            velocity_y=float(vy),
            target=target,
            last_frame_time_ms=float(now_ms),
        )
        self._frame_id = self._scheduler.request_frame(self._on_frame)
        _LOG.debug("fling_started vx=%.4f vy=%.4f", vx, vy)
        self._publish(
            FlingStarted(velocity_x=float(vx), velocity_y=float(vy), started_at_ms=now_ms)
        )
        return True

    def stop(self) -> None:
        """Force Idle immediately."""
        if self.is_running:
            self._finish("preempted")

    def _on_frame(self, frame_time_ms: float) -> None:
        state = self._state
        if state is None or not state.active:
            return
        self._frame_id = None
        elapsed_ms = normalize_frame_delta(
            frame_time_ms - state.last_frame_time_ms,
            nominal_ms=self._nominal_frame_ms,
            max_ms=self._max_frame_ms,
        )
        state.last_frame_time_ms = frame_time_ms
        state.frame_count += 1

        decay = self._friction ** (elapsed_ms / self._nominal_frame_ms)
        state.velocity_x *= decay
        state.velocity_y *= decay
        if abs(state.velocity_x) < self._stop_speed and abs(state.velocity_y) < self._stop_speed:
            self._finish("decayed")
            return

        exact_x = state.velocity_x * elapsed_ms + state.remainder_x
        exact_y = state.velocity_y * elapsed_ms + state.remainder_y
        step_x = math.trunc(exact_x)
        step_y = math.trunc(exact_y)
        state.remainder_x = exact_x - step_x
        state.remainder_y = exact_y - step_y
        if step_x or step_y:
            try:
                self._sink.apply(state.target, step_x, step_y)
            except RECOVERABLE_RUNTIME_ERRORS:
                log_recoverable(_LOG, "fling_dispatch_failed", level=logging.WARNING)
                self._finish("failed")
                return
        self._frame_id = self._scheduler.request_frame(self._on_frame)

    def _finish(self, reason: str) -> None:
        state = self._state
        if state is None:
            return
        state.active = False
        if self._frame_id is not None:
            self._scheduler.cancel_frame(self._frame_id)
            self._frame_id = None
        _LOG.debug("fling_finished reason=%s frames=%d", reason, state.frame_count)
        self._publish(FlingFinished(reason=reason, frame_count=state.frame_count))

    def _publish(self, event: object) -> None:
        if self._events is not None:
            self._events.publish(event)

"""Frame timing primitives."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from time import monotonic

NOMINAL_FRAME_MS = 16.666
MAX_FRAME_MS = 100.0


@dataclass(frozen=True, slots=True)
class TimeContext:
    """Per-frame timing context."""

    frame_index: int
    delta_ms: float
    elapsed_ms: float


class FrameClock:
    """Monotonic millisecond frame clock with bounded frame deltas."""

    def __init__(
        self,
        *,
        time_source: Callable[[], float] | None = None,
        max_delta_ms: float = 250.0,
    ) -> None:
        self._time_source = time_source or monotonic
        self._max_delta_ms = max_delta_ms
        self._last_seconds: float | None = None
        self._elapsed_ms = 0.0

    def next(self, frame_index: int) -> TimeContext:
        """Advance the clock and return the next frame context."""
        now = self._time_source()
        if self._last_seconds is None:
            delta = 0.0
        else:
            raw_delta = (now - self._last_seconds) * 1000.0
            non_negative_delta = max(0.0, raw_delta)
            delta = min(non_negative_delta, self._max_delta_ms)
        self._last_seconds = now
        self._elapsed_ms += delta
        return TimeContext(
            frame_index=frame_index,
            delta_ms=delta,
            elapsed_ms=self._elapsed_ms,
        )


def normalize_frame_delta(
    elapsed_ms: float,
    *,
    nominal_ms: float = NOMINAL_FRAME_MS,
    max_ms: float = MAX_FRAME_MS,
) -> float:
    """Replace stalled or non-positive frame gaps with one nominal frame.

    A gap above `max_ms` usually means the host was backgrounded; integrating
    it would jump the content by the whole stall.
    """
    if elapsed_ms > max_ms or elapsed_ms <= 0.0:
        return nominal_ms
    return elapsed_ms


__all__ = ["FrameClock", "MAX_FRAME_MS", "NOMINAL_FRAME_MS", "TimeContext", "normalize_frame_delta"]

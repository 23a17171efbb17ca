"""Average scroll velocity over the sample window."""

from __future__ import annotations

import math
from dataclasses import dataclass

from flingscroll.scroll.history import SampleHistory


@dataclass(frozen=True, slots=True)
class Velocity:
    """Velocity vector in px/ms."""

    vx: float
    vy: float

    @property
    def speed(self) -> float:
        return math.hypot(self.vx, self.vy)


class VelocityEstimator:
    """Convert a sample window into an average velocity."""

    def estimate(self, history: SampleHistory) -> Velocity | None:
        """Return px/ms velocity, or None when it is undefined or not finite.

        The oldest sample only anchors the start time. Its displacement
        happened before the measured interval, so the sum starts at the
        second sample.
        """
        samples = history.samples()
        if len(samples) < 2:
            return None
        elapsed_ms = samples[-1].timestamp_ms - samples[0].timestamp_ms
        if elapsed_ms <= 0.0:
            return None
        sum_x = sum(sample.dx for sample in samples[1:])
        sum_y = sum(sample.dy for sample in samples[1:])
        vx = sum_x / elapsed_ms
        vy = sum_y / elapsed_ms
        if not (math.isfinite(vx) and math.isfinite(vy)):
            return None
        return Velocity(vx=vx, vy=vy)

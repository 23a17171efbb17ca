"""Least-squares detection of a trailing-off hand motion."""

from __future__ import annotations

import logging
import math

import numpy as np

from flingscroll.scroll.history import SampleHistory

_LOG = logging.getLogger(__name__)

MIN_SPEED_POINTS = 3


def speed_points(history: SampleHistory) -> tuple[np.ndarray, np.ndarray]:
    """Return (time since window start, instantaneous speed) per sample.

    A sample's speed is its displacement over the gap to the preceding
    sample; the oldest sample borrows the gap to the following one. Samples
    with a zero gap carry no rate and are skipped.
    """
    samples = history.samples()
    if len(samples) < 2:
        return np.empty(0), np.empty(0)
    start_ms = samples[0].timestamp_ms
    times: list[float] = []
    speeds: list[float] = []
    for index, sample in enumerate(samples):
        if index == 0:
            gap_ms = samples[1].timestamp_ms - sample.timestamp_ms
        else:
            gap_ms = sample.timestamp_ms - samples[index - 1].timestamp_ms
        if gap_ms <= 0.0:
            continue
        times.append(sample.timestamp_ms - start_ms)
        speeds.append(math.hypot(sample.dx, sample.dy) / gap_ms)
    return np.asarray(times, dtype=np.float64), np.asarray(speeds, dtype=np.float64)


def fit_slope(times: np.ndarray, values: np.ndarray) -> float | None:
    """Ordinary least-squares slope of values over times."""
    if times.size < 2:
        return None
    centered_t = times - times.mean()
    denominator = float(np.dot(centered_t, centered_t))
    if denominator == 0.0:
        return None
    return float(np.dot(centered_t, values - values.mean())) / denominator


class DecelerationClassifier:
    """Suppress flings while the hand is visibly slowing at release."""

    def __init__(self, *, slope_tolerance: float = -0.01) -> None:
        self._slope_tolerance = float(slope_tolerance)

    def is_decelerating(self, history: SampleHistory) -> bool:
        times, speeds = speed_points(history)
        if speeds.size < MIN_SPEED_POINTS:
            return False
        slope = fit_slope(times, speeds)
        if slope is None:
            return False
        mean_speed = float(speeds.mean())
        final_speed = float(speeds[-1])
        decelerating = slope < self._slope_tolerance and final_speed < mean_speed
        _LOG.debug(
            "deceleration_check points=%d slope=%.5f final=%.4f mean=%.4f result=%s",
            speeds.size,
            slope,
            final_speed,
            mean_speed,
            decelerating,
        )
        return decelerating

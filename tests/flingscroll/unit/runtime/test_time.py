from __future__ import annotations

import pytest

from flingscroll.runtime.time import (
    MAX_FRAME_MS,
    NOMINAL_FRAME_MS,
    FrameClock,
    normalize_frame_delta,
)


def test_frame_clock_reports_millisecond_deltas() -> None:
    values = iter([1.0, 1.016, 1.032])
    clock = FrameClock(time_source=lambda: next(values))

    first = clock.next(0)
    second = clock.next(1)
    third = clock.next(2)

    assert first.delta_ms == 0.0
    assert second.delta_ms == pytest.approx(16.0)
    assert third.elapsed_ms == pytest.approx(32.0)
    assert third.frame_index == 2


def test_frame_clock_clamps_large_and_negative_gaps() -> None:
    values = iter([0.0, 2.0, 1.0])
    clock = FrameClock(time_source=lambda: next(values), max_delta_ms=100.0)

    clock.next(0)
    assert clock.next(1).delta_ms == 100.0
    assert clock.next(2).delta_ms == 0.0


@pytest.mark.parametrize(
    ("elapsed", "expected"),
    [
        (16.0, 16.0),
        (MAX_FRAME_MS, MAX_FRAME_MS),
        (MAX_FRAME_MS + 0.1, NOMINAL_FRAME_MS),
        (0.0, NOMINAL_FRAME_MS),
        (-5.0, NOMINAL_FRAME_MS),
    ],
)
def test_normalize_frame_delta(elapsed: float, expected: float) -> None:
    assert normalize_frame_delta(elapsed) == expected


def test_normalize_frame_delta_uses_supplied_bounds() -> None:
    assert normalize_frame_delta(40.0, nominal_ms=10.0, max_ms=30.0) == 10.0

from __future__ import annotations

import pytest

from flingscroll.scroll.history import InputSample, SampleHistory


def _sample(t: float, dy: float = 10.0) -> InputSample:
    return InputSample(dx=0.0, dy=dy, timestamp_ms=t, target="viewport")


def test_history_keeps_samples_inside_window() -> None:
    history = SampleHistory(window_ms=150.0)
    for t in (0.0, 50.0, 100.0, 149.0):
        history.push(_sample(t))

    assert len(history) == 4
    assert history.oldest is not None and history.oldest.timestamp_ms == 0.0
    assert history.span_ms == 149.0


def test_history_prunes_relative_to_inserted_sample() -> None:
    history = SampleHistory(window_ms=150.0)
    for t in (0.0, 40.0, 100.0):
        history.push(_sample(t))

    history.push(_sample(190.0))

    assert [sample.timestamp_ms for sample in history] == [100.0, 190.0]


def test_history_drops_sample_exactly_one_window_old() -> None:
    history = SampleHistory(window_ms=150.0)
    history.push(_sample(0.0))
    history.push(_sample(150.0))

    assert [sample.timestamp_ms for sample in history.samples()] == [150.0]
    assert history.span_ms == 0.0


def test_history_rejects_out_of_order_timestamps() -> None:
    history = SampleHistory()
    history.push(_sample(20.0))
    history.push(_sample(20.0))

    with pytest.raises(ValueError):
        history.push(_sample(19.0))
    assert len(history) == 2


def test_history_clear_and_empty_accessors() -> None:
    history = SampleHistory()
    history.push(_sample(0.0))
    history.clear()

    assert len(history) == 0
    assert history.oldest is None
    assert history.newest is None
    assert history.samples() == ()


def test_history_rejects_non_positive_window() -> None:
    with pytest.raises(ValueError):
        SampleHistory(window_ms=0.0)

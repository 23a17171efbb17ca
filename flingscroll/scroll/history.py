"""Time-windowed buffer of recent wheel samples."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterator
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class InputSample:
    """One qualifying wheel event, already scaled by the scroll factor."""

    dx: float
    dy: float
    timestamp_ms: float
    target: object


class SampleHistory:
    """Insertion-ordered samples younger than `window_ms`.

    Pruning happens on insert, relative to the inserted sample's timestamp.
    """

    def __init__(self, *, window_ms: float = 150.0) -> None:
        if window_ms <= 0.0:
            raise ValueError("window_ms must be > 0")
        self._window_ms = float(window_ms)
        self._samples: deque[InputSample] = deque()

    @property
    def window_ms(self) -> float:
        return self._window_ms

    def push(self, sample: InputSample) -> None:
        """Append sample and drop entries that fell out of the window."""
        if self._samples and sample.timestamp_ms < self._samples[-1].timestamp_ms:
            raise ValueError("sample timestamps must be non-decreasing")
        self._samples.append(sample)
        now_ms = sample.timestamp_ms
        while self._samples and now_ms - self._samples[0].timestamp_ms >= self._window_ms:
            self._samples.popleft()

    def clear(self) -> None:
        self._samples.clear()

    def samples(self) -> tuple[InputSample, ...]:
        return tuple(self._samples)

    @property
    def oldest(self) -> InputSample | None:
        return self._samples[0] if self._samples else None

    @property
    def newest(self) -> InputSample | None:
        return self._samples[-1] if self._samples else None

    @property
    def span_ms(self) -> float:
        if len(self._samples) < 2:
            return 0.0
        return self._samples[-1].timestamp_ms - self._samples[0].timestamp_ms

    def __len__(self) -> int:
        return len(self._samples)

    def __iter__(self) -> Iterator[InputSample]:
        return iter(tuple(self._samples))

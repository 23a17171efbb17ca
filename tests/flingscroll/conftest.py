from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator

import pytest

from flingscroll.runtime.config import RuntimeConfig, set_runtime_config
from flingscroll.runtime.scheduler import Scheduler
from flingscroll.scroll.history import InputSample, SampleHistory
from flingscroll.sdk.virtual_dom import VirtualDocument, VirtualNode, build_page


class RecordingSink:
    """Displacement sink that records every apply call."""

    def __init__(self) -> None:
        self.calls: list[tuple[object, float, float]] = []
        self.fail_with: BaseException | None = None

    def apply(self, target: object, dx: float, dy: float) -> bool:
        if self.fail_with is not None:
            raise self.fail_with
        self.calls.append((target, dx, dy))
        return True

    def total(self) -> tuple[float, float]:
        return (sum(call[1] for call in self.calls), sum(call[2] for call in self.calls))


@pytest.fixture
def scheduler() -> Scheduler:
    return Scheduler()


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def page() -> VirtualDocument:
    return build_page(content_height=20000.0, viewport_height=800.0)


@pytest.fixture
def scroll_panel(page: VirtualDocument) -> VirtualNode:
    """Inner `overflow-y: auto` panel inside the page body."""
    body = page.body
    assert body is not None
    panel = body.append(
        VirtualNode(
            "div",
            scroll_width=1200.0,
            scroll_height=3000.0,
            client_width=1200.0,
            client_height=300.0,
            overflow_y="auto",
        )
    )
    return panel


@pytest.fixture
def make_history() -> Callable[..., SampleHistory]:
    def _make(
        points: Iterable[tuple[float, float, float]],
        *,
        window_ms: float = 150.0,
        target: object = "target",
    ) -> SampleHistory:
        history = SampleHistory(window_ms=window_ms)
        for dx, dy, t in points:
            history.push(InputSample(dx=dx, dy=dy, timestamp_ms=t, target=target))
        return history

    return _make


@pytest.fixture(autouse=True)
def default_runtime_config() -> Iterator[RuntimeConfig]:
    """Pin defaults so host environment variables cannot leak into engine tuning."""
    config = set_runtime_config(RuntimeConfig())
    yield config
    set_runtime_config(RuntimeConfig())

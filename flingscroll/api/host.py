"""Host boundary contracts: scrollable nodes, documents and scheduling."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Literal, Protocol

Axis = Literal["x", "y"]
FrameCallback = Callable[[float], None]
TimerCallback = Callable[[], None]

# Per-call behavior that bypasses host smooth-scroll styling.
NON_SMOOTH_BEHAVIOR = "instant"


class ScrollNode(Protocol):
    """Element-like node that may own a scrollable region."""

    tag_name: str

    @property
    def parent(self) -> "ScrollNode | None": ...

    @property
    def children(self) -> Sequence["ScrollNode"]: ...

    @property
    def scroll_width(self) -> float: ...

    @property
    def scroll_height(self) -> float: ...

    @property
    def client_width(self) -> float: ...

    @property
    def client_height(self) -> float: ...

    def scroll_by(self, dx: float, dy: float, *, behavior: str) -> None:
        """Scroll the region by a displacement."""


class ScrollViewport(Protocol):
    """Window-like viewport the scroll root is driven through."""

    def scroll_by(self, dx: float, dy: float, *, behavior: str) -> None:
        """Scroll the document viewport by a displacement."""


class ScrollDocument(Protocol):
    """Document-level host queries used by resolution and dispatch."""

    host_name: str
    is_embedded_frame: bool

    @property
    def root(self) -> ScrollNode: ...

    @property
    def body(self) -> ScrollNode | None: ...

    @property
    def scrolling_element(self) -> ScrollNode | None: ...

    @property
    def viewport(self) -> ScrollViewport: ...

    @property
    def fullscreen_element(self) -> ScrollNode | None: ...

    def computed_overflow(self, node: ScrollNode, axis: Axis) -> str:
        """Return computed `overflow-x`/`overflow-y`.

        May raise `CrossBoundaryAccessDenied` for restricted nodes.
        """

    def frame_for_source(self, source: object) -> ScrollNode | None:
        """Return the embedded frame element whose content posted a message."""

    def set_scroll_behavior(self, node: ScrollNode, value: str) -> None:
        """Override a node's `scroll-behavior` style."""


class HostScheduler(Protocol):
    """Single-threaded timer and animation-frame primitives."""

    @property
    def now_ms(self) -> float: ...

    def call_later(self, delay_ms: float, callback: TimerCallback) -> int:
        """Schedule a one-shot callback after delay."""

    def cancel(self, task_id: int) -> None:
        """Cancel a scheduled timer if it exists."""

    def request_frame(self, callback: FrameCallback) -> int:
        """Run callback with the frame timestamp on the next display frame."""

    def cancel_frame(self, frame_id: int) -> None:
        """Cancel a requested frame callback if it has not run."""


__all__ = [
    "Axis",
    "FrameCallback",
    "HostScheduler",
    "NON_SMOOTH_BEHAVIOR",
    "ScrollDocument",
    "ScrollNode",
    "ScrollViewport",
    "TimerCallback",
]

"""In-memory document tree implementing the host scroll protocols."""

from __future__ import annotations

from collections.abc import Iterable

from flingscroll.api.host import Axis
from flingscroll.runtime.errors import CrossBoundaryAccessDenied


class VirtualNode:
    """Element with scroll geometry, computed overflow and a scroll offset."""

    def __init__(
        self,
        tag_name: str,
        *,
        scroll_width: float = 0.0,
        scroll_height: float = 0.0,
        client_width: float = 0.0,
        client_height: float = 0.0,
        overflow_x: str = "visible",
        overflow_y: str = "visible",
        children: Iterable["VirtualNode"] = (),
    ) -> None:
        self.tag_name = tag_name
        self.scroll_width = float(scroll_width)
        self.scroll_height = float(scroll_height)
        self.client_width = float(client_width)
        self.client_height = float(client_height)
        self.overflow_x = overflow_x
        self.overflow_y = overflow_y
        self.scroll_left = 0.0
        self.scroll_top = 0.0
        self.style: dict[str, str] = {}
        self.scroll_calls: list[tuple[float, float, str]] = []
        self._parent: VirtualNode | None = None
        self._children: list[VirtualNode] = []
        for child in children:
            self.append(child)

    @property
    def parent(self) -> "VirtualNode | None":
        return self._parent

    @property
    def children(self) -> tuple["VirtualNode", ...]:
        return tuple(self._children)

    def append(self, child: "VirtualNode") -> "VirtualNode":
        if child._parent is not None:
            child._parent._children.remove(child)
        child._parent = self
        self._children.append(child)
        return child

    def scroll_by(self, dx: float, dy: float, *, behavior: str) -> None:
        """Record the call, then move the offset within its scrollable range."""
        self.scroll_calls.append((dx, dy, behavior))
        max_left = max(0.0, self.scroll_width - self.client_width)
        max_top = max(0.0, self.scroll_height - self.client_height)
        self.scroll_left = min(max_left, max(0.0, self.scroll_left + dx))
        self.scroll_top = min(max_top, max(0.0, self.scroll_top + dy))

    def total_scrolled(self) -> tuple[float, float]:
        """Sum of requested displacements, ignoring clamping."""
        return (
            sum(call[0] for call in self.scroll_calls),
            sum(call[1] for call in self.scroll_calls),
        )

    def __repr__(self) -> str:
        return f"VirtualNode({self.tag_name!r})"


class VirtualViewport:
    """Window stand-in; scrolling it scrolls the document's scroll root."""

    def __init__(self, document: "VirtualDocument") -> None:
        self._document = document
        self.scroll_calls: list[tuple[float, float, str]] = []

    def scroll_by(self, dx: float, dy: float, *, behavior: str) -> None:
        self.scroll_calls.append((dx, dy, behavior))
        root = self._document.scrolling_element or self._document.body
        if root is not None:
            root.scroll_by(dx, dy, behavior=behavior)

    def __repr__(self) -> str:
        return "VirtualViewport()"


class VirtualDocument:
    """Document queries over a `VirtualNode` tree."""

    def __init__(
        self,
        root: VirtualNode,
        *,
        body: VirtualNode | None = None,
        host_name: str = "",
        is_embedded_frame: bool = False,
        legacy_scrolling_element: bool = False,
        restricted: Iterable[VirtualNode] = (),
    ) -> None:
        self._root = root
        self._body = body
        self.host_name = host_name
        self.is_embedded_frame = is_embedded_frame
        # Quirks-mode documents expose no scrolling element.
        self._scrolling_element = None if legacy_scrolling_element else root
        self._viewport = VirtualViewport(self)
        self._restricted = {id(node) for node in restricted}
        self._frames: dict[int, tuple[object, VirtualNode]] = {}
        self.fullscreen_element: VirtualNode | None = None

    @property
    def root(self) -> VirtualNode:
        return self._root

    @property
    def body(self) -> VirtualNode | None:
        return self._body

    @property
    def scrolling_element(self) -> VirtualNode | None:
        return self._scrolling_element

    @property
    def viewport(self) -> VirtualViewport:
        return self._viewport

    def restrict(self, node: VirtualNode) -> None:
        """Make computed-style access on node fail like a cross-origin frame."""
        self._restricted.add(id(node))

    def computed_overflow(self, node: VirtualNode, axis: Axis) -> str:
        if id(node) in self._restricted:
            raise CrossBoundaryAccessDenied(f"computed style blocked for {node!r}")
        return node.overflow_x if axis == "x" else node.overflow_y

    def register_frame(self, source: object, frame: VirtualNode) -> None:
        """Associate a frame element with the message source of its content."""
        self._frames[id(source)] = (source, frame)

    def frame_for_source(self, source: object) -> VirtualNode | None:
        entry = self._frames.get(id(source))
        return None if entry is None else entry[1]

    def set_scroll_behavior(self, node: VirtualNode, value: str) -> None:
        node.style["scroll-behavior"] = value


def build_page(
    *,
    content_height: float = 5000.0,
    viewport_height: float = 800.0,
    width: float = 1200.0,
    host_name: str = "",
    root_overflow: str = "visible",
    body_overflow: str = "visible",
) -> VirtualDocument:
    """Return a conventional `<html><body>` page taller than the viewport."""
    root = VirtualNode(
        "html",
        scroll_width=width,
        scroll_height=content_height,
        client_width=width,
        client_height=viewport_height,
        overflow_x=root_overflow,
        overflow_y=root_overflow,
    )
    body = root.append(
        VirtualNode(
            "body",
            scroll_width=width,
            scroll_height=content_height,
            client_width=width,
            client_height=content_height,
            overflow_x=body_overflow,
            overflow_y=body_overflow,
        )
    )
    return VirtualDocument(root, body=body, host_name=host_name)


__all__ = ["VirtualDocument", "VirtualNode", "VirtualViewport", "build_page"]

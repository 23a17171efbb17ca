"""Scrollable-ancestor resolution for wheel events."""

from __future__ import annotations

import logging

from flingscroll.api.host import Axis, ScrollDocument, ScrollNode
from flingscroll.runtime.errors import RECOVERABLE_RUNTIME_ERRORS, log_recoverable

_LOG = logging.getLogger(__name__)

_SCROLLABLE_OVERFLOW = frozenset({"auto", "scroll"})


class ScrollTargetResolver:
    """Find the nearest ancestor that actually scrolls on the wanted axis.

    Two tiers apply. A node whose scroll extent matches the document root's
    is treated as the page itself and resolves to the document scroll root,
    because layouts disagree on whether `<html>` or `<body>` reports the
    overflow. Any other node qualifies when its content overflows its box and
    its computed overflow is `auto` or `scroll`.
    """

    def __init__(
        self,
        document: ScrollDocument,
        *,
        overflow_tolerance_px: float = 10.0,
        max_depth: int = 4096,
    ) -> None:
        if max_depth <= 0:
            raise ValueError("max_depth must be > 0")
        self._document = document
        self._overflow_tolerance_px = float(overflow_tolerance_px)
        self._max_depth = int(max_depth)

    def scroll_root(self) -> ScrollNode | None:
        document = self._document
        return document.scrolling_element or document.body

    def resolve(self, origin: ScrollNode | None, wants_x: bool, wants_y: bool) -> ScrollNode | None:
        """Return the scroll target for an event at `origin`, or None."""
        horizontal = wants_x and not wants_y
        axis: Axis = "x" if horizontal else "y"
        document = self._document
        root = document.root
        root_extent = self._scroll_extent(root, horizontal)

        visited: set[int] = set()
        node = origin
        depth = 0
        while node is not None and depth < self._max_depth:
            if id(node) in visited:
                _LOG.warning("resolve_cycle_detected node=%r", node)
                return None
            visited.add(id(node))
            depth += 1

            if self._scroll_extent(node, horizontal) == root_extent:
                if self._accepts_root(axis, horizontal):
                    return self.scroll_root()
            elif self._content_overflows(node, horizontal):
                if self._overflow_scrollable(node, axis):
                    return node
            node = node.parent
        return None

    def _accepts_root(self, axis: Axis, horizontal: bool) -> bool:
        document = self._document
        root = document.root
        if document.is_embedded_frame:
            # Inside frames only the literal content test is trusted.
            return self._content_overflows(root, horizontal)
        body = document.body
        top_not_hidden = self._overflow_not_hidden(root, axis) and (
            body is None or self._overflow_not_hidden(body, axis)
        )
        return top_not_hidden or self._overflow_scrollable(root, axis)

    def _content_overflows(self, node: ScrollNode, horizontal: bool) -> bool:
        client = node.client_width if horizontal else node.client_height
        return client + self._overflow_tolerance_px < self._scroll_extent(node, horizontal)

    def _overflow_not_hidden(self, node: ScrollNode, axis: Axis) -> bool:
        overflow = self._computed_overflow(node, axis)
        return overflow is not None and overflow != "hidden"

    def _overflow_scrollable(self, node: ScrollNode, axis: Axis) -> bool:
        return self._computed_overflow(node, axis) in _SCROLLABLE_OVERFLOW

    def _computed_overflow(self, node: ScrollNode, axis: Axis) -> str | None:
        try:
            return self._document.computed_overflow(node, axis).strip().lower()
        except RECOVERABLE_RUNTIME_ERRORS:
            log_recoverable(_LOG, f"computed_style_unavailable node={node!r} axis={axis}")
            return None

    @staticmethod
    def _scroll_extent(node: ScrollNode, horizontal: bool) -> float:
        return node.scroll_width if horizontal else node.scroll_height

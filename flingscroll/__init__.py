"""Scroll-speed override and momentum scrolling engine."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from flingscroll.api.host import HostScheduler, ScrollDocument
    from flingscroll.scroll.engine import ScrollEngine


def create_engine(document: "ScrollDocument", scheduler: "HostScheduler") -> "ScrollEngine":
    """Create and attach an engine with default settings."""
    from flingscroll.api.engine import create_scroll_engine

    return create_scroll_engine(document, scheduler)


__all__ = ["create_engine"]

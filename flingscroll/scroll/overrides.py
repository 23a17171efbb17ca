"""Host-keyed redirection of the generically resolved scroll target."""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping

from flingscroll.api.host import ScrollDocument, ScrollNode

# Receives the document and the resolved target; returns a replacement target
# or None to keep the resolved one.
ScrollOverride = Callable[[ScrollDocument, object], object | None]


def find_descendant(start: object, tag_name: str) -> ScrollNode | None:
    """Depth-first search below `start` for the first node with `tag_name`."""
    wanted = tag_name.lower()
    stack = list(reversed(tuple(getattr(start, "children", ()))))
    while stack:
        node = stack.pop()
        if node.tag_name.lower() == wanted:
            return node
        stack.extend(reversed(tuple(node.children)))
    return None


def fullscreen_app_container(document: ScrollDocument, target: object) -> object | None:
    """While fullscreen, scroll the app shell instead of the page."""
    if document.fullscreen_element is None:
        return None
    # The viewport has no children; search from the document root instead.
    start = target if hasattr(target, "children") else document.root
    return find_descendant(start, "ytd-app")


def real_scroll_root(document: ScrollDocument, target: object) -> object | None:
    """Always drive the document's scrolling element."""
    _ = target
    return document.scrolling_element


class HostOverrideTable:
    """Immutable host name → override strategy lookup."""

    def __init__(self, overrides: Mapping[str, ScrollOverride] | None = None) -> None:
        self._overrides: dict[str, ScrollOverride] = {
            host.strip().lower(): override for host, override in (overrides or {}).items()
        }

    def for_host(self, host_name: str) -> ScrollOverride | None:
        return self._overrides.get(host_name.strip().lower())

    def with_override(self, host_name: str, override: ScrollOverride) -> "HostOverrideTable":
        """Return a copy with one more entry."""
        merged = dict(self._overrides)
        merged[host_name.strip().lower()] = override
        return HostOverrideTable(merged)

    def __contains__(self, host_name: object) -> bool:
        return isinstance(host_name, str) and host_name.strip().lower() in self._overrides

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._overrides))

    def __len__(self) -> int:
        return len(self._overrides)


def default_host_overrides() -> HostOverrideTable:
    return HostOverrideTable(
        {
            "youtube.com": fullscreen_app_container,
            "www.nexusmods.com": real_scroll_root,
        }
    )


__all__ = [
    "HostOverrideTable",
    "ScrollOverride",
    "default_host_overrides",
    "find_descendant",
    "fullscreen_app_container",
    "real_scroll_root",
]

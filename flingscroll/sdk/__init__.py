"""In-memory host adapters for headless use."""

from flingscroll.sdk.memory_store import InMemorySettingsStore
from flingscroll.sdk.virtual_dom import VirtualDocument, VirtualNode, VirtualViewport, build_page

__all__ = [
    "InMemorySettingsStore",
    "VirtualDocument",
    "VirtualNode",
    "VirtualViewport",
    "build_page",
]

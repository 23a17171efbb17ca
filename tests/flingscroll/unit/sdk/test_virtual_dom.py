from __future__ import annotations

import pytest

from flingscroll.runtime.errors import CrossBoundaryAccessDenied
from flingscroll.sdk.virtual_dom import VirtualDocument, VirtualNode, build_page


def test_build_page_shapes_root_and_body() -> None:
    page = build_page(content_height=3000.0, viewport_height=600.0, host_name="example.org")
    body = page.body

    assert body is not None
    assert body.parent is page.root
    assert page.root.children == (body,)
    assert page.root.client_height == 600.0
    assert body.scroll_height == page.root.scroll_height == 3000.0
    assert page.scrolling_element is page.root
    assert page.host_name == "example.org"


def test_scroll_by_clamps_offset_and_records_requests() -> None:
    node = VirtualNode("div", scroll_height=500.0, client_height=200.0)

    node.scroll_by(0.0, 250.0, behavior="instant")
    node.scroll_by(0.0, 100.0, behavior="instant")
    node.scroll_by(5.0, -1000.0, behavior="instant")

    assert node.scroll_top == 0.0
    assert node.scroll_left == 0.0
    assert node.total_scrolled() == (5.0, -650.0)
    assert len(node.scroll_calls) == 3


def test_append_reparents_node() -> None:
    first = VirtualNode("div")
    second = VirtualNode("div")
    child = first.append(VirtualNode("span"))

    second.append(child)

    assert first.children == ()
    assert child.parent is second


def test_viewport_falls_back_to_body_without_scrolling_element() -> None:
    root = VirtualNode("html")
    body = root.append(VirtualNode("body", scroll_height=2000.0, client_height=500.0))
    document = VirtualDocument(root, body=body, legacy_scrolling_element=True)

    document.viewport.scroll_by(0.0, 50.0, behavior="instant")

    assert document.scrolling_element is None
    assert body.scroll_top == 50.0
    assert document.viewport.scroll_calls == [(0.0, 50.0, "instant")]


def test_restricted_node_blocks_computed_style(page) -> None:
    body = page.body
    assert body is not None
    assert page.computed_overflow(body, "y") == "visible"

    page.restrict(body)

    with pytest.raises(CrossBoundaryAccessDenied):
        page.computed_overflow(body, "y")


def test_frame_registry_maps_message_sources(page) -> None:
    frame = VirtualNode("iframe")
    source = object()

    page.register_frame(source, frame)

    assert page.frame_for_source(source) is frame
    assert page.frame_for_source(object()) is None

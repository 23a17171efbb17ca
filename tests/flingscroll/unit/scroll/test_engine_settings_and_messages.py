from __future__ import annotations

import asyncio

from flingscroll.api.input_events import WheelInput
from flingscroll.api.settings import ScrollSettings, SettingsUpdate
from flingscroll.runtime.config import FlingTuning
from flingscroll.runtime.events import RuntimeEventBus
from flingscroll.runtime.time import NOMINAL_FRAME_MS
from flingscroll.scroll.engine import ScrollEngine
from flingscroll.sdk.memory_store import InMemorySettingsStore
from flingscroll.sdk.virtual_dom import VirtualNode


def _attached(page, scheduler, **kwargs) -> ScrollEngine:
    engine = ScrollEngine(page, scheduler, tuning=FlingTuning(), **kwargs)
    engine.attach()
    return engine


def test_frame_message_is_handled_as_wheel_on_frame_element(page, scheduler) -> None:
    engine = _attached(page, scheduler)
    body = page.body
    assert body is not None
    frame = body.append(VirtualNode("iframe", scroll_height=300.0, client_height=300.0))
    source = object()
    page.register_frame(source, frame)
    payload = WheelInput(delta_x=0.0, delta_y=90.0).to_frame_payload()

    assert engine.handle_frame_message(payload, source) is True
    assert page.viewport.scroll_calls == [(0.0, 90.0, "instant")]


def test_frame_message_with_other_marker_is_ignored(page, scheduler) -> None:
    engine = _attached(page, scheduler)

    assert engine.handle_frame_message({"CSS": "ChangeFlingSpeed", "deltaY": 90}, object()) is False
    assert engine.handle_frame_message({"deltaY": 90}, object()) is False
    assert page.viewport.scroll_calls == []


def test_frame_message_from_unknown_source_has_no_target(page, scheduler) -> None:
    engine = _attached(page, scheduler)
    payload = WheelInput(delta_x=0.0, delta_y=90.0).to_frame_payload()

    assert engine.handle_frame_message(payload, object()) is False


def test_frame_message_with_garbage_delta_is_ignored(page, scheduler) -> None:
    engine = _attached(page, scheduler)
    body = page.body
    assert body is not None
    frame = body.append(VirtualNode("iframe", scroll_height=300.0, client_height=300.0))
    source = object()
    page.register_frame(source, frame)
    payload = {"CSS": "ChangeScrollSpeed", "deltaX": "abc", "deltaY": 100}

    assert engine.handle_frame_message(payload, source) is False
    assert page.viewport.scroll_calls == []
    assert len(engine.history) == 0


def test_runtime_message_updates_scroll_factor(page, scheduler) -> None:
    engine = _attached(page, scheduler)

    assert engine.handle_runtime_message({"CSS": "ChangeScrollSpeed", "scrollFactor": "2"}) is True
    engine.handle_wheel(WheelInput(delta_x=0.0, delta_y=50.0, target=page.body))

    assert engine.settings.scroll_factor == 2.0
    assert page.viewport.scroll_calls == [(0.0, 100.0, "instant")]


def test_runtime_fling_message_reconfigures_animator(page, scheduler) -> None:
    engine = _attached(page, scheduler)

    handled = engine.handle_runtime_message(
        {"CSS": "ChangeFlingSpeed", "flingFriction": "0.8", "flingThreshold": "2.5"}
    )

    assert handled is True
    assert engine.animator.friction == 0.8
    assert engine.animator.threshold == 2.5


def test_unrelated_runtime_message_is_ignored(page, scheduler) -> None:
    engine = _attached(page, scheduler)

    assert engine.handle_runtime_message({"CSS": "SomethingElse"}) is False
    assert engine.settings == ScrollSettings()


def test_disabling_fling_cancels_pending_attempt(page, scheduler) -> None:
    engine = _attached(page, scheduler)
    for index in range(4):
        if index:
            scheduler.advance(16.0)
        engine.handle_wheel(WheelInput(delta_x=0.0, delta_y=100.0, target=page.body))

    engine.handle_runtime_message({"CSS": "ChangeFlingSpeed", "flingEnabled": "false"})
    scheduler.run_until_idle(frame_ms=NOMINAL_FRAME_MS)

    assert engine.settings.fling_enabled is False
    assert not engine.fling_pending
    assert len(engine.history) == 0
    assert page.root.scroll_top == 400.0


def test_bus_settings_update_is_applied(page, scheduler) -> None:
    bus = RuntimeEventBus()
    engine = _attached(page, scheduler, events=bus)

    bus.publish(SettingsUpdate(scroll_factor=3.0, fling_threshold=4.0))

    assert engine.settings.scroll_factor == 3.0
    assert engine.animator.threshold == 4.0


def test_invalid_update_keeps_previous_values(page, scheduler) -> None:
    engine = _attached(page, scheduler)

    settings = engine.apply_settings_update(SettingsUpdate(fling_friction=1.5, scroll_factor=0.5))

    assert settings.fling_friction == 0.95
    assert settings.scroll_factor == 0.5
    assert engine.animator.friction == 0.95


def test_smooth_scroll_off_forces_auto_behavior(page, scheduler) -> None:
    _attached(page, scheduler, settings=ScrollSettings(smooth_scroll=False))
    body = page.body
    assert body is not None

    assert page.root.style == {"scroll-behavior": "auto"}
    assert body.style == {"scroll-behavior": "auto"}


def test_smooth_scroll_on_leaves_page_styles_alone(page, scheduler) -> None:
    engine = _attached(page, scheduler)
    page.root.style["scroll-behavior"] = "smooth"

    engine.handle_root_mutation()

    assert page.root.style == {"scroll-behavior": "smooth"}


def test_root_mutation_reapplies_behavior(page, scheduler) -> None:
    engine = _attached(page, scheduler, settings=ScrollSettings(smooth_scroll=False))
    page.root.style["scroll-behavior"] = "smooth"

    engine.handle_root_mutation()

    assert page.root.style["scroll-behavior"] == "auto"


def test_turning_smooth_scroll_off_applies_immediately(page, scheduler) -> None:
    engine = _attached(page, scheduler)

    engine.apply_settings_update(SettingsUpdate(smooth_scroll=False))

    assert page.root.style["scroll-behavior"] == "auto"


def test_load_settings_from_store(page, scheduler) -> None:
    engine = _attached(page, scheduler)
    store = InMemorySettingsStore({"flingFriction": "0.9", "smoothScroll": "false"})

    settings = asyncio.run(engine.load_settings(store, platform="linux"))

    assert settings.scroll_factor == 0.15
    assert settings.fling_friction == 0.9
    assert engine.animator.friction == 0.9
    assert page.root.style["scroll-behavior"] == "auto"


def test_loading_disabled_settings_stops_momentum(page, scheduler) -> None:
    engine = _attached(page, scheduler)
    engine.handle_wheel(WheelInput(delta_x=0.0, delta_y=100.0, target=page.body))

    asyncio.run(engine.load_settings(InMemorySettingsStore({"disableExtension": "true"})))

    assert engine.settings.enabled is False
    assert not engine.fling_pending
    assert engine.handle_wheel(WheelInput(delta_x=0.0, delta_y=100.0, target=page.body)) is False

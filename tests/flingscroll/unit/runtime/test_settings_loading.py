from __future__ import annotations

import asyncio
import logging

import pytest

from flingscroll.api.settings import DEFAULT_SETTINGS, ScrollSettings, SettingsUpdate
from flingscroll.runtime.errors import SettingsUnavailable
from flingscroll.runtime.settings import (
    coerce_flag,
    coerce_number,
    decode_settings_message,
    load_settings,
    merge_settings,
    platform_default_scroll_factor,
)
from flingscroll.sdk.memory_store import InMemorySettingsStore


class _BrokenStore:
    async def get(self, key: str) -> object | None:
        raise SettingsUnavailable(f"storage offline for {key}")


@pytest.mark.parametrize(
    ("raw", "expected"),
    [(True, True), ("true", True), (" FALSE ", False), ("maybe", None), (1, None), (None, None)],
)
def test_coerce_flag(raw: object, expected: bool | None) -> None:
    assert coerce_flag(raw) is expected


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("0.15", 0.15), (3, 3.0), ("nan", None), ("abc", None), (True, None), (None, None)],
)
def test_coerce_number(raw: object, expected: float | None) -> None:
    assert coerce_number(raw) == expected


def test_platform_default_scroll_factor() -> None:
    assert platform_default_scroll_factor("Linux") == 0.15
    assert platform_default_scroll_factor("win") == 1.0
    assert platform_default_scroll_factor("cros") is None
    assert platform_default_scroll_factor(None) is None


def test_merge_settings_applies_partial_update() -> None:
    merged = merge_settings(DEFAULT_SETTINGS, SettingsUpdate(scroll_factor=0.15, enabled=False))

    assert merged.scroll_factor == 0.15
    assert merged.enabled is False
    assert merged.fling_friction == DEFAULT_SETTINGS.fling_friction


def test_merge_settings_returns_same_snapshot_for_empty_update() -> None:
    assert merge_settings(DEFAULT_SETTINGS, SettingsUpdate()) is DEFAULT_SETTINGS


def test_merge_settings_rejects_out_of_range_fields_individually(caplog) -> None:
    current = ScrollSettings(scroll_factor=2.0)
    with caplog.at_level(logging.WARNING, logger="flingscroll.runtime.settings"):
        merged = merge_settings(
            current,
            SettingsUpdate(
                scroll_factor=0.0,
                fling_friction=1.0,
                fling_threshold=-1.0,
                fling_enabled=False,
            ),
        )

    assert merged.scroll_factor == 2.0
    assert merged.fling_friction == 0.95
    assert merged.fling_threshold == 1.0
    assert merged.fling_enabled is False
    assert sum("settings_rejected" in message for message in caplog.messages) == 3


def test_merge_settings_accepts_scroll_factor_upper_bound() -> None:
    at_max = merge_settings(DEFAULT_SETTINGS, SettingsUpdate(scroll_factor=1000.0))
    above_max = merge_settings(DEFAULT_SETTINGS, SettingsUpdate(scroll_factor=1000.5))

    assert at_max.scroll_factor == 1000.0
    assert above_max.scroll_factor == 1.0


def test_decode_settings_message_reads_scroll_factor_from_any_message() -> None:
    update = decode_settings_message(
        {"CSS": "ChangeScrollSpeed", "scrollFactor": "0.5", "flingFriction": "0.9"}
    )

    assert update == SettingsUpdate(scroll_factor=0.5)


def test_decode_settings_message_reads_fling_fields_from_fling_message() -> None:
    update = decode_settings_message(
        {
            "CSS": "ChangeFlingSpeed",
            "flingEnabled": "false",
            "flingFriction": "0.9",
            "flingThreshold": 2,
        }
    )

    assert update == SettingsUpdate(fling_enabled=False, fling_friction=0.9, fling_threshold=2.0)


def test_decode_settings_message_ignores_unrelated_messages() -> None:
    assert decode_settings_message({"CSS": "Unrelated"}) is None
    assert decode_settings_message({"scrollFactor": 0}) is None


def test_load_settings_reads_every_key() -> None:
    store = InMemorySettingsStore(
        {
            "scrollFactor": "2.5",
            "flingEnabled": "false",
            "flingFriction": "0.9",
            "flingThreshold": "3",
            "disableExtension": "true",
            "smoothScroll": "false",
        }
    )

    settings = asyncio.run(load_settings(store, platform="linux"))

    assert settings == ScrollSettings(
        scroll_factor=2.5,
        fling_enabled=False,
        fling_friction=0.9,
        fling_threshold=3.0,
        enabled=False,
        smooth_scroll=False,
    )
    assert "customSetting" in store.reads


def test_load_settings_uses_platform_default_without_custom_setting() -> None:
    settings = asyncio.run(load_settings(InMemorySettingsStore(), platform="linux"))

    assert settings.scroll_factor == 0.15
    assert settings.fling_enabled is True


def test_load_settings_skips_platform_default_for_custom_setting() -> None:
    store = InMemorySettingsStore({"customSetting": "true"})

    settings = asyncio.run(load_settings(store, platform="linux"))

    assert settings.scroll_factor == 1.0


def test_load_settings_falls_back_to_defaults_when_store_fails(caplog) -> None:
    defaults = ScrollSettings(scroll_factor=3.0)
    with caplog.at_level(logging.WARNING, logger="flingscroll.runtime.settings"):
        settings = asyncio.run(load_settings(_BrokenStore(), platform="linux", defaults=defaults))

    assert settings is defaults
    assert any("settings_unavailable" in message for message in caplog.messages)

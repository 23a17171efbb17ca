"""Settings snapshot loading, merging and broadcast-message decoding."""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from dataclasses import replace

from flingscroll.api.settings import (
    DEFAULT_SETTINGS,
    SCROLL_FACTOR_MAX,
    ScrollSettings,
    SettingsStore,
    SettingsUpdate,
)
from flingscroll.runtime.errors import RECOVERABLE_RUNTIME_ERRORS, log_recoverable

_LOG = logging.getLogger(__name__)

FLING_MESSAGE_MARKER = "ChangeFlingSpeed"

# Scroll factor applied when the user has not opted into a custom value.
PLATFORM_SCROLL_FACTORS: dict[str, float] = {
    "linux": 0.15,
    "win": 1.0,
    "mac": 1.0,
}

KEY_SCROLL_FACTOR = "scrollFactor"
KEY_FLING_ENABLED = "flingEnabled"
KEY_FLING_FRICTION = "flingFriction"
KEY_FLING_THRESHOLD = "flingThreshold"
KEY_DISABLE_EXTENSION = "disableExtension"
KEY_SMOOTH_SCROLL = "smoothScroll"
KEY_CUSTOM_SETTING = "customSetting"


def coerce_flag(value: object) -> bool | None:
    """Decode stored booleans, which the settings UI writes as "true"/"false"."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized == "true":
            return True
        if normalized == "false":
            return False
    return None


def coerce_number(value: object) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def platform_default_scroll_factor(platform: str | None) -> float | None:
    if platform is None:
        return None
    return PLATFORM_SCROLL_FACTORS.get(platform.strip().lower())


def merge_settings(current: ScrollSettings, update: SettingsUpdate) -> ScrollSettings:
    """Merge a partial update, dropping out-of-range fields individually."""
    changes: dict[str, object] = {}
    if update.scroll_factor is not None:
        if 0.0 < update.scroll_factor <= SCROLL_FACTOR_MAX:
            changes["scroll_factor"] = float(update.scroll_factor)
        else:
            _LOG.warning("settings_rejected field=scroll_factor value=%r", update.scroll_factor)
    if update.fling_friction is not None:
        if 0.0 < update.fling_friction < 1.0:
            changes["fling_friction"] = float(update.fling_friction)
        else:
            _LOG.warning("settings_rejected field=fling_friction value=%r", update.fling_friction)
    if update.fling_threshold is not None:
        if update.fling_threshold >= 0.0:
            changes["fling_threshold"] = float(update.fling_threshold)
        else:
            _LOG.warning(
                "settings_rejected field=fling_threshold value=%r", update.fling_threshold
            )
    if update.fling_enabled is not None:
        changes["fling_enabled"] = bool(update.fling_enabled)
    if update.enabled is not None:
        changes["enabled"] = bool(update.enabled)
    if update.smooth_scroll is not None:
        changes["smooth_scroll"] = bool(update.smooth_scroll)
    if not changes:
        return current
    return replace(current, **changes)


def decode_settings_message(message: Mapping[str, object]) -> SettingsUpdate | None:
    """Decode a settings-UI broadcast into a partial update.

    Scroll factor rides on any message; fling fields only on fling messages.
    """
    scroll_factor = coerce_number(message.get(KEY_SCROLL_FACTOR))
    if not scroll_factor:
        scroll_factor = None
    fling_enabled: bool | None = None
    fling_friction: float | None = None
    fling_threshold: float | None = None
    if message.get("CSS") == FLING_MESSAGE_MARKER:
        fling_enabled = coerce_flag(message.get(KEY_FLING_ENABLED))
        fling_friction = coerce_number(message.get(KEY_FLING_FRICTION))
        fling_threshold = coerce_number(message.get(KEY_FLING_THRESHOLD))
    update = SettingsUpdate(
        scroll_factor=scroll_factor,
        fling_enabled=fling_enabled,
        fling_friction=fling_friction,
        fling_threshold=fling_threshold,
    )
    if update == SettingsUpdate():
        return None
    return update


async def load_settings(
    store: SettingsStore,
    *,
    platform: str | None = None,
    defaults: ScrollSettings = DEFAULT_SETTINGS,
) -> ScrollSettings:
    """Read every preference key and build a snapshot.

    Store failures fall back to `defaults`; the engine never blocks on them.
    """
    try:
        raw = {
            key: await store.get(key)
            for key in (
                KEY_SCROLL_FACTOR,
                KEY_FLING_ENABLED,
                KEY_FLING_FRICTION,
                KEY_FLING_THRESHOLD,
                KEY_DISABLE_EXTENSION,
                KEY_SMOOTH_SCROLL,
                KEY_CUSTOM_SETTING,
            )
        }
    except RECOVERABLE_RUNTIME_ERRORS:
        log_recoverable(_LOG, "settings_unavailable using_defaults=1", level=logging.WARNING)
        return defaults

    scroll_factor = coerce_number(raw[KEY_SCROLL_FACTOR])
    if scroll_factor is None and coerce_flag(raw[KEY_CUSTOM_SETTING]) is not True:
        scroll_factor = platform_default_scroll_factor(platform)
    disable_extension = coerce_flag(raw[KEY_DISABLE_EXTENSION])
    update = SettingsUpdate(
        scroll_factor=scroll_factor,
        fling_enabled=coerce_flag(raw[KEY_FLING_ENABLED]),
        fling_friction=coerce_number(raw[KEY_FLING_FRICTION]),
        fling_threshold=coerce_number(raw[KEY_FLING_THRESHOLD]),
        enabled=None if disable_extension is None else not disable_extension,
        smooth_scroll=coerce_flag(raw[KEY_SMOOTH_SCROLL]),
    )
    settings = merge_settings(defaults, update)
    _LOG.debug("settings_loaded %s", settings)
    return settings


__all__ = [
    "FLING_MESSAGE_MARKER",
    "PLATFORM_SCROLL_FACTORS",
    "coerce_flag",
    "coerce_number",
    "decode_settings_message",
    "load_settings",
    "merge_settings",
    "platform_default_scroll_factor",
]

"""Public scroll-settings contracts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

SCROLL_FACTOR_MAX = 1000.0


@dataclass(frozen=True, slots=True)
class ScrollSettings:
    """Immutable settings snapshot consumed by the engine."""

    scroll_factor: float = 1.0
    fling_enabled: bool = True
    fling_friction: float = 0.95
    fling_threshold: float = 1.0
    enabled: bool = True
    smooth_scroll: bool = True


@dataclass(frozen=True, slots=True)
class SettingsUpdate:
    """Partial settings notification. `None` fields keep their prior value."""

    scroll_factor: float | None = None
    fling_enabled: bool | None = None
    fling_friction: float | None = None
    fling_threshold: float | None = None
    enabled: bool | None = None
    smooth_scroll: bool | None = None


class SettingsStore(Protocol):
    """Asynchronous key/value preference store owned by the host."""

    async def get(self, key: str) -> object | None:
        """Return stored value for key, or None when missing."""


DEFAULT_SETTINGS = ScrollSettings()


__all__ = [
    "DEFAULT_SETTINGS",
    "SCROLL_FACTOR_MAX",
    "ScrollSettings",
    "SettingsStore",
    "SettingsUpdate",
]

"""Public flingscroll API contracts."""

from flingscroll.api.engine import create_scroll_engine
from flingscroll.api.events import (
    EventBus,
    FlingFinished,
    FlingStarted,
    Subscription,
    create_event_bus,
)
from flingscroll.api.host import (
    NON_SMOOTH_BEHAVIOR,
    HostScheduler,
    ScrollDocument,
    ScrollNode,
    ScrollViewport,
)
from flingscroll.api.input_events import WheelInput, wheel_input_from_frame_payload
from flingscroll.api.logging import LoggingConfig
from flingscroll.api.settings import (
    DEFAULT_SETTINGS,
    ScrollSettings,
    SettingsStore,
    SettingsUpdate,
)

__all__ = [
    "DEFAULT_SETTINGS",
    "EventBus",
    "FlingFinished",
    "FlingStarted",
    "HostScheduler",
    "LoggingConfig",
    "NON_SMOOTH_BEHAVIOR",
    "ScrollDocument",
    "ScrollNode",
    "ScrollSettings",
    "ScrollViewport",
    "SettingsStore",
    "SettingsUpdate",
    "Subscription",
    "WheelInput",
    "create_event_bus",
    "create_scroll_engine",
    "wheel_input_from_frame_payload",
]

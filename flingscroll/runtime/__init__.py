"""Runtime modules: scheduling, timing, configuration, logging."""

from flingscroll.runtime.config import (
    FlingTuning,
    RuntimeConfig,
    get_runtime_config,
    load_runtime_config,
)
from flingscroll.runtime.errors import CrossBoundaryAccessDenied, SettingsUnavailable
from flingscroll.runtime.events import RuntimeEventBus
from flingscroll.runtime.logging import configure_logging, setup_logging
from flingscroll.runtime.loop import FrameLoop
from flingscroll.runtime.scheduler import Scheduler
from flingscroll.runtime.settings import decode_settings_message, load_settings, merge_settings
from flingscroll.runtime.time import FrameClock, TimeContext, normalize_frame_delta

__all__ = [
    "CrossBoundaryAccessDenied",
    "FlingTuning",
    "FrameClock",
    "FrameLoop",
    "RuntimeConfig",
    "RuntimeEventBus",
    "Scheduler",
    "SettingsUnavailable",
    "TimeContext",
    "configure_logging",
    "decode_settings_message",
    "get_runtime_config",
    "load_runtime_config",
    "load_settings",
    "merge_settings",
    "normalize_frame_delta",
    "setup_logging",
]

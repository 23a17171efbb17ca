"""Centralized runtime configuration sourced from environment."""

from __future__ import annotations

import os
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Mapping

from flingscroll.api.logging import LoggingConfig
from flingscroll.runtime.time import MAX_FRAME_MS, NOMINAL_FRAME_MS

ENV_PREFIX = "FLINGSCROLL_"


@dataclass(frozen=True, slots=True)
class FlingTuning:
    """Fixed constants of the momentum model."""

    sample_window_ms: float = 150.0
    debounce_ms: float = 50.0
    min_fling_samples: int = 3
    stop_speed: float = 0.05
    nominal_frame_ms: float = NOMINAL_FRAME_MS
    max_frame_ms: float = MAX_FRAME_MS
    deceleration_slope: float = -0.01
    overflow_tolerance_px: float = 10.0
    navigation_ratio: float = 2.0
    navigation_min_delta: float = 10.0
    max_ancestor_depth: int = 4096

    def __post_init__(self) -> None:
        if self.sample_window_ms <= 0.0:
            raise ValueError("sample_window_ms must be > 0")
        if self.debounce_ms < 0.0:
            raise ValueError("debounce_ms must be >= 0")
        if self.min_fling_samples < 2:
            raise ValueError("min_fling_samples must be >= 2")
        if self.nominal_frame_ms <= 0.0:
            raise ValueError("nominal_frame_ms must be > 0")
        if self.max_frame_ms < self.nominal_frame_ms:
            raise ValueError("max_frame_ms must be >= nominal_frame_ms")
        if self.stop_speed <= 0.0:
            raise ValueError("stop_speed must be > 0")
        if self.max_ancestor_depth <= 0:
            raise ValueError("max_ancestor_depth must be > 0")


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    trace_input: bool = False
    tuning: FlingTuning = field(default_factory=FlingTuning)


_RUNTIME_CONFIG: ContextVar[RuntimeConfig | None] = ContextVar(
    "flingscroll_runtime_config", default=None
)


def _raw(name: str, *, env: Mapping[str, str] | None = None) -> str | None:
    value = os.getenv(name) if env is None else env.get(name)
    return None if value is None else str(value)


def _flag(name: str, default: bool, *, env: Mapping[str, str] | None = None) -> bool:
    raw = _raw(name, env=env)
    if raw is None:
        return bool(default)
    value = raw.strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off"}:
        return False
    return bool(default)


def _int(
    name: str,
    default: int,
    *,
    minimum: int | None = None,
    env: Mapping[str, str] | None = None,
) -> int:
    raw = _raw(name, env=env)
    if raw is None:
        value = int(default)
    else:
        try:
            value = int(raw.strip())
        except ValueError:
            value = int(default)
    if minimum is None:
        return value
    return max(int(minimum), value)


def _float(
    name: str,
    default: float,
    *,
    minimum: float | None = None,
    env: Mapping[str, str] | None = None,
) -> float:
    raw = _raw(name, env=env)
    if raw is None:
        value = float(default)
    else:
        try:
            value = float(raw.strip())
        except ValueError:
            value = float(default)
    if minimum is None:
        return value
    return max(float(minimum), value)


def _text(name: str, default: str, *, env: Mapping[str, str] | None = None) -> str:
    raw = _raw(name, env=env)
    if raw is None:
        return str(default)
    value = raw.strip()
    return value if value else str(default)


def _format(raw: str, fallback: str) -> str:
    value = raw.strip().lower()
    return value if value in {"text", "json"} else fallback


def resolve_log_level_name(
    default: str = "INFO", *, env: Mapping[str, str] | None = None
) -> str:
    """Resolve log level with package-prefixed override."""
    value = _raw(f"{ENV_PREFIX}LOG_LEVEL", env=env)
    if value is None:
        value = _raw("LOG_LEVEL", env=env) or default
    return value.strip().upper()


def load_fling_tuning(*, env: Mapping[str, str] | None = None) -> FlingTuning:
    defaults = FlingTuning()
    p = ENV_PREFIX
    nominal = _float(f"{p}NOMINAL_FRAME_MS", defaults.nominal_frame_ms, minimum=1.0, env=env)
    return FlingTuning(
        sample_window_ms=_float(
            f"{p}SAMPLE_WINDOW_MS", defaults.sample_window_ms, minimum=1.0, env=env
        ),
        debounce_ms=_float(f"{p}DEBOUNCE_MS", defaults.debounce_ms, minimum=0.0, env=env),
        min_fling_samples=_int(
            f"{p}MIN_FLING_SAMPLES", defaults.min_fling_samples, minimum=2, env=env
        ),
        stop_speed=_float(f"{p}STOP_SPEED", defaults.stop_speed, minimum=1e-6, env=env),
        nominal_frame_ms=nominal,
        max_frame_ms=_float(f"{p}MAX_FRAME_MS", defaults.max_frame_ms, minimum=nominal, env=env),
        deceleration_slope=_float(f"{p}DECELERATION_SLOPE", defaults.deceleration_slope, env=env),
        overflow_tolerance_px=_float(
            f"{p}OVERFLOW_TOLERANCE_PX", defaults.overflow_tolerance_px, minimum=0.0, env=env
        ),
        navigation_ratio=_float(
            f"{p}NAVIGATION_RATIO", defaults.navigation_ratio, minimum=0.0, env=env
        ),
        navigation_min_delta=_float(
            f"{p}NAVIGATION_MIN_DELTA", defaults.navigation_min_delta, minimum=0.0, env=env
        ),
        max_ancestor_depth=_int(
            f"{p}MAX_ANCESTOR_DEPTH", defaults.max_ancestor_depth, minimum=1, env=env
        ),
    )


def load_runtime_config(*, env: Mapping[str, str] | None = None) -> RuntimeConfig:
    p = ENV_PREFIX
    log_file = _text(f"{p}LOG_FILE", "", env=env)
    return RuntimeConfig(
        logging=LoggingConfig(
            level_name=resolve_log_level_name(env=env),
            console_format=_format(_text(f"{p}LOG_FORMAT", "text", env=env), "text"),
            file_path=log_file or None,
            file_format=_format(_text(f"{p}LOG_FILE_FORMAT", "json", env=env), "json"),
        ),
        trace_input=_flag(f"{p}TRACE_INPUT", False, env=env),
        tuning=load_fling_tuning(env=env),
    )


def initialize_runtime_config(*, env: Mapping[str, str] | None = None) -> RuntimeConfig:
    config = load_runtime_config(env=env)
    _RUNTIME_CONFIG.set(config)
    return config


def set_runtime_config(config: RuntimeConfig) -> RuntimeConfig:
    _RUNTIME_CONFIG.set(config)
    return config


def get_runtime_config() -> RuntimeConfig:
    config = _RUNTIME_CONFIG.get()
    if config is not None:
        return config
    return initialize_runtime_config()


__all__ = [
    "ENV_PREFIX",
    "FlingTuning",
    "RuntimeConfig",
    "get_runtime_config",
    "initialize_runtime_config",
    "load_fling_tuning",
    "load_runtime_config",
    "resolve_log_level_name",
    "set_runtime_config",
]

"""Shared exception policy helpers and error taxonomy."""

from __future__ import annotations

import logging
from typing import TypeAlias


class CrossBoundaryAccessDenied(PermissionError):
    """Host refused to expose a node's computed style (restricted embedding)."""


class SettingsUnavailable(RuntimeError):
    """Preference store could not be read."""


# Explicitly bounded fallback set for host-facing compatibility paths.
RecoverableRuntimeErrors: TypeAlias = tuple[type[BaseException], ...]
RECOVERABLE_RUNTIME_ERRORS: RecoverableRuntimeErrors = (
    RuntimeError,
    OSError,
    ValueError,
    TypeError,
    AttributeError,
    LookupError,
)


def log_recoverable(
    logger: logging.Logger,
    message: str,
    *,
    level: int = logging.DEBUG,
) -> None:
    """Emit structured observability for tolerated recoverable exceptions."""
    logger.log(level, message, exc_info=True)


__all__ = [
    "CrossBoundaryAccessDenied",
    "RECOVERABLE_RUNTIME_ERRORS",
    "RecoverableRuntimeErrors",
    "SettingsUnavailable",
    "log_recoverable",
]

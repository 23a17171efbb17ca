"""Public event bus API contracts."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol, TypeVar

TEvent = TypeVar("TEvent")


@dataclass(frozen=True, slots=True)
class Subscription:
    """Opaque subscription token."""

    id: int


@dataclass(frozen=True, slots=True)
class FlingStarted:
    """A fling animation entered the running state."""

    velocity_x: float
    velocity_y: float
    started_at_ms: float


@dataclass(frozen=True, slots=True)
class FlingFinished:
    """A fling animation returned to idle."""

    reason: str  # decayed|preempted|failed
    frame_count: int


class EventBus(Protocol):
    """Public in-process pub/sub contract."""

    def subscribe(
        self,
        event_type: type[TEvent],
        handler: Callable[[TEvent], None],
    ) -> Subscription:
        """Subscribe handler for event type."""

    def unsubscribe(self, subscription: Subscription) -> None:
        """Unsubscribe token."""

    def publish(self, event: object) -> int:
        """Publish event and return invocation count."""


def create_event_bus() -> EventBus:
    """Create default event bus implementation."""
    from flingscroll.runtime.events import RuntimeEventBus

    return RuntimeEventBus()


__all__ = ["EventBus", "FlingFinished", "FlingStarted", "Subscription", "create_event_bus"]

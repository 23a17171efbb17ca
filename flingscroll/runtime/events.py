"""In-process bus carrying settings updates and fling lifecycle events."""

from __future__ import annotations

import logging
from collections.abc import Callable
from itertools import count
from typing import Any, TypeVar

from flingscroll.api.events import Subscription
from flingscroll.runtime.errors import RECOVERABLE_RUNTIME_ERRORS, log_recoverable

TEvent = TypeVar("TEvent")
EventHandler = Callable[[Any], None]

_LOG = logging.getLogger(__name__)


class RuntimeEventBus:
    """Typed pub/sub; handlers match by isinstance, in subscription order.

    Publishing happens inside wheel handlers and frame callbacks, so a failing
    subscriber is logged and skipped instead of unwinding the publisher.
    """

    def __init__(self) -> None:
        self._ids = count(1)
        self._handlers: dict[int, tuple[type[object], EventHandler]] = {}

    @property
    def subscription_count(self) -> int:
        return len(self._handlers)

    def subscribe(
        self,
        event_type: type[TEvent],
        handler: Callable[[TEvent], None],
    ) -> Subscription:
        subscription = Subscription(next(self._ids))
        self._handlers[subscription.id] = (event_type, handler)
        return subscription

    def unsubscribe(self, subscription: Subscription) -> None:
        self._handlers.pop(subscription.id, None)

    def publish(self, event: object) -> int:
        """Deliver event; return the number of handlers that completed."""
        event_name = type(event).__name__
        # Snapshot: handlers may unsubscribe while we deliver.
        matching = [
            handler
            for event_type, handler in tuple(self._handlers.values())
            if isinstance(event, event_type)
        ]
        completed = 0
        for handler in matching:
            try:
                handler(event)
            except RECOVERABLE_RUNTIME_ERRORS:
                log_recoverable(
                    _LOG, f"event_handler_failed type={event_name}", level=logging.WARNING
                )
                continue
            completed += 1
        _LOG.debug("event_published type=%s handlers=%d", event_name, completed)
        return completed


__all__ = ["RuntimeEventBus"]

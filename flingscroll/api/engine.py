"""Public engine construction API."""

from __future__ import annotations

from typing import TYPE_CHECKING

from flingscroll.api.events import EventBus
from flingscroll.api.host import HostScheduler, ScrollDocument
from flingscroll.api.settings import DEFAULT_SETTINGS, ScrollSettings

if TYPE_CHECKING:
    from flingscroll.runtime.config import FlingTuning
    from flingscroll.scroll.engine import ScrollEngine
    from flingscroll.scroll.overrides import HostOverrideTable


def create_scroll_engine(
    document: ScrollDocument,
    scheduler: HostScheduler,
    *,
    settings: ScrollSettings = DEFAULT_SETTINGS,
    tuning: "FlingTuning | None" = None,
    overrides: "HostOverrideTable | None" = None,
    events: EventBus | None = None,
    trace_input: bool | None = None,
) -> "ScrollEngine":
    """Create an engine for one document and attach it.

    Tuning and input tracing default to the environment-driven runtime config.
    """
    from flingscroll.runtime.config import get_runtime_config
    from flingscroll.scroll.engine import ScrollEngine

    config = get_runtime_config()
    engine = ScrollEngine(
        document,
        scheduler,
        settings=settings,
        tuning=tuning if tuning is not None else config.tuning,
        overrides=overrides,
        events=events,
        trace_input=config.trace_input if trace_input is None else trace_input,
    )
    engine.attach()
    return engine


__all__ = ["create_scroll_engine"]

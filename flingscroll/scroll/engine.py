"""Composition root wiring wheel input to dispatch and momentum."""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping

from flingscroll.api.events import EventBus, Subscription
from flingscroll.api.host import HostScheduler, ScrollDocument
from flingscroll.api.input_events import WheelInput, wheel_input_from_frame_payload
from flingscroll.api.settings import DEFAULT_SETTINGS, ScrollSettings, SettingsStore, SettingsUpdate
from flingscroll.runtime.config import FlingTuning
from flingscroll.runtime.settings import decode_settings_message, load_settings, merge_settings
from flingscroll.scroll.animator import FlingAnimator
from flingscroll.scroll.deceleration import DecelerationClassifier
from flingscroll.scroll.dispatcher import ScrollDispatcher
from flingscroll.scroll.history import InputSample, SampleHistory
from flingscroll.scroll.overrides import HostOverrideTable, default_host_overrides
from flingscroll.scroll.resolver import ScrollTargetResolver
from flingscroll.scroll.velocity import VelocityEstimator

_LOG = logging.getLogger(__name__)


class ScrollEngine:
    """Per-document engine instance.

    All state lives on the instance and is only touched from the host's
    event loop: wheel handlers, the debounce timer and frame callbacks.
    """

    def __init__(
        self,
        document: ScrollDocument,
        scheduler: HostScheduler,
        *,
        settings: ScrollSettings = DEFAULT_SETTINGS,
        tuning: FlingTuning | None = None,
        overrides: HostOverrideTable | None = None,
        events: EventBus | None = None,
        trace_input: bool = False,
    ) -> None:
        self._document = document
        self._scheduler = scheduler
        self._tuning = tuning or FlingTuning()
        self._settings = settings
        self._events = events
        self._trace_input = trace_input
        self._settings_subscription: Subscription | None = None
        self._debounce_task: int | None = None
        self._attached = False

        self.resolver = ScrollTargetResolver(
            document,
            overflow_tolerance_px=self._tuning.overflow_tolerance_px,
            max_depth=self._tuning.max_ancestor_depth,
        )
        self.dispatcher = ScrollDispatcher(
            document,
            overrides=overrides if overrides is not None else default_host_overrides(),
        )
        self.history = SampleHistory(window_ms=self._tuning.sample_window_ms)
        self.estimator = VelocityEstimator()
        self.classifier = DecelerationClassifier(slope_tolerance=self._tuning.deceleration_slope)
        self.animator = FlingAnimator(
            self.dispatcher,
            scheduler,
            friction=settings.fling_friction,
            threshold=settings.fling_threshold,
            stop_speed=self._tuning.stop_speed,
            nominal_frame_ms=self._tuning.nominal_frame_ms,
            max_frame_ms=self._tuning.max_frame_ms,
            events=events,
        )

    @property
    def settings(self) -> ScrollSettings:
        return self._settings

    @property
    def attached(self) -> bool:
        return self._attached

    @property
    def fling_pending(self) -> bool:
        return self._debounce_task is not None

    # --- lifecycle -------------------------------------------------------

    def attach(self) -> bool:
        """Start listening. A disabled engine stays detached."""
        if not self._settings.enabled:
            _LOG.info("engine_attach_skipped reason=disabled")
            return False
        if self._events is not None and self._settings_subscription is None:
            self._settings_subscription = self._events.subscribe(
                SettingsUpdate, self.apply_settings_update
            )
        self._attached = True
        self.enforce_scroll_behavior()
        _LOG.info("engine_attached host=%s settings=%s", self._document.host_name, self._settings)
        return True

    def detach(self) -> None:
        self.cancel_momentum()
        if self._events is not None and self._settings_subscription is not None:
            self._events.unsubscribe(self._settings_subscription)
            self._settings_subscription = None
        self._attached = False

    async def load_settings(
        self, store: SettingsStore, *, platform: str | None = None
    ) -> ScrollSettings:
        """Replace the cached snapshot with the store's current values."""
        self._replace_settings(await load_settings(store, platform=platform))
        return self._settings

    def apply_settings_update(self, update: SettingsUpdate) -> ScrollSettings:
        """Merge a push notification into the cached snapshot."""
        self._replace_settings(merge_settings(self._settings, update))
        return self._settings

    def handle_runtime_message(self, message: Mapping[str, object]) -> bool:
        """Apply a settings-UI broadcast. Returns False for unrelated messages."""
        update = decode_settings_message(message)
        if update is None:
            return False
        self.apply_settings_update(update)
        return True

    def enforce_scroll_behavior(self) -> None:
        """Neutralize host smooth-scroll styling when the user turned it off."""
        if self._settings.smooth_scroll:
            return
        document = self._document
        nodes = [document.root]
        if document.body is not None:
            nodes.append(document.body)
        for node in nodes:
            document.set_scroll_behavior(node, "auto")

    def handle_root_mutation(self) -> None:
        """Re-apply scroll-behavior policy after the root's attributes changed."""
        if self._attached:
            self.enforce_scroll_behavior()

    # --- input -----------------------------------------------------------

    def handle_wheel(self, event: WheelInput) -> bool:
        """Handle one raw wheel event. Returns False to let it pass through.

        Pass-through events (zoom, navigation swipes, unresolvable targets and
        non-finite deltas) leave a running fling alone. Only a handled event
        preempts it.
        """
        settings = self._settings
        if not self._attached or not settings.enabled:
            return False
        if event.default_prevented or event.ctrl_key:
            return False

        delta_x = float(event.delta_x)
        delta_y = float(event.delta_y)
        if not (math.isfinite(delta_x) and math.isfinite(delta_y)):
            self._trace("wheel_pass_through reason=non_finite dx=%s dy=%s", delta_x, delta_y)
            return False
        if event.shift_key and not (event.ctrl_key or event.alt_key or event.meta_key):
            delta_x = delta_x or delta_y
            delta_y = 0.0

        if not event.shift_key and self._is_navigation_gesture(delta_x, delta_y):
            self._trace("wheel_pass_through reason=navigation dx=%s dy=%s", delta_x, delta_y)
            return False

        target = self.resolver.resolve(event.target, delta_x != 0.0, delta_y != 0.0)
        if target is None:
            self._trace("wheel_pass_through reason=unresolved dx=%s dy=%s", delta_x, delta_y)
            return False
        scroll_target: object = target
        if target is self.resolver.scroll_root():
            scroll_target = self._document.viewport

        scaled_x = delta_x * settings.scroll_factor
        scaled_y = delta_y * settings.scroll_factor
        if not (math.isfinite(scaled_x) and math.isfinite(scaled_y)):
            self._trace("wheel_pass_through reason=overflow dx=%s dy=%s", scaled_x, scaled_y)
            return False

        self.cancel_momentum()
        self.dispatcher.apply(scroll_target, scaled_x, scaled_y)
        self._trace("wheel_dispatched dx=%s dy=%s target=%r", scaled_x, scaled_y, scroll_target)

        if settings.fling_enabled:
            self.history.push(
                InputSample(
                    dx=scaled_x,
                    dy=scaled_y,
                    timestamp_ms=self._scheduler.now_ms,
                    target=scroll_target,
                )
            )
            self._debounce_task = self._scheduler.call_later(
                self._tuning.debounce_ms, self._attempt_fling
            )

        event.prevent_default()
        return True

    def handle_frame_message(self, payload: Mapping[str, object], source: object) -> bool:
        """Handle a wheel event forwarded by an embedded frame."""
        if payload.get("CSS") is None:
            return False
        frame = self._document.frame_for_source(source)
        event = wheel_input_from_frame_payload(payload, target=frame)
        if event is None:
            return False
        return self.handle_wheel(event)

    def cancel_momentum(self) -> None:
        """Drop the pending fling attempt and any running fling."""
        if self._debounce_task is not None:
            self._scheduler.cancel(self._debounce_task)
            self._debounce_task = None
        self.animator.stop()

    # --- internals -------------------------------------------------------

    def _attempt_fling(self) -> None:
        self._debounce_task = None
        settings = self._settings
        if not settings.fling_enabled:
            return
        history = self.history
        if len(history) < self._tuning.min_fling_samples:
            _LOG.debug("fling_skipped reason=few_samples count=%d", len(history))
            return
        velocity = self.estimator.estimate(history)
        if velocity is None:
            _LOG.debug("fling_skipped reason=no_estimate")
            return
        if velocity.speed < settings.fling_threshold:
            _LOG.debug("fling_skipped reason=slow speed=%.4f", velocity.speed)
            return
        if self.classifier.is_decelerating(history):
            _LOG.debug("fling_skipped reason=decelerating speed=%.4f", velocity.speed)
            return
        newest = history.newest
        if newest is None:
            return
        self.animator.start(newest.target, velocity.vx, velocity.vy, self._scheduler.now_ms)

    def _is_navigation_gesture(self, delta_x: float, delta_y: float) -> bool:
        tuning = self._tuning
        return (
            abs(delta_x) > abs(delta_y) * tuning.navigation_ratio
            and abs(delta_x) > tuning.navigation_min_delta
        )

    def _replace_settings(self, settings: ScrollSettings) -> None:
        previous = self._settings
        self._settings = settings
        self.animator.configure(
            friction=settings.fling_friction, threshold=settings.fling_threshold
        )
        if not settings.fling_enabled or not settings.enabled:
            self.cancel_momentum()
            self.history.clear()
        if previous.smooth_scroll != settings.smooth_scroll and self._attached:
            self.enforce_scroll_behavior()
        if previous != settings:
            _LOG.info("settings_updated %s", settings)

    def _trace(self, message: str, *args: object) -> None:
        if self._trace_input:
            _LOG.debug(message, *args)

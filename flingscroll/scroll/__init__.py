"""Momentum scroll engine components."""

from flingscroll.scroll.animator import FlingAnimator, FlingPhase, FlingState
from flingscroll.scroll.deceleration import DecelerationClassifier
from flingscroll.scroll.dispatcher import ScrollDispatcher
from flingscroll.scroll.engine import ScrollEngine
from flingscroll.scroll.history import InputSample, SampleHistory
from flingscroll.scroll.overrides import HostOverrideTable, default_host_overrides
from flingscroll.scroll.resolver import ScrollTargetResolver
from flingscroll.scroll.velocity import Velocity, VelocityEstimator

__all__ = [
    "DecelerationClassifier",
    "FlingAnimator",
    "FlingPhase",
    "FlingState",
    "HostOverrideTable",
    "InputSample",
    "SampleHistory",
    "ScrollDispatcher",
    "ScrollEngine",
    "ScrollTargetResolver",
    "Velocity",
    "VelocityEstimator",
    "default_host_overrides",
]

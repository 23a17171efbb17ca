"""Command-line replay of a synthetic wheel burst against a virtual page."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence

from flingscroll.api.engine import create_scroll_engine
from flingscroll.api.events import FlingFinished, FlingStarted
from flingscroll.api.input_events import WheelInput
from flingscroll.api.settings import ScrollSettings
from flingscroll.runtime.config import initialize_runtime_config
from flingscroll.runtime.events import RuntimeEventBus
from flingscroll.runtime.json_codec import dumps_text
from flingscroll.runtime.logging import configure_logging, get_logger, shutdown_logging
from flingscroll.runtime.loop import FrameLoop
from flingscroll.runtime.scheduler import Scheduler
from flingscroll.runtime.time import NOMINAL_FRAME_MS
from flingscroll.sdk.virtual_dom import build_page

_LOG = get_logger("flingscroll.replay")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="flingscroll-demo",
        description="Replay a synthetic wheel burst through the momentum scroll engine.",
    )
    parser.add_argument("--scroll-factor", type=float, default=1.0)
    parser.add_argument("--friction", type=float, default=0.95)
    parser.add_argument("--threshold", type=float, default=1.0)
    parser.add_argument("--no-fling", action="store_true", help="Disable momentum scrolling.")
    parser.add_argument("--events", type=int, default=6, help="Wheel events in the burst.")
    parser.add_argument("--delta", type=float, default=100.0, help="deltaY of the first event.")
    parser.add_argument(
        "--growth",
        type=float,
        default=1.0,
        help="Per-event multiplier applied to deltaY (<1 simulates a slowing hand).",
    )
    parser.add_argument("--interval-ms", type=float, default=16.0)
    parser.add_argument("--content-height", type=float, default=20000.0)
    parser.add_argument("--host", default="", help="Host name used for override lookup.")
    parser.add_argument(
        "--realtime",
        action="store_true",
        help="Play the momentum phase against the wall clock instead of fixed frames.",
    )
    return parser


def run_replay(args: argparse.Namespace) -> dict[str, object]:
    """Run the burst to completion and return a summary."""
    settings = ScrollSettings(
        scroll_factor=args.scroll_factor,
        fling_enabled=not args.no_fling,
        fling_friction=args.friction,
        fling_threshold=args.threshold,
    )
    document = build_page(content_height=args.content_height, host_name=args.host)
    scheduler = Scheduler()
    events = RuntimeEventBus()
    lifecycle: list[str] = []
    events.subscribe(FlingStarted, lambda event: lifecycle.append("started"))
    events.subscribe(FlingFinished, lambda event: lifecycle.append(f"finished:{event.reason}"))
    engine = create_scroll_engine(document, scheduler, settings=settings, events=events)

    body = document.body
    delta = float(args.delta)
    handled = 0
    for index in range(max(0, int(args.events))):
        if index:
            scheduler.advance(float(args.interval_ms))
        if engine.handle_wheel(WheelInput(delta_x=0.0, delta_y=delta, target=body)):
            handled += 1
        delta *= float(args.growth)
    input_offset = document.root.scroll_top

    if args.realtime:

        def _busy() -> bool:
            return bool(scheduler.queued_task_count or scheduler.pending_frame_count)

        frames = FrameLoop(scheduler).run(should_continue=_busy)
    else:
        frames = scheduler.run_until_idle(frame_ms=NOMINAL_FRAME_MS)
    summary: dict[str, object] = {
        "handled_events": handled,
        "offset_after_input": input_offset,
        "final_offset": document.root.scroll_top,
        "momentum_px": document.root.scroll_top - input_offset,
        "frames": frames,
        "lifecycle": lifecycle,
    }
    _LOG.info("replay_finished %s", summary)
    return summary


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    config = initialize_runtime_config()
    configure_logging(config.logging)
    try:
        summary = run_replay(args)
    except ValueError as exc:
        _LOG.error("replay_failed error=%s", exc)
        return 2
    finally:
        shutdown_logging()
    sys.stdout.write(dumps_text(summary, pretty=True) + "\n")
    return 0

"""Public input event types."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

FRAME_MESSAGE_MARKER = "ChangeScrollSpeed"


@dataclass(slots=True)
class WheelInput:
    """Raw wheel/trackpad event as delivered by the host.

    `default_prevented` is the host's "already handled" flag. The engine reads
    it before handling and sets it through `prevent_default` afterwards.
    """

    delta_x: float
    delta_y: float
    target: object | None = None
    shift_key: bool = False
    ctrl_key: bool = False
    alt_key: bool = False
    meta_key: bool = False
    default_prevented: bool = False

    def prevent_default(self) -> None:
        self.default_prevented = True

    def to_frame_payload(self) -> dict[str, object]:
        """Return the payload an embedded frame forwards to its embedder."""
        return {
            "CSS": FRAME_MESSAGE_MARKER,
            "deltaX": self.delta_x,
            "deltaY": self.delta_y,
            "shiftKey": self.shift_key,
            "ctrlKey": self.ctrl_key,
            "altKey": self.alt_key,
            "metaKey": self.meta_key,
            "defaultPrevented": self.default_prevented,
        }


def wheel_input_from_frame_payload(
    payload: Mapping[str, object],
    *,
    target: object | None,
) -> WheelInput | None:
    """Rebuild a wheel event forwarded by an embedded frame.

    Returns None when the payload does not carry the frame marker or a delta
    is not a finite number. Frame content is untrusted.
    """
    from flingscroll.runtime.settings import coerce_number

    if payload.get("CSS") != FRAME_MESSAGE_MARKER:
        return None
    delta_x = coerce_number(payload.get("deltaX") or 0.0)
    delta_y = coerce_number(payload.get("deltaY") or 0.0)
    if delta_x is None or delta_y is None:
        return None
    return WheelInput(
        delta_x=delta_x,
        delta_y=delta_y,
        target=target,
        shift_key=bool(payload.get("shiftKey", False)),
        ctrl_key=bool(payload.get("ctrlKey", False)),
        alt_key=bool(payload.get("altKey", False)),
        meta_key=bool(payload.get("metaKey", False)),
        default_prevented=bool(payload.get("defaultPrevented", False)),
    )


__all__ = ["FRAME_MESSAGE_MARKER", "WheelInput", "wheel_input_from_frame_payload"]

"""Raw platform event records and the uniform gesture event model.

Platforms report gestures in several shapes: touch scale/rotate gestures,
synthesized trackpad pan-zoom events, plain pointer events and scroll-wheel
signals. The raw records below mirror those shapes one-to-one; the
normalizer turns each of them into a ``GestureStartDetails`` or
``GestureUpdateDetails`` so the transform pipeline only ever sees one model.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from infinity_view.geometry import ZERO, Offset


class DeviceKind(str, Enum):
    MOUSE = "mouse"
    TOUCH = "touch"
    TRACKPAD = "trackpad"
    STYLUS = "stylus"
    UNKNOWN = "unknown"


# Pointer button bits, matching the platform bitmask layout.
PRIMARY_BUTTON = 0x01
SECONDARY_BUTTON = 0x02
MIDDLE_BUTTON = 0x04


# --- Raw platform events -----------------------------------------------------------


@dataclass(frozen=True)
class ScaleStartEvent:
    """Touch scale/rotate gesture recognised by the platform."""

    focal_point: Offset
    local_focal_point: Optional[Offset] = None
    pointer_count: int = 1


@dataclass(frozen=True)
class ScaleUpdateEvent:
    """Touch scale/rotate update; ``scale`` and ``rotation`` are cumulative."""

    focal_point: Offset
    local_focal_point: Offset
    scale: float = 1.0
    rotation: float = 0.0
    pointer_count: int = 2


@dataclass(frozen=True)
class PanZoomStartEvent:
    """Start of a synthesized trackpad pan/zoom gesture."""

    position: Offset
    local_position: Offset = ZERO
    kind: DeviceKind = DeviceKind.TRACKPAD
    buttons: Optional[int] = None


@dataclass(frozen=True)
class PanZoomUpdateEvent:
    """Trackpad pan/zoom update; ``pan``, ``scale`` and ``rotation`` are cumulative."""

    position: Offset
    local_position: Offset
    pan: Offset = ZERO
    local_pan: Offset = ZERO
    scale: float = 1.0
    rotation: float = 0.0
    kind: DeviceKind = DeviceKind.TRACKPAD
    buttons: Optional[int] = None


@dataclass(frozen=True)
class PointerDownEvent:
    position: Offset
    local_position: Offset = ZERO
    kind: DeviceKind = DeviceKind.MOUSE
    buttons: Optional[int] = PRIMARY_BUTTON


@dataclass(frozen=True)
class PointerMoveEvent:
    position: Offset
    local_position: Offset
    kind: DeviceKind = DeviceKind.MOUSE
    buttons: Optional[int] = PRIMARY_BUTTON


@dataclass(frozen=True)
class PointerScrollEvent:
    """Scroll-wheel signal; positive ``scroll_delta.dy`` scrolls down."""

    position: Offset
    local_position: Offset
    scroll_delta: Offset
    kind: DeviceKind = DeviceKind.MOUSE
    buttons: Optional[int] = None


# --- Uniform gesture model ---------------------------------------------------------


@dataclass(frozen=True)
class GestureStartDetails:
    """Focal point of the pointers at the start of a gesture."""

    focal_point: Offset


@dataclass(frozen=True)
class GestureUpdateDetails:
    """One normalized input sample.

    ``scale`` and ``rotation`` are cumulative since the gesture started;
    ``1.0`` and ``0.0`` mean the axis is idle for this sample. ``buttons`` is
    only meaningful for mouse and trackpad devices.
    """

    focal_point: Offset
    local_focal_point: Offset
    scale: float = 1.0
    rotation: float = 0.0
    kind: DeviceKind = DeviceKind.UNKNOWN
    buttons: Optional[int] = None
    pointer_count: int = 0


__all__ = [
    "DeviceKind",
    "GestureStartDetails",
    "GestureUpdateDetails",
    "MIDDLE_BUTTON",
    "PRIMARY_BUTTON",
    "PanZoomStartEvent",
    "PanZoomUpdateEvent",
    "PointerDownEvent",
    "PointerMoveEvent",
    "PointerScrollEvent",
    "SECONDARY_BUTTON",
    "ScaleStartEvent",
    "ScaleUpdateEvent",
]

"""Input normalization: raw platform events to uniform gesture events."""

from __future__ import annotations

from .events import (
    MIDDLE_BUTTON,
    PRIMARY_BUTTON,
    SECONDARY_BUTTON,
    DeviceKind,
    GestureStartDetails,
    GestureUpdateDetails,
    PanZoomStartEvent,
    PanZoomUpdateEvent,
    PointerDownEvent,
    PointerMoveEvent,
    PointerScrollEvent,
    ScaleStartEvent,
    ScaleUpdateEvent,
)
from .normalizer import normalize_start, normalize_update
from .scroll_policy import ScrollWheelBehavior, resolve_behavior, resolve_scroll

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
    "ScrollWheelBehavior",
    "normalize_start",
    "normalize_update",
    "resolve_behavior",
    "resolve_scroll",
]

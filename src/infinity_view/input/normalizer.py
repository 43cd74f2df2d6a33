"""Stateless adapters from raw platform events to the uniform gesture model."""

from __future__ import annotations

from typing import Union

from infinity_view.input.events import (
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

StartEvent = Union[ScaleStartEvent, PanZoomStartEvent, PointerDownEvent, PointerScrollEvent]
UpdateEvent = Union[ScaleUpdateEvent, PanZoomUpdateEvent, PointerMoveEvent]


def from_scale_start(event: ScaleStartEvent) -> GestureStartDetails:
    return GestureStartDetails(focal_point=event.focal_point)


def from_scale_update(event: ScaleUpdateEvent) -> GestureUpdateDetails:
    # Legacy scale-gesture recognisers only ever report touch input.
    return GestureUpdateDetails(
        focal_point=event.focal_point,
        local_focal_point=event.local_focal_point,
        scale=float(event.scale),
        rotation=float(event.rotation),
        kind=DeviceKind.TOUCH,
        buttons=None,
        pointer_count=int(event.pointer_count),
    )


def from_pan_zoom_start(event: PanZoomStartEvent) -> GestureStartDetails:
    return GestureStartDetails(focal_point=event.position)


def from_pan_zoom_update(event: PanZoomUpdateEvent) -> GestureUpdateDetails:
    # Trackpad gestures are not finger-counted.
    return GestureUpdateDetails(
        focal_point=event.position + event.pan,
        local_focal_point=event.local_position + event.local_pan,
        scale=float(event.scale),
        rotation=float(event.rotation),
        kind=event.kind,
        buttons=event.buttons,
        pointer_count=0,
    )


def from_pointer_down(event: PointerDownEvent) -> GestureStartDetails:
    return GestureStartDetails(focal_point=event.position)


def from_pointer_move(event: PointerMoveEvent) -> GestureUpdateDetails:
    return GestureUpdateDetails(
        focal_point=event.position,
        local_focal_point=event.local_position,
        scale=1.0,
        rotation=0.0,
        kind=event.kind,
        buttons=event.buttons,
        pointer_count=1,
    )


def from_pointer_scroll(event: PointerScrollEvent) -> GestureStartDetails:
    """Synthetic gesture start emitted before each resolved wheel tick."""
    return GestureStartDetails(focal_point=event.position)


def normalize_start(event: StartEvent) -> GestureStartDetails:
    if isinstance(event, ScaleStartEvent):
        return from_scale_start(event)
    if isinstance(event, PanZoomStartEvent):
        return from_pan_zoom_start(event)
    if isinstance(event, PointerDownEvent):
        return from_pointer_down(event)
    if isinstance(event, PointerScrollEvent):
        return from_pointer_scroll(event)
    raise TypeError(f"unsupported gesture start event: {type(event).__name__}")


def normalize_update(event: UpdateEvent) -> GestureUpdateDetails:
    if isinstance(event, ScaleUpdateEvent):
        return from_scale_update(event)
    if isinstance(event, PanZoomUpdateEvent):
        return from_pan_zoom_update(event)
    if isinstance(event, PointerMoveEvent):
        return from_pointer_move(event)
    raise TypeError(f"unsupported gesture update event: {type(event).__name__}")


__all__ = [
    "StartEvent",
    "UpdateEvent",
    "from_pan_zoom_start",
    "from_pan_zoom_update",
    "from_pointer_down",
    "from_pointer_move",
    "from_pointer_scroll",
    "from_scale_start",
    "from_scale_update",
    "normalize_start",
    "normalize_update",
]

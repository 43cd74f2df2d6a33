"""Scroll-wheel policy: map a wheel tick onto exactly one transform kind."""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum
from typing import Optional

from infinity_view.geometry import Offset
from infinity_view.input.events import GestureUpdateDetails, PointerScrollEvent

logger = logging.getLogger(__name__)

# Raw scroll deltas are divided by this before being used as a pan distance.
TRANSLATE_DIVISOR = 5.0
ROTATE_STEP_RAD = 0.1


class ScrollWheelBehavior(str, Enum):
    IGNORE = "ignore"
    TRANSLATE_X = "translateX"
    TRANSLATE_X_INVERT = "translateXInvert"
    TRANSLATE_Y = "translateY"
    TRANSLATE_Y_INVERT = "translateYInvert"
    ROTATE_CLOCKWISE = "rotateClockwise"
    ROTATE_COUNTER_CLOCKWISE = "rotateCounterClockwise"
    SCALE = "scale"

    @classmethod
    def parse(cls, value: str | ScrollWheelBehavior) -> ScrollWheelBehavior:
        """Accept enum members, values (``"translateX"``) or names (``"translate_x"``)."""
        if isinstance(value, cls):
            return value
        token = str(value).strip()
        for member in cls:
            if token == member.value or token.lower() == member.value.lower():
                return member
            if token.upper() == member.name:
                return member
        raise ValueError(f"unknown scroll wheel behavior: {value!r}")


ScrollWheelHandler = Callable[[], Optional[ScrollWheelBehavior]]


def resolve_behavior(
    default: ScrollWheelBehavior,
    handler: Optional[ScrollWheelHandler] = None,
) -> ScrollWheelBehavior:
    """Ask the per-event override first and fall back to the static default."""
    if handler is not None:
        override = handler()
        if override is not None:
            return ScrollWheelBehavior.parse(override)
    return default


def _direction(dy: float) -> float:
    if dy > 0.0:
        return 1.0
    if dy < 0.0:
        return -1.0
    return 0.0


def resolve_scroll(
    event: PointerScrollEvent,
    behavior: ScrollWheelBehavior,
    sensitivity: float = 1.0,
) -> GestureUpdateDetails:
    """Build the gesture update equivalent to one wheel tick.

    Only one of translation, rotation and scale moves away from its identity
    value. ``IGNORE`` never reaches this function: callers drop the event
    before synthesizing a gesture start.
    """
    if behavior is ScrollWheelBehavior.IGNORE:
        raise ValueError("ignored scroll events must be dropped before resolution")
    if not sensitivity > 0.0:
        raise ValueError("scroll wheel sensitivity must be positive")

    delta = event.scroll_delta
    focal = event.position
    scale = 1.0
    rotation = 0.0
    down = _direction(delta.dy)

    if behavior is ScrollWheelBehavior.TRANSLATE_X:
        focal = focal - Offset(delta.dy / TRANSLATE_DIVISOR, 0.0)
    elif behavior is ScrollWheelBehavior.TRANSLATE_X_INVERT:
        focal = focal + Offset(delta.dy / TRANSLATE_DIVISOR, 0.0)
    elif behavior is ScrollWheelBehavior.TRANSLATE_Y:
        focal = focal - delta / TRANSLATE_DIVISOR
    elif behavior is ScrollWheelBehavior.TRANSLATE_Y_INVERT:
        focal = focal + delta / TRANSLATE_DIVISOR
    elif behavior is ScrollWheelBehavior.ROTATE_CLOCKWISE:
        rotation = -ROTATE_STEP_RAD * down
    elif behavior is ScrollWheelBehavior.ROTATE_COUNTER_CLOCKWISE:
        rotation = ROTATE_STEP_RAD * down
    elif behavior is ScrollWheelBehavior.SCALE:
        scale = 1.0 - down * float(sensitivity) / 10.0
    else:  # pragma: no cover - closed enum
        raise ValueError(f"unsupported scroll wheel behavior: {behavior}")

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "scroll %s delta=(%.1f,%.1f) -> focal=(%.1f,%.1f) scale=%.3f rot=%.3f",
            behavior.value,
            delta.dx,
            delta.dy,
            focal.dx,
            focal.dy,
            scale,
            rotation,
        )

    return GestureUpdateDetails(
        focal_point=focal,
        local_focal_point=event.local_position,
        scale=scale,
        rotation=rotation,
        kind=event.kind,
        buttons=event.buttons,
        pointer_count=0,
    )


__all__ = [
    "ROTATE_STEP_RAD",
    "ScrollWheelBehavior",
    "ScrollWheelHandler",
    "TRANSLATE_DIVISOR",
    "resolve_behavior",
    "resolve_scroll",
]

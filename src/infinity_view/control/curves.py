"""Named easing curves for animated controller batches."""

from __future__ import annotations

import math
from collections.abc import Callable

Curve = Callable[[float], float]


def linear(t: float) -> float:
    return t


def ease_in(t: float) -> float:
    return t * t * t


def ease_out(t: float) -> float:
    u = 1.0 - t
    return 1.0 - u * u * u


def ease_in_out(t: float) -> float:
    if t < 0.5:
        return 4.0 * t * t * t
    u = -2.0 * t + 2.0
    return 1.0 - (u * u * u) / 2.0


def fast_out_slow_in(t: float) -> float:
    return 1.0 - math.pow(1.0 - t, 4)


CURVES: dict[str, Curve] = {
    "linear": linear,
    "ease_in": ease_in,
    "ease_out": ease_out,
    "ease_in_out": ease_in_out,
    "fast_out_slow_in": fast_out_slow_in,
}


def get_curve(name: str) -> Curve:
    key = str(name).strip().lower()
    try:
        return CURVES[key]
    except KeyError:
        raise ValueError(f"unknown animation curve: {name!r}") from None


__all__ = ["CURVES", "Curve", "get_curve"]

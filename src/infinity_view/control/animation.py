"""Timed interpolation between two composed transforms."""

from __future__ import annotations

import math
from dataclasses import dataclass

from infinity_view.control.curves import Curve, linear
from infinity_view.transform.affine import Affine2D


@dataclass
class AnimationBuffer:
    """Target collected while a controller batch is open."""

    target: Affine2D


def _shortest_arc(start: float, end: float) -> float:
    delta = math.fmod(end - start, 2.0 * math.pi)
    if delta > math.pi:
        delta -= 2.0 * math.pi
    elif delta < -math.pi:
        delta += 2.0 * math.pi
    return delta


@dataclass(frozen=True)
class TransformAnimation:
    """Interpolate translation, scale and rotation separately between two fixed endpoints.

    Rotation follows the shortest arc so a batch that turns the view from
    170 to -170 degrees passes through 180 rather than through 0.
    """

    start: Affine2D
    end: Affine2D
    duration_s: float
    curve: Curve = linear

    def progress(self, elapsed: float) -> float:
        if self.duration_s <= 0.0:
            return 1.0
        return min(1.0, max(0.0, float(elapsed) / self.duration_s))

    def done(self, elapsed: float) -> bool:
        return self.progress(elapsed) >= 1.0

    def sample(self, elapsed: float) -> Affine2D:
        p = self.progress(elapsed)
        if p <= 0.0:
            return self.start
        if p >= 1.0:
            return self.end
        t = float(self.curve(p))
        t0 = self.start.translation
        t1 = self.end.translation
        s0 = self.start.scale
        s1 = self.end.scale
        r0 = self.start.rotation
        r1 = r0 + _shortest_arc(r0, self.end.rotation)
        return Affine2D.from_components(
            translation=t0 + (t1 - t0) * t,
            scale=s0 + (s1 - s0) * t,
            rotation=r0 + (r1 - r0) * t,
        )


__all__ = ["AnimationBuffer", "TransformAnimation"]

"""Display-only rotation snapping.

The stored transform is never altered; the renderer draws an extra
counter-rotation so content appears to stick at multiples of the increment.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from infinity_view.geometry import Offset
from infinity_view.transform.affine import Affine2D, rotate_primitive


def rotation_of(transform: Affine2D) -> float:
    """Rotation read from the image of the unit x vector (robust to scale and translation)."""
    return transform.rotation


def _round_half_away(value: float) -> float:
    return math.copysign(math.floor(abs(value) + 0.5), value)


def snap_angle(angle: float, threshold: float, increment: float) -> float:
    """Snap ``angle`` to the nearest multiple of ``increment`` when within ``threshold``.

    All values are radians. A threshold of 0 disables snapping.
    """
    if threshold <= 0.0 or increment <= 0.0:
        return angle
    if math.fmod(abs(angle) + threshold / 2.0, increment) < threshold:
        return increment * _round_half_away(angle / increment)
    return angle


@dataclass(frozen=True)
class SnapResult:
    rotation: float
    display_rotation: float

    @property
    def counter_rotation(self) -> float:
        return self.display_rotation - self.rotation

    @property
    def snapped(self) -> bool:
        return self.display_rotation != self.rotation


def snap_rotation(transform: Affine2D, threshold: float, increment: float) -> SnapResult:
    raw = rotation_of(transform)
    return SnapResult(rotation=raw, display_rotation=snap_angle(raw, threshold, increment))


def display_transform(transform: Affine2D, result: SnapResult, center: Optional[Offset]) -> Affine2D:
    """Apply the snap counter-rotation about the viewport center on top of ``transform``."""
    if not result.snapped or center is None:
        return transform
    return transform.then(rotate_primitive(result.counter_rotation, center))


__all__ = [
    "SnapResult",
    "display_transform",
    "rotation_of",
    "snap_angle",
    "snap_rotation",
]

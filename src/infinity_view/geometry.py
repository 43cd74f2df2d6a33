"""Plane geometry value types shared by the input and transform layers."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Offset:
    """Immutable 2D point or vector in logical pixels."""

    dx: float = 0.0
    dy: float = 0.0

    def __add__(self, other: Offset) -> Offset:
        return Offset(self.dx + other.dx, self.dy + other.dy)

    def __sub__(self, other: Offset) -> Offset:
        return Offset(self.dx - other.dx, self.dy - other.dy)

    def __mul__(self, factor: float) -> Offset:
        return Offset(self.dx * float(factor), self.dy * float(factor))

    __rmul__ = __mul__

    def __truediv__(self, divisor: float) -> Offset:
        return Offset(self.dx / float(divisor), self.dy / float(divisor))

    def __neg__(self) -> Offset:
        return Offset(-self.dx, -self.dy)

    @property
    def distance(self) -> float:
        return math.hypot(self.dx, self.dy)

    @property
    def direction(self) -> float:
        """Angle of the vector in radians, measured from +x toward +y."""
        return math.atan2(self.dy, self.dx)

    @classmethod
    def of(cls, value: Offset | tuple[float, float]) -> Offset:
        if isinstance(value, Offset):
            return value
        x, y = value
        return cls(float(x), float(y))


ZERO = Offset(0.0, 0.0)


def alignment_along_size(alignment: tuple[float, float], size: tuple[float, float]) -> Offset:
    """Map an alignment in ``[-1, 1]`` to a point inside a box of ``size``.

    ``(-1, -1)`` is the top-left corner, ``(0, 0)`` the center and ``(1, 1)``
    the bottom-right corner.
    """
    ax, ay = alignment
    width, height = size
    return Offset((float(ax) + 1.0) * 0.5 * float(width), (float(ay) + 1.0) * 0.5 * float(height))


__all__ = ["Offset", "ZERO", "alignment_along_size"]

"""2D affine algebra for the composed view transform.

Matrices are 3x3 homogeneous ``float64`` arrays acting on column vectors
(``p' = M @ p``), so "left-multiplying" a step ``S`` onto ``M`` means
``S @ M``: the step happens after everything already composed. Screen
coordinates are y-down, hence a positive angle turns content clockwise on
screen.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Union

import numpy as np

from infinity_view.geometry import Offset

PointLike = Union[Offset, tuple[float, float]]

_EPS = 1e-12


def _frozen(matrix: np.ndarray) -> np.ndarray:
    arr = np.array(matrix, dtype=np.float64, copy=True)
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True, eq=False)
class Affine2D:
    """Immutable 2D affine transform (translate, uniform scale, rotation).

    Every mutation helper returns a new instance; the wrapped array is
    read-only so a reader between two updates always sees a complete matrix.
    """

    matrix: np.ndarray

    def __post_init__(self) -> None:
        arr = np.asarray(self.matrix, dtype=np.float64)
        if arr.shape != (3, 3):
            raise ValueError(f"affine matrix must be 3x3, got {arr.shape}")
        object.__setattr__(self, "matrix", _frozen(arr))

    # --- constructors -----------------------------------------------------------------
    @classmethod
    def identity(cls) -> Affine2D:
        return cls(np.eye(3))

    @classmethod
    def from_components(cls, *, translation: PointLike, scale: float, rotation: float) -> Affine2D:
        """Build ``T(translation) @ R(rotation) @ S(scale)``."""
        t = Offset.of(translation)
        c = math.cos(rotation) * scale
        s = math.sin(rotation) * scale
        return cls(np.array([[c, -s, t.dx], [s, c, t.dy], [0.0, 0.0, 1.0]]))

    # --- algebra ----------------------------------------------------------------------
    def __matmul__(self, other: Affine2D) -> Affine2D:
        return Affine2D(self.matrix @ other.matrix)

    def then(self, step: Affine2D) -> Affine2D:
        """Left-multiply ``step`` onto this transform (``step @ self``)."""
        return step @ self

    def determinant(self) -> float:
        return float(np.linalg.det(self.matrix[:2, :2]))

    @property
    def is_invertible(self) -> bool:
        return abs(self.determinant()) > _EPS

    def inverse(self) -> Affine2D:
        assert self.is_invertible, "composed transform must stay invertible"
        return Affine2D(np.linalg.inv(self.matrix))

    def map_point(self, point: PointLike) -> Offset:
        p = Offset.of(point)
        out = self.matrix @ np.array([p.dx, p.dy, 1.0])
        return Offset(float(out[0]), float(out[1]))

    # --- decomposition ----------------------------------------------------------------
    @property
    def translation(self) -> Offset:
        """Image of the content origin."""
        return Offset(float(self.matrix[0, 2]), float(self.matrix[1, 2]))

    @property
    def basis(self) -> Offset:
        """Image of the unit x vector, with translation removed."""
        return self.map_point(Offset(1.0, 0.0)) - self.map_point(Offset(0.0, 0.0))

    @property
    def scale(self) -> float:
        return self.basis.distance

    @property
    def rotation(self) -> float:
        return self.basis.direction

    def with_translation(self, translation: PointLike) -> Affine2D:
        t = Offset.of(translation)
        arr = np.array(self.matrix, copy=True)
        arr[0, 2] = t.dx
        arr[1, 2] = t.dy
        return Affine2D(arr)

    # --- comparison / export ----------------------------------------------------------
    def allclose(self, other: Affine2D, *, atol: float = 1e-9) -> bool:
        return bool(np.allclose(self.matrix, other.matrix, atol=atol, rtol=0.0))

    def equals(self, other: Affine2D) -> bool:
        return bool(np.array_equal(self.matrix, other.matrix))

    @property
    def is_identity(self) -> bool:
        return self.equals(IDENTITY)

    def as_matrix4(self) -> np.ndarray:
        """Row-major 4x4 homogeneous matrix for renderers that expect 3D transforms."""
        m4 = np.eye(4)
        m4[:2, :2] = self.matrix[:2, :2]
        m4[:2, 3] = self.matrix[:2, 2]
        return m4

    def __repr__(self) -> str:
        t = self.translation
        return (
            f"Affine2D(translation=({t.dx:.3f}, {t.dy:.3f}), "
            f"scale={self.scale:.4f}, rotation={self.rotation:.4f})"
        )


IDENTITY = Affine2D.identity()


# --- anchored primitives ------------------------------------------------------------


def translate_primitive(delta: PointLike) -> Affine2D:
    d = Offset.of(delta)
    return Affine2D(np.array([[1.0, 0.0, d.dx], [0.0, 1.0, d.dy], [0.0, 0.0, 1.0]]))


def scale_primitive(factor: float, focal: PointLike) -> Affine2D:
    """Uniform scale about ``focal``: ``T(focal * (1 - factor)) @ S(factor)``."""
    f = float(factor)
    if f == 0.0:
        raise ValueError("scale factor must be non-zero")
    p = Offset.of(focal)
    shift = p * (1.0 - f)
    return Affine2D(np.array([[f, 0.0, shift.dx], [0.0, f, shift.dy], [0.0, 0.0, 1.0]]))


def rotate_primitive(angle: float, focal: PointLike) -> Affine2D:
    """Rotation by ``angle`` radians about ``focal``.

    Uses the closed-form offset instead of ``T(focal) @ R @ T(-focal)``.
    """
    p = Offset.of(focal)
    c = math.cos(angle)
    s = math.sin(angle)
    dx = (1.0 - c) * p.dx + s * p.dy
    dy = (1.0 - c) * p.dy - s * p.dx
    return Affine2D(np.array([[c, -s, dx], [s, c, dy], [0.0, 0.0, 1.0]]))


__all__ = [
    "Affine2D",
    "IDENTITY",
    "PointLike",
    "rotate_primitive",
    "scale_primitive",
    "translate_primitive",
]

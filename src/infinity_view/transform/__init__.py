"""Transform algebra, gesture delta tracking and rotation snapping."""

from __future__ import annotations

from .affine import (
    IDENTITY,
    Affine2D,
    rotate_primitive,
    scale_primitive,
    translate_primitive,
)
from .composer import AxisFlags, GatePredicates, TransformComposer, UpdateOutcome
from .snap import SnapResult, display_transform, rotation_of, snap_angle, snap_rotation
from .tracker import DeltaTracker, GestureTrackerState

__all__ = [
    "Affine2D",
    "AxisFlags",
    "DeltaTracker",
    "GatePredicates",
    "GestureTrackerState",
    "IDENTITY",
    "SnapResult",
    "TransformComposer",
    "UpdateOutcome",
    "display_transform",
    "rotate_primitive",
    "rotation_of",
    "scale_primitive",
    "snap_angle",
    "snap_rotation",
    "translate_primitive",
]

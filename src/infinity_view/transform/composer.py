"""Compose incremental gesture steps onto the view transform.

Each update is evaluated axis by axis in a fixed order (translate, scale,
rotate). Every step is left-multiplied onto the result of the previous step
and the finished working copy replaces the stored transform in one swap.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass
from typing import Optional

from infinity_view.geometry import Offset
from infinity_view.input.events import GestureStartDetails, GestureUpdateDetails
from infinity_view.transform.affine import (
    IDENTITY,
    Affine2D,
    rotate_primitive,
    scale_primitive,
    translate_primitive,
)
from infinity_view.transform.tracker import DeltaTracker

logger = logging.getLogger(__name__)

TransformTest = Callable[[GestureUpdateDetails], bool]


@dataclass(frozen=True)
class AxisFlags:
    translate: bool = True
    scale: bool = True
    rotate: bool = False

    @property
    def locked(self) -> bool:
        return not (self.translate or self.scale or self.rotate)


@dataclass(frozen=True)
class GatePredicates:
    """Optional per-axis veto; a missing predicate allows the axis."""

    translation_test: Optional[TransformTest] = None
    scale_test: Optional[TransformTest] = None
    rotate_test: Optional[TransformTest] = None

    @staticmethod
    def _allows(test: Optional[TransformTest], details: GestureUpdateDetails) -> bool:
        return test is None or bool(test(details))

    def allows_translation(self, details: GestureUpdateDetails) -> bool:
        return self._allows(self.translation_test, details)

    def allows_scale(self, details: GestureUpdateDetails) -> bool:
        return self._allows(self.scale_test, details)

    def allows_rotation(self, details: GestureUpdateDetails) -> bool:
        return self._allows(self.rotate_test, details)


@dataclass(frozen=True)
class UpdateOutcome:
    transform: Affine2D
    translated: bool = False
    scaled: bool = False
    rotated: bool = False

    @property
    def changed(self) -> bool:
        return self.translated or self.scaled or self.rotated


class TransformComposer:
    """Owns the composed transform and the tracker of the live gesture."""

    def __init__(self, transform: Affine2D = IDENTITY) -> None:
        self._transform = transform
        self.tracker = DeltaTracker()

    @property
    def transform(self) -> Affine2D:
        return self._transform

    def replace(self, transform: Affine2D) -> Affine2D:
        assert transform.is_invertible, "composed transform must stay invertible"
        self._transform = transform
        return transform

    def reset(self) -> Affine2D:
        return self.replace(IDENTITY)

    def begin(self, details: GestureStartDetails) -> None:
        self.tracker.on_start(details)

    def apply_update(
        self,
        details: GestureUpdateDetails,
        *,
        axes: AxisFlags,
        gates: GatePredicates,
        focal_override: Optional[Offset] = None,
    ) -> UpdateOutcome:
        if axes.locked:
            return UpdateOutcome(transform=self._transform)

        focal = focal_override if focal_override is not None else details.local_focal_point
        working = self._transform
        translated = scaled = rotated = False

        if axes.translate and gates.allows_translation(details):
            delta = self.tracker.translation_delta(details.focal_point)
            working = working.then(translate_primitive(delta))
            translated = delta.dx != 0.0 or delta.dy != 0.0

        if axes.scale and details.scale != 1.0 and gates.allows_scale(details):
            if not (math.isfinite(details.scale) and details.scale > 0.0):
                logger.debug("skipping degenerate scale sample %r", details.scale)
            else:
                factor = self.tracker.scale_delta(details.scale)
                working = working.then(scale_primitive(factor, focal))
                scaled = factor != 1.0

        if axes.rotate and details.rotation != 0.0 and gates.allows_rotation(details):
            angle = self.tracker.rotation_delta(details.rotation)
            working = working.then(rotate_primitive(angle, focal))
            rotated = angle != 0.0

        self._transform = working
        return UpdateOutcome(
            transform=working,
            translated=translated,
            scaled=scaled,
            rotated=rotated,
        )


__all__ = [
    "AxisFlags",
    "GatePredicates",
    "TransformComposer",
    "TransformTest",
    "UpdateOutcome",
]

"""Convert cumulative gesture samples into frame-to-frame deltas."""

from __future__ import annotations

from dataclasses import dataclass

from infinity_view.geometry import ZERO, Offset
from infinity_view.input.events import GestureStartDetails


@dataclass
class GestureTrackerState:
    """Last absolute sample seen for the gesture in progress."""

    last_translation: Offset = ZERO
    last_scale: float = 1.0
    last_rotation: float = 0.0


class DeltaTracker:
    """Gesture APIs report values since gesture start; the composer needs increments."""

    def __init__(self) -> None:
        self.state = GestureTrackerState()

    def on_start(self, details: GestureStartDetails) -> None:
        self.state = GestureTrackerState(
            last_translation=details.focal_point,
            last_scale=1.0,
            last_rotation=0.0,
        )

    def translation_delta(self, translation: Offset) -> Offset:
        previous = self.state.last_translation
        self.state.last_translation = translation
        return translation - previous

    def scale_delta(self, scale: float) -> float:
        previous = self.state.last_scale
        assert previous != 0.0, "tracked scale must never be zero"
        self.state.last_scale = float(scale)
        return float(scale) / previous

    def rotation_delta(self, rotation: float) -> float:
        previous = self.state.last_rotation
        self.state.last_rotation = float(rotation)
        return float(rotation) - previous


__all__ = ["DeltaTracker", "GestureTrackerState"]

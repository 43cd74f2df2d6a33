"""Engine configuration consumed at construction time."""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any, Optional

from infinity_view.control.curves import CURVES
from infinity_view.input.scroll_policy import ScrollWheelBehavior, ScrollWheelHandler
from infinity_view.transform.composer import AxisFlags, GatePredicates, TransformTest
from infinity_view.utils.env import env_bool, env_choice, env_float, env_pair


class InvalidConfigError(ValueError):
    """Raised for configuration values that would mask a caller bug if clamped."""


@dataclass(frozen=True)
class EngineConfig:
    """Gesture, scroll, snapping and animation settings for ``InfinityEngine``.

    Snap angles are in degrees; ``focal_point_alignment`` is an ``(x, y)``
    alignment in ``[-1, 1]`` where ``(0, 0)`` anchors scale and rotation at
    the viewport center regardless of where the pointers are.
    """

    should_translate: bool = True
    should_scale: bool = True
    should_rotate: bool = False
    scroll_wheel_behavior: ScrollWheelBehavior = ScrollWheelBehavior.SCALE
    scroll_wheel_handler: Optional[ScrollWheelHandler] = None
    scroll_wheel_sensitivity: float = 1.0
    rotation_snapping_threshold: float = 0.0
    rotation_snapping_increment: float = 90.0
    focal_point_alignment: Optional[tuple[float, float]] = None
    translation_test: Optional[TransformTest] = None
    scale_test: Optional[TransformTest] = None
    rotate_test: Optional[TransformTest] = None
    animation_curve: str = "linear"
    animation_duration_s: float = 0.3

    def __post_init__(self) -> None:
        try:
            behavior = ScrollWheelBehavior.parse(self.scroll_wheel_behavior)
        except ValueError as exc:
            raise InvalidConfigError(str(exc)) from exc
        object.__setattr__(self, "scroll_wheel_behavior", behavior)

        sensitivity = float(self.scroll_wheel_sensitivity)
        if not (math.isfinite(sensitivity) and sensitivity > 0.0):
            raise InvalidConfigError(f"scroll_wheel_sensitivity must be > 0, got {self.scroll_wheel_sensitivity!r}")
        threshold = float(self.rotation_snapping_threshold)
        if not (math.isfinite(threshold) and threshold >= 0.0):
            raise InvalidConfigError(f"rotation_snapping_threshold must be >= 0, got {self.rotation_snapping_threshold!r}")
        increment = float(self.rotation_snapping_increment)
        if not (math.isfinite(increment) and increment > 0.0):
            raise InvalidConfigError(f"rotation_snapping_increment must be > 0, got {self.rotation_snapping_increment!r}")
        duration = float(self.animation_duration_s)
        if not (math.isfinite(duration) and duration >= 0.0):
            raise InvalidConfigError(f"animation_duration_s must be >= 0, got {self.animation_duration_s!r}")
        curve = str(self.animation_curve).strip().lower()
        if curve not in CURVES:
            raise InvalidConfigError(f"unknown animation_curve {self.animation_curve!r}; expected one of {sorted(CURVES)}")

        alignment = self.focal_point_alignment
        if alignment is not None:
            if len(alignment) != 2:
                raise InvalidConfigError(f"focal_point_alignment must be an (x, y) pair, got {alignment!r}")
            ax, ay = (float(v) for v in alignment)
            if not (math.isfinite(ax) and math.isfinite(ay)):
                raise InvalidConfigError(f"focal_point_alignment must be finite, got {alignment!r}")
            object.__setattr__(self, "focal_point_alignment", (ax, ay))

        object.__setattr__(self, "scroll_wheel_sensitivity", sensitivity)
        object.__setattr__(self, "rotation_snapping_threshold", threshold)
        object.__setattr__(self, "rotation_snapping_increment", increment)
        object.__setattr__(self, "animation_duration_s", duration)
        object.__setattr__(self, "animation_curve", curve)

    @property
    def locked(self) -> bool:
        return self.axes.locked

    @property
    def axes(self) -> AxisFlags:
        return AxisFlags(
            translate=bool(self.should_translate),
            scale=bool(self.should_scale),
            rotate=bool(self.should_rotate),
        )

    @property
    def gates(self) -> GatePredicates:
        return GatePredicates(
            translation_test=self.translation_test,
            scale_test=self.scale_test,
            rotate_test=self.rotate_test,
        )

    @property
    def snap_threshold_rad(self) -> float:
        return math.radians(self.rotation_snapping_threshold)

    @property
    def snap_increment_rad(self) -> float:
        return math.radians(self.rotation_snapping_increment)

    def with_overrides(self, **overrides: Any) -> EngineConfig:
        return replace(self, **overrides)


_BEHAVIOR_CHOICES = tuple(member.value for member in ScrollWheelBehavior)


def load_engine_config(env: Optional[Mapping[str, str]] = None, **overrides: Any) -> EngineConfig:
    """Resolve ``INFINITY_VIEW_*`` environment variables into an ``EngineConfig``.

    Keyword overrides win over the environment; callables (gate predicates,
    the scroll handler) can only be passed as overrides.
    """
    defaults = EngineConfig()
    values: dict[str, Any] = {
        "should_translate": env_bool("INFINITY_VIEW_SHOULD_TRANSLATE", defaults.should_translate, env),
        "should_scale": env_bool("INFINITY_VIEW_SHOULD_SCALE", defaults.should_scale, env),
        "should_rotate": env_bool("INFINITY_VIEW_SHOULD_ROTATE", defaults.should_rotate, env),
        "scroll_wheel_behavior": env_choice(
            "INFINITY_VIEW_SCROLL_BEHAVIOR",
            _BEHAVIOR_CHOICES,
            defaults.scroll_wheel_behavior.value,
            env,
        ),
        "scroll_wheel_sensitivity": env_float(
            "INFINITY_VIEW_SCROLL_SENSITIVITY", defaults.scroll_wheel_sensitivity, env
        ),
        "rotation_snapping_threshold": env_float(
            "INFINITY_VIEW_SNAP_THRESHOLD_DEG", defaults.rotation_snapping_threshold, env
        ),
        "rotation_snapping_increment": env_float(
            "INFINITY_VIEW_SNAP_INCREMENT_DEG", defaults.rotation_snapping_increment, env
        ),
        "focal_point_alignment": env_pair("INFINITY_VIEW_FOCAL_ALIGNMENT", None, env),
        "animation_curve": env_choice("INFINITY_VIEW_ANIMATION_CURVE", CURVES.keys(), defaults.animation_curve, env),
        "animation_duration_s": env_float(
            "INFINITY_VIEW_ANIMATION_MS", defaults.animation_duration_s * 1000.0, env
        ) / 1000.0,
    }
    values.update(overrides)
    return EngineConfig(**values)


__all__ = ["EngineConfig", "InvalidConfigError", "load_engine_config"]

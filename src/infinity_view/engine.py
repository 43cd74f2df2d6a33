"""Gesture-to-transform engine.

``InfinityEngine`` receives normalized input, folds it into a single composed
transform and asks its renderer to redraw. It is single-threaded: every
entry point runs synchronously on the caller's event thread.

Two sources write the composed transform: the live gesture pipeline and the
``ViewController``. A live gesture always wins over an in-flight controller
animation; the animation is dropped and the gesture continues from the
interpolated value that is currently on screen.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Optional, Union

from infinity_view.config.logging_policy import LoggingToggles, load_logging_toggles
from infinity_view.config.models import EngineConfig
from infinity_view.control.animation import AnimationBuffer, TransformAnimation
from infinity_view.control.curves import get_curve
from infinity_view.control.surface import ViewController
from infinity_view.control.ticker import FrameTicker, ManualTicker
from infinity_view.geometry import Offset, alignment_along_size
from infinity_view.input import normalizer
from infinity_view.input.events import (
    DeviceKind,
    GestureStartDetails,
    GestureUpdateDetails,
    PanZoomStartEvent,
    PanZoomUpdateEvent,
    PointerDownEvent,
    PointerMoveEvent,
    PointerScrollEvent,
    ScaleStartEvent,
    ScaleUpdateEvent,
)
from infinity_view.input.scroll_policy import ScrollWheelBehavior, resolve_behavior, resolve_scroll
from infinity_view.transform.affine import IDENTITY, Affine2D, rotate_primitive, scale_primitive
from infinity_view.transform.composer import TransformComposer, UpdateOutcome
from infinity_view.transform.snap import SnapResult, display_transform, snap_rotation

logger = logging.getLogger(__name__)

CENTER_ALIGNMENT = (0.0, 0.0)

RawEvent = Union[
    ScaleStartEvent,
    ScaleUpdateEvent,
    PanZoomStartEvent,
    PanZoomUpdateEvent,
    PointerDownEvent,
    PointerMoveEvent,
    PointerScrollEvent,
]


@dataclass(frozen=True)
class RedrawRequest:
    """Everything a renderer needs to draw the content plane."""

    transform: Affine2D
    rotation: float
    display_rotation: float
    display_transform: Affine2D

    @property
    def counter_rotation(self) -> float:
        return self.display_rotation - self.rotation


class _EngineBinding:
    """Live getters/setters plugged into a ``ViewController``."""

    def __init__(self, engine: InfinityEngine) -> None:
        self._engine = engine

    def get_scale(self) -> float:
        return self._engine._control_target().scale

    def set_scale(self, scale: float, animate: bool) -> None:
        engine = self._engine
        current = engine._control_target()
        center = engine.center
        old_scale = current.scale
        assert old_scale > 0.0, "composed transform lost its scale"
        undone = current @ scale_primitive(1.0 / old_scale, center)
        engine._control_write(undone @ scale_primitive(scale, center), animate, "scale")

    def get_translation(self) -> Offset:
        return self._engine._control_target().translation

    def set_translation(self, translation: Offset, animate: bool) -> None:
        engine = self._engine
        engine._control_write(engine._control_target().with_translation(translation), animate, "translation")

    def get_rotation(self) -> float:
        return self._engine._control_target().rotation

    def set_rotation(self, rotation: float, animate: bool) -> None:
        engine = self._engine
        current = engine._control_target()
        turned = current @ rotate_primitive(rotation - current.rotation, engine.center)
        engine._control_write(turned, animate, "rotation")

    def reset(self, animate: bool) -> None:
        self._engine._control_write(IDENTITY, animate, "reset")

    def begin_batch(self) -> None:
        self._engine._begin_batch()

    def end_batch(self, commit: bool) -> None:
        self._engine._end_batch(commit)


class InfinityEngine:
    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        *,
        viewport_size: tuple[float, float] = (0.0, 0.0),
        on_redraw: Optional[Callable[[RedrawRequest], None]] = None,
        controller: Optional[ViewController] = None,
        ticker: Optional[FrameTicker] = None,
        clock: Callable[[], float] = time.perf_counter,
        logging_toggles: Optional[LoggingToggles] = None,
    ) -> None:
        self._config = config if config is not None else EngineConfig()
        self._composer = TransformComposer()
        self._viewport_size = (0.0, 0.0)
        self.resize(*viewport_size)
        self._on_redraw = on_redraw
        self._ticker: FrameTicker = ticker if ticker is not None else ManualTicker()
        self._clock = clock
        self._toggles = logging_toggles if logging_toggles is not None else load_logging_toggles()
        self._buffer: Optional[AnimationBuffer] = None
        self._animation: Optional[TransformAnimation] = None
        self._animation_started = 0.0
        self._binding = _EngineBinding(self)
        self._controller: Optional[ViewController] = None
        self._last_request: Optional[RedrawRequest] = None
        if controller is not None:
            self.attach_controller(controller)

    # --- state ------------------------------------------------------------------------
    @property
    def config(self) -> EngineConfig:
        return self._config

    @property
    def transform(self) -> Affine2D:
        return self._composer.transform

    @property
    def viewport_size(self) -> tuple[float, float]:
        return self._viewport_size

    @property
    def center(self) -> Offset:
        return alignment_along_size(CENTER_ALIGNMENT, self._viewport_size)

    @property
    def controller(self) -> Optional[ViewController]:
        return self._controller

    @property
    def animating(self) -> bool:
        return self._animation is not None

    @property
    def batch_open(self) -> bool:
        return self._buffer is not None

    def snap(self) -> SnapResult:
        return snap_rotation(
            self._composer.transform,
            self._config.snap_threshold_rad,
            self._config.snap_increment_rad,
        )

    def snapshot(self) -> RedrawRequest:
        """Current transform plus the snap-filtered display angle."""
        transform = self._composer.transform
        result = self.snap()
        width, height = self._viewport_size
        center = self.center if width > 0.0 and height > 0.0 else None
        return RedrawRequest(
            transform=transform,
            rotation=result.rotation,
            display_rotation=result.display_rotation,
            display_transform=display_transform(transform, result, center),
        )

    # --- lifecycle --------------------------------------------------------------------
    def resize(self, width: float, height: float) -> None:
        w = float(width)
        h = float(height)
        if w < 0.0 or h < 0.0:
            raise ValueError(f"viewport size must be non-negative, got {(width, height)!r}")
        self._viewport_size = (w, h)

    def attach_controller(self, controller: ViewController) -> None:
        if self._buffer is not None:
            logger.debug("discarding open animation batch on controller re-attach")
            self._end_batch(commit=False)
        if self._controller is not None and self._controller is not controller:
            self._controller.detach()
        self._controller = controller
        controller.attach(self._binding)

    def reconfigure(self, config: EngineConfig, *, controller: Optional[ViewController] = None) -> None:
        """Swap configuration and re-attach the (possibly new) controller."""
        self._config = config
        target = controller if controller is not None else self._controller
        if target is not None:
            self.attach_controller(target)

    # --- gesture pipeline -------------------------------------------------------------
    def gesture_start(self, details: GestureStartDetails) -> None:
        # Locked views leave controller animations running.
        if not self._config.locked:
            self.abort_animation(reason="gesture")
        self._composer.begin(details)
        if self._toggles.log_gesture_info and logger.isEnabledFor(logging.INFO):
            logger.info("gesture start focal=(%.1f,%.1f)", details.focal_point.dx, details.focal_point.dy)

    def gesture_update(self, details: GestureUpdateDetails) -> UpdateOutcome:
        config = self._config
        if config.locked:
            return UpdateOutcome(transform=self._composer.transform)
        self.abort_animation(reason="gesture")
        outcome = self._composer.apply_update(
            details,
            axes=config.axes,
            gates=config.gates,
            focal_override=self._focal_override(),
        )
        if self._toggles.log_gesture_info and logger.isEnabledFor(logging.INFO):
            logger.info(
                "gesture update kind=%s scale=%.4f rot=%.4f -> t=%s s=%s r=%s",
                details.kind.value,
                details.scale,
                details.rotation,
                outcome.translated,
                outcome.scaled,
                outcome.rotated,
            )
        if outcome.changed:
            self._request_redraw()
        return outcome

    def _focal_override(self) -> Optional[Offset]:
        alignment = self._config.focal_point_alignment
        if alignment is None:
            return None
        return alignment_along_size(alignment, self._viewport_size)

    # --- raw event entry points -------------------------------------------------------
    def handle_scale_start(self, event: ScaleStartEvent) -> None:
        self.gesture_start(normalizer.from_scale_start(event))

    def handle_scale_update(self, event: ScaleUpdateEvent) -> UpdateOutcome:
        return self.gesture_update(normalizer.from_scale_update(event))

    def handle_pan_zoom_start(self, event: PanZoomStartEvent) -> None:
        self.gesture_start(normalizer.from_pan_zoom_start(event))

    def handle_pan_zoom_update(self, event: PanZoomUpdateEvent) -> UpdateOutcome:
        return self.gesture_update(normalizer.from_pan_zoom_update(event))

    def handle_pointer_down(self, event: PointerDownEvent) -> None:
        # Touch contacts arrive through the scale-gesture recogniser instead.
        if event.kind is DeviceKind.TOUCH:
            return
        self.gesture_start(normalizer.from_pointer_down(event))

    def handle_pointer_move(self, event: PointerMoveEvent) -> Optional[UpdateOutcome]:
        if event.kind is DeviceKind.TOUCH:
            return None
        return self.gesture_update(normalizer.from_pointer_move(event))

    def handle_pointer_scroll(self, event: PointerScrollEvent) -> Optional[UpdateOutcome]:
        """Run one wheel tick as a synthetic start/update pair; ``None`` when ignored."""
        config = self._config
        behavior = resolve_behavior(config.scroll_wheel_behavior, config.scroll_wheel_handler)
        if behavior is ScrollWheelBehavior.IGNORE:
            return None
        if self._toggles.log_scroll_info and logger.isEnabledFor(logging.INFO):
            logger.info(
                "scroll behavior=%s delta=(%.1f,%.1f) at (%.1f,%.1f)",
                behavior.value,
                event.scroll_delta.dx,
                event.scroll_delta.dy,
                event.position.dx,
                event.position.dy,
            )
        self.gesture_start(normalizer.from_pointer_scroll(event))
        return self.gesture_update(resolve_scroll(event, behavior, config.scroll_wheel_sensitivity))

    def handle_event(self, event: RawEvent) -> Optional[UpdateOutcome]:
        if isinstance(event, ScaleStartEvent):
            self.handle_scale_start(event)
            return None
        if isinstance(event, ScaleUpdateEvent):
            return self.handle_scale_update(event)
        if isinstance(event, PanZoomStartEvent):
            self.handle_pan_zoom_start(event)
            return None
        if isinstance(event, PanZoomUpdateEvent):
            return self.handle_pan_zoom_update(event)
        if isinstance(event, PointerDownEvent):
            self.handle_pointer_down(event)
            return None
        if isinstance(event, PointerMoveEvent):
            return self.handle_pointer_move(event)
        if isinstance(event, PointerScrollEvent):
            return self.handle_pointer_scroll(event)
        raise TypeError(f"unsupported input event: {type(event).__name__}")

    # --- controller plumbing ----------------------------------------------------------
    def _control_target(self) -> Affine2D:
        buffer = self._buffer
        return buffer.target if buffer is not None else self._composer.transform

    def _control_write(self, transform: Affine2D, animate: bool, what: str) -> None:
        buffer = self._buffer
        if animate and buffer is not None:
            buffer.target = transform
            if self._toggles.log_control_info and logger.isEnabledFor(logging.INFO):
                logger.info("controller %s buffered -> %r", what, transform)
            return
        self.abort_animation(reason=f"controller.{what}")
        self._composer.replace(transform)
        if self._toggles.log_control_info and logger.isEnabledFor(logging.INFO):
            logger.info("controller %s -> %r", what, transform)
        self._request_redraw()

    def _begin_batch(self) -> None:
        self._buffer = AnimationBuffer(target=self._composer.transform)

    def _end_batch(self, commit: bool) -> None:
        buffer = self._buffer
        self._buffer = None
        if buffer is None or not commit:
            return
        start = self._composer.transform
        target = buffer.target
        self.abort_animation(reason="batch")
        if self._config.animation_duration_s <= 0.0 or target.equals(start):
            self._composer.replace(target)
            self._request_redraw()
            return
        self._animation = TransformAnimation(
            start=start,
            end=target,
            duration_s=self._config.animation_duration_s,
            curve=get_curve(self._config.animation_curve),
        )
        self._animation_started = float(self._clock())
        if self._toggles.log_animation_debug:
            logger.debug(
                "animation start %r -> %r over %.3fs (%s)",
                start,
                target,
                self._config.animation_duration_s,
                self._config.animation_curve,
            )
        self._ticker.start(self._on_frame)

    # --- animation --------------------------------------------------------------------
    def _on_frame(self) -> None:
        animation = self._animation
        if animation is None:
            self._ticker.stop()
            return
        elapsed = float(self._clock()) - self._animation_started
        self._composer.replace(animation.sample(elapsed))
        if animation.done(elapsed):
            self._animation = None
            self._ticker.stop()
            if self._toggles.log_animation_debug:
                logger.debug("animation settled after %.3fs", elapsed)
        self._request_redraw()

    def abort_animation(self, *, reason: str = "abort") -> bool:
        """Drop any in-flight interpolation, keeping the value currently shown."""
        if self._animation is None:
            return False
        self._animation = None
        self._ticker.stop()
        if self._toggles.log_animation_debug:
            logger.debug("animation aborted by %s", reason)
        return True

    # --- output -----------------------------------------------------------------------
    @property
    def last_request(self) -> Optional[RedrawRequest]:
        return self._last_request

    def _request_redraw(self) -> None:
        request = self.snapshot()
        self._last_request = request
        if self._on_redraw is not None:
            self._on_redraw(request)


__all__ = ["InfinityEngine", "RawEvent", "RedrawRequest"]

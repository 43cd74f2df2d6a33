from __future__ import annotations

import math

import pytest

from infinity_view.config.models import EngineConfig
from infinity_view.control.surface import NotReadyError, ViewController
from infinity_view.control.ticker import ManualTicker
from infinity_view.engine import InfinityEngine, RedrawRequest
from infinity_view.geometry import Offset
from infinity_view.input.events import (
    DeviceKind,
    PanZoomStartEvent,
    PanZoomUpdateEvent,
    PointerDownEvent,
    PointerMoveEvent,
    PointerScrollEvent,
    ScaleStartEvent,
    ScaleUpdateEvent,
)
from infinity_view.input.scroll_policy import ScrollWheelBehavior
from infinity_view.transform.affine import IDENTITY

VIEWPORT = (200.0, 100.0)


class _Clock:
    def __init__(self, now: float = 0.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


def _engine(config: EngineConfig | None = None, **kwargs) -> tuple[InfinityEngine, list[RedrawRequest]]:
    redraws: list[RedrawRequest] = []
    kwargs.setdefault("viewport_size", VIEWPORT)
    engine = InfinityEngine(config, on_redraw=redraws.append, **kwargs)
    return engine, redraws


def _wheel(dy: float, at: Offset = Offset(50, 25)) -> PointerScrollEvent:
    return PointerScrollEvent(position=at, local_position=at, scroll_delta=Offset(0, dy))


def _drag(engine: InfinityEngine, start: Offset, end: Offset) -> None:
    engine.handle_pointer_down(PointerDownEvent(position=start, local_position=start))
    engine.handle_pointer_move(PointerMoveEvent(position=end, local_position=end))


# --- gesture pipeline ----------------------------------------------------------------


def test_mouse_drag_translates_and_requests_redraw() -> None:
    engine, redraws = _engine()

    _drag(engine, Offset(10, 10), Offset(25, 5))

    assert engine.transform.translation == Offset(15, -5)
    assert redraws[-1].transform is engine.transform
    assert engine.last_request is redraws[-1]


def test_scroll_scales_about_the_cursor() -> None:
    engine, _ = _engine()
    cursor = Offset(50, 25)

    outcome = engine.handle_pointer_scroll(_wheel(100, cursor))

    assert outcome is not None and outcome.scaled
    assert engine.transform.scale == pytest.approx(0.9)
    fixed = engine.transform.map_point(cursor)
    assert fixed.dx == pytest.approx(cursor.dx)
    assert fixed.dy == pytest.approx(cursor.dy)


def test_scroll_translate_y_pans_by_a_fifth_of_the_delta() -> None:
    engine, _ = _engine(EngineConfig(scroll_wheel_behavior=ScrollWheelBehavior.TRANSLATE_Y))

    engine.handle_pointer_scroll(_wheel(100))

    assert engine.transform.translation == Offset(0, -20)
    assert engine.transform.scale == pytest.approx(1.0)


def test_scroll_rotates_when_rotation_is_enabled() -> None:
    engine, _ = _engine(
        EngineConfig(should_rotate=True, scroll_wheel_behavior=ScrollWheelBehavior.ROTATE_CLOCKWISE)
    )

    engine.handle_pointer_scroll(_wheel(100))

    assert engine.transform.rotation == pytest.approx(-0.1)


def test_ignored_scroll_never_starts_a_gesture() -> None:
    engine, redraws = _engine(EngineConfig(scroll_wheel_behavior=ScrollWheelBehavior.IGNORE))
    engine.handle_pointer_down(PointerDownEvent(position=Offset(0, 0)))

    assert engine.handle_pointer_scroll(_wheel(100)) is None
    assert redraws == []
    # the tracker still holds the pointer-down focal point
    engine.handle_pointer_move(PointerMoveEvent(position=Offset(4, 0), local_position=Offset(4, 0)))
    assert engine.transform.translation == Offset(4, 0)


def test_scroll_handler_overrides_default_behavior() -> None:
    mode = {"behavior": None}
    engine, _ = _engine(EngineConfig(scroll_wheel_handler=lambda: mode["behavior"]))

    engine.handle_pointer_scroll(_wheel(-100))
    assert engine.transform.scale == pytest.approx(1.1)

    mode["behavior"] = ScrollWheelBehavior.IGNORE
    before = engine.transform
    assert engine.handle_pointer_scroll(_wheel(-100)) is None
    assert engine.transform is before


def test_trackpad_pinch_accumulates_incremental_scale() -> None:
    engine, _ = _engine()
    focal = Offset(100, 50)
    engine.handle_pan_zoom_start(PanZoomStartEvent(position=focal, local_position=focal))

    for scale in (1.2, 1.44):
        engine.handle_pan_zoom_update(PanZoomUpdateEvent(position=focal, local_position=focal, scale=scale))

    assert engine.transform.scale == pytest.approx(1.44)
    assert engine.transform.map_point(focal).dx == pytest.approx(100.0)


def test_trackpad_pan_translates_by_accumulated_pan() -> None:
    engine, _ = _engine()
    origin = Offset(100, 50)
    engine.handle_pan_zoom_start(PanZoomStartEvent(position=origin))

    engine.handle_pan_zoom_update(PanZoomUpdateEvent(position=origin, local_position=origin, pan=Offset(10, 0)))
    engine.handle_pan_zoom_update(PanZoomUpdateEvent(position=origin, local_position=origin, pan=Offset(30, 5)))

    assert engine.transform.translation == Offset(30, 5)


def test_touch_pinch_rotate_uses_scale_gesture_events() -> None:
    engine, _ = _engine(EngineConfig(should_rotate=True))
    focal = Offset(60, 40)
    engine.handle_scale_start(ScaleStartEvent(focal_point=focal))

    engine.handle_scale_update(ScaleUpdateEvent(focal_point=focal, local_focal_point=focal, scale=2.0, rotation=0.3))

    assert engine.transform.scale == pytest.approx(2.0)
    assert engine.transform.rotation == pytest.approx(0.3)
    assert engine.transform.map_point(focal).dy == pytest.approx(40.0)


def test_touch_pointer_events_are_ignored() -> None:
    engine, redraws = _engine()
    touch = DeviceKind.TOUCH

    engine.handle_pointer_down(PointerDownEvent(position=Offset(0, 0), kind=touch))
    assert engine.handle_pointer_move(PointerMoveEvent(position=Offset(9, 9), local_position=Offset(9, 9), kind=touch)) is None
    assert redraws == []


def test_scale_gate_leaves_scale_unchanged() -> None:
    engine, _ = _engine(EngineConfig(scale_test=lambda details: False))

    engine.handle_pointer_scroll(_wheel(-100))

    assert engine.transform.scale == pytest.approx(1.0)


def test_translation_gate_can_require_a_button() -> None:
    from infinity_view.input.events import MIDDLE_BUTTON, PRIMARY_BUTTON

    engine, _ = _engine(EngineConfig(translation_test=lambda d: d.buttons == MIDDLE_BUTTON))

    engine.handle_pointer_down(PointerDownEvent(position=Offset(0, 0), buttons=PRIMARY_BUTTON))
    engine.handle_pointer_move(PointerMoveEvent(position=Offset(5, 0), local_position=Offset(5, 0), buttons=PRIMARY_BUTTON))
    assert engine.transform.is_identity

    engine.handle_pointer_down(PointerDownEvent(position=Offset(0, 0), buttons=MIDDLE_BUTTON))
    engine.handle_pointer_move(PointerMoveEvent(position=Offset(5, 0), local_position=Offset(5, 0), buttons=MIDDLE_BUTTON))
    assert engine.transform.translation == Offset(5, 0)


def test_locked_engine_ignores_input() -> None:
    engine, redraws = _engine(EngineConfig(should_translate=False, should_scale=False, should_rotate=False))

    _drag(engine, Offset(0, 0), Offset(50, 50))
    engine.handle_pointer_scroll(_wheel(100))

    assert engine.transform.is_identity
    assert redraws == []


def test_focal_point_alignment_anchors_at_the_viewport_center() -> None:
    engine, _ = _engine(EngineConfig(focal_point_alignment=(0.0, 0.0)))
    center = Offset(100, 50)

    engine.handle_pointer_scroll(_wheel(-100, at=Offset(10, 10)))

    mapped = engine.transform.map_point(center)
    assert mapped.dx == pytest.approx(100.0)
    assert mapped.dy == pytest.approx(50.0)


def test_handle_event_dispatches_and_rejects_unknown() -> None:
    engine, _ = _engine()
    engine.handle_event(PointerDownEvent(position=Offset(0, 0)))
    engine.handle_event(PointerMoveEvent(position=Offset(2, 3), local_position=Offset(2, 3)))
    assert engine.transform.translation == Offset(2, 3)

    with pytest.raises(TypeError):
        engine.handle_event("tap")  # type: ignore[arg-type]


def test_redraw_carries_snap_filtered_angle() -> None:
    controller = ViewController()
    engine, redraws = _engine(
        EngineConfig(should_rotate=True, rotation_snapping_threshold=5.0),
        controller=controller,
    )

    controller.rotation_in_degrees = 88.0
    request = redraws[-1]
    assert math.degrees(request.rotation) == pytest.approx(88.0)
    assert math.degrees(request.display_rotation) == pytest.approx(90.0)
    assert math.degrees(request.display_transform.rotation) == pytest.approx(90.0)
    assert math.degrees(engine.transform.rotation) == pytest.approx(88.0)

    controller.rotation_in_degrees = 80.0
    assert math.degrees(redraws[-1].display_rotation) == pytest.approx(80.0)


def test_viewport_size_must_be_non_negative() -> None:
    engine, _ = _engine()
    with pytest.raises(ValueError):
        engine.resize(-1, 10)


# --- controller ----------------------------------------------------------------------


def test_reset_always_returns_identity() -> None:
    controller = ViewController()
    engine, _ = _engine(EngineConfig(should_rotate=True), controller=controller)
    _drag(engine, Offset(0, 0), Offset(40, -30))
    engine.handle_pointer_scroll(_wheel(100))
    controller.rotation = 1.2

    controller.reset()

    assert engine.transform.equals(IDENTITY)
    controller.reset()
    assert engine.transform.equals(IDENTITY)


def test_set_scale_round_trips_independent_of_prior_state() -> None:
    controller = ViewController()
    engine, _ = _engine(controller=controller)
    _drag(engine, Offset(0, 0), Offset(33, 12))
    controller.rotation = 0.7
    engine.handle_pointer_scroll(_wheel(100))
    center_before = engine.transform.map_point(engine.center)

    controller.scale = 2.0

    assert controller.scale == pytest.approx(2.0)
    assert controller.rotation == pytest.approx(0.7)
    center_after = engine.transform.map_point(engine.center)
    assert center_after.dx == pytest.approx(center_before.dx)
    assert center_after.dy == pytest.approx(center_before.dy)


def test_rotation_and_translation_setters() -> None:
    controller = ViewController()
    engine, _ = _engine(controller=controller)
    controller.scale = 0.5

    controller.rotation = -2.0
    assert controller.rotation == pytest.approx(-2.0)
    assert controller.scale == pytest.approx(0.5)

    controller.translation = Offset(12, 34)
    assert controller.translation == Offset(12, 34)
    assert engine.transform.translation == Offset(12, 34)


def test_controller_not_ready_until_engine_attaches() -> None:
    controller = ViewController()
    with pytest.raises(NotReadyError):
        controller.scale = 2.0

    engine, _ = _engine(controller=controller)
    controller.scale = 2.0
    assert engine.transform.scale == pytest.approx(2.0)


def test_on_ready_runs_once_across_reconfigure() -> None:
    ready: list[ViewController] = []

    def on_ready(c: ViewController) -> None:
        ready.append(c)
        c.scale = 0.25

    controller = ViewController(on_ready=on_ready)
    engine, redraws = _engine(controller=controller)

    assert engine.transform.scale == pytest.approx(0.25)
    assert len(redraws) == 1

    engine.reconfigure(EngineConfig(should_rotate=True))
    assert ready == [controller]
    controller.rotation = 0.5
    assert engine.transform.rotation == pytest.approx(0.5)


def test_attaching_a_new_controller_detaches_the_old_one() -> None:
    first = ViewController()
    engine, _ = _engine(controller=first)
    second = ViewController()

    engine.reconfigure(engine.config, controller=second)

    assert engine.controller is second
    with pytest.raises(NotReadyError):
        _ = first.scale
    assert second.scale == pytest.approx(1.0)


# --- animated batches ----------------------------------------------------------------


def _animated_engine(duration: float = 0.3):
    clock = _Clock()
    ticker = ManualTicker()
    controller = ViewController()
    engine, redraws = _engine(
        EngineConfig(animation_duration_s=duration),
        controller=controller,
        ticker=ticker,
        clock=clock,
    )
    return engine, controller, ticker, clock, redraws


def test_batch_interpolates_from_pre_batch_to_target() -> None:
    engine, controller, ticker, clock, _ = _animated_engine()
    controller.rotation = 0.5
    controller.translation = Offset(10, 10)
    before = engine.transform

    with controller.animate():
        controller.translation += Offset(50, 0)
        assert engine.transform is before

    assert engine.animating
    assert ticker.active

    ticker.tick()
    assert engine.transform.equals(before)

    clock.now += 0.15
    ticker.tick()
    assert engine.transform.translation.dx == pytest.approx(35.0)
    assert engine.transform.rotation == pytest.approx(0.5)

    clock.now = 1.0
    ticker.tick()
    expected = before.with_translation(before.translation + Offset(50, 0))
    assert engine.transform.equals(expected)
    assert not engine.animating
    assert not ticker.active
    assert ticker.tick() is False


def test_getters_inside_a_batch_read_the_buffer() -> None:
    engine, controller, ticker, clock, _ = _animated_engine()

    with controller.animate():
        controller.scale *= 2.0
        controller.scale *= 1.5
        assert controller.scale == pytest.approx(3.0)
        assert engine.transform.scale == pytest.approx(1.0)

    clock.now += 1.0
    ticker.tick()
    assert engine.transform.scale == pytest.approx(3.0)


def test_reset_inside_batch_animates_to_identity() -> None:
    engine, controller, ticker, clock, _ = _animated_engine()
    controller.translation = Offset(80, 0)

    controller.animate(controller.reset)
    clock.now = 1.0
    ticker.tick()

    assert engine.transform.equals(IDENTITY)


def test_live_gesture_aborts_in_flight_animation() -> None:
    engine, controller, ticker, clock, _ = _animated_engine()

    with controller.animate():
        controller.translation = Offset(100, 0)
    clock.now += 0.15
    ticker.tick()
    mid = engine.transform
    assert mid.translation.dx == pytest.approx(50.0)

    _drag(engine, Offset(0, 0), Offset(0, 10))

    assert not engine.animating
    assert not ticker.active
    assert engine.transform.translation.dx == pytest.approx(50.0)
    assert engine.transform.translation.dy == pytest.approx(10.0)


def test_direct_write_aborts_in_flight_animation() -> None:
    engine, controller, ticker, clock, _ = _animated_engine()
    with controller.animate():
        controller.translation = Offset(100, 0)

    controller.scale = 3.0

    assert not engine.animating
    assert engine.transform.scale == pytest.approx(3.0)


def test_new_batch_starts_from_the_mid_flight_value() -> None:
    engine, controller, ticker, clock, _ = _animated_engine()
    with controller.animate():
        controller.translation = Offset(100, 0)
    clock.now += 0.15
    ticker.tick()
    mid = engine.transform

    with controller.animate():
        assert controller.translation.dx == pytest.approx(50.0)
        controller.translation = Offset(0, 0)

    ticker.tick()
    assert engine.transform.allclose(mid)
    clock.now += 1.0
    ticker.tick()
    assert engine.transform.translation == Offset(0, 0)


def test_zero_duration_batch_applies_immediately() -> None:
    engine, controller, ticker, clock, redraws = _animated_engine(duration=0.0)

    with controller.animate():
        controller.translation = Offset(7, 7)

    assert not engine.animating
    assert engine.transform.translation == Offset(7, 7)
    assert redraws[-1].transform is engine.transform
    assert engine.last_request is redraws[-1]


def test_failed_batch_leaves_transform_untouched() -> None:
    engine, controller, ticker, clock, _ = _animated_engine()

    with pytest.raises(KeyError):
        with controller.animate():
            controller.translation = Offset(7, 7)
            raise KeyError("boom")

    assert engine.transform.is_identity
    assert not engine.animating
    assert not engine.batch_open


def test_reconfigure_inside_a_batch_discards_the_buffer() -> None:
    engine, controller, ticker, clock, _ = _animated_engine()

    with controller.animate():
        controller.scale = 2.0
        engine.reconfigure(EngineConfig(should_rotate=True, animation_duration_s=0.3))

    assert not engine.batch_open
    assert not engine.animating
    assert engine.transform.scale == pytest.approx(1.0)

    controller.scale = 3.0
    assert controller.scale == pytest.approx(3.0)
    assert engine.transform.scale == pytest.approx(3.0)


def test_locked_engine_keeps_controller_animation_running() -> None:
    engine, controller, ticker, clock, _ = _animated_engine()
    with controller.animate():
        controller.translation = Offset(100, 0)
    engine.reconfigure(
        EngineConfig(should_translate=False, should_scale=False, should_rotate=False, animation_duration_s=0.3)
    )

    engine.handle_pointer_down(PointerDownEvent(position=Offset(0, 0)))

    assert engine.animating
    clock.now = 1.0
    ticker.tick()
    assert engine.transform.translation == Offset(100, 0)

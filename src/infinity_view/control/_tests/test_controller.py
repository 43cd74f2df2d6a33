from __future__ import annotations

import math

import pytest

from infinity_view.control.surface import NotReadyError, ViewController
from infinity_view.geometry import Offset


class _StubBinding:
    def __init__(self) -> None:
        self.scale = 1.0
        self.translation = Offset(0, 0)
        self.rotation = 0.0
        self.calls: list[tuple] = []

    def get_scale(self) -> float:
        return self.scale

    def set_scale(self, scale: float, animate: bool) -> None:
        self.calls.append(("scale", scale, animate))
        self.scale = scale

    def get_translation(self) -> Offset:
        return self.translation

    def set_translation(self, translation: Offset, animate: bool) -> None:
        self.calls.append(("translation", translation, animate))
        self.translation = translation

    def get_rotation(self) -> float:
        return self.rotation

    def set_rotation(self, rotation: float, animate: bool) -> None:
        self.calls.append(("rotation", rotation, animate))
        self.rotation = rotation

    def reset(self, animate: bool) -> None:
        self.calls.append(("reset", animate))

    def begin_batch(self) -> None:
        self.calls.append(("begin",))

    def end_batch(self, commit: bool) -> None:
        self.calls.append(("end", commit))


def test_members_raise_before_attach() -> None:
    controller = ViewController()

    assert controller.is_ready is False
    with pytest.raises(NotReadyError):
        _ = controller.scale
    with pytest.raises(NotReadyError):
        controller.translation = Offset(1, 1)
    with pytest.raises(NotReadyError):
        controller.reset()
    with pytest.raises(NotReadyError):
        with controller.animate():
            pass


def test_on_ready_fires_once_after_attach() -> None:
    seen: list[ViewController] = []
    controller = ViewController(on_ready=seen.append)

    controller.attach(_StubBinding())
    controller.attach(_StubBinding())

    assert seen == [controller]
    assert controller.is_ready


def test_on_ready_can_drive_the_binding() -> None:
    binding = _StubBinding()
    controller = ViewController(on_ready=lambda c: setattr(c, "scale", 0.25))

    controller.attach(binding)

    assert binding.calls == [("scale", 0.25, False)]


def test_degrees_round_trip_through_radians() -> None:
    binding = _StubBinding()
    controller = ViewController()
    controller.attach(binding)

    controller.rotation_in_degrees = 45.0

    assert binding.rotation == pytest.approx(math.pi / 4)
    assert controller.rotation_in_degrees == pytest.approx(45.0)


def test_tuple_translation_is_coerced() -> None:
    binding = _StubBinding()
    controller = ViewController()
    controller.attach(binding)

    controller.translation = (3, 4)

    assert binding.translation == Offset(3, 4)


def test_rejects_non_positive_scale() -> None:
    controller = ViewController()
    controller.attach(_StubBinding())
    with pytest.raises(ValueError):
        controller.scale = 0.0
    with pytest.raises(ValueError):
        controller.scale = float("nan")


def test_animate_batches_writes_and_folds_nested_batches() -> None:
    binding = _StubBinding()
    controller = ViewController()
    controller.attach(binding)

    with controller.animate():
        controller.translation += Offset(-50, 0)
        with controller.animate():
            controller.scale *= 1.1
        controller.reset()

    assert binding.calls == [
        ("begin",),
        ("translation", Offset(-50, 0), True),
        ("scale", pytest.approx(1.1), True),
        ("reset", True),
        ("end", True),
    ]


def test_animate_with_callback_runs_inside_batch() -> None:
    binding = _StubBinding()
    controller = ViewController()
    controller.attach(binding)

    result = controller.animate(lambda: setattr(controller, "rotation", 1.0))

    assert result is None
    assert binding.calls == [("begin",), ("rotation", 1.0, True), ("end", True)]
    controller.rotation = 2.0
    assert binding.calls[-1] == ("rotation", 2.0, False)


def test_failed_batch_is_discarded() -> None:
    binding = _StubBinding()
    controller = ViewController()
    controller.attach(binding)

    with pytest.raises(RuntimeError):
        with controller.animate():
            controller.scale = 2.0
            raise RuntimeError("boom")

    assert binding.calls[-1] == ("end", False)


def test_detach_makes_controller_unready() -> None:
    controller = ViewController()
    controller.attach(_StubBinding())
    controller.detach()
    with pytest.raises(NotReadyError):
        _ = controller.rotation


def test_reattach_inside_batch_discards_it_on_the_old_binding() -> None:
    old = _StubBinding()
    new = _StubBinding()
    controller = ViewController()
    controller.attach(old)

    with controller.animate():
        controller.scale = 2.0
        controller.attach(new)
        controller.scale = 3.0

    assert old.calls[-1] == ("end", False)
    assert new.calls == [("scale", 3.0, False)]


def test_detach_inside_batch_discards_it() -> None:
    binding = _StubBinding()
    controller = ViewController()
    controller.attach(binding)

    with controller.animate():
        controller.detach()

    assert binding.calls == [("begin",), ("end", False)]

"""Programmatic control of an ``InfinityEngine`` from outside the gesture stream.

A ``ViewController`` is created unattached; every member raises
``NotReadyError`` until an engine binds it with ``attach``. Use ``on_ready``
to run an initial transform as soon as the binding exists::

    controller = ViewController(on_ready=lambda c: setattr(c, "scale", 0.25))
    engine = InfinityEngine(config, controller=controller)

Writes made inside ``animate`` are collected and played back as one timed
transition::

    with controller.animate():
        controller.translation += Offset(-50, 0)
        controller.scale *= 1.1
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from typing import Optional, Protocol

from infinity_view.geometry import Offset

logger = logging.getLogger(__name__)


class NotReadyError(RuntimeError):
    """Raised when a controller is used before an engine attached it."""


class ControlBinding(Protocol):
    """Live getters/setters an engine plugs into a controller."""

    def get_scale(self) -> float: ...

    def set_scale(self, scale: float, animate: bool) -> None: ...

    def get_translation(self) -> Offset: ...

    def set_translation(self, translation: Offset, animate: bool) -> None: ...

    def get_rotation(self) -> float: ...

    def set_rotation(self, rotation: float, animate: bool) -> None: ...

    def reset(self, animate: bool) -> None: ...

    def begin_batch(self) -> None: ...

    def end_batch(self, commit: bool) -> None: ...


class _AnimationBatch:
    def __init__(self, controller: ViewController) -> None:
        self._controller = controller

    def __enter__(self) -> ViewController:
        self._controller._open_batch()
        return self._controller

    def __exit__(self, exc_type, exc, tb) -> bool:  # type: ignore[no-untyped-def]
        self._controller._close_batch(commit=exc_type is None)
        return False


class ViewController:
    def __init__(self, on_ready: Optional[Callable[[ViewController], None]] = None) -> None:
        self.on_ready = on_ready
        self._binding: Optional[ControlBinding] = None
        self._ready_fired = False
        self._batch_depth = 0

    # --- lifecycle --------------------------------------------------------------------
    def attach(self, binding: ControlBinding) -> None:
        """Bind live engine callbacks; ``on_ready`` fires after the first attach only."""
        rebinding = self._binding is not None
        self._drop_open_batch()
        self._binding = binding
        logger.debug("controller %s", "re-attached" if rebinding else "attached")
        if not self._ready_fired:
            self._ready_fired = True
            if self.on_ready is not None:
                self.on_ready(self)

    def detach(self) -> None:
        self._drop_open_batch()
        self._binding = None

    def _drop_open_batch(self) -> None:
        """Discard a batch left open by a re-attach or detach."""
        if self._batch_depth > 0 and self._binding is not None:
            self._binding.end_batch(False)
        self._batch_depth = 0

    @property
    def is_ready(self) -> bool:
        return self._binding is not None

    def _require(self) -> ControlBinding:
        binding = self._binding
        if binding is None:
            raise NotReadyError("ViewController is not attached to an engine yet; use on_ready")
        return binding

    @property
    def _animating(self) -> bool:
        return self._batch_depth > 0

    # --- properties -------------------------------------------------------------------
    @property
    def scale(self) -> float:
        return self._require().get_scale()

    @scale.setter
    def scale(self, value: float) -> None:
        value = float(value)
        if not (math.isfinite(value) and value > 0.0):
            raise ValueError(f"scale must be a positive finite number, got {value!r}")
        self._require().set_scale(value, self._animating)

    @property
    def translation(self) -> Offset:
        return self._require().get_translation()

    @translation.setter
    def translation(self, value: Offset | tuple[float, float]) -> None:
        self._require().set_translation(Offset.of(value), self._animating)

    @property
    def rotation(self) -> float:
        """Rotation in radians."""
        return self._require().get_rotation()

    @rotation.setter
    def rotation(self, value: float) -> None:
        self._require().set_rotation(float(value), self._animating)

    @property
    def rotation_in_degrees(self) -> float:
        return math.degrees(self.rotation)

    @rotation_in_degrees.setter
    def rotation_in_degrees(self, value: float) -> None:
        self.rotation = math.radians(float(value))

    def reset(self) -> None:
        """Return to scale 1.0, translation (0, 0) and rotation 0.0."""
        self._require().reset(self._animating)

    # --- batching ---------------------------------------------------------------------
    def animate(self, callback: Optional[Callable[[], None]] = None) -> Optional[_AnimationBatch]:
        """Animate every change made inside the batch.

        Without a callback this returns a context manager; with one, the
        callback runs inside a batch immediately. Nested batches fold into
        the outermost one. Curve and duration come from the engine config.
        """
        batch = _AnimationBatch(self)
        if callback is None:
            return batch
        with batch:
            callback()
        return None

    def _open_batch(self) -> None:
        binding = self._require()
        if self._batch_depth == 0:
            binding.begin_batch()
        self._batch_depth += 1

    def _close_batch(self, *, commit: bool) -> None:
        if self._batch_depth == 0:
            return
        self._batch_depth -= 1
        if self._batch_depth == 0 and self._binding is not None:
            self._binding.end_batch(commit)


__all__ = ["ControlBinding", "NotReadyError", "ViewController"]

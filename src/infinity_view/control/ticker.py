"""Frame scheduling for animated controller batches."""

from __future__ import annotations

from collections.abc import Callable
from typing import Optional, Protocol

FrameCallback = Callable[[], None]


class FrameTicker(Protocol):
    """Calls a frame callback repeatedly until stopped."""

    @property
    def active(self) -> bool: ...

    def start(self, callback: FrameCallback) -> None: ...

    def stop(self) -> None: ...


class ManualTicker:
    """Ticker driven by explicit ``tick()`` calls (headless use and tests)."""

    def __init__(self) -> None:
        self._callback: Optional[FrameCallback] = None
        self.frames = 0

    @property
    def active(self) -> bool:
        return self._callback is not None

    def start(self, callback: FrameCallback) -> None:
        self._callback = callback

    def stop(self) -> None:
        self._callback = None

    def tick(self) -> bool:
        """Run one frame; returns False when nothing is scheduled."""
        callback = self._callback
        if callback is None:
            return False
        self.frames += 1
        callback()
        return True


__all__ = ["FrameCallback", "FrameTicker", "ManualTicker"]

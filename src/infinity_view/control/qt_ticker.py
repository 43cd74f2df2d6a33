"""QTimer-backed frame ticker."""

from __future__ import annotations

import logging
from typing import Optional

from qtpy import QtCore

from infinity_view.control.ticker import FrameCallback

logger = logging.getLogger(__name__)

DEFAULT_FRAME_INTERVAL_MS = 16


class QtFrameTicker:
    """Drive animation frames from the Qt event loop."""

    def __init__(self, parent: Optional[QtCore.QObject] = None, *, interval_ms: int = DEFAULT_FRAME_INTERVAL_MS) -> None:
        self._timer = QtCore.QTimer(parent)
        self._timer.setTimerType(QtCore.Qt.PreciseTimer)
        self._timer.setInterval(max(1, int(interval_ms)))
        self._timer.timeout.connect(self._on_timeout)
        self._callback: Optional[FrameCallback] = None

    @property
    def active(self) -> bool:
        return self._callback is not None and bool(self._timer.isActive())

    def start(self, callback: FrameCallback) -> None:
        self._callback = callback
        if not self._timer.isActive():
            self._timer.start()
        logger.debug("frame ticker started interval=%dms", int(self._timer.interval()))

    def stop(self) -> None:
        self._callback = None
        if self._timer.isActive():
            self._timer.stop()

    def _on_timeout(self) -> None:
        callback = self._callback
        if callback is None:
            self._timer.stop()
            return
        callback()


__all__ = ["DEFAULT_FRAME_INTERVAL_MS", "QtFrameTicker"]

"""External control surface and animated transitions.

``QtFrameTicker`` lives in ``infinity_view.control.qt_ticker`` and is not
imported here so the package works without a Qt binding.
"""

from __future__ import annotations

from .animation import AnimationBuffer, TransformAnimation
from .curves import CURVES, get_curve
from .surface import ControlBinding, NotReadyError, ViewController
from .ticker import FrameTicker, ManualTicker

__all__ = [
    "AnimationBuffer",
    "CURVES",
    "ControlBinding",
    "FrameTicker",
    "ManualTicker",
    "NotReadyError",
    "TransformAnimation",
    "ViewController",
    "get_curve",
]

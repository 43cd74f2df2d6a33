"""
infinity-view: pan, zoom and rotate an unbounded 2D content plane.

The engine turns touch, mouse, trackpad and scroll-wheel input into one
composed affine transform, keeping the point under the user's fingers or
cursor fixed, and exposes a small controller for programmatic (optionally
animated) changes.
"""

from infinity_view.config import EngineConfig, InvalidConfigError, load_engine_config
from infinity_view.control import ManualTicker, NotReadyError, ViewController
from infinity_view.engine import InfinityEngine, RedrawRequest
from infinity_view.geometry import Offset
from infinity_view.input import (
    DeviceKind,
    GestureStartDetails,
    GestureUpdateDetails,
    ScrollWheelBehavior,
)
from infinity_view.transform import Affine2D

__version__ = "0.1.0"

__all__ = [
    "Affine2D",
    "DeviceKind",
    "EngineConfig",
    "GestureStartDetails",
    "GestureUpdateDetails",
    "InfinityEngine",
    "InvalidConfigError",
    "ManualTicker",
    "NotReadyError",
    "Offset",
    "RedrawRequest",
    "ScrollWheelBehavior",
    "ViewController",
    "__version__",
    "load_engine_config",
]

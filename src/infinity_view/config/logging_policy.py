"""Debug/logging toggles for the gesture engine.

``INFINITY_VIEW_DEBUG`` accepts a truthy flag (every toggle on), a comma
separated list of names (``gesture,scroll,control,animation``) or a JSON
object such as ``{"flags": ["gesture"], "level": "debug"}``.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, fields
from typing import Optional

from infinity_view.utils.env import env_str

logger = logging.getLogger(__name__)

LOG_FORMAT = "[%(asctime)s] %(name)s - %(levelname)s - %(message)s"


@dataclass(frozen=True)
class LoggingToggles:
    log_gesture_info: bool = False
    log_scroll_info: bool = False
    log_control_info: bool = False
    log_animation_debug: bool = False
    level: Optional[int] = None


_LOG_FLAG_MAP: dict[str, Iterable[str]] = {
    "gesture": ("log_gesture_info",),
    "scroll": ("log_scroll_info",),
    "control": ("log_control_info",),
    "animation": ("log_animation_debug",),
}

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}


def _split_flags(raw: object) -> set[str]:
    result: set[str] = set()
    items: Iterable[object]
    if raw is None:
        return result
    if isinstance(raw, str):
        items = raw.split(",")
    elif isinstance(raw, Iterable):
        items = raw
    else:
        return result
    for item in items:
        token = str(item).strip().lower()
        if token:
            result.add(token)
    return result


def _load_debug_config(env: Optional[Mapping[str, str]]) -> tuple[bool, dict[str, object]]:
    raw = env_str("INFINITY_VIEW_DEBUG", env=env)
    if raw is None:
        return False, {}
    raw_str = raw.strip()
    if raw_str.lower() in _FALSY:
        return False, {}
    if raw_str.lower() in _TRUTHY:
        return True, {"flags": list(_LOG_FLAG_MAP)}
    try:
        parsed = json.loads(raw_str)
    except ValueError:
        return True, {"flags": raw_str}
    if isinstance(parsed, dict):
        return True, parsed
    if isinstance(parsed, (list, tuple)):
        return True, {"flags": parsed}
    logger.debug("INFINITY_VIEW_DEBUG JSON is neither object nor list; treating as flag list")
    return True, {"flags": raw_str}


def load_logging_toggles(env: Optional[Mapping[str, str]] = None) -> LoggingToggles:
    enabled, cfg = _load_debug_config(env)
    if not enabled:
        return LoggingToggles()

    flags = _split_flags(cfg.get("flags"))
    kwargs: dict[str, object] = {f.name: False for f in fields(LoggingToggles) if f.name != "level"}
    for flag, attrs in _LOG_FLAG_MAP.items():
        if flag in flags:
            for attr in attrs:
                kwargs[attr] = True

    level_raw = cfg.get("level")
    level = _LEVELS.get(str(level_raw).strip().lower()) if level_raw is not None else None
    return LoggingToggles(level=level, **kwargs)  # type: ignore[arg-type]


def configure_logging(level: int = logging.INFO, *, toggles: Optional[LoggingToggles] = None) -> None:
    """Install the stream handler used by demos and scripts; the library never calls this."""
    effective = level
    if toggles is not None and toggles.level is not None:
        effective = toggles.level
    logging.basicConfig(level=effective, format=LOG_FORMAT)
    logging.getLogger("infinity_view").setLevel(effective)


__all__ = [
    "LOG_FORMAT",
    "LoggingToggles",
    "configure_logging",
    "load_logging_toggles",
]

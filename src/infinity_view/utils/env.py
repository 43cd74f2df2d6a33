from __future__ import annotations

import os
from collections.abc import Iterable, Mapping
from typing import Optional


def _lookup(name: str, env: Optional[Mapping[str, str]]) -> Optional[str]:
    source = os.environ if env is None else env
    return source.get(name)


def env_str(name: str, default: Optional[str] = None, env: Optional[Mapping[str, str]] = None) -> Optional[str]:
    v = _lookup(name, env)
    return v if v is not None else default


def env_bool(name: str, default: bool = False, env: Optional[Mapping[str, str]] = None) -> bool:
    v = _lookup(name, env)
    if v is None:
        return default
    s = v.strip().lower()
    if s in ("1", "true", "yes", "on"):
        return True
    if s in ("0", "false", "no", "off"):
        return False
    return default


def env_float(name: str, default: float, env: Optional[Mapping[str, str]] = None) -> float:
    v = _lookup(name, env)
    if not v:
        return default
    try:
        return float(v)
    except ValueError:
        return default


def env_choice(
    name: str,
    choices: Iterable[str],
    default: str,
    env: Optional[Mapping[str, str]] = None,
) -> str:
    v = _lookup(name, env)
    if not v:
        return default
    key = v.strip().lower()
    table = {c.lower(): c for c in choices}
    return table.get(key, default)


def env_pair(
    name: str,
    default: Optional[tuple[float, float]] = None,
    env: Optional[Mapping[str, str]] = None,
) -> Optional[tuple[float, float]]:
    """Parse an ``"x,y"`` pair; malformed values fall back to ``default``."""
    v = _lookup(name, env)
    if not v or not v.strip():
        return default
    parts = [p.strip() for p in v.split(",")]
    if len(parts) != 2:
        return default
    try:
        return float(parts[0]), float(parts[1])
    except ValueError:
        return default

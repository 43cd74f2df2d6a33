"""Configuration dataclasses and environment loaders."""

from .logging_policy import LoggingToggles, configure_logging, load_logging_toggles
from .models import EngineConfig, InvalidConfigError, load_engine_config

__all__ = [
    "EngineConfig",
    "InvalidConfigError",
    "LoggingToggles",
    "configure_logging",
    "load_engine_config",
    "load_logging_toggles",
]

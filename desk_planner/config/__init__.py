"""
Configuration Management

Centralized configuration for:
- Simulation engine (chunk size, ETA window, seed)
- Saved-run storage location
- Default form inputs
- Logging
"""

from .settings import (
    Settings,
    EngineConfig,
    StorageConfig,
    DefaultInputs,
    get_settings
)
from .log import configure_logging

__all__ = [
    "Settings",
    "EngineConfig",
    "StorageConfig",
    "DefaultInputs",
    "get_settings",
    "configure_logging"
]

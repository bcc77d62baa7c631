"""
Runtime Configuration Module

Provides configuration loading and management for flatmerkle.
"""

from .runtime import (
    LoggingConfig,
    RuntimeConfig,
    TreeConfig,
    get_default_config,
    set_default_config,
)

__all__ = [
    "LoggingConfig",
    "RuntimeConfig",
    "TreeConfig",
    "get_default_config",
    "set_default_config",
]

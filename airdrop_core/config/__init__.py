"""
Runtime Configuration Module

Provides configuration loading and management for merkle-airdrop.
"""

from .runtime import (
    ENV_PREFIX,
    RuntimeConfig,
    TreeConfig,
    get_default_config,
    set_default_config,
)

__all__ = [
    "ENV_PREFIX",
    "RuntimeConfig",
    "TreeConfig",
    "get_default_config",
    "set_default_config",
]

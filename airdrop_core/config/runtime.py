"""
Runtime Configuration

Central configuration for hasher selection, leaf encoding and logging.
"""

from __future__ import annotations

import copy
import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from airdrop_core.crypto.hashing import DEFAULT_HASH_ALGORITHM

load_dotenv()


# Environment variable prefix
ENV_PREFIX = "AIRDROP_"


@dataclass
class TreeConfig:
    """How entries are turned into a tree."""
    hash_algorithm: str = DEFAULT_HASH_ALGORITHM
    leaf_encoding: str = "raw"


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration.

    Can be loaded from:
    - Environment variables (a .env file is read at import)
    - YAML or JSON file
    - Programmatic construction
    """
    tree: TreeConfig = field(default_factory=TreeConfig)
    log_level: str = "INFO"
    log_file: Optional[str] = None
    output_format: str = "human"  # "human" or "json"
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - AIRDROP_HASH_ALGORITHM: Hasher registry name
        - AIRDROP_LEAF_ENCODING: raw | decimal-csv
        - AIRDROP_LOG_LEVEL: Log level
        - AIRDROP_LOG_FILE: Log file path
        - AIRDROP_OUTPUT_FORMAT: human | json
        """
        overrides: dict[str, Any] = {}

        if os.getenv(f"{ENV_PREFIX}HASH_ALGORITHM"):
            overrides.setdefault("tree", {})["hash_algorithm"] = os.getenv(f"{ENV_PREFIX}HASH_ALGORITHM")
        if os.getenv(f"{ENV_PREFIX}LEAF_ENCODING"):
            overrides.setdefault("tree", {})["leaf_encoding"] = os.getenv(f"{ENV_PREFIX}LEAF_ENCODING")

        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides["log_level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")
        if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
            overrides["log_file"] = os.getenv(f"{ENV_PREFIX}LOG_FILE")
        if os.getenv(f"{ENV_PREFIX}OUTPUT_FORMAT"):
            overrides["output_format"] = os.getenv(f"{ENV_PREFIX}OUTPUT_FORMAT")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """Load configuration purely from environment variables."""
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data)

    @classmethod
    def from_json(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a JSON file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path, "r") as f:
            data = json.load(f)

        return cls.from_dict(data)

    @classmethod
    def from_file(cls, path: str | Path) -> "RuntimeConfig":
        """Load from YAML or JSON depending on the file suffix."""
        path = Path(path)
        if path.suffix.lower() in (".yaml", ".yml"):
            return cls.from_yaml(path)
        return cls.from_json(path)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        tree_data = data.get("tree", {})
        tree = TreeConfig(**tree_data) if tree_data else TreeConfig()

        return cls(
            tree=tree,
            log_level=data.get("log_level", "INFO"),
            log_file=data.get("log_file"),
            output_format=data.get("output_format", "human"),
            extra=data.get("extra", {}),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)

        if "tree" in overrides:
            for key, value in overrides["tree"].items():
                setattr(new_config.tree, key, value)

        for key in ("log_level", "log_file", "output_format"):
            if key in overrides:
                setattr(new_config, key, overrides[key])

        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "tree": {
                "hash_algorithm": self.tree.hash_algorithm,
                "leaf_encoding": self.tree.leaf_encoding,
            },
            "log_level": self.log_level,
            "log_file": self.log_file,
            "output_format": self.output_format,
            "extra": self.extra,
        }


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = RuntimeConfig.from_env()
    return _default_config


def set_default_config(config: RuntimeConfig) -> None:
    """Set the default runtime configuration."""
    global _default_config
    _default_config = config

"""
CLI Configuration

Locates the configuration file for the airdrop CLI and overlays
environment variables on top of it.
"""

from __future__ import annotations

from pathlib import Path

from airdrop_core.config.runtime import RuntimeConfig


DEFAULT_CONFIG_PATHS = (
    Path("airdrop.json"),
    Path("airdrop.yaml"),
    Path(".airdrop.json"),
)


def _default_paths() -> list[Path]:
    paths = [Path.cwd() / p for p in DEFAULT_CONFIG_PATHS]
    paths.append(Path.home() / ".config" / "airdrop" / "config.json")
    return paths


def load_config(config_path: Path | None = None) -> RuntimeConfig:
    """
    Load configuration from file and/or environment.

    Environment variables override file settings. An explicit path that
    does not exist is an error; missing default files are not.

    Args:
        config_path: Optional path to a JSON or YAML config file

    Returns:
        Merged configuration
    """
    config = RuntimeConfig()

    if config_path is not None:
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        config = RuntimeConfig.from_file(config_path)
    else:
        for default_path in _default_paths():
            if default_path.exists():
                config = RuntimeConfig.from_file(default_path)
                break

    return config.with_env_overrides()


def get_default_config_template() -> str:
    """Get a template configuration file."""
    return """{
  "tree": {
    "hash_algorithm": "sha256",
    "leaf_encoding": "raw"
  },
  "log_level": "INFO",
  "log_file": null,
  "output_format": "human"
}
"""

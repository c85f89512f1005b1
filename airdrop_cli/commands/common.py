"""
Shared helpers for CLI commands.
"""

from __future__ import annotations

import json
import logging
from argparse import Namespace
from typing import Any

from airdrop_core.config.runtime import RuntimeConfig
from airdrop_core.records import AirdropDistribution, load_entries


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def get_config(args: Namespace) -> RuntimeConfig:
    """Config attached by main(), or defaults when a command is called directly."""
    config = getattr(args, "cli_config", None)
    return config if config is not None else RuntimeConfig()


def wants_json(args: Namespace) -> bool:
    if getattr(args, "json", False):
        return True
    return get_config(args).output_format == "json"


def build_distribution(args: Namespace) -> AirdropDistribution:
    """Load the entries file named on the command line and commit to it."""
    config = get_config(args)
    entries = load_entries(args.entries)
    logger.debug(
        f"Building distribution: hash={config.tree.hash_algorithm}, "
        f"leaf_encoding={config.tree.leaf_encoding}"
    )
    return AirdropDistribution(
        entries,
        hash_algorithm=config.tree.hash_algorithm,
        leaf_encoding=config.tree.leaf_encoding,
    )


def print_json(data: Any) -> None:
    print(json.dumps(data, indent=2))

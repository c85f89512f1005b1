"""
CLI Root Command

Commit to an entry list and print the root.

Usage:
    airdrop root entries.json [--json]
"""

from __future__ import annotations

import logging
from argparse import Namespace

from airdrop_core.schemas.errors import AirdropException
from airdrop_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    build_distribution,
    print_json,
    wants_json,
)


logger = logging.getLogger(__name__)


def root_cmd(args: Namespace) -> int:
    """
    Execute the root command.

    Returns:
        Exit code
    """
    try:
        distribution = build_distribution(args)
    except AirdropException as e:
        logger.error(f"Cannot build tree: {e.message}")
        if wants_json(args):
            print_json({"ok": False, "error": e.to_error_model().model_dump()})
        return EXIT_RUNTIME_ERROR

    commitment = distribution.commitment()

    if wants_json(args):
        print_json(commitment.model_dump())
    else:
        print(f"root: {commitment.root}")
        print(f"leaf_count: {commitment.leaf_count}")
        print(f"depth: {commitment.depth}")
        print(f"hash_algorithm: {commitment.hash_algorithm}")
        print(f"leaf_encoding: {commitment.leaf_encoding}")

    return EXIT_SUCCESS

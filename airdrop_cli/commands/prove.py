"""
CLI Prove Command

Generate an inclusion proof for one entry of an entry list.

Usage:
    airdrop prove entries.json --address 0x... --amount 55 [--out proof.json]
    airdrop prove entries.json --index 3
"""

from __future__ import annotations

import logging
import sys
from argparse import Namespace
from pathlib import Path

from airdrop_core.schemas.errors import AirdropException
from airdrop_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    build_distribution,
    print_json,
    wants_json,
)


logger = logging.getLogger(__name__)


def prove_cmd(args: Namespace) -> int:
    """
    Execute the prove command.

    Returns:
        Exit code
    """
    if args.index is None and (args.address is None or args.amount is None):
        print("Error: give either --index or both --address and --amount", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        distribution = build_distribution(args)
        if args.index is not None:
            document = distribution.proof_at(args.index)
        else:
            document = distribution.proof_for(args.address, args.amount)
    except AirdropException as e:
        logger.error(f"Cannot generate proof: {e.message}")
        if wants_json(args):
            print_json({"ok": False, "error": e.to_error_model().model_dump()})
        else:
            print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except ValueError as e:
        # pydantic rejects a malformed --address / --amount
        print(f"Error: invalid entry: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if args.out:
        out_path = Path(args.out)
        out_path.write_text(document.model_dump_json(indent=2) + "\n", encoding="utf-8")
        logger.info(f"Wrote proof for leaf {document.leaf_index} to {out_path}")

    if wants_json(args):
        print_json(document.model_dump())
    else:
        entry = distribution.entries[document.leaf_index]
        print(f"address: {entry.address}")
        print(f"amount: {entry.amount}")
        print(f"leaf_index: {document.leaf_index}")
        print(f"leaf: {document.leaf}")
        print(f"root: {document.root}")
        print(f"proof ({len(document.proof)}):")
        for sibling in document.proof:
            print(f"  {sibling}")

    return EXIT_SUCCESS

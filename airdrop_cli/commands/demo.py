"""
CLI Demo Command

Two-entry walkthrough: commit, prove the first entry, then check the
proof against the right amount and a tampered one.

Usage:
    airdrop demo [--json]
"""

from __future__ import annotations

from argparse import Namespace

from airdrop_core.records import AirdropDistribution, AirdropEntry
from airdrop_cli.commands.common import (
    EXIT_SUCCESS,
    get_config,
    print_json,
    wants_json,
)


DEMO_ENTRIES = (
    AirdropEntry(
        address="0x94fbcf49867fd909e6b2ecf2802c4b2bba7c9b2d50a13abbb75dbae0216db82a",
        amount=55,
    ),
    AirdropEntry(
        address="0xb4536519beaef9d9207af2b5f83ae35d4ac76cc288ab9004b39254b354149d27",
        amount=27,
    ),
)


def demo_cmd(args: Namespace) -> int:
    config = get_config(args)
    distribution = AirdropDistribution(
        DEMO_ENTRIES,
        hash_algorithm=config.tree.hash_algorithm,
        leaf_encoding=config.tree.leaf_encoding,
    )

    claimant = DEMO_ENTRIES[0]
    document = distribution.proof_for(claimant.address, claimant.amount)
    right = distribution.verify_claim(claimant.address, claimant.amount, document)
    wrong = distribution.verify_claim(claimant.address, claimant.amount + 1, document)

    if wants_json(args):
        print_json({
            "root": distribution.root_hex,
            "proof": document.model_dump(),
            "right_leaf": right,
            "wrong_leaf": wrong,
        })
    else:
        print(f"root: {distribution.root_hex}")
        print(f"wrong leaf: {str(wrong).lower()}")
        print(f"right leaf: {str(right).lower()}")

    return EXIT_SUCCESS

"""
Common test fixtures shared by all test modules.

Provides factory functions for:
- Raw leaf payloads
- AirdropEntry lists (starting with the two reference entries)
- Entry files on disk
"""

import json
from pathlib import Path
from typing import Optional

from airdrop_core.records import AirdropEntry


ADDRESS_ONE = "0x94fbcf49867fd909e6b2ecf2802c4b2bba7c9b2d50a13abbb75dbae0216db82a"
AMOUNT_ONE = 55

ADDRESS_TWO = "0xb4536519beaef9d9207af2b5f83ae35d4ac76cc288ab9004b39254b354149d27"
AMOUNT_TWO = 27


def make_payloads(count: int = 5, prefix: str = "leaf") -> list[bytes]:
    """Create ``count`` distinct payloads: b"leaf0", b"leaf1", ..."""
    return [f"{prefix}{i}".encode() for i in range(count)]


def make_entries(extra: Optional[int] = 3) -> list[AirdropEntry]:
    """Create the two reference entries followed by ``extra`` synthetic ones."""
    entries = [
        AirdropEntry(address=ADDRESS_ONE, amount=AMOUNT_ONE),
        AirdropEntry(address=ADDRESS_TWO, amount=AMOUNT_TWO),
    ]
    for i in range(extra or 0):
        entries.append(AirdropEntry(address=hex(0x1000 + i), amount=100 * (i + 1)))
    return entries


def write_entries_json(path: Path, entries: list[AirdropEntry]) -> Path:
    """Write entries as a JSON list and return the path."""
    path.write_text(
        json.dumps([e.model_dump() for e in entries], indent=2),
        encoding="utf-8",
    )
    return path

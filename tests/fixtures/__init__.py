"""
Test fixtures package for merkle-airdrop tests.

Usage:
    from fixtures import make_entries, make_payloads

    def test_something():
        entries = make_entries(extra=0)
"""

from .common import (
    ADDRESS_ONE,
    ADDRESS_TWO,
    AMOUNT_ONE,
    AMOUNT_TWO,
    make_payloads,
    make_entries,
    write_entries_json,
)

__all__ = [
    "ADDRESS_ONE",
    "ADDRESS_TWO",
    "AMOUNT_ONE",
    "AMOUNT_TWO",
    "make_payloads",
    "make_entries",
    "write_entries_json",
]

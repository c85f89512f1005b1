"""
Module 04 - Airdrop Records

Canonical (address, amount) record encoding and the distribution facade
that commits to an entry list and serves claims.
"""
from .encoder import (
    ADDRESS_LENGTH,
    AMOUNT_LENGTH,
    RECORD_LENGTH,
    MAX_AMOUNT,
    LEAF_ENCODINGS,
    AirdropEntry,
    normalize_address,
    encode_entry,
    decode_entry,
    leaf_bytes,
    parse_entries,
    load_entries,
)

from .distribution import (
    AirdropDistribution,
    entry_leaf,
    verify_entry_proof,
)

__all__ = [
    "ADDRESS_LENGTH",
    "AMOUNT_LENGTH",
    "RECORD_LENGTH",
    "MAX_AMOUNT",
    "LEAF_ENCODINGS",
    "AirdropEntry",
    "normalize_address",
    "encode_entry",
    "decode_entry",
    "leaf_bytes",
    "parse_entries",
    "load_entries",
    "AirdropDistribution",
    "entry_leaf",
    "verify_entry_proof",
]

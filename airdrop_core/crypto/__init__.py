"""
Core cryptographic utilities.

Module 02 provides the pluggable Hasher capability and hex helpers.
"""
from .hashing import (
    DEFAULT_HASH_ALGORITHM,
    Hasher,
    HashlibHasher,
    Keccak256Hasher,
    FunctionHasher,
    available_hashers,
    get_hasher,
    sha256,
    hash_concat,
    hash_sorted_pair,
    to_hex,
    from_hex,
)

__all__ = [
    "DEFAULT_HASH_ALGORITHM",
    "Hasher",
    "HashlibHasher",
    "Keccak256Hasher",
    "FunctionHasher",
    "available_hashers",
    "get_hasher",
    "sha256",
    "hash_concat",
    "hash_sorted_pair",
    "to_hex",
    "from_hex",
]

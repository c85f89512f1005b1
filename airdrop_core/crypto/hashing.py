"""
Module 02 - Hashing Utilities
Pluggable digest functions and hex helpers for Merkle commitments.

This module provides:
- Hasher: the capability every tree and verifier is parameterised over
- HashlibHasher / Keccak256Hasher / FunctionHasher implementations
- A small registry so hashers can be selected by name from config
- Hex encoding/decoding for publishing digests

Security/Determinism Notes:
- A Hasher must be deterministic, fixed-length and stateless
- The security of a commitment rests entirely on the plugged-in hash
- All implementations here are safe to call from several threads
"""
from __future__ import annotations

import hashlib
from typing import Callable, Protocol, runtime_checkable

from eth_utils import keccak

from airdrop_core.schemas.errors import UnsupportedHashAlgorithmError


DEFAULT_HASH_ALGORITHM = "sha256"


@runtime_checkable
class Hasher(Protocol):
    """
    One-way digest capability used for leaf hashing and node combination.

    Attributes:
        name: Registry name of the algorithm (e.g. "sha256")
        digest_size: Output length in bytes
    """

    name: str
    digest_size: int

    def hash(self, data: bytes) -> bytes:
        """Digest raw bytes into a fixed-length digest."""
        ...


class HashlibHasher:
    """
    Hasher backed by a ``hashlib`` constructor.

    A fresh hash object is created per call, so instances hold no
    mutable state between calls.

    Example:
        >>> HashlibHasher("sha256").hash(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """

    def __init__(self, algorithm: str, digest_size: int | None = None) -> None:
        self.name = algorithm
        self._algorithm = algorithm
        self._digest_size_arg = digest_size
        try:
            probe = self._new()
        except ValueError as e:
            raise UnsupportedHashAlgorithmError(algorithm) from e
        self.digest_size = probe.digest_size

    def _new(self):
        if self._digest_size_arg is not None:
            # blake2 family accepts a configurable output length
            return getattr(hashlib, self._algorithm)(digest_size=self._digest_size_arg)
        return hashlib.new(self._algorithm)

    def hash(self, data: bytes) -> bytes:
        h = self._new()
        h.update(data)
        return h.digest()

    def __repr__(self) -> str:
        return f"HashlibHasher({self.name!r}, digest_size={self.digest_size})"


class Keccak256Hasher:
    """Ethereum keccak-256 (pre-standard SHA-3 padding) via eth_utils."""

    name = "keccak256"
    digest_size = 32

    def hash(self, data: bytes) -> bytes:
        return keccak(data)

    def __repr__(self) -> str:
        return "Keccak256Hasher()"


class FunctionHasher:
    """
    Adapt a plain ``bytes -> bytes`` callable into a Hasher.

    The callable's output length is checked on every call so a function
    that does not honour its declared digest size fails loudly.
    """

    def __init__(
        self,
        fn: Callable[[bytes], bytes],
        digest_size: int,
        name: str = "custom",
    ) -> None:
        if digest_size <= 0:
            raise ValueError(f"digest_size must be positive, got {digest_size}")
        self._fn = fn
        self.digest_size = digest_size
        self.name = name

    def hash(self, data: bytes) -> bytes:
        digest = self._fn(data)
        if len(digest) != self.digest_size:
            raise ValueError(
                f"Hasher {self.name!r} produced {len(digest)} bytes, "
                f"expected {self.digest_size}"
            )
        return digest

    def __repr__(self) -> str:
        return f"FunctionHasher(name={self.name!r}, digest_size={self.digest_size})"


_REGISTRY: dict[str, Callable[[], Hasher]] = {
    "sha256": lambda: HashlibHasher("sha256"),
    "sha3_256": lambda: HashlibHasher("sha3_256"),
    "blake2b": lambda: HashlibHasher("blake2b", digest_size=32),
    "keccak256": Keccak256Hasher,
}


def available_hashers() -> list[str]:
    """Names accepted by get_hasher(), sorted."""
    return sorted(_REGISTRY)


def get_hasher(name: str = DEFAULT_HASH_ALGORITHM) -> Hasher:
    """
    Look up a hasher by registry name.

    Names are case-insensitive and "-" is accepted in place of "_"
    (so "sha3-256" works).

    Raises:
        UnsupportedHashAlgorithmError: If the name is not registered
    """
    key = name.strip().lower().replace("-", "_")
    try:
        factory = _REGISTRY[key]
    except KeyError:
        raise UnsupportedHashAlgorithmError(name, supported=available_hashers()) from None
    return factory()


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


def hash_concat(left: bytes, right: bytes, hasher: Hasher | None = None) -> bytes:
    """Hash the positional concatenation ``left || right``."""
    hasher = hasher or get_hasher()
    return hasher.hash(left + right)


def hash_sorted_pair(a: bytes, b: bytes, hasher: Hasher | None = None) -> bytes:
    """
    Combine two digests with the sort-pairs rule.

    parent = hash(min(a, b) || max(a, b)), comparing as byte strings,
    so hash_sorted_pair(a, b) == hash_sorted_pair(b, a).
    """
    if b < a:
        a, b = b, a
    return hash_concat(a, b, hasher)


def to_hex(data: bytes) -> str:
    """
    Convert bytes to a lowercase hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert a hexadecimal string to bytes.

    The 0x prefix is optional so digests printed without it (as many
    JavaScript Merkle libraries do) are accepted too.

    Raises:
        ValueError: If the string has odd length or invalid hex characters
    """
    hex_content = hex_string[2:] if hex_string[:2] in ("0x", "0X") else hex_string

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length, got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


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

"""
Module 03 - Merkle Proofs Convenience Wrappers
Thin wrappers around the tree functions for callers holding raw payloads.

This module provides class-based interfaces:
- MerkleProver: Generate roots and proofs from payloads or leaf digests
- MerkleVerifier: Verify proofs from digests or raw payloads
"""
from __future__ import annotations

from typing import Sequence

from airdrop_core.crypto.hashing import Hasher, get_hasher
from airdrop_core.merkle.merkle_tree import (
    MerkleProof,
    MerkleTree,
    build_merkle_proof,
    build_merkle_root,
    verify_merkle_proof,
    verify_proof,
)


class MerkleProver:
    """
    Convenience class for generating Merkle roots and proofs.

    Example:
        >>> proof = MerkleProver.prove_payload([b"a", b"b", b"c"], index=1)
        >>> MerkleVerifier.verify(proof)
        True
    """

    @staticmethod
    def prove(
        leaves: Sequence[bytes],
        index: int,
        hasher: Hasher | None = None,
    ) -> MerkleProof:
        """Generate a proof for the pre-hashed leaf at ``index``."""
        return build_merkle_proof(leaves, index, hasher)

    @staticmethod
    def prove_payload(
        payloads: Sequence[bytes],
        index: int,
        hasher: Hasher | None = None,
    ) -> MerkleProof:
        """Generate a proof for the raw payload at ``index``."""
        return MerkleTree(payloads, hasher).get_proof(index)

    @staticmethod
    def compute_root(leaves: Sequence[bytes], hasher: Hasher | None = None) -> bytes:
        """Compute the root over pre-hashed leaves."""
        return build_merkle_root(leaves, hasher)

    @staticmethod
    def compute_root_from_payloads(
        payloads: Sequence[bytes],
        hasher: Hasher | None = None,
    ) -> bytes:
        """Compute the root over raw payloads."""
        return MerkleTree(payloads, hasher).root


class MerkleVerifier:
    """Convenience class for verifying Merkle proofs."""

    @staticmethod
    def verify(proof: MerkleProof, hasher: Hasher | None = None) -> bool:
        """Verify a proof against the root it carries."""
        return verify_proof(proof, hasher)

    @staticmethod
    def verify_leaf_in_root(
        leaf: bytes,
        siblings: Sequence[bytes],
        root: bytes,
        hasher: Hasher | None = None,
    ) -> bool:
        """Verify a leaf digest is included in ``root``."""
        return verify_merkle_proof(leaf, siblings, root, hasher)

    @staticmethod
    def verify_payload_in_root(
        payload: bytes,
        siblings: Sequence[bytes],
        root: bytes,
        hasher: Hasher | None = None,
    ) -> bool:
        """
        Verify a raw payload is included in ``root``.

        The payload is hashed with the same hasher to produce the leaf.
        """
        hasher = hasher or get_hasher()
        return verify_merkle_proof(hasher.hash(payload), siblings, root, hasher)


__all__ = [
    "MerkleProver",
    "MerkleVerifier",
]

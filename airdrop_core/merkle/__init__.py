"""
Module 03 - Merkle Tree and Commitments
Sort-pairs Merkle tree construction + proof generation/verification.

This module provides:
- MerkleTree: Immutable tree over payloads, built once
- MerkleProof: Frozen inclusion proof (side-free sibling list)
- build_merkle_root / build_merkle_proof: Functional forms over leaf digests
- verify_merkle_proof: Standalone verification needing only a Hasher

Canonical Commitment Rules:
1. Leaf hashing: hasher.hash(payload)
2. Parent hashing: hasher.hash(min(a, b) + max(a, b))
3. Odd rule: last node of an odd level is promoted unchanged
4. Empty tree: EmptyInputError
5. Single leaf: root = leaf

Usage:
    from airdrop_core.crypto import get_hasher
    from airdrop_core.merkle import MerkleTree, verify_merkle_proof

    tree = MerkleTree(payloads, get_hasher("sha256"))
    proof = tree.get_proof(2)
    assert verify_merkle_proof(proof.leaf, proof.siblings, tree.root)
"""
from .merkle_tree import (
    MerkleProof,
    MerkleTree,
    merkle_parent,
    verify_merkle_proof,
    verify_proof,
    build_merkle_root,
    build_merkle_proof,
    compute_tree_depth,
)

from .merkle_proofs import (
    MerkleProver,
    MerkleVerifier,
)


__all__ = [
    # Core types
    "MerkleProof",
    "MerkleTree",
    # Core functions
    "merkle_parent",
    "verify_merkle_proof",
    "verify_proof",
    "build_merkle_root",
    "build_merkle_proof",
    "compute_tree_depth",
    # Convenience classes
    "MerkleProver",
    "MerkleVerifier",
]

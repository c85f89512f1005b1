"""
Module 03 - Merkle Tree Implementation
Sort-pairs Merkle tree construction, proof generation, and verification.

This module provides:
- Deterministic Merkle root computation over a pluggable Hasher
- Merkle proof generation by leaf index (or by leaf digest)
- Standalone proof verification that needs only the Hasher
- Odd-node promotion for levels with an odd number of nodes

Canonical Commitment Rules (Hard Contracts):
1. Leaf hashing: leaf = hasher.hash(payload)
2. Parent hashing: parent = hasher.hash(min(a, b) + max(a, b))
   - Children are compared as byte strings, so the parent does not depend
     on which side a child sat on. Proofs therefore carry no left/right flags.
3. Odd rule: the last node of an odd level is carried up unchanged.
   It is NOT duplicated and NOT hashed with itself.
4. Empty leaves: construction fails with EmptyInputError
5. Single leaf: root = leaf (the leaf digest itself), proof = []

Determinism Notes:
- No randomness; leaf order is the caller's order and is never sorted
- The tree is built once and is read-only afterwards
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Sequence

from airdrop_core.crypto.hashing import Hasher, get_hasher, hash_sorted_pair, to_hex
from airdrop_core.schemas.errors import (
    EmptyInputError,
    LeafNotFoundError,
    MalformedProofError,
)


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MerkleProof:
    """
    Inclusion proof for a single leaf.

    Attributes:
        leaf: The leaf digest being proven
        index: 0-based position of the leaf in the original leaf list
        siblings: Sibling digests from the leaf level upwards. Levels where
                  the node was promoted without a sibling contribute nothing.
        root: The Merkle root this proof is against
    """
    leaf: bytes
    index: int
    siblings: tuple[bytes, ...]
    root: bytes

    def __post_init__(self) -> None:
        if self.index < 0:
            raise ValueError(f"Leaf index must be non-negative, got {self.index}")
        # Accept any sequence but store an immutable tuple
        object.__setattr__(self, "siblings", tuple(self.siblings))

    def __len__(self) -> int:
        return len(self.siblings)


def merkle_parent(a: bytes, b: bytes, hasher: Hasher | None = None) -> bytes:
    """
    Compute the parent digest of two sibling nodes.

    parent = hash(min(a, b) || max(a, b)), so merkle_parent(a, b) equals
    merkle_parent(b, a).
    """
    return hash_sorted_pair(a, b, hasher)


def _check_digest(value: bytes, digest_size: int, what: str, position: int | None = None) -> None:
    if len(value) != digest_size:
        where = f" at position {position}" if position is not None else ""
        raise MalformedProofError(
            f"{what}{where} is {len(value)} bytes, expected {digest_size}",
            position=position,
            expected_length=digest_size,
            actual_length=len(value),
        )


def _build_levels(leaves: tuple[bytes, ...], hasher: Hasher) -> tuple[tuple[bytes, ...], ...]:
    levels = [leaves]
    current = leaves
    while len(current) > 1:
        next_level: list[bytes] = []
        for i in range(0, len(current) - 1, 2):
            next_level.append(merkle_parent(current[i], current[i + 1], hasher))
        if len(current) % 2 == 1:
            # Promote the unpaired node unchanged
            next_level.append(current[-1])
        current = tuple(next_level)
        levels.append(current)
    return tuple(levels)


class MerkleTree:
    """
    Immutable binary Merkle tree over caller-supplied payloads.

    Payloads are hashed into leaf digests on construction and the full
    set of levels is computed once. All public accessors are read-only,
    so one instance can serve proofs to many threads at once.

    Example:
        >>> tree = MerkleTree([b"alice", b"bob", b"carol"])
        >>> proof = tree.get_proof(2)
        >>> tree.verify(proof.leaf, proof.siblings, tree.root)
        True
    """

    def __init__(self, payloads: Iterable[bytes], hasher: Hasher | None = None) -> None:
        hasher = hasher or get_hasher()
        leaves = tuple(hasher.hash(bytes(payload)) for payload in payloads)
        self._init_levels(leaves, hasher)

    @classmethod
    def from_leaf_digests(
        cls,
        leaves: Iterable[bytes],
        hasher: Hasher | None = None,
    ) -> "MerkleTree":
        """
        Build a tree from already-hashed leaves.

        Raises:
            EmptyInputError: If no leaves are given
            MalformedProofError: If a leaf is not digest_size bytes long
        """
        hasher = hasher or get_hasher()
        digests = tuple(bytes(leaf) for leaf in leaves)
        for i, leaf in enumerate(digests):
            _check_digest(leaf, hasher.digest_size, "Leaf digest", i)
        tree = cls.__new__(cls)
        tree._init_levels(digests, hasher)
        return tree

    def _init_levels(self, leaves: tuple[bytes, ...], hasher: Hasher) -> None:
        if not leaves:
            raise EmptyInputError()
        self._hasher = hasher
        self._levels = _build_levels(leaves, hasher)
        logger.debug(
            "Built Merkle tree: %d leaves, %d levels, hasher=%s, root=%s",
            len(leaves), len(self._levels), hasher.name, to_hex(self.root),
        )

    @property
    def hasher(self) -> Hasher:
        return self._hasher

    @property
    def levels(self) -> tuple[tuple[bytes, ...], ...]:
        """All levels, leaf level first and the one-element root level last."""
        return self._levels

    @property
    def leaves(self) -> tuple[bytes, ...]:
        return self._levels[0]

    @property
    def leaf_count(self) -> int:
        return len(self._levels[0])

    @property
    def depth(self) -> int:
        """Number of levels, leaves and root included."""
        return len(self._levels)

    @property
    def root(self) -> bytes:
        return self._levels[-1][0]

    @property
    def root_hex(self) -> str:
        return to_hex(self.root)

    def index_of(self, leaf: bytes) -> int:
        """
        Resolve a leaf digest to its first matching index.

        A digest that occurs more than once (duplicate payloads) cannot
        identify a unique position; the first occurrence is returned and a
        warning is logged. Use get_proof(index) when positions matter.

        Raises:
            LeafNotFoundError: If the digest is not a leaf of this tree
        """
        leaves = self._levels[0]
        try:
            index = leaves.index(leaf)
        except ValueError:
            raise LeafNotFoundError(
                f"Leaf {to_hex(leaf)} is not part of this tree",
                leaf=to_hex(leaf),
            ) from None
        occurrences = leaves.count(leaf)
        if occurrences > 1:
            logger.warning(
                "Leaf %s occurs %d times; resolving to first index %d",
                to_hex(leaf), occurrences, index,
            )
        return index

    def get_proof(self, index: int) -> MerkleProof:
        """
        Generate the inclusion proof for the leaf at ``index``.

        Walks from the leaf to the root recording the sibling at each level
        (index XOR 1). A node promoted without a sibling adds no entry.

        Raises:
            LeafNotFoundError: If index is out of range
        """
        if index < 0 or index >= self.leaf_count:
            raise LeafNotFoundError(
                f"Leaf index {index} out of range for {self.leaf_count} leaves",
                leaf_index=index,
            )

        siblings: list[bytes] = []
        current_index = index
        for level in self._levels[:-1]:
            sibling_index = current_index ^ 1
            if sibling_index < len(level):
                siblings.append(level[sibling_index])
            current_index //= 2

        return MerkleProof(
            leaf=self._levels[0][index],
            index=index,
            siblings=tuple(siblings),
            root=self.root,
        )

    def get_proof_for_leaf(self, leaf: bytes) -> MerkleProof:
        """Generate a proof for a leaf digest (first matching index)."""
        return self.get_proof(self.index_of(leaf))

    def get_proof_for_payload(self, payload: bytes) -> MerkleProof:
        """Generate a proof for a raw payload by re-hashing it."""
        return self.get_proof_for_leaf(self._hasher.hash(bytes(payload)))

    def verify(self, leaf: bytes, siblings: Sequence[bytes], root: bytes) -> bool:
        """Verify a (leaf, proof, root) triple with this tree's hasher."""
        return verify_merkle_proof(leaf, siblings, root, self._hasher)

    def __len__(self) -> int:
        return self.leaf_count

    def __repr__(self) -> str:
        return (
            f"MerkleTree(leaves={self.leaf_count}, depth={self.depth}, "
            f"hasher={self._hasher.name!r}, root={self.root_hex!r})"
        )


def verify_merkle_proof(
    leaf: bytes,
    siblings: Sequence[bytes],
    root: bytes,
    hasher: Hasher | None = None,
) -> bool:
    """
    Verify that ``leaf`` is included under ``root``.

    Replays the sort-pairs combination with each sibling in order and
    compares the result to the root. Does not need the tree.

    Args:
        leaf: Leaf digest to check
        siblings: Proof siblings, leaf level first (may be empty)
        root: Published root digest
        hasher: Hasher the tree was built with (default sha256)

    Returns:
        True if the recomputed root equals ``root``, False otherwise

    Raises:
        MalformedProofError: If leaf, root or any sibling has the wrong length
    """
    hasher = hasher or get_hasher()
    size = hasher.digest_size

    _check_digest(leaf, size, "Leaf digest")
    _check_digest(root, size, "Root digest")
    for position, sibling in enumerate(siblings):
        _check_digest(sibling, size, "Proof entry", position)

    current = leaf
    for sibling in siblings:
        current = merkle_parent(current, sibling, hasher)

    return current == root


def verify_proof(proof: MerkleProof, hasher: Hasher | None = None) -> bool:
    """Verify a MerkleProof against the root it carries."""
    return verify_merkle_proof(proof.leaf, proof.siblings, proof.root, hasher)


def build_merkle_root(leaves: Sequence[bytes], hasher: Hasher | None = None) -> bytes:
    """
    Build a Merkle root from a sequence of leaf digests.

    Example: [a, b, c] -> [parent(a, b), c] -> [parent(parent(a, b), c)]

    Raises:
        EmptyInputError: If leaves is empty
    """
    return MerkleTree.from_leaf_digests(leaves, hasher).root


def build_merkle_proof(
    leaves: Sequence[bytes],
    index: int,
    hasher: Hasher | None = None,
) -> MerkleProof:
    """
    Generate a Merkle proof for the leaf digest at ``index``.

    Raises:
        EmptyInputError: If leaves is empty
        LeafNotFoundError: If index is out of range
    """
    return MerkleTree.from_leaf_digests(leaves, hasher).get_proof(index)


def compute_tree_depth(num_leaves: int) -> int:
    """
    Number of levels (leaves and root included) for ``num_leaves`` leaves.

    Odd levels promote their last node, so each level has
    ceil(n / 2) nodes: 1 -> 1, 2 -> 2, 3 -> 3, 4 -> 3, 5 -> 4.
    """
    if num_leaves <= 0:
        return 0
    depth = 1
    n = num_leaves
    while n > 1:
        n = (n + 1) // 2
        depth += 1
    return depth


__all__ = [
    "MerkleProof",
    "MerkleTree",
    "merkle_parent",
    "verify_merkle_proof",
    "verify_proof",
    "build_merkle_root",
    "build_merkle_proof",
    "compute_tree_depth",
]

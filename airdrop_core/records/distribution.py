"""
Module 04 - Airdrop Records
File: distribution.py

Purpose: Commit to an airdrop entry list and serve claims against it.

An AirdropDistribution is the publisher's view: it holds the full entry
list, builds the tree once and hands out ProofDocuments. A beneficiary
only needs verify_entry_proof() and the published root.
"""

from __future__ import annotations

import logging
from typing import Sequence

from airdrop_core.crypto.hashing import (
    DEFAULT_HASH_ALGORITHM,
    Hasher,
    from_hex,
    get_hasher,
    to_hex,
)
from airdrop_core.merkle.merkle_tree import MerkleTree, verify_merkle_proof
from airdrop_core.schemas.errors import LeafNotFoundError
from airdrop_core.schemas.proof import (
    DEFAULT_LEAF_ENCODING,
    LeafEncoding,
    ProofDocument,
    RootCommitment,
)
from .encoder import AirdropEntry, encode_entry, leaf_bytes


logger = logging.getLogger(__name__)


def entry_leaf(
    entry: AirdropEntry,
    hasher: Hasher,
    leaf_encoding: LeafEncoding | str = DEFAULT_LEAF_ENCODING,
) -> bytes:
    """Leaf digest for one entry: hasher.hash(leaf_bytes(encode_entry(entry)))."""
    return hasher.hash(leaf_bytes(encode_entry(entry), leaf_encoding))


class AirdropDistribution:
    """
    A committed (address, amount) list.

    Example:
        >>> dist = AirdropDistribution([AirdropEntry(address="0x1", amount=5)])
        >>> doc = dist.proof_for("0x1", 5)
        >>> dist.verify_claim("0x1", 5, doc)
        True
    """

    def __init__(
        self,
        entries: Sequence[AirdropEntry],
        hash_algorithm: str = DEFAULT_HASH_ALGORITHM,
        leaf_encoding: LeafEncoding = DEFAULT_LEAF_ENCODING,
    ) -> None:
        self._entries = tuple(entries)
        self._hasher = get_hasher(hash_algorithm)
        self._leaf_encoding = leaf_encoding
        payloads = [leaf_bytes(encode_entry(e), leaf_encoding) for e in self._entries]
        self._tree = MerkleTree(payloads, self._hasher)
        logger.info(
            f"Committed {len(self._entries)} entries "
            f"(hash={self._hasher.name}, leaf_encoding={leaf_encoding}): {self._tree.root_hex}"
        )

    @property
    def entries(self) -> tuple[AirdropEntry, ...]:
        return self._entries

    @property
    def tree(self) -> MerkleTree:
        return self._tree

    @property
    def hash_algorithm(self) -> str:
        return self._hasher.name

    @property
    def leaf_encoding(self) -> LeafEncoding:
        return self._leaf_encoding

    @property
    def root(self) -> bytes:
        return self._tree.root

    @property
    def root_hex(self) -> str:
        return self._tree.root_hex

    def leaf_for(self, address: str, amount: int) -> bytes:
        """Leaf digest the given entry would have in this distribution."""
        return entry_leaf(AirdropEntry(address=address, amount=amount), self._hasher, self._leaf_encoding)

    def index_of(self, address: str, amount: int) -> int:
        """
        Position of an entry in the list (first match).

        Raises:
            LeafNotFoundError: If the entry is not part of the distribution
        """
        entry = AirdropEntry(address=address, amount=amount)
        for i, candidate in enumerate(self._entries):
            if candidate == entry:
                return i
        raise LeafNotFoundError(
            f"No entry for {entry.address} with amount {entry.amount}",
            leaf=to_hex(entry_leaf(entry, self._hasher, self._leaf_encoding)),
        )

    def proof_at(self, index: int) -> ProofDocument:
        """Proof document for the entry at ``index``."""
        proof = self._tree.get_proof(index)
        return ProofDocument.from_merkle_proof(
            proof,
            hash_algorithm=self.hash_algorithm,
            leaf_encoding=self._leaf_encoding,
        )

    def proof_for(self, address: str, amount: int) -> ProofDocument:
        """Proof document for an (address, amount) entry."""
        return self.proof_at(self.index_of(address, amount))

    def verify_claim(self, address: str, amount: int, document: ProofDocument) -> bool:
        """
        Check a claim against this distribution's root.

        The leaf is recomputed from (address, amount) rather than taken
        from the document, and the root is this distribution's own.

        Raises:
            MalformedProofError: If a proof entry has the wrong length
        """
        leaf = self.leaf_for(address, amount)
        siblings = document.to_merkle_proof().siblings
        return verify_merkle_proof(leaf, siblings, self.root, self._hasher)

    def commitment(self) -> RootCommitment:
        """Publishable commitment for this distribution."""
        return RootCommitment(
            hash_algorithm=self.hash_algorithm,
            leaf_encoding=self._leaf_encoding,
            root=self.root_hex,
            leaf_count=self._tree.leaf_count,
            depth=self._tree.depth,
        )

    def __len__(self) -> int:
        return len(self._entries)


def verify_entry_proof(
    address: str,
    amount: int,
    document: ProofDocument,
    root: bytes | str | None = None,
) -> bool:
    """
    Beneficiary-side check that (address, amount) is under a root.

    Uses the document's hash algorithm and leaf encoding. ``root`` is the
    independently published root; when omitted the document's own root is
    used, which only proves internal consistency of the document.

    Raises:
        MalformedProofError: If a digest has the wrong length
        UnsupportedHashAlgorithmError: If the document names an unknown hasher
    """
    hasher = document.get_hasher()
    leaf = entry_leaf(AirdropEntry(address=address, amount=amount), hasher, document.leaf_encoding)
    proof = document.to_merkle_proof()
    if root is None:
        expected_root = proof.root
    elif isinstance(root, str):
        expected_root = from_hex(root)
    else:
        expected_root = root
    return verify_merkle_proof(leaf, proof.siblings, expected_root, hasher)


__all__ = [
    "AirdropDistribution",
    "entry_leaf",
    "verify_entry_proof",
]

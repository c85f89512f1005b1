"""
Module 01 - Schemas
File: proof.py

Purpose: Hex-encoded exchange documents for roots and inclusion proofs.
The core works on raw bytes; these models are the presentation layer used
when a root is published or a proof is handed to a beneficiary.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from airdrop_core.crypto.hashing import (
    DEFAULT_HASH_ALGORITHM,
    Hasher,
    from_hex,
    get_hasher,
    to_hex,
)
from airdrop_core.merkle.merkle_tree import MerkleProof, verify_merkle_proof
from .versioning import SCHEMA_VERSION, assert_supported_schema_version


# How a record payload is turned into the bytes that get hashed into a leaf
LeafEncoding = Literal["raw", "decimal-csv"]

DEFAULT_LEAF_ENCODING: LeafEncoding = "raw"


def _normalize_hex(value: str) -> str:
    # Raises ValueError on bad input, which pydantic reports as a validation error
    return to_hex(from_hex(value.strip()))


class ProofDocument(BaseModel):
    """
    Inclusion proof for one leaf, as handed to a beneficiary.

    All digests are lowercase 0x-prefixed hex. ``proof`` lists sibling
    digests from the leaf level upwards and carries no side flags.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    schema_version: str = Field(default=SCHEMA_VERSION)
    hash_algorithm: str = Field(
        default=DEFAULT_HASH_ALGORITHM,
        description="Registry name of the hasher the tree was built with",
        min_length=1,
    )
    leaf_encoding: LeafEncoding = Field(default=DEFAULT_LEAF_ENCODING)
    leaf: str = Field(..., description="Leaf digest (hex)")
    leaf_index: int = Field(..., ge=0, description="Position of the leaf in the entry list")
    proof: list[str] = Field(default_factory=list, description="Sibling digests (hex)")
    root: str = Field(..., description="Merkle root (hex)")

    @field_validator("schema_version")
    @classmethod
    def _check_version(cls, v: str) -> str:
        assert_supported_schema_version(v)
        return v

    @field_validator("leaf", "root")
    @classmethod
    def _check_digest_hex(cls, v: str) -> str:
        return _normalize_hex(v)

    @field_validator("proof")
    @classmethod
    def _check_proof_hex(cls, v: list[str]) -> list[str]:
        return [_normalize_hex(item) for item in v]

    @classmethod
    def from_merkle_proof(
        cls,
        proof: MerkleProof,
        hash_algorithm: str = DEFAULT_HASH_ALGORITHM,
        leaf_encoding: LeafEncoding = DEFAULT_LEAF_ENCODING,
    ) -> "ProofDocument":
        return cls(
            hash_algorithm=hash_algorithm,
            leaf_encoding=leaf_encoding,
            leaf=to_hex(proof.leaf),
            leaf_index=proof.index,
            proof=[to_hex(s) for s in proof.siblings],
            root=to_hex(proof.root),
        )

    def to_merkle_proof(self) -> MerkleProof:
        return MerkleProof(
            leaf=from_hex(self.leaf),
            index=self.leaf_index,
            siblings=tuple(from_hex(s) for s in self.proof),
            root=from_hex(self.root),
        )

    def get_hasher(self) -> Hasher:
        return get_hasher(self.hash_algorithm)

    def verify(self, leaf: bytes | None = None) -> bool:
        """
        Verify this document, optionally against an independently computed leaf.

        Raises:
            MalformedProofError: If any digest has the wrong length
            UnsupportedHashAlgorithmError: If hash_algorithm is unknown
        """
        proof = self.to_merkle_proof()
        return verify_merkle_proof(
            proof.leaf if leaf is None else leaf,
            proof.siblings,
            proof.root,
            self.get_hasher(),
        )


class RootCommitment(BaseModel):
    """Published commitment to a whole entry list."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    schema_version: str = Field(default=SCHEMA_VERSION)
    hash_algorithm: str = Field(default=DEFAULT_HASH_ALGORITHM, min_length=1)
    leaf_encoding: LeafEncoding = Field(default=DEFAULT_LEAF_ENCODING)
    root: str = Field(..., description="Merkle root (hex)")
    leaf_count: int = Field(..., ge=1)
    depth: int = Field(..., ge=1, description="Number of tree levels, leaves and root included")

    @field_validator("schema_version")
    @classmethod
    def _check_version(cls, v: str) -> str:
        assert_supported_schema_version(v)
        return v

    @field_validator("root")
    @classmethod
    def _check_root_hex(cls, v: str) -> str:
        return _normalize_hex(v)

    @property
    def root_bytes(self) -> bytes:
        return from_hex(self.root)

"""
Module 03 - Merkle Prover/Verifier Unit Tests
Tests for airdrop_core/merkle/merkle_proofs.py
"""
import pytest

from fixtures import make_payloads

from airdrop_core.crypto.hashing import get_hasher, sha256
from airdrop_core.merkle import MerkleProver, MerkleTree, MerkleVerifier
from airdrop_core.schemas.errors import EmptyInputError, LeafNotFoundError


class TestMerkleProver:
    """Tests for MerkleProver."""

    def test_compute_root_from_payloads(self):
        payloads = make_payloads(6)
        assert MerkleProver.compute_root_from_payloads(payloads) == MerkleTree(payloads).root

    def test_compute_root_from_digests(self):
        payloads = make_payloads(6)
        leaves = [sha256(p) for p in payloads]
        assert MerkleProver.compute_root(leaves) == MerkleTree(payloads).root

    def test_prove_digest_and_payload_agree(self):
        payloads = make_payloads(5)
        leaves = [sha256(p) for p in payloads]
        assert MerkleProver.prove(leaves, 3) == MerkleProver.prove_payload(payloads, 3)

    def test_prove_out_of_range(self):
        with pytest.raises(LeafNotFoundError):
            MerkleProver.prove_payload(make_payloads(2), 5)

    def test_prove_empty(self):
        with pytest.raises(EmptyInputError):
            MerkleProver.compute_root_from_payloads([])


class TestMerkleVerifier:
    """Tests for MerkleVerifier."""

    def test_verify_round_trip(self):
        proof = MerkleProver.prove_payload([b"a", b"b", b"c"], index=1)
        assert MerkleVerifier.verify(proof)

    def test_verify_leaf_in_root(self):
        tree = MerkleTree(make_payloads(4))
        proof = tree.get_proof(2)
        assert MerkleVerifier.verify_leaf_in_root(proof.leaf, proof.siblings, tree.root)

    def test_verify_payload_in_root(self):
        payloads = make_payloads(7)
        tree = MerkleTree(payloads)
        proof = tree.get_proof(6)

        assert MerkleVerifier.verify_payload_in_root(payloads[6], proof.siblings, tree.root)
        assert not MerkleVerifier.verify_payload_in_root(b"leaf99", proof.siblings, tree.root)

    def test_verify_payload_with_hasher(self):
        keccak = get_hasher("keccak256")
        payloads = make_payloads(3)
        tree = MerkleTree(payloads, keccak)
        proof = tree.get_proof(0)

        assert MerkleVerifier.verify_payload_in_root(payloads[0], proof.siblings, tree.root, keccak)
        assert not MerkleVerifier.verify_payload_in_root(payloads[0], proof.siblings, tree.root)

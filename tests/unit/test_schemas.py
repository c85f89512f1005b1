"""
Module 01 - Schema Unit Tests
Tests for airdrop_core/schemas (errors, versioning, verification, proof documents)
"""
import json

import pytest
from pydantic import ValidationError

from airdrop_core.crypto.hashing import sha256
from airdrop_core.merkle import MerkleTree
from airdrop_core.schemas import (
    SCHEMA_VERSION,
    AirdropError,
    AirdropException,
    CheckResult,
    EmptyInputError,
    ErrorCodes,
    LeafNotFoundError,
    MalformedProofError,
    RecordEncodingError,
    UnsupportedSchemaVersionError,
    VerificationResult,
    assert_supported_schema_version,
    is_compatible_schema_version,
    schema_major,
)
from airdrop_core.schemas.proof import ProofDocument, RootCommitment


class TestErrors:
    """Tests for the exception taxonomy."""

    @pytest.mark.parametrize(
        "exc, code",
        [
            (EmptyInputError(), ErrorCodes.EMPTY_INPUT),
            (LeafNotFoundError("missing"), ErrorCodes.LEAF_NOT_FOUND),
            (MalformedProofError("bad"), ErrorCodes.MALFORMED_PROOF),
            (RecordEncodingError("bad record"), ErrorCodes.RECORD_ENCODING_ERROR),
        ],
    )
    def test_codes_and_not_retryable(self, exc, code):
        assert isinstance(exc, AirdropException)
        assert exc.code == code
        assert exc.retryable is False

    def test_empty_input_default_message(self):
        assert "zero leaves" in str(EmptyInputError())

    def test_to_error_model_and_back(self):
        exc = MalformedProofError("short", position=2, expected_length=32, actual_length=31)
        model = exc.to_error_model()

        assert isinstance(model, AirdropError)
        assert model.details == {"position": 2, "expected_length": 32, "actual_length": 31}

        again = model.to_exception()
        assert again.code == ErrorCodes.MALFORMED_PROOF
        assert again.message == "short"

    def test_error_model_forbids_extra(self):
        with pytest.raises(ValidationError):
            AirdropError(code="X", message="m", unexpected=True)

    def test_repr(self):
        assert repr(LeafNotFoundError("gone")) == (
            "LeafNotFoundError(code='LEAF_NOT_FOUND', message='gone')"
        )


class TestVersioning:
    """Tests for schema version helpers."""

    def test_current_version_supported(self):
        assert_supported_schema_version(SCHEMA_VERSION)
        assert is_compatible_schema_version(SCHEMA_VERSION)
        assert schema_major(SCHEMA_VERSION) == 1

    def test_unknown_version(self):
        assert not is_compatible_schema_version("v0")
        with pytest.raises(UnsupportedSchemaVersionError, match="v0"):
            assert_supported_schema_version("v0")

    @pytest.mark.parametrize("tag", ["1", "v", "V1", "v1.0", ""])
    def test_malformed_tag(self, tag):
        with pytest.raises(UnsupportedSchemaVersionError):
            schema_major(tag)


class TestVerificationResult:
    """Tests for CheckResult/VerificationResult."""

    def test_add_failed_check_flips_ok(self):
        result = VerificationResult()
        result.add_check(CheckResult.passed("a", "fine"))
        assert result.ok

        result.add_check(CheckResult.failed("b", "broken", position=3))
        assert not result.ok
        assert [c.check_id for c in result.failed_checks] == ["b"]
        assert result.failed_checks[0].details == {"position": 3}
        assert result.error is None

    def test_abort_records_error(self):
        result = VerificationResult(leaf_index=0)
        result.abort("proof_well_formed", MalformedProofError("short", position=1))

        assert not result.ok
        assert result.error.code == ErrorCodes.MALFORMED_PROOF
        assert result.checks[0].details == {"position": 1}

    def test_checks_are_frozen(self):
        check = CheckResult.passed("a", "fine")
        with pytest.raises(ValidationError):
            check.ok = False


class TestProofDocument:
    """Tests for the hex proof exchange format."""

    def setup_method(self):
        self.tree = MerkleTree([b"alice", b"bob", b"carol"])
        self.proof = self.tree.get_proof(0)

    def test_from_and_to_merkle_proof(self):
        doc = ProofDocument.from_merkle_proof(self.proof)

        assert doc.schema_version == SCHEMA_VERSION
        assert doc.leaf == "0x" + sha256(b"alice").hex()
        assert len(doc.proof) == 2
        assert doc.to_merkle_proof() == self.proof

    def test_verify(self):
        doc = ProofDocument.from_merkle_proof(self.proof)
        assert doc.verify()
        assert not doc.verify(leaf=sha256(b"mallory"))

    def test_hex_normalised(self):
        doc = ProofDocument(
            leaf=self.proof.leaf.hex().upper(),
            leaf_index=0,
            proof=[s.hex() for s in self.proof.siblings],
            root="0X" + self.proof.root.hex(),
        )
        assert doc.leaf == "0x" + self.proof.leaf.hex()
        assert doc.root == self.tree.root_hex
        assert doc.verify()

    def test_json_round_trip(self):
        doc = ProofDocument.from_merkle_proof(self.proof, leaf_encoding="decimal-csv")
        loaded = ProofDocument.model_validate_json(doc.model_dump_json())
        assert loaded == doc

    def test_invalid_hex_rejected(self):
        with pytest.raises(ValidationError):
            ProofDocument(leaf="0xzz", leaf_index=0, proof=[], root="0x00")

    def test_negative_index_rejected(self):
        with pytest.raises(ValidationError):
            ProofDocument(leaf="0x00", leaf_index=-1, proof=[], root="0x00")

    def test_unknown_fields_rejected(self):
        data = json.loads(ProofDocument.from_merkle_proof(self.proof).model_dump_json())
        data["side"] = ["left"]
        with pytest.raises(ValidationError):
            ProofDocument.model_validate(data)

    def test_unsupported_schema_version(self):
        with pytest.raises(ValidationError):
            ProofDocument(schema_version="v9", leaf="0x00", leaf_index=0, root="0x00")

    def test_unknown_leaf_encoding(self):
        with pytest.raises(ValidationError):
            ProofDocument(leaf_encoding="base64", leaf="0x00", leaf_index=0, root="0x00")

    def test_short_sibling_raises_on_verify(self):
        doc = ProofDocument(
            leaf=self.proof.leaf.hex(),
            leaf_index=0,
            proof=[self.proof.siblings[0].hex()[:-2]],
            root=self.proof.root.hex(),
        )
        with pytest.raises(MalformedProofError):
            doc.verify()


class TestRootCommitment:
    """Tests for RootCommitment."""

    def test_fields(self):
        commitment = RootCommitment(root="AB" * 32, leaf_count=3, depth=3)
        assert commitment.root == "0x" + "ab" * 32
        assert commitment.root_bytes == bytes([0xAB]) * 32
        assert commitment.hash_algorithm == "sha256"

    def test_leaf_count_must_be_positive(self):
        with pytest.raises(ValidationError):
            RootCommitment(root="0x00", leaf_count=0, depth=1)

"""
Module 04 - Record Encoding Unit Tests
Tests for airdrop_core/records/encoder.py

Covers:
1. Address normalisation and entry validation
2. 40-byte record layout (address || u64 little-endian)
3. Leaf encodings (raw, decimal-csv)
4. Loading entry lists from JSON, YAML and CSV
"""
import json

import pytest

from fixtures import ADDRESS_ONE, AMOUNT_ONE, make_entries

from airdrop_core.crypto.hashing import sha256
from airdrop_core.records import (
    MAX_AMOUNT,
    RECORD_LENGTH,
    AirdropEntry,
    decode_entry,
    encode_entry,
    leaf_bytes,
    load_entries,
    normalize_address,
    parse_entries,
)
from airdrop_core.schemas.errors import ErrorCodes, RecordEncodingError


class TestAddressNormalisation:
    """Tests for normalize_address and AirdropEntry.address."""

    def test_full_address_lowercased(self):
        assert normalize_address(ADDRESS_ONE.upper().replace("0X", "0x")) == ADDRESS_ONE

    def test_short_address_left_padded(self):
        assert normalize_address("0x1") == "0x" + "0" * 63 + "1"

    def test_prefix_optional(self):
        assert normalize_address(ADDRESS_ONE[2:]) == ADDRESS_ONE

    def test_too_long(self):
        with pytest.raises(ValueError, match="longer than 32 bytes"):
            normalize_address("0x" + "ab" * 33)

    def test_not_hex(self):
        with pytest.raises(ValueError, match="not hexadecimal"):
            normalize_address("0xnothex")

    def test_empty(self):
        with pytest.raises(ValueError, match="empty"):
            normalize_address("0x")

    def test_entry_normalises_address(self):
        entry = AirdropEntry(address="0xAB", amount=1)
        assert entry.address == "0x" + "0" * 62 + "ab"

    def test_entry_accepts_integer_address(self):
        """Unquoted hex in YAML arrives as an int."""
        assert AirdropEntry(address=0x1, amount=1).address == normalize_address("0x1")


class TestEntryValidation:
    """Tests for AirdropEntry bounds."""

    def test_negative_amount_rejected(self):
        with pytest.raises(ValueError):
            AirdropEntry(address="0x1", amount=-1)

    def test_amount_above_u64_rejected(self):
        with pytest.raises(ValueError):
            AirdropEntry(address="0x1", amount=MAX_AMOUNT + 1)

    def test_max_amount_accepted(self):
        assert AirdropEntry(address="0x1", amount=MAX_AMOUNT).amount == MAX_AMOUNT

    def test_extra_fields_rejected(self):
        with pytest.raises(ValueError):
            AirdropEntry(address="0x1", amount=1, memo="hi")

    def test_entries_are_frozen(self):
        entry = AirdropEntry(address="0x1", amount=1)
        with pytest.raises(ValueError):
            entry.amount = 2


class TestRecordLayout:
    """Tests for encode_entry/decode_entry."""

    def test_reference_record(self):
        record = encode_entry(AirdropEntry(address=ADDRESS_ONE, amount=AMOUNT_ONE))

        assert len(record) == RECORD_LENGTH
        assert record.hex() == ADDRESS_ONE[2:] + "3700000000000000"

    def test_amount_is_little_endian(self):
        record = encode_entry(AirdropEntry(address="0x1", amount=0x0102))
        assert record[32:] == bytes([0x02, 0x01, 0, 0, 0, 0, 0, 0])

    def test_decode_inverts_encode(self):
        for entry in make_entries():
            assert decode_entry(encode_entry(entry)) == entry

    def test_decode_wrong_length(self):
        with pytest.raises(RecordEncodingError) as exc_info:
            decode_entry(b"\x00" * 39)
        assert exc_info.value.code == ErrorCodes.RECORD_ENCODING_ERROR
        assert exc_info.value.details["length"] == 39


class TestLeafEncodings:
    """Tests for leaf_bytes."""

    def test_raw_is_identity(self):
        payload = bytes(range(40))
        assert leaf_bytes(payload, "raw") == payload

    def test_decimal_csv_renders_byte_values(self):
        assert leaf_bytes(bytes([148, 251, 0, 7]), "decimal-csv") == b"148,251,0,7"

    def test_decimal_csv_reference_record(self):
        record = encode_entry(AirdropEntry(address=ADDRESS_ONE, amount=AMOUNT_ONE))
        text = leaf_bytes(record, "decimal-csv").decode("ascii")

        assert text.startswith("148,251,207,73,")
        assert text.endswith(",42,55,0,0,0,0,0,0,0")
        assert sha256(text.encode("ascii")).hex() == (
            "a0eac9aa07fa217605864fcf45e8b5bd3e1f07a54e96f6098500e5b5ea28982d"
        )

    def test_unknown_encoding(self):
        with pytest.raises(RecordEncodingError, match="Unknown leaf encoding"):
            leaf_bytes(b"x", "base64")


class TestParseEntries:
    """Tests for parse_entries."""

    def test_parses_mappings(self):
        entries = parse_entries([{"address": "0x1", "amount": 5}, {"address": "0x2", "amount": "6"}])
        assert [e.amount for e in entries] == [5, 6]

    def test_reports_position_of_bad_item(self):
        with pytest.raises(RecordEncodingError) as exc_info:
            parse_entries(
                [{"address": "0x1", "amount": 5}, {"address": "0x2", "amount": -3}],
                source="list.json",
            )

        err = exc_info.value
        assert "list.json: entry 1" in err.message
        assert err.details["field_path"] == "[1].amount"


class TestLoadEntries:
    """Tests for load_entries."""

    def test_json_list(self, entries_file, entries):
        assert load_entries(entries_file) == entries

    def test_json_object_with_entries_key(self, tmp_path, entries):
        path = tmp_path / "drop.json"
        path.write_text(json.dumps({"entries": [e.model_dump() for e in entries]}))
        assert load_entries(path) == entries

    def test_yaml(self, tmp_path):
        path = tmp_path / "drop.yaml"
        path.write_text(
            "entries:\n"
            f"  - address: '{ADDRESS_ONE}'\n"
            f"    amount: {AMOUNT_ONE}\n"
            "  - address: 0x2\n"
            "    amount: 7\n"
        )
        loaded = load_entries(path)

        assert loaded[0] == AirdropEntry(address=ADDRESS_ONE, amount=AMOUNT_ONE)
        assert loaded[1] == AirdropEntry(address="0x2", amount=7)

    def test_csv(self, tmp_path):
        path = tmp_path / "drop.csv"
        path.write_text(f"address,amount\n{ADDRESS_ONE},{AMOUNT_ONE}\n0x2,7\n")
        loaded = load_entries(path)

        assert len(loaded) == 2
        assert loaded[0].amount == AMOUNT_ONE
        assert loaded[1].address == normalize_address("0x2")

    def test_missing_file(self, tmp_path):
        with pytest.raises(RecordEncodingError, match="not found"):
            load_entries(tmp_path / "nope.json")

    def test_unsupported_suffix(self, tmp_path):
        path = tmp_path / "drop.txt"
        path.write_text("[]")
        with pytest.raises(RecordEncodingError, match="Unsupported entries file type"):
            load_entries(path)

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "drop.json"
        path.write_text("[{")
        with pytest.raises(RecordEncodingError, match="Failed to parse"):
            load_entries(path)

    def test_not_a_list(self, tmp_path):
        path = tmp_path / "drop.json"
        path.write_text('{"address": "0x1"}')
        with pytest.raises(RecordEncodingError, match="expected a list"):
            load_entries(path)

    def test_invalid_entry(self, tmp_path):
        path = tmp_path / "drop.json"
        path.write_text('[{"address": "0xzz", "amount": 1}]')
        with pytest.raises(RecordEncodingError) as exc_info:
            load_entries(path)
        assert exc_info.value.details["field_path"] == "[0].address"

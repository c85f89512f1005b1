"""
Module 04 - Airdrop Records
File: encoder.py

Purpose: Turn (address, amount) entries into canonical leaf payloads.

Record layout (BCS ``address`` followed by ``u64``):
    bytes  0..32  address, big-endian, left-padded with zeros
    bytes 32..40  amount, unsigned 64-bit little-endian

The Merkle core treats the resulting 40 bytes as an opaque payload.
"""

from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import Any, Iterable

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from airdrop_core.schemas.errors import RecordEncodingError
from airdrop_core.schemas.proof import LeafEncoding


logger = logging.getLogger(__name__)

ADDRESS_LENGTH = 32
AMOUNT_LENGTH = 8
RECORD_LENGTH = ADDRESS_LENGTH + AMOUNT_LENGTH
MAX_AMOUNT = 2**64 - 1

LEAF_ENCODINGS: tuple[str, ...] = ("raw", "decimal-csv")


class AirdropEntry(BaseModel):
    """One beneficiary of an airdrop: who gets how much."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    address: str = Field(
        ...,
        description="Account address, normalised to 0x + 64 lowercase hex chars",
    )
    amount: int = Field(..., ge=0, le=MAX_AMOUNT, description="Unsigned 64-bit amount")

    @field_validator("address", mode="before")
    @classmethod
    def _normalize_address(cls, v: Any) -> str:
        # Unquoted 0x... scalars come out of YAML as ints
        if isinstance(v, int) and not isinstance(v, bool):
            v = hex(v)
        if not isinstance(v, str):
            raise ValueError(f"Address must be a hex string, got {type(v).__name__}")
        return normalize_address(v)


def normalize_address(address: str) -> str:
    """
    Normalise an address to ``0x`` + 64 lowercase hex characters.

    Short addresses (e.g. ``0x1``) are left-padded with zeros, matching
    how BCS serialises a Move ``address``.

    Raises:
        ValueError: If the address is not hex or longer than 32 bytes
    """
    value = address.strip().lower()
    if value.startswith("0x"):
        value = value[2:]
    if not value:
        raise ValueError("Address is empty")
    if len(value) > ADDRESS_LENGTH * 2:
        raise ValueError(
            f"Address is longer than {ADDRESS_LENGTH} bytes: {address!r}"
        )
    try:
        int(value, 16)
    except ValueError:
        raise ValueError(f"Address is not hexadecimal: {address!r}") from None
    return "0x" + value.rjust(ADDRESS_LENGTH * 2, "0")


def encode_entry(entry: AirdropEntry) -> bytes:
    """
    Encode an entry into its 40-byte canonical record.

    Example:
        >>> encode_entry(AirdropEntry(address="0x1", amount=1)).hex()[-16:]
        '0100000000000000'
    """
    return bytes.fromhex(entry.address[2:]) + entry.amount.to_bytes(AMOUNT_LENGTH, "little")


def decode_entry(payload: bytes) -> AirdropEntry:
    """
    Decode a 40-byte canonical record back into an entry.

    Raises:
        RecordEncodingError: If the payload is not exactly 40 bytes
    """
    if len(payload) != RECORD_LENGTH:
        raise RecordEncodingError(
            f"Record must be {RECORD_LENGTH} bytes, got {len(payload)}",
            details={"length": len(payload)},
        )
    return AirdropEntry(
        address="0x" + payload[:ADDRESS_LENGTH].hex(),
        amount=int.from_bytes(payload[ADDRESS_LENGTH:], "little"),
    )


def leaf_bytes(payload: bytes, encoding: LeafEncoding | str = "raw") -> bytes:
    """
    Render a record payload into the bytes that are hashed into a leaf.

    ``raw`` hashes the record as-is. ``decimal-csv`` hashes the ASCII text
    of the byte values joined by commas ("148,251,..."), which is what a
    JavaScript ``Uint8Array.toString()`` yields; roots published by tools
    that hashed that string can only be reproduced with this encoding.

    Raises:
        RecordEncodingError: If the encoding name is unknown
    """
    if encoding == "raw":
        return bytes(payload)
    if encoding == "decimal-csv":
        return ",".join(str(b) for b in payload).encode("ascii")
    raise RecordEncodingError(
        f"Unknown leaf encoding: {encoding!r}",
        details={"supported": list(LEAF_ENCODINGS)},
    )


def parse_entries(items: Iterable[Any], source: str = "<input>") -> list[AirdropEntry]:
    """
    Validate raw mappings into entries.

    Raises:
        RecordEncodingError: On the first invalid item, with its position
    """
    entries: list[AirdropEntry] = []
    for i, item in enumerate(items):
        try:
            entries.append(AirdropEntry.model_validate(item))
        except ValidationError as e:
            first = e.errors()[0]
            loc = ".".join(str(part) for part in first.get("loc", ()))
            raise RecordEncodingError(
                f"{source}: entry {i} is invalid: {first.get('msg', str(e))}",
                field_path=f"[{i}].{loc}" if loc else f"[{i}]",
            ) from e
    return entries


def load_entries(path: str | Path) -> list[AirdropEntry]:
    """
    Load an entry list from JSON, YAML or CSV.

    JSON/YAML: a list of ``{"address": ..., "amount": ...}`` objects, or an
    object with such a list under ``"entries"``.
    CSV: a header row containing ``address`` and ``amount``.

    Raises:
        RecordEncodingError: If the file is missing, unparseable or invalid
    """
    path = Path(path)
    if not path.is_file():
        raise RecordEncodingError(f"Entries file not found: {path}")

    suffix = path.suffix.lower()
    try:
        if suffix == ".csv":
            with open(path, newline="", encoding="utf-8") as f:
                items: Any = list(csv.DictReader(f))
        elif suffix in (".yaml", ".yml"):
            with open(path, encoding="utf-8") as f:
                items = yaml.safe_load(f)
        elif suffix == ".json":
            with open(path, encoding="utf-8") as f:
                items = json.load(f)
        else:
            raise RecordEncodingError(
                f"Unsupported entries file type: {path.suffix or '(none)'}",
                details={"path": str(path)},
            )
    except (json.JSONDecodeError, yaml.YAMLError, csv.Error, UnicodeDecodeError) as e:
        raise RecordEncodingError(f"Failed to parse {path}: {e}") from e

    if isinstance(items, dict):
        items = items.get("entries")
    if not isinstance(items, list):
        raise RecordEncodingError(
            f"{path}: expected a list of entries",
            details={"path": str(path)},
        )

    entries = parse_entries(items, source=str(path))
    logger.info(f"Loaded {len(entries)} entries from {path}")
    return entries


__all__ = [
    "ADDRESS_LENGTH",
    "AMOUNT_LENGTH",
    "RECORD_LENGTH",
    "MAX_AMOUNT",
    "LEAF_ENCODINGS",
    "AirdropEntry",
    "normalize_address",
    "encode_entry",
    "decode_entry",
    "leaf_bytes",
    "parse_entries",
    "load_entries",
]

"""
CLI Verify Command

Verify a proof document offline, without the entry list:
- Optionally recompute the leaf from (address, amount)
- Optionally check against an independently published root
- Replay the proof and compare roots

Usage:
    airdrop verify proof.json [--address 0x... --amount N] [--root 0x...] [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from pathlib import Path

from pydantic import ValidationError

from airdrop_core.crypto.hashing import from_hex, to_hex
from airdrop_core.merkle.merkle_tree import verify_merkle_proof
from airdrop_core.records import AirdropEntry, entry_leaf
from airdrop_core.schemas.errors import AirdropException, MalformedProofError
from airdrop_core.schemas.proof import ProofDocument
from airdrop_core.schemas.verification import CheckResult, VerificationResult
from airdrop_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
    print_json,
    wants_json,
)


logger = logging.getLogger(__name__)


def load_proof_document(path: Path) -> ProofDocument:
    """Read and validate a proof document from JSON."""
    return ProofDocument.model_validate_json(path.read_text(encoding="utf-8"))


def verify_document(
    document: ProofDocument,
    entry: AirdropEntry | None = None,
    published_root: str | None = None,
) -> VerificationResult:
    """
    Verify a proof document and report each step as a check.

    A root mismatch yields ok=False with no error; a structurally invalid
    proof yields ok=False with ``error`` set.
    """
    hasher = document.get_hasher()
    proof = document.to_merkle_proof()
    result = VerificationResult(leaf_index=document.leaf_index)

    leaf = proof.leaf
    if entry is not None:
        leaf = entry_leaf(entry, hasher, document.leaf_encoding)
        if leaf == proof.leaf:
            result.add_check(CheckResult.passed(
                "leaf_matches_entry",
                f"Leaf matches {entry.address} / {entry.amount}",
            ))
        else:
            result.add_check(CheckResult.failed(
                "leaf_matches_entry",
                f"Entry {entry.address} / {entry.amount} hashes to {to_hex(leaf)}, "
                f"document claims {document.leaf}",
            ))

    root = proof.root
    if published_root is not None:
        root = from_hex(published_root)
        if root == proof.root:
            result.add_check(CheckResult.passed("root_matches_published", "Document root is the published root"))
        else:
            result.add_check(CheckResult.failed(
                "root_matches_published",
                f"Document root {document.root} differs from published root {to_hex(root)}",
            ))

    result.root = to_hex(root)
    try:
        included = verify_merkle_proof(leaf, proof.siblings, root, hasher)
    except MalformedProofError as e:
        result.abort("proof_well_formed", e)
        return result

    result.add_check(CheckResult.passed(
        "proof_well_formed",
        f"{len(proof.siblings)} proof entries of {hasher.digest_size} bytes",
    ))
    if included:
        result.add_check(CheckResult.passed("root_reconstructed", "Proof reproduces the root"))
    else:
        result.add_check(CheckResult.failed("root_reconstructed", "Proof does not reproduce the root"))
    return result


def print_result_human(path: Path, document: ProofDocument, result: VerificationResult) -> None:
    print(f"proof: {path}")
    print(f"leaf_index: {document.leaf_index}")
    print(f"root: {document.root}")
    print(f"hash_algorithm: {document.hash_algorithm}")
    print(f"valid: {str(result.ok).lower()}")
    for check in result.checks:
        status = "✓" if check.ok else "✗"
        print(f"  {status} {check.check_id}: {check.message}")


def verify_cmd(args: Namespace) -> int:
    """
    Execute the verify command.

    Returns:
        Exit code (0 valid, 2 not valid, 1 could not run)
    """
    path = Path(args.proof_path)
    if not path.is_file():
        print(f"Error: Proof file not found: {path}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if (args.address is None) != (args.amount is None):
        print("Error: --address and --amount must be given together", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        document = load_proof_document(path)
    except (ValidationError, json.JSONDecodeError) as e:
        print(f"Error loading proof document: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        entry = None
        if args.address is not None:
            entry = AirdropEntry(address=args.address, amount=args.amount)
        result = verify_document(document, entry=entry, published_root=args.root)
    except AirdropException as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if wants_json(args):
        print_json(result.model_dump())
    else:
        print_result_human(path, document, result)

    if result.ok:
        logger.info("Verification passed")
        return EXIT_SUCCESS
    logger.warning("Verification failed")
    return EXIT_VERIFICATION_FAILED

"""
Module 01 - Schemas
File: __init__.py

Purpose: Export error, versioning and verification-report schemas.
Proof exchange documents live in ``airdrop_core.schemas.proof`` and are
imported from there directly, since they depend on the Merkle module.
"""

# Version constants
from .versioning import (
    SCHEMA_VERSION,
    SUPPORTED_SCHEMA_VERSIONS,
    UnsupportedSchemaVersionError,
    assert_supported_schema_version,
    is_compatible_schema_version,
    schema_major,
)

# Error models and exceptions
from .errors import (
    AirdropError,
    AirdropException,
    EmptyInputError,
    ErrorCodes,
    LeafNotFoundError,
    MalformedProofError,
    RecordEncodingError,
    UnsupportedHashAlgorithmError,
)

# Verification reports
from .verification import (
    CheckResult,
    VerificationResult,
)

__all__ = [
    # Versioning
    "SCHEMA_VERSION",
    "SUPPORTED_SCHEMA_VERSIONS",
    "UnsupportedSchemaVersionError",
    "assert_supported_schema_version",
    "is_compatible_schema_version",
    "schema_major",
    # Errors
    "AirdropError",
    "AirdropException",
    "EmptyInputError",
    "ErrorCodes",
    "LeafNotFoundError",
    "MalformedProofError",
    "RecordEncodingError",
    "UnsupportedHashAlgorithmError",
    # Verification
    "CheckResult",
    "VerificationResult",
]

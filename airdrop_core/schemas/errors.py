"""
Module 01 - Schemas
File: errors.py

Purpose: Error taxonomy for tree construction, proof generation and
proof verification. Defines both Pydantic models for structured error
reporting and Python exceptions for control flow.

A root mismatch during verification is NOT an error: it is a normal
``False`` outcome. Exceptions here are reserved for inputs the core
cannot work with at all.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes."""

    # Tree construction
    EMPTY_INPUT = "EMPTY_INPUT"

    # Proof generation
    LEAF_NOT_FOUND = "LEAF_NOT_FOUND"

    # Proof verification
    MALFORMED_PROOF = "MALFORMED_PROOF"

    # Hasher selection
    UNSUPPORTED_HASH_ALGORITHM = "UNSUPPORTED_HASH_ALGORITHM"

    # Record encoding / entry lists
    RECORD_ENCODING_ERROR = "RECORD_ENCODING_ERROR"


# =============================================================================
# Pydantic Error Model (Structured Communication)
# =============================================================================

class AirdropError(BaseModel):
    """
    Error model for structured error reporting.

    Used where an error has to be reported rather than raised, e.g. in a
    VerificationResult or a CLI JSON report.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.MALFORMED_PROOF],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the operation can be retried",
    )

    def to_exception(self) -> "AirdropException":
        """Convert this error model to a raisable exception."""
        return AirdropException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class AirdropException(Exception):
    """
    Base exception for all merkle-airdrop errors.

    Carries structured error information and can be converted to an
    AirdropError model.
    """

    def __init__(
        self,
        message: str,
        code: str = "AIRDROP_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> AirdropError:
        """Convert this exception to an AirdropError model."""
        return AirdropError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class EmptyInputError(AirdropException):
    """Raised when a tree is constructed from zero leaves."""

    def __init__(
        self,
        message: str = "Cannot build a Merkle tree from zero leaves",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.EMPTY_INPUT,
            details=details,
            retryable=False,
        )


class LeafNotFoundError(AirdropException):
    """Raised when a proof is requested for a leaf absent from level 0."""

    def __init__(
        self,
        message: str,
        leaf: str | None = None,
        leaf_index: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if leaf:
            full_details["leaf"] = leaf
        if leaf_index is not None:
            full_details["leaf_index"] = leaf_index
        super().__init__(
            message=message,
            code=ErrorCodes.LEAF_NOT_FOUND,
            details=full_details,
            retryable=False,
        )


class MalformedProofError(AirdropException):
    """Raised when a proof entry does not have the hasher's digest length."""

    def __init__(
        self,
        message: str,
        position: int | None = None,
        expected_length: int | None = None,
        actual_length: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if position is not None:
            full_details["position"] = position
        if expected_length is not None:
            full_details["expected_length"] = expected_length
        if actual_length is not None:
            full_details["actual_length"] = actual_length
        super().__init__(
            message=message,
            code=ErrorCodes.MALFORMED_PROOF,
            details=full_details,
            retryable=False,
        )


class UnsupportedHashAlgorithmError(AirdropException):
    """Raised when a hasher is requested by an unknown name."""

    def __init__(
        self,
        algorithm: str,
        supported: list[str] | None = None,
    ) -> None:
        details: dict[str, Any] = {"algorithm": algorithm}
        if supported:
            details["supported"] = supported
        super().__init__(
            message=f"Unsupported hash algorithm: {algorithm!r}",
            code=ErrorCodes.UNSUPPORTED_HASH_ALGORITHM,
            details=details,
            retryable=False,
        )


class RecordEncodingError(AirdropException):
    """Raised when an airdrop entry cannot be encoded, decoded or loaded."""

    def __init__(
        self,
        message: str,
        field_path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if field_path:
            full_details["field_path"] = field_path
        super().__init__(
            message=message,
            code=ErrorCodes.RECORD_ENCODING_ERROR,
            details=full_details,
            retryable=False,
        )

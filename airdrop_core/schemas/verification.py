"""
Module 01 - Schemas
File: verification.py
Purpose: Step-by-step report of a proof verification.

The core verifier answers with a plain bool. When a proof document is
checked from the CLI, each step (leaf recomputation, published-root
comparison, digest lengths, root replay) is recorded here so a failed
claim says which step failed.
"""
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from .errors import AirdropError, AirdropException


class CheckResult(BaseModel):
    """Outcome of one verification step."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    check_id: str = Field(..., min_length=1, description="Step name, e.g. root_reconstructed")
    ok: bool
    message: str
    details: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def passed(cls, check_id: str, message: str, **details: Any) -> "CheckResult":
        return cls(check_id=check_id, ok=True, message=message, details=details)

    @classmethod
    def failed(cls, check_id: str, message: str, **details: Any) -> "CheckResult":
        return cls(check_id=check_id, ok=False, message=message, details=details)


class VerificationResult(BaseModel):
    """
    Report for one proof document.

    ``ok`` is the conjunction of all recorded steps. ``error`` is set only
    when the proof could not be evaluated at all (wrong digest lengths);
    an honest root mismatch is a failed step with no error.
    """

    model_config = ConfigDict(extra="forbid")

    ok: bool = True
    leaf_index: Optional[int] = Field(default=None, ge=0)
    root: Optional[str] = Field(default=None, description="Root the proof was replayed against (hex)")
    checks: list[CheckResult] = Field(default_factory=list)
    error: Optional[AirdropError] = None

    @property
    def failed_checks(self) -> list[CheckResult]:
        return [check for check in self.checks if not check.ok]

    def add_check(self, check: CheckResult) -> None:
        self.checks.append(check)
        if not check.ok:
            self.ok = False

    def abort(self, check_id: str, exc: AirdropException) -> None:
        """Record a step that could not run because of ``exc``."""
        self.add_check(CheckResult.failed(check_id, exc.message, **exc.details))
        self.error = exc.to_error_model()

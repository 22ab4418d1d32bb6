# core/results.py

"""
OPERATION RESULTS (CALLER-FACING)

Core operations never leak exceptions for expected failures.
They return plain data that the HTTP layer (or any other caller)
can surface verbatim:

    OperationResult(ok=False, error_kind=ErrorKind.NOT_FOUND,
                    code="ADDRESS_NOT_FOUND", message="Address not found")
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class ErrorKind(str, Enum):
    NOT_FOUND = "NotFound"
    INVALID_INPUT = "InvalidInput"
    POLICY_VIOLATION = "PolicyViolation"


class StorefrontError(Exception):
    """
    Base class for recoverable domain failures.

    Subclasses pin `error_kind` and `code`; the message is an
    end-user-facing sentence.
    """

    error_kind: ErrorKind = ErrorKind.INVALID_INPUT
    code: str = "INVALID_INPUT"

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


@dataclass(frozen=True)
class OperationResult:
    ok: bool
    error_kind: Optional[ErrorKind] = None
    code: Optional[str] = None
    message: Optional[str] = None
    data: Any = None

    @classmethod
    def success(cls, data=None, message: str | None = None) -> "OperationResult":
        return cls(ok=True, data=data, message=message)

    @classmethod
    def failure(cls, exc: StorefrontError) -> "OperationResult":
        return cls(
            ok=False,
            error_kind=exc.error_kind,
            code=exc.code,
            message=exc.message,
        )

    def as_dict(self) -> dict:
        payload = {"ok": self.ok}
        if not self.ok:
            payload["error_kind"] = self.error_kind.value if self.error_kind else None
            payload["code"] = self.code
            payload["message"] = self.message
        elif self.message:
            payload["message"] = self.message
        return payload

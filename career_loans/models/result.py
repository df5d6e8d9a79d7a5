"""Structured outcome for ledger operations that can be rejected."""

from dataclasses import dataclass
from typing import Generic, TypeVar

from career_loans.exceptions import ResultError
from career_loans.models.enums import RejectionReason

T = TypeVar("T")


@dataclass
class OperationResult(Generic[T]):
    """Success with a value, or a rejection with a reason code.

    Usage::

        result = ledger.pay_off(loan_id, funds)
        if not result:
            print(result.reason, result.message)
    """

    success: bool
    value: T | None = None
    reason: RejectionReason | None = None
    message: str = ""

    @classmethod
    def ok(cls, value: T | None = None, message: str = "") -> "OperationResult[T]":
        return cls(success=True, value=value, message=message)

    @classmethod
    def fail(cls, reason: RejectionReason, message: str = "") -> "OperationResult[T]":
        return cls(success=False, reason=reason, message=message)

    def __bool__(self) -> bool:
        return self.success

    def unwrap(self) -> T | None:
        """Return the value, raising ``ResultError`` if the operation was rejected."""
        if not self.success:
            reason = self.reason.value if self.reason else "UNKNOWN"
            raise ResultError(f"{reason}: {self.message}")
        return self.value

"""Loan model and its flat persistence record."""

import logging
import math
import uuid
from dataclasses import dataclass, field
from typing import Any, Mapping

from career_loans.amortization import remaining_balance

logger = logging.getLogger(__name__)

RECORD_FIELDS = (
    "id",
    "principal",
    "apr",
    "term_months",
    "monthly_payment",
    "payments_made",
    "remaining",
    "start_time",
    "next_payment_time",
)


def new_loan_id() -> str:
    """Generate a fresh opaque loan identifier."""
    return uuid.uuid4().hex


@dataclass
class Loan:
    """Amortizing obligation held by a ledger."""

    principal: float  # Amount borrowed
    apr: float  # Annual rate fixed at origination (0.12 for 12%)
    term_months: int
    monthly_payment: float  # Rounded once at origination, never recomputed
    payments_made: int = 0
    remaining: float = 0.0  # Cache of the last computed balance
    start_time: float = 0.0
    next_payment_time: float = 0.0
    loan_id: str = field(default_factory=new_loan_id)

    @property
    def months_left(self) -> int:
        return max(0, self.term_months - self.payments_made)

    def to_record(self) -> dict[str, str]:
        """Flatten into named scalar fields for the host's save format."""
        return {
            "id": self.loan_id,
            "principal": repr(float(self.principal)),
            "apr": repr(float(self.apr)),
            "term_months": str(int(self.term_months)),
            "monthly_payment": repr(float(self.monthly_payment)),
            "payments_made": str(int(self.payments_made)),
            "remaining": repr(float(self.remaining)),
            "start_time": repr(float(self.start_time)),
            "next_payment_time": repr(float(self.next_payment_time)),
        }

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Loan":
        """Rebuild a loan from a saved record.

        Each field is recovered on its own: a missing or unparsable value
        becomes zero (or a fresh id) and is logged, the rest still load.
        Whole numbers stored as floats (``12.0``) are accepted for the
        integer fields. An unreadable ``remaining`` is recomputed from the
        loan terms rather than zeroed, so it cannot retire the loan.
        """
        loan_id = _parse_id(record.get("id"))
        principal = _parse_float(record, "principal", loan_id)
        apr = _parse_float(record, "apr", loan_id)
        monthly_payment = _parse_float(record, "monthly_payment", loan_id)
        payments_made = _parse_int(record, "payments_made", loan_id)

        remaining = _parse_float(record, "remaining", loan_id, default=None)
        if remaining is None:
            remaining = remaining_balance(principal, apr, max(0, payments_made), monthly_payment)

        return cls(
            loan_id=loan_id,
            principal=principal,
            apr=apr,
            term_months=_parse_int(record, "term_months", loan_id),
            monthly_payment=monthly_payment,
            payments_made=payments_made,
            remaining=remaining,
            start_time=_parse_float(record, "start_time", loan_id),
            next_payment_time=_parse_float(record, "next_payment_time", loan_id),
        )


def _parse_id(value: Any) -> str:
    if value is not None:
        try:
            parsed = uuid.UUID(str(value).strip())
        except ValueError:
            pass
        else:
            if parsed.int != 0:
                return parsed.hex

    fresh = new_loan_id()
    logger.warning("Loan record id %r is missing or invalid, assigned %s", value, fresh)
    return fresh


def _to_float(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan


def _parse_float(
    record: Mapping[str, Any],
    name: str,
    loan_id: str,
    default: float | None = 0.0,
) -> float | None:
    value = record.get(name)
    parsed = _to_float(value)
    if not math.isfinite(parsed):
        fallback = "recomputed value" if default is None else default
        logger.warning("Loan %s field %s=%r is unparsable, using %s", loan_id, name, value, fallback)
        return default
    return parsed


def _parse_int(record: Mapping[str, Any], name: str, loan_id: str) -> int:
    value = record.get(name)
    parsed = _to_float(value)
    if not math.isfinite(parsed) or not parsed.is_integer():
        logger.warning("Loan %s field %s=%r is unparsable, using 0", loan_id, name, value)
        return 0
    return int(parsed)

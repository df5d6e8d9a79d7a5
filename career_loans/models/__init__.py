"""Domain models for the loan ledger."""

from career_loans.models.enums import Preset, RejectionReason, RetirementReason
from career_loans.models.loan import RECORD_FIELDS, Loan, new_loan_id
from career_loans.models.requests import (
    LedgerSummary,
    LoanStatement,
    OriginationRequest,
    Quote,
    SweepReport,
)
from career_loans.models.result import OperationResult

__all__ = [
    "LedgerSummary",
    "Loan",
    "LoanStatement",
    "OperationResult",
    "OriginationRequest",
    "Preset",
    "Quote",
    "RECORD_FIELDS",
    "RejectionReason",
    "RetirementReason",
    "SweepReport",
    "new_loan_id",
]

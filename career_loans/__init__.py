"""Amortizing loans for simulations with an irregular clock."""

from career_loans.config import CareerLoansConfig, LoanConfig, SimulationConfig
from career_loans.funds import Funds, FundsPool
from career_loans.ledger import LoanLedger
from career_loans.models import Loan, OperationResult, OriginationRequest, RejectionReason
from career_loans.tiers import TierCaps, caps_for

__all__ = [
    "CareerLoansConfig",
    "Funds",
    "FundsPool",
    "Loan",
    "LoanConfig",
    "LoanLedger",
    "OperationResult",
    "OriginationRequest",
    "RejectionReason",
    "SimulationConfig",
    "TierCaps",
    "caps_for",
]

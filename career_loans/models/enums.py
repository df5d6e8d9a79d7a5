"""Enumeration types for loan ledger entities."""

from enum import Enum


class RejectionReason(str, Enum):
    INVALID_INPUT = "INVALID_INPUT"
    CAPACITY_EXCEEDED = "CAPACITY_EXCEEDED"
    INSUFFICIENT_FUNDS = "INSUFFICIENT_FUNDS"
    LOAN_NOT_FOUND = "LOAN_NOT_FOUND"


class RetirementReason(str, Enum):
    TERM_COMPLETE = "TERM_COMPLETE"  # payments_made reached term_months
    PAID_DOWN = "PAID_DOWN"  # remaining fell to the payoff epsilon
    PAID_OFF = "PAID_OFF"  # early payoff requested by the host


class Preset(str, Enum):
    EASY = "EASY"
    NORMAL = "NORMAL"
    MODERATE = "MODERATE"
    HARD = "HARD"

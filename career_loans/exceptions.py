"""Custom exception hierarchy for career-loans."""


class CareerLoansError(Exception):
    """Base exception for all career-loans errors."""


class ConfigurationError(CareerLoansError):
    """Raised when configuration is invalid or missing."""


class LoanNotFoundError(CareerLoansError):
    """Raised when a referenced loan is not in the ledger."""


class ResultError(CareerLoansError):
    """Raised when unwrapping the value of a failed operation result."""

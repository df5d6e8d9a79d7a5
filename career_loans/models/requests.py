"""Request and report objects exchanged between the ledger and its host."""

from dataclasses import dataclass, field

from career_loans.models.enums import RetirementReason


@dataclass
class OriginationRequest:
    """Loan terms asked for by the host.

    ``apr`` is normally left unset so the ledger prices the loan from the
    borrower's reputation; a host may pin it to a quoted rate instead.
    """

    amount: float
    term_months: int
    apr: float | None = None


@dataclass
class Quote:
    """Preview of what ``originate`` would grant for a request."""

    tier: int
    apr: float
    amount: float  # Clamped to the tier's principal cap
    term_months: int  # Clamped to [1, max_term_months]
    monthly_payment: float  # Rounded, as it would be fixed on the loan
    max_loans: int
    max_principal: float
    active_loans: int

    @property
    def can_originate(self) -> bool:
        return self.active_loans < self.max_loans and self.amount > 0


@dataclass
class SweepReport:
    """What one ``advance_time`` call did."""

    now: float
    debounced: bool = False
    installments: int = 0
    collected: float = 0.0
    shortfall: float = 0.0  # Unpaid installment amount absorbed without arrears
    retired: dict[str, RetirementReason] = field(default_factory=dict)


@dataclass
class LoanStatement:
    """Display figures for one active loan."""

    loan_id: str
    principal: float
    apr: float
    monthly_payment: float
    payments_made: int
    term_months: int
    remaining: float
    months_left: int
    days_to_next_payment: float


@dataclass
class LedgerSummary:
    """Display figures for the whole ledger."""

    statements: list[LoanStatement]
    total_monthly: float
    total_remaining: float

    @property
    def active_loans(self) -> int:
        return len(self.statements)

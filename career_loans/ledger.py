"""Loan ledger: origination, time-driven payment sweep and payoff."""

from __future__ import annotations

import logging
import math
from typing import Any, Iterator, Mapping

from career_loans.amortization import (
    ScheduledInstallment,
    monthly_payment,
    remaining_balance,
    schedule as amortization_schedule,
    split_installment,
)
from career_loans.config import DAYS_PER_MONTH, LoanConfig
from career_loans.exceptions import LoanNotFoundError
from career_loans.funds import FundsPool
from career_loans.models import (
    LedgerSummary,
    Loan,
    LoanStatement,
    OperationResult,
    OriginationRequest,
    Quote,
    RejectionReason,
    RetirementReason,
    SweepReport,
    new_loan_id,
)
from career_loans.tiers import caps_for

logger = logging.getLogger(__name__)

# Balances at or below this are treated as fully repaid
PAYOFF_EPSILON = 0.01


class LoanLedger:
    """Owns the active loans of one borrower and settles them against a funds pool.

    The ledger never reads a clock or global state: the host passes the
    current simulation time, its funds pool and the borrower's reputation
    into each call.

    Parameters
    ----------
    config : LoanConfig | None
        Policy snapshot (tier thresholds, caps, APR bounds, month length).
        Defaults to ``LoanConfig()``.
    """

    def __init__(self, config: LoanConfig | None = None) -> None:
        self.config = config or LoanConfig()
        self._loans: list[Loan] = []
        self._last_check_time: float | None = None

    def __len__(self) -> int:
        return len(self._loans)

    def __iter__(self) -> Iterator[Loan]:
        return iter(list(self._loans))

    def __contains__(self, loan_id: object) -> bool:
        return any(loan.loan_id == loan_id for loan in self._loans)

    @property
    def loans(self) -> list[Loan]:
        """Snapshot of the active loans."""
        return list(self._loans)

    @property
    def last_check_time(self) -> float | None:
        return self._last_check_time

    def get(self, loan_id: str) -> Loan:
        """Get an active loan by id."""
        loan = self._find(loan_id)
        if loan is None:
            raise LoanNotFoundError(f"Loan {loan_id} not found")
        return loan

    # Payment sweep
    def advance_time(self, now: float, funds: FundsPool) -> SweepReport:
        """Process every installment that has fallen due by ``now``.

        A single call catches up any number of missed months; each loan's
        installments are settled in order. Calls closer together than
        ``config.check_interval`` are skipped.

        Parameters
        ----------
        now : float
            Current simulation time in seconds.
        funds : FundsPool
            Pool installments are withdrawn from.

        Returns
        -------
        SweepReport
            Installments processed, amounts collected and absorbed, and the
            loans retired by this call.
        """
        if self._last_check_time is not None and now < self._last_check_time + self.config.check_interval:
            return SweepReport(now=now, debounced=True)
        self._last_check_time = now

        report = SweepReport(now=now)
        # Walk backwards so retiring a loan does not shift the unvisited ones
        for index in range(len(self._loans) - 1, -1, -1):
            loan = self._loans[index]
            self._settle_due_installments(loan, now, funds, report)

            reason = self._retirement_reason(loan)
            if reason is not None:
                del self._loans[index]
                report.retired[loan.loan_id] = reason
                logger.info(
                    "Retired loan %s (%s) after %d/%d payments",
                    loan.loan_id,
                    reason.value,
                    loan.payments_made,
                    loan.term_months,
                    extra={"extra": {"loan_id": loan.loan_id, "reason": reason.value}},
                )

        return report

    def _settle_due_installments(
        self,
        loan: Loan,
        now: float,
        funds: FundsPool,
        report: SweepReport,
    ) -> None:
        while loan.payments_made < loan.term_months and now >= loan.next_payment_time:
            balance = remaining_balance(loan.principal, loan.apr, loan.payments_made, loan.monthly_payment)
            interest, principal_part = split_installment(balance, loan.apr, loan.monthly_payment)

            payment = loan.monthly_payment
            available = funds.get_balance()
            if available >= payment:
                funds.add_amount(-payment)
                report.collected += payment
            else:
                paid = max(0.0, available)
                if paid > 0:
                    funds.add_amount(-paid)
                shortfall = payment - paid
                # Missed cash is not carried as arrears; it only retires less principal
                principal_part = max(0.0, principal_part - shortfall)
                report.collected += paid
                report.shortfall += shortfall
                logger.warning(
                    "Loan %s installment %d short by %.2f (paid %.2f of %.2f)",
                    loan.loan_id,
                    loan.payments_made + 1,
                    shortfall,
                    paid,
                    payment,
                    extra={"extra": {"loan_id": loan.loan_id, "shortfall": shortfall}},
                )

            loan.payments_made += 1
            loan.remaining = max(0.0, balance - principal_part)
            loan.next_payment_time += self.config.seconds_per_month
            report.installments += 1

            logger.debug(
                "Loan %s installment %d/%d: interest=%.2f principal=%.2f remaining=%.2f",
                loan.loan_id,
                loan.payments_made,
                loan.term_months,
                interest,
                principal_part,
                loan.remaining,
            )

    @staticmethod
    def _retirement_reason(loan: Loan) -> RetirementReason | None:
        if loan.payments_made >= loan.term_months:
            return RetirementReason.TERM_COMPLETE
        if loan.remaining <= PAYOFF_EPSILON:
            return RetirementReason.PAID_DOWN
        return None

    # Origination
    def quote(self, request: OriginationRequest, reputation: float) -> OperationResult[Quote]:
        """Preview the terms ``originate`` would grant, without mutating anything.

        Malformed requests fail with ``INVALID_INPUT`` exactly as ``originate``
        would. A valid request over the tier's capacity still quotes, with
        ``can_originate`` false.
        """
        invalid = self._validate_request(request)
        if invalid:
            return OperationResult.fail(RejectionReason.INVALID_INPUT, invalid)

        caps = caps_for(reputation, self.config)
        apr = caps.apr if request.apr is None else request.apr
        amount = max(0.0, min(caps.max_principal, float(request.amount)))
        term_months = max(1, min(self.config.max_term_months, int(request.term_months)))
        quote = Quote(
            tier=caps.tier,
            apr=apr,
            amount=amount,
            term_months=term_months,
            monthly_payment=float(round(monthly_payment(amount, apr, term_months))),
            max_loans=caps.max_loans,
            max_principal=caps.max_principal,
            active_loans=len(self._loans),
        )
        return OperationResult.ok(quote)

    def originate(
        self,
        request: OriginationRequest,
        now: float,
        reputation: float,
        funds: FundsPool,
    ) -> OperationResult[Loan]:
        """Open a new loan and credit its principal to ``funds``.

        The amount is clamped to the tier's principal cap and the term to
        ``[1, max_term_months]``. Rejected requests leave no state behind.
        """
        quoted = self.quote(request, reputation)
        if not quoted:
            logger.info("Origination rejected: %s", quoted.message)
            return OperationResult.fail(quoted.reason, quoted.message)

        quote = quoted.value
        if quote.active_loans >= quote.max_loans:
            message = f"Tier {quote.tier} allows {quote.max_loans} active loans"
            logger.info("Origination rejected: %s", message)
            return OperationResult.fail(RejectionReason.CAPACITY_EXCEEDED, message)
        if quote.amount <= 0:
            message = f"Tier {quote.tier} principal cap is {quote.max_principal:.0f}"
            logger.info("Origination rejected: %s", message)
            return OperationResult.fail(RejectionReason.CAPACITY_EXCEEDED, message)

        loan = Loan(
            loan_id=self._unused_id(),
            principal=quote.amount,
            apr=quote.apr,
            term_months=quote.term_months,
            monthly_payment=quote.monthly_payment,
            payments_made=0,
            remaining=quote.amount,
            start_time=now,
            next_payment_time=now + self.config.seconds_per_month,
        )
        self._loans.append(loan)
        funds.add_amount(loan.principal)

        logger.info(
            "Originated loan %s: principal=%.0f apr=%.4f term=%d payment=%.0f",
            loan.loan_id,
            loan.principal,
            loan.apr,
            loan.term_months,
            loan.monthly_payment,
            extra={"extra": {"loan_id": loan.loan_id, "principal": loan.principal}},
        )
        return OperationResult.ok(loan)

    @staticmethod
    def _validate_request(request: OriginationRequest) -> str | None:
        amount = request.amount
        if not isinstance(amount, (int, float)) or not math.isfinite(amount) or amount <= 0:
            return f"Amount must be a positive number, got {amount!r}"

        term = request.term_months
        if isinstance(term, float) and term.is_integer():
            term = int(term)
        if not isinstance(term, int) or isinstance(term, bool) or term < 1:
            return f"Term must be a whole number of months >= 1, got {request.term_months!r}"

        apr = request.apr
        if apr is not None and (not isinstance(apr, (int, float)) or not 0.0 <= apr <= 1.0):
            return f"APR must be within [0, 1], got {apr!r}"
        return None

    def _unused_id(self) -> str:
        loan_id = new_loan_id()
        while loan_id in self:
            loan_id = new_loan_id()
        return loan_id

    # Payoff
    def pay_off(self, loan_id: str, funds: FundsPool) -> OperationResult[float]:
        """Retire a loan early by paying its outstanding balance in one go.

        Either the whole balance is withdrawn and the loan retired, or
        nothing changes. The result value is the amount charged.
        """
        loan = self._find(loan_id)
        if loan is None:
            return OperationResult.fail(RejectionReason.LOAN_NOT_FOUND, f"Loan {loan_id} not found")

        remaining = remaining_balance(loan.principal, loan.apr, loan.payments_made, loan.monthly_payment)
        if remaining <= PAYOFF_EPSILON:
            self._loans.remove(loan)
            logger.info(
                "Loan %s already repaid, retired without charge",
                loan.loan_id,
                extra={"extra": {"loan_id": loan.loan_id, "reason": RetirementReason.PAID_DOWN.value}},
            )
            return OperationResult.ok(0.0)

        available = funds.get_balance()
        if available < remaining:
            message = f"Payoff needs {remaining:.2f}, only {available:.2f} available"
            logger.info("Payoff of loan %s rejected: %s", loan.loan_id, message)
            return OperationResult.fail(RejectionReason.INSUFFICIENT_FUNDS, message)

        funds.add_amount(-remaining)
        self._loans.remove(loan)
        logger.info(
            "Loan %s paid off (-%.0f)",
            loan.loan_id,
            remaining,
            extra={
                "extra": {
                    "loan_id": loan.loan_id,
                    "reason": RetirementReason.PAID_OFF.value,
                    "charged": remaining,
                }
            },
        )
        return OperationResult.ok(remaining)

    # Display figures
    def summary(self, now: float) -> LedgerSummary:
        """Figures a host displays: per-loan statements and totals."""
        seconds_per_day = self.config.seconds_per_month / DAYS_PER_MONTH
        statements = []
        for loan in self._loans:
            remaining = remaining_balance(loan.principal, loan.apr, loan.payments_made, loan.monthly_payment)
            statements.append(
                LoanStatement(
                    loan_id=loan.loan_id,
                    principal=loan.principal,
                    apr=loan.apr,
                    monthly_payment=loan.monthly_payment,
                    payments_made=loan.payments_made,
                    term_months=loan.term_months,
                    remaining=remaining,
                    months_left=loan.months_left,
                    days_to_next_payment=max(0.0, (loan.next_payment_time - now) / seconds_per_day),
                )
            )
        return LedgerSummary(
            statements=statements,
            total_monthly=sum(s.monthly_payment for s in statements),
            total_remaining=sum(s.remaining for s in statements),
        )

    def schedule(self, loan_id: str) -> list[ScheduledInstallment]:
        """Installments still ahead of a loan, carried iteratively from its current balance."""
        loan = self.get(loan_id)
        rows = list(amortization_schedule(loan.principal, loan.apr, loan.term_months, loan.monthly_payment))
        return rows[loan.payments_made :]

    # Persistence
    def save(self) -> dict[str, Any]:
        """Node holding one flat record per active loan."""
        return {"loans": [loan.to_record() for loan in self._loans]}

    def restore(self, node: Mapping[str, Any]) -> int:
        """Replace the active set with the loans saved in ``node``.

        Returns the number of loans restored. The sweep debounce restarts,
        so the next ``advance_time`` call always processes.
        """
        self._loans.clear()
        self._last_check_time = None

        for record in node.get("loans", []):
            loan = Loan.from_record(record)
            if loan.loan_id in self:
                duplicate = loan.loan_id
                loan.loan_id = self._unused_id()
                logger.warning("Duplicate loan id %s in saved ledger, assigned %s", duplicate, loan.loan_id)
            loan.term_months = max(0, loan.term_months)
            loan.payments_made = max(0, min(loan.term_months, loan.payments_made))
            self._loans.append(loan)

        logger.info("Restored %d loans", len(self._loans))
        return len(self._loans)

    @classmethod
    def from_node(cls, node: Mapping[str, Any], config: LoanConfig | None = None) -> "LoanLedger":
        """Create a ledger from a saved node."""
        ledger = cls(config)
        ledger.restore(node)
        return ledger

    def _find(self, loan_id: str) -> Loan | None:
        for loan in self._loans:
            if loan.loan_id == loan_id:
                return loan
        return None

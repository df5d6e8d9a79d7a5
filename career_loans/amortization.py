"""Fixed-payment amortization math.

All functions are pure: balances are derived from the loan terms and the
number of installments already paid, never from an accumulated running
total. That keeps catch-up processing after a clock jump exact.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

# Monthly rates below this are treated as interest-free
ZERO_RATE_EPSILON = 1e-12


@dataclass
class ScheduledInstallment:
    """One row of an amortization table."""

    number: int  # 1, 2, 3, ...
    payment: float
    interest: float
    principal: float
    balance: float  # Outstanding after this installment


def monthly_rate(apr: float) -> float:
    """Convert an annual percentage rate into a monthly rate."""
    return apr / 12.0


def monthly_payment(principal: float, apr: float, term_months: int) -> float:
    """Fixed installment that retires ``principal`` in ``term_months``.

    Parameters
    ----------
    principal : float
        Amount borrowed.
    apr : float
        Annual percentage rate (0.12 for 12%).
    term_months : int
        Number of monthly installments, at least 1.

    Returns
    -------
    float
        Unrounded monthly payment.
    """
    if term_months < 1:
        raise ValueError(f"term_months must be >= 1, got {term_months}")

    r = monthly_rate(apr)
    if abs(r) < ZERO_RATE_EPSILON:
        return principal / term_months
    return principal * r / (1.0 - (1.0 + r) ** -term_months)


def remaining_balance(
    principal: float,
    apr: float,
    payments_made: int,
    payment: float,
) -> float:
    """Outstanding balance after ``payments_made`` fixed installments.

    Uses the closed-form compound formula and floors the result at zero.
    """
    r = monthly_rate(apr)
    k = payments_made
    if abs(r) < ZERO_RATE_EPSILON:
        return max(0.0, principal - k * payment)

    growth = (1.0 + r) ** k
    return max(0.0, principal * growth - payment * ((growth - 1.0) / r))


def split_installment(balance: float, apr: float, payment: float) -> tuple[float, float]:
    """Split a payment into (interest, principal) against ``balance``."""
    interest = balance * monthly_rate(apr)
    return interest, max(0.0, payment - interest)


def schedule(
    principal: float,
    apr: float,
    term_months: int,
    payment: float | None = None,
) -> Iterator[ScheduledInstallment]:
    """Generate the iterative amortization table for a loan.

    When ``payment`` is omitted the unrounded fixed payment is used. The
    balance is carried by subtraction, so the final row exposes any drift
    introduced by a rounded payment.
    """
    if payment is None:
        payment = monthly_payment(principal, apr, term_months)

    balance = principal
    for number in range(1, term_months + 1):
        interest, principal_part = split_installment(balance, apr, payment)
        balance = max(0.0, balance - principal_part)
        yield ScheduledInstallment(
            number=number,
            payment=payment,
            interest=interest,
            principal=principal_part,
            balance=balance,
        )

"""Career scenario: a reference host driving a ledger over simulated time."""

from __future__ import annotations

import logging
import random
from collections import Counter
from dataclasses import dataclass, field

from career_loans.config import LoanConfig, SimulationConfig
from career_loans.funds import Funds
from career_loans.generators import OriginationRequestGenerator, TickGenerator
from career_loans.ledger import LoanLedger
from career_loans.tiers import clamp_reputation

logger = logging.getLogger(__name__)


@dataclass
class ScenarioReport:
    """Outcome of a scenario run."""

    ticks: int = 0
    originated: int = 0
    paid_off: int = 0
    retired: int = 0
    installments: int = 0
    collected: float = 0.0
    shortfall: float = 0.0
    final_time: float = 0.0
    final_funds: float = 0.0
    final_reputation: float = 0.0
    active_loans: int = 0
    rejections: Counter = field(default_factory=Counter)


class CareerScenario:
    """Simulate a borrower whose host clock ticks irregularly.

    Each tick the host:
    - credits income for every month boundary crossed
    - drifts reputation by a random amount
    - sweeps the ledger (catching up after warp jumps)
    - sometimes requests a new loan or pays off the smallest one
    """

    def __init__(
        self,
        months: int = 36,
        initial_funds: float = 250_000.0,
        monthly_income: float = 60_000.0,
        starting_reputation: float = 150.0,
        seed: int | None = None,
        *,
        config: SimulationConfig | None = None,
        loan_config: LoanConfig | None = None,
    ) -> None:
        """Initialize career scenario.

        Parameters
        ----------
        months : int
            Simulated months to run.
        initial_funds : float
            Funds balance at the start.
        monthly_income : float
            Income credited once per simulated month.
        starting_reputation : float
            Borrower reputation at the start.
        seed : int | None
            Random seed for reproducibility.
        config : SimulationConfig | None
            Optional host configuration. If provided, overrides the
            positional parameters.
        loan_config : LoanConfig | None
            Loan policy handed to the ledger.
        """
        self.config = config or SimulationConfig(
            months=months,
            initial_funds=initial_funds,
            monthly_income=monthly_income,
            starting_reputation=starting_reputation,
        )
        self.seed = seed

        if seed is not None:
            random.seed(seed)

        self.ledger = LoanLedger(loan_config)
        self.funds = Funds(balance=self.config.initial_funds)
        self.reputation = clamp_reputation(self.config.starting_reputation)
        self._request_gen = OriginationRequestGenerator(seed=seed)
        tick_seed = None if seed is None else seed + 1
        self._tick_gen = TickGenerator(warp_chance=self.config.warp_chance, seed=tick_seed)

    def run(self) -> ScenarioReport:
        """Run the scenario to the end of its horizon.

        Returns
        -------
        ScenarioReport
            Counters and final balances.
        """
        cfg = self.config
        month_length = self.ledger.config.seconds_per_month
        horizon = cfg.months * month_length
        report = ScenarioReport()
        months_paid = 0

        logger.info(
            "Starting career scenario: %d months, funds=%.0f, reputation=%.0f",
            cfg.months,
            self.funds.get_balance(),
            self.reputation,
        )

        now = 0.0
        for now in self._tick_gen.ticks(0.0, horizon):
            report.ticks += 1

            months_elapsed = int(now // month_length)
            if months_elapsed > months_paid:
                self.funds.add_amount((months_elapsed - months_paid) * cfg.monthly_income)
                months_paid = months_elapsed

            drift = random.uniform(-cfg.reputation_drift, cfg.reputation_drift * 1.2)
            self.reputation = clamp_reputation(self.reputation + drift)

            sweep = self.ledger.advance_time(now, self.funds)
            report.installments += sweep.installments
            report.collected += sweep.collected
            report.shortfall += sweep.shortfall
            report.retired += len(sweep.retired)

            if random.randint(1, 100) <= cfg.borrow_chance:
                request = self._request_gen.generate()
                result = self.ledger.originate(request, now, self.reputation, self.funds)
                if result:
                    report.originated += 1
                else:
                    report.rejections[result.reason.value] += 1

            if self.ledger.loans and random.randint(1, 100) <= cfg.payoff_chance:
                self._pay_off_smallest(now, report)

        report.final_time = now
        report.final_funds = self.funds.get_balance()
        report.final_reputation = self.reputation
        report.active_loans = len(self.ledger)

        logger.info(
            "Career scenario done: %d ticks, %d originated, %d retired, %d paid off, funds=%.0f",
            report.ticks,
            report.originated,
            report.retired,
            report.paid_off,
            report.final_funds,
        )
        return report

    def _pay_off_smallest(self, now: float, report: ScenarioReport) -> None:
        smallest = min(self.ledger.summary(now).statements, key=lambda s: s.remaining)
        result = self.ledger.pay_off(smallest.loan_id, self.funds)
        if result:
            report.paid_off += 1
        else:
            report.rejections[result.reason.value] += 1

#!/usr/bin/env python3
"""Run a career scenario against a loan ledger.

Drives a ledger with an irregular clock (including time-warp jumps), prints
the final loan book and scenario report, and optionally saves the ledger
node and report as JSON.
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from career_loans.config import CareerLoansConfig, LoanConfig
from career_loans.logging import setup_logging
from career_loans.scenarios import CareerScenario
from career_loans.sinks import ConsoleSink, JsonFileSink

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Simulate a career of amortizing loans.")
    parser.add_argument("--months", type=int, help="Simulated months (default from env or 36)")
    parser.add_argument("--seed", type=int, help="Random seed")
    parser.add_argument("--preset", help="Difficulty preset: EASY, NORMAL, MODERATE, HARD")
    parser.add_argument("--initial-funds", type=float, help="Starting funds balance")
    parser.add_argument("--monthly-income", type=float, help="Income credited per month")
    parser.add_argument("--reputation", type=float, help="Starting reputation (0-1000)")
    parser.add_argument("--output", type=Path, help="Directory for JSON ledger and report")
    parser.add_argument("--log-level", help="Log level (DEBUG, INFO, ...)")
    parser.add_argument("--log-format", choices=["standard", "json"], help="Log format")
    parser.add_argument("--ledger-log-level", help="Separate log level for ledger events")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Run the scenario and print results."""
    args = parse_args(argv)
    config = CareerLoansConfig.from_env()

    setup_logging(
        args.log_level or config.log_level,
        args.log_format or config.log_format,
        ledger_level=args.ledger_log_level or config.ledger_log_level,
    )

    if args.preset:
        config.loans = LoanConfig.from_preset(args.preset)
    sim = config.simulation
    if args.months is not None:
        sim.months = args.months
    if args.initial_funds is not None:
        sim.initial_funds = args.initial_funds
    if args.monthly_income is not None:
        sim.monthly_income = args.monthly_income
    if args.reputation is not None:
        sim.starting_reputation = args.reputation
    seed = args.seed if args.seed is not None else config.seed

    scenario = CareerScenario(seed=seed, config=sim, loan_config=config.loans)
    report = scenario.run()

    console = ConsoleSink()
    console.write_summary(scenario.ledger.summary(report.final_time))
    console.write_report("Scenario report", report)

    if args.output:
        sink = JsonFileSink(args.output, pretty=True)
        sink.write_ledger(scenario.ledger)
        sink.write_report("report", report)
        sink.close()

    logger.info("Done")
    return 0


if __name__ == "__main__":
    sys.exit(main())

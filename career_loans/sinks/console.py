"""Console sink for ledger summaries and scenario reports."""

import json
from typing import Any

from career_loans.models import LedgerSummary
from career_loans.sinks.serialization import to_dict


class ConsoleSink:
    """Print ledger figures and reports to stdout."""

    def __init__(self, pretty: bool = True) -> None:
        self.pretty = pretty

    def write_summary(self, summary: LedgerSummary) -> None:
        """Print the figures a host would show next to its loan list."""
        print(f"\n{'='*60}")
        print(f"Active loans: {summary.active_loans}")
        print("=" * 60)

        for s in summary.statements:
            print(
                f"{s.loan_id[:8]}  {s.payments_made}/{s.term_months} paid  "
                f"monthly {s.monthly_payment:,.0f}  remaining {s.remaining:,.0f}  "
                f"APR {s.apr * 100:.2f}%  next in {s.days_to_next_payment:.1f} d"
            )

        print(f"Total monthly outgoing: {summary.total_monthly:,.0f}")
        print(f"Total remaining: {summary.total_remaining:,.0f}")

    def write_report(self, title: str, report: Any) -> None:
        """Print a dataclass report as JSON."""
        print(f"\n{'='*60}")
        print(title)
        print("=" * 60)
        data = to_dict(report)
        if self.pretty:
            print(json.dumps(data, indent=2, ensure_ascii=False, default=str))
        else:
            print(json.dumps(data, ensure_ascii=False, default=str))

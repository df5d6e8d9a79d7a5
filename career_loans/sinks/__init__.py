"""Output sinks for ledger snapshots and reports."""

from career_loans.sinks.console import ConsoleSink
from career_loans.sinks.json_file import JsonFileSink

__all__ = ["ConsoleSink", "JsonFileSink"]

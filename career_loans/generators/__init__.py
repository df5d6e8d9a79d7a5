"""Host-side generators for driving the ledger in simulations."""

from career_loans.generators.clock import TickGenerator
from career_loans.generators.requests import OriginationRequestGenerator

__all__ = ["OriginationRequestGenerator", "TickGenerator"]

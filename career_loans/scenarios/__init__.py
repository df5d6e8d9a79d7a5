"""Reference host scenarios that drive a loan ledger over simulated time."""

from career_loans.scenarios.career import CareerScenario, ScenarioReport

__all__ = ["CareerScenario", "ScenarioReport"]

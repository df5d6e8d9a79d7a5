"""Pytest configuration and fixtures."""

import pytest

from career_loans.config import SECONDS_PER_MONTH, LoanConfig
from career_loans.funds import Funds
from career_loans.ledger import LoanLedger


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def month() -> float:
    """Length of one simulated month in seconds."""
    return SECONDS_PER_MONTH


@pytest.fixture
def config() -> LoanConfig:
    """Default policy without sweep debouncing."""
    return LoanConfig(check_interval=0.0)


@pytest.fixture
def ledger(config: LoanConfig) -> LoanLedger:
    """Create a fresh ledger for each test."""
    return LoanLedger(config)


@pytest.fixture
def rich_funds() -> Funds:
    """Funds pool that never runs short."""
    return Funds(balance=1_000_000_000.0)

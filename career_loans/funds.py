"""Funds pool interface and an in-memory implementation."""

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@runtime_checkable
class FundsPool(Protocol):
    """Host-owned balance the ledger credits and debits."""

    def get_balance(self) -> float: ...

    def add_amount(self, delta: float) -> None: ...


@dataclass
class Funds:
    """In-memory funds pool for hosts without their own balance."""

    balance: float = 0.0
    credited: float = 0.0
    debited: float = 0.0

    def get_balance(self) -> float:
        return self.balance

    def add_amount(self, delta: float) -> None:
        """Apply a credit (positive) or debit (negative); no floor is enforced."""
        self.balance += delta
        if delta >= 0:
            self.credited += delta
        else:
            self.debited -= delta

"""Origination request generator."""

from career_loans.generators.base import BaseGenerator
from career_loans.models import OriginationRequest


class OriginationRequestGenerator(BaseGenerator):
    """Generate the loan requests a borrower might submit."""

    TERMS = (6, 12, 18, 24, 36, 48, 60, 120)

    def __init__(
        self,
        min_amount: int = 50_000,
        max_amount: int = 2_000_000,
        seed: int | None = None,
    ) -> None:
        super().__init__(seed)
        self.min_amount = min_amount
        self.max_amount = max_amount

    def generate(self) -> OriginationRequest:
        """Generate a request; amounts are whole thousands.

        Returns
        -------
        OriginationRequest
            Request priced by the ledger (``apr`` left unset).
        """
        amount = self.fake.random_int(min=self.min_amount, max=self.max_amount, step=1000)
        return OriginationRequest(
            amount=float(amount),
            term_months=self.fake.random_element(elements=self.TERMS),
        )

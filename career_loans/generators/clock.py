"""Irregular simulation clock for driving a ledger."""

from typing import Iterator

from career_loans.config import SECONDS_PER_DAY, SECONDS_PER_MONTH
from career_loans.generators.base import BaseGenerator


class TickGenerator(BaseGenerator):
    """Generate host clock ticks with uneven spacing and occasional time warps.

    Parameters
    ----------
    min_step : float
        Shortest ordinary tick, in seconds.
    max_step : float
        Longest ordinary tick, in seconds.
    warp_chance : int
        Percent chance that a tick is a warp jump of one to
        ``max_warp_months`` months instead.
    max_warp_months : int
        Longest warp jump in months.
    seed : int | None
        Random seed for reproducibility.
    """

    def __init__(
        self,
        min_step: float = SECONDS_PER_DAY / 4,
        max_step: float = 3 * SECONDS_PER_DAY,
        warp_chance: int = 2,
        max_warp_months: int = 6,
        seed: int | None = None,
    ) -> None:
        super().__init__(seed)
        self.min_step = min_step
        self.max_step = max_step
        self.warp_chance = warp_chance
        self.max_warp_months = max_warp_months

    def next_step(self) -> float:
        """Seconds until the next tick."""
        if self.fake.boolean(chance_of_getting_true=self.warp_chance):
            months = self.fake.random_int(min=1, max=self.max_warp_months)
            # Warps rarely land on a month boundary
            return months * SECONDS_PER_MONTH + self.fake.random.uniform(0, SECONDS_PER_DAY)
        return self.fake.random.uniform(self.min_step, self.max_step)

    def ticks(self, start: float, end: float) -> Iterator[float]:
        """Yield non-decreasing clock values from ``start`` until past ``end``."""
        now = start
        while now < end:
            now += self.next_step()
            yield now

"""Configuration management for career-loans."""

import math
from dataclasses import dataclass, field, replace
from typing import Any

from career_loans.exceptions import ConfigurationError
from career_loans.models.enums import Preset

SECONDS_PER_DAY = 6 * 3600.0  # One 6-hour simulation day
DAYS_PER_MONTH = 30
SECONDS_PER_MONTH = DAYS_PER_MONTH * SECONDS_PER_DAY

REPUTATION_MAX = 1000
MAX_LOANS_CAP = 10
MAX_PRINCIPAL_CAP = 1_000_000_000.0
MAX_TERM_CAP = 240

# (rep_tier2, rep_tier3, apr_min, apr_max) per difficulty preset
PRESETS: dict[Preset, tuple[int, int, float, float]] = {
    Preset.EASY: (150, 250, 0.01, 0.20),
    Preset.NORMAL: (200, 300, 0.01, 0.25),
    Preset.HARD: (220, 330, 0.02, 0.30),
}


def _clamp(value: Any, low: Any, high: Any) -> Any:
    return max(low, min(high, value))


@dataclass
class LoanConfig:
    """Loan policy snapshot consumed by the tier policy and the ledger.

    Every instance is clamped on construction, so consumers can rely on
    ``rep_tier3 >= rep_tier2`` and ``apr_max >= apr_min`` without checking.
    """

    rep_tier2: int = 200
    rep_tier3: int = 300
    max_loans_tier1: int = 1
    max_loans_tier2: int = 2
    max_loans_tier3: int = 3
    max_principal_tier1: float = 500_000.0
    max_principal_tier2: float = 2_000_000.0
    max_principal_tier3: float = 10_000_000.0
    max_term_months: int = 120
    apr_min: float = 0.01
    apr_max: float = 0.25
    check_interval: float = 5.0  # Debounce between payment sweeps (seconds)
    seconds_per_month: float = SECONDS_PER_MONTH

    def __post_init__(self) -> None:
        self.clamp_all()

    def clamp_all(self) -> None:
        """Force every field into its valid range."""
        self.rep_tier2 = _clamp(int(self.rep_tier2), 0, REPUTATION_MAX)
        self.rep_tier3 = _clamp(int(self.rep_tier3), 0, REPUTATION_MAX)
        if self.rep_tier3 < self.rep_tier2:
            self.rep_tier3 = self.rep_tier2

        self.max_loans_tier1 = _clamp(int(self.max_loans_tier1), 0, MAX_LOANS_CAP)
        self.max_loans_tier2 = _clamp(int(self.max_loans_tier2), 0, MAX_LOANS_CAP)
        self.max_loans_tier3 = _clamp(int(self.max_loans_tier3), 0, MAX_LOANS_CAP)

        self.max_principal_tier1 = _clamp(float(self.max_principal_tier1), 0.0, MAX_PRINCIPAL_CAP)
        self.max_principal_tier2 = _clamp(float(self.max_principal_tier2), 0.0, MAX_PRINCIPAL_CAP)
        self.max_principal_tier3 = _clamp(float(self.max_principal_tier3), 0.0, MAX_PRINCIPAL_CAP)

        self.max_term_months = _clamp(int(self.max_term_months), 1, MAX_TERM_CAP)

        self.apr_min = _clamp(float(self.apr_min), 0.0, 1.0)
        self.apr_max = _clamp(float(self.apr_max), 0.0, 1.0)
        if self.apr_max < self.apr_min:
            self.apr_max = self.apr_min

        self.check_interval = max(0.0, float(self.check_interval))
        if not math.isfinite(self.seconds_per_month) or self.seconds_per_month <= 0:
            self.seconds_per_month = SECONDS_PER_MONTH

    def with_overrides(self, **changes: Any) -> "LoanConfig":
        """Return a re-clamped copy with the given fields replaced."""
        return replace(self, **changes)

    @classmethod
    def from_preset(cls, preset: Preset | str, **overrides: Any) -> "LoanConfig":
        """Create config from a difficulty preset.

        Unknown presets (MODERATE included) use the NORMAL values. A string
        that is not a preset name at all raises ``ConfigurationError``.
        """
        if isinstance(preset, str) and not isinstance(preset, Preset):
            try:
                preset = Preset(preset.upper())
            except ValueError as exc:
                raise ConfigurationError(f"Unknown preset: {preset}") from exc

        rep_tier2, rep_tier3, apr_min, apr_max = PRESETS.get(preset, PRESETS[Preset.NORMAL])
        values: dict[str, Any] = {
            "rep_tier2": rep_tier2,
            "rep_tier3": rep_tier3,
            "apr_min": apr_min,
            "apr_max": apr_max,
            "max_term_months": 120,
        }
        values.update(overrides)
        return cls(**values)


@dataclass
class SimulationConfig:
    """Reference host configuration for scenario runs."""

    months: int = 36
    initial_funds: float = 250_000.0
    monthly_income: float = 60_000.0
    starting_reputation: float = 150.0
    reputation_drift: float = 12.0  # Max reputation change per tick
    borrow_chance: int = 3  # Percent per tick
    payoff_chance: int = 2  # Percent per tick
    warp_chance: int = 2  # Percent per tick


@dataclass
class CareerLoansConfig:
    """Main configuration for career-loans."""

    loans: LoanConfig = field(default_factory=LoanConfig)
    simulation: SimulationConfig = field(default_factory=SimulationConfig)
    seed: int | None = None
    log_level: str = "INFO"
    log_format: str = "standard"
    ledger_log_level: str | None = None  # Falls back to log_level

    @classmethod
    def from_env(cls) -> "CareerLoansConfig":
        """Create config from environment variables."""
        import os

        def read(name: str, cast: type, default: Any) -> Any:
            raw = os.getenv(name)
            if raw is None or raw == "":
                return default
            try:
                return cast(raw)
            except ValueError as exc:
                raise ConfigurationError(f"Invalid value for {name}: {raw!r}") from exc

        base = LoanConfig.from_preset(os.getenv("CAREER_LOANS_PRESET", "NORMAL"))
        loans = base.with_overrides(
            rep_tier2=read("REP_TIER2", int, base.rep_tier2),
            rep_tier3=read("REP_TIER3", int, base.rep_tier3),
            max_term_months=read("MAX_TERM_MONTHS", int, base.max_term_months),
            apr_min=read("APR_MIN", float, base.apr_min),
            apr_max=read("APR_MAX", float, base.apr_max),
        )

        defaults = SimulationConfig()
        simulation = SimulationConfig(
            months=read("SIM_MONTHS", int, defaults.months),
            initial_funds=read("INITIAL_FUNDS", float, defaults.initial_funds),
            monthly_income=read("MONTHLY_INCOME", float, defaults.monthly_income),
        )

        return cls(
            loans=loans,
            simulation=simulation,
            seed=read("SEED", int, None),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "standard"),
            ledger_log_level=os.getenv("LEDGER_LOG_LEVEL") or None,
        )

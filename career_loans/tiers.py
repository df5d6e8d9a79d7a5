"""Reputation tier policy: loan caps and APR from a reputation score."""

import math
from dataclasses import dataclass

from career_loans.config import REPUTATION_MAX, LoanConfig

# APR curve end points: 20% at zero reputation down to 2% at full reputation
APR_AT_ZERO_REP = 0.20
APR_AT_MAX_REP = 0.02


@dataclass(frozen=True)
class TierCaps:
    """Eligibility limits for one reputation level."""

    tier: int  # 1, 2 or 3
    max_loans: int
    max_principal: float
    apr: float


def clamp_reputation(reputation: float) -> float:
    """Clamp a raw reputation score into [0, REPUTATION_MAX]."""
    if math.isnan(reputation):
        return 0.0
    return max(0.0, min(float(REPUTATION_MAX), float(reputation)))


def apr_for(reputation: float, config: LoanConfig) -> float:
    """Continuous APR for a reputation score, clamped to the config bounds."""
    rep = clamp_reputation(reputation)
    apr = APR_AT_ZERO_REP - (rep / REPUTATION_MAX) * (APR_AT_ZERO_REP - APR_AT_MAX_REP)
    return max(config.apr_min, min(config.apr_max, apr))


def tier_for(reputation: float, config: LoanConfig) -> int:
    """Tier number for a reputation score; thresholds are inclusive."""
    rep = clamp_reputation(reputation)
    if rep >= config.rep_tier3:
        return 3
    if rep >= config.rep_tier2:
        return 2
    return 1


def caps_for(reputation: float, config: LoanConfig) -> TierCaps:
    """Resolve the loan caps and APR granted at ``reputation``.

    Parameters
    ----------
    reputation : float
        Raw reputation from the host; out-of-range values are clamped.
    config : LoanConfig
        Policy snapshot holding thresholds and per-tier caps.

    Returns
    -------
    TierCaps
        Max concurrent loans, max principal and APR.
    """
    tier = tier_for(reputation, config)
    max_loans, max_principal = {
        1: (config.max_loans_tier1, config.max_principal_tier1),
        2: (config.max_loans_tier2, config.max_principal_tier2),
        3: (config.max_loans_tier3, config.max_principal_tier3),
    }[tier]
    return TierCaps(
        tier=tier,
        max_loans=max_loans,
        max_principal=max_principal,
        apr=apr_for(reputation, config),
    )

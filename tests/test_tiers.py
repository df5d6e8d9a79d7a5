"""Tests for the reputation tier policy."""

import pytest

from career_loans.config import LoanConfig
from career_loans.tiers import TierCaps, apr_for, caps_for, clamp_reputation, tier_for


@pytest.fixture
def policy() -> LoanConfig:
    return LoanConfig()


class TestClampReputation:
    """Tests for clamp_reputation."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [(-50.0, 0.0), (0.0, 0.0), (420.5, 420.5), (1000.0, 1000.0), (5000.0, 1000.0)],
    )
    def test_clamp(self, raw: float, expected: float) -> None:
        assert clamp_reputation(raw) == expected

    def test_nan_is_zero(self) -> None:
        assert clamp_reputation(float("nan")) == 0.0


class TestTierLookup:
    """Tests for tier selection."""

    def test_zero_reputation_is_tier1(self, policy: LoanConfig) -> None:
        caps = caps_for(0, policy)
        assert caps.tier == 1
        assert caps.max_loans == policy.max_loans_tier1
        assert caps.max_principal == policy.max_principal_tier1

    def test_full_reputation_is_tier3(self, policy: LoanConfig) -> None:
        caps = caps_for(1000, policy)
        assert caps.tier == 3
        assert caps.max_loans == policy.max_loans_tier3
        assert caps.max_principal == policy.max_principal_tier3

    def test_tier2_boundary_is_inclusive(self, policy: LoanConfig) -> None:
        caps = caps_for(policy.rep_tier2, policy)
        assert caps.tier == 2
        assert caps.max_loans == policy.max_loans_tier2
        assert caps.max_principal == policy.max_principal_tier2

    def test_just_below_tier2(self, policy: LoanConfig) -> None:
        assert tier_for(policy.rep_tier2 - 0.01, policy) == 1

    def test_tier3_boundary_is_inclusive(self, policy: LoanConfig) -> None:
        assert tier_for(policy.rep_tier3, policy) == 3

    def test_out_of_range_reputation_is_clamped(self, policy: LoanConfig) -> None:
        assert caps_for(-300, policy).tier == 1
        assert caps_for(99_999, policy).tier == 3

    def test_equal_thresholds_skip_tier2(self) -> None:
        policy = LoanConfig(rep_tier2=400, rep_tier3=400)
        assert tier_for(399, policy) == 1
        assert tier_for(400, policy) == 3

    def test_caps_are_immutable(self, policy: LoanConfig) -> None:
        caps = caps_for(0, policy)
        assert isinstance(caps, TierCaps)
        with pytest.raises(AttributeError):
            caps.max_loans = 5  # type: ignore[misc]


class TestAprCurve:
    """Tests for the reputation-based APR."""

    def test_end_points(self, policy: LoanConfig) -> None:
        assert apr_for(0, policy) == pytest.approx(0.20)
        assert apr_for(1000, policy) == pytest.approx(0.02)

    def test_linear_midpoint(self, policy: LoanConfig) -> None:
        assert apr_for(500, policy) == pytest.approx(0.11)

    def test_apr_is_continuous_across_tiers(self, policy: LoanConfig) -> None:
        below = apr_for(policy.rep_tier2 - 0.001, policy)
        at = apr_for(policy.rep_tier2, policy)
        assert below == pytest.approx(at, abs=1e-5)

    def test_clamped_to_config_bounds(self) -> None:
        policy = LoanConfig(apr_min=0.05, apr_max=0.10)
        assert apr_for(0, policy) == pytest.approx(0.10)
        assert apr_for(1000, policy) == pytest.approx(0.05)

    def test_reputation_clamped_before_apr(self, policy: LoanConfig) -> None:
        assert apr_for(-1000, policy) == pytest.approx(0.20)
        assert apr_for(3000, policy) == pytest.approx(0.02)

    def test_caps_carry_apr(self, policy: LoanConfig) -> None:
        assert caps_for(250, policy).apr == pytest.approx(apr_for(250, policy))

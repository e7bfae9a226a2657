"""Unit tests for impact-driven workflow parameters."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from amendment_engine.domain.models.impact_policy import (
    DEFAULT_POLICY,
    IMPACT_SEVERITY_ORDER,
    policy_for,
)
from amendment_engine.domain.models.proposal import ImpactLevel


class TestImpactTable:
    """Lookup table values."""

    @pytest.mark.parametrize(
        ("impact", "review", "voting", "quorum", "threshold"),
        [
            (ImpactLevel.BREAKING, 21, 14, 10, 75.0),
            (ImpactLevel.MAJOR, 14, 7, 7, 66.0),
            (ImpactLevel.MINOR, 7, 5, 5, 60.0),
            (ImpactLevel.PATCH, 3, 3, 3, 50.0),
        ],
    )
    def test_policy_values(
        self,
        impact: ImpactLevel,
        review: int,
        voting: int,
        quorum: int,
        threshold: float,
    ) -> None:
        policy = policy_for(impact)
        assert policy.review_days == review
        assert policy.voting_days == voting
        assert policy.quorum == quorum
        assert policy.threshold == threshold

    def test_unknown_impact_uses_defaults(self) -> None:
        assert policy_for(None) == DEFAULT_POLICY
        assert DEFAULT_POLICY.review_days == 7
        assert DEFAULT_POLICY.voting_days == 5
        assert DEFAULT_POLICY.quorum == 5
        assert DEFAULT_POLICY.threshold == 60.0

    def test_testing_required_for_major_and_breaking(self) -> None:
        assert policy_for(ImpactLevel.BREAKING).testing_required is True
        assert policy_for(ImpactLevel.MAJOR).testing_required is True
        assert policy_for(ImpactLevel.MINOR).testing_required is False
        assert policy_for(ImpactLevel.PATCH).testing_required is False


class TestMonotonicity:
    """Stricter rules for more severe impact."""

    @given(
        lower=st.integers(0, len(IMPACT_SEVERITY_ORDER) - 1),
        upper=st.integers(0, len(IMPACT_SEVERITY_ORDER) - 1),
    )
    def test_quorum_and_threshold_non_decreasing(self, lower: int, upper: int) -> None:
        if lower > upper:
            lower, upper = upper, lower
        less = policy_for(IMPACT_SEVERITY_ORDER[lower])
        more = policy_for(IMPACT_SEVERITY_ORDER[upper])
        assert less.quorum <= more.quorum
        assert less.threshold <= more.threshold
        assert less.review_days <= more.review_days

    def test_severity_order_covers_every_level(self) -> None:
        assert set(IMPACT_SEVERITY_ORDER) == set(ImpactLevel)

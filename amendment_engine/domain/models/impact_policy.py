"""Impact-driven workflow parameters.

Review length, voting length, quorum and approval threshold all scale with
the impact severity of a proposal. The values are fixed at creation time
(review length, quorum, threshold) or when voting starts (voting length).

| impact   | review days | voting days | quorum | threshold % |
|----------|-------------|-------------|--------|-------------|
| breaking | 21          | 14          | 10     | 75          |
| major    | 14          | 7           | 7      | 66          |
| minor    | 7           | 5           | 5      | 60          |
| patch    | 3           | 3           | 3      | 50          |

An unknown impact falls back to the minor-equivalent defaults below.
"""

from __future__ import annotations

from dataclasses import dataclass

from amendment_engine.domain.models.proposal import ImpactLevel

DEFAULT_REVIEW_DAYS: int = 7
DEFAULT_VOTING_DAYS: int = 5
DEFAULT_QUORUM: int = 5
DEFAULT_THRESHOLD: float = 60.0

# Severity order, least severe first
IMPACT_SEVERITY_ORDER: tuple[ImpactLevel, ...] = (
    ImpactLevel.PATCH,
    ImpactLevel.MINOR,
    ImpactLevel.MAJOR,
    ImpactLevel.BREAKING,
)


@dataclass(frozen=True)
class ImpactPolicy:
    """Workflow parameters for one impact level.

    Attributes:
        review_days: Length of the community review period.
        voting_days: Length of the voting period.
        quorum: Minimum number of votes (unweighted) for a valid result.
        threshold: Minimum weighted approval percentage to pass.
        testing_required: Whether the amendment must be covered by tests.
    """

    review_days: int
    voting_days: int
    quorum: int
    threshold: float
    testing_required: bool


IMPACT_POLICIES: dict[ImpactLevel, ImpactPolicy] = {
    ImpactLevel.BREAKING: ImpactPolicy(
        review_days=21, voting_days=14, quorum=10, threshold=75.0, testing_required=True
    ),
    ImpactLevel.MAJOR: ImpactPolicy(
        review_days=14, voting_days=7, quorum=7, threshold=66.0, testing_required=True
    ),
    ImpactLevel.MINOR: ImpactPolicy(
        review_days=7, voting_days=5, quorum=5, threshold=60.0, testing_required=False
    ),
    ImpactLevel.PATCH: ImpactPolicy(
        review_days=3, voting_days=3, quorum=3, threshold=50.0, testing_required=False
    ),
}

DEFAULT_POLICY = ImpactPolicy(
    review_days=DEFAULT_REVIEW_DAYS,
    voting_days=DEFAULT_VOTING_DAYS,
    quorum=DEFAULT_QUORUM,
    threshold=DEFAULT_THRESHOLD,
    testing_required=False,
)


def policy_for(impact: ImpactLevel | None) -> ImpactPolicy:
    """Look up the workflow parameters for an impact level.

    Args:
        impact: The impact level, or None for the defaults.

    Returns:
        The ImpactPolicy for the level, DEFAULT_POLICY if unknown.
    """
    if impact is None:
        return DEFAULT_POLICY
    return IMPACT_POLICIES.get(impact, DEFAULT_POLICY)

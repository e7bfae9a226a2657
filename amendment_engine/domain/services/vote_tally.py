"""Vote tally domain service.

Turns a list of weighted votes into a deterministic pass/fail decision.

Rules:
- approvals, rejections and abstentions are sums of vote weights
- approval_percentage = approvals / (approvals + rejections + abstentions) * 100
- quorum is met on the raw vote count, not the weighted sum
- passed = quorum_met and approval_percentage >= threshold

Abstentions are part of the denominator, so abstaining lowers the approval
percentage.
"""

from __future__ import annotations

from collections.abc import Iterable

from amendment_engine.domain.models.proposal import Proposal, Vote, VoteDecision
from amendment_engine.domain.models.voting_result import VotingResult


def weighted_sum(votes: Iterable[Vote], decision: VoteDecision) -> int:
    """Sum the weights of votes carrying the given decision."""
    return sum(v.weight for v in votes if v.decision == decision)


def approval_percentage(approvals: int, total_weight: int) -> float:
    """Calculate the weighted approval percentage.

    Args:
        approvals: Weighted approvals.
        total_weight: Weighted approvals + rejections + abstentions.

    Returns:
        Percentage as float (0.0-100.0). Returns 0.0 for zero total weight.

    Examples:
        >>> approval_percentage(3, 4)
        75.0
        >>> approval_percentage(0, 0)
        0.0
    """
    if total_weight <= 0:
        return 0.0
    return approvals / total_weight * 100


def voting_summary(
    *,
    title: str | None,
    passed: bool,
    percentage: float,
    approvals: int,
    rejections: int,
) -> str:
    """Render the one-line summary of a tally.

    Examples:
        >>> voting_summary(title="Docs", passed=True, percentage=85.71, approvals=6, rejections=0)
        'Amendment "Docs" PASSED with 85.7% approval (6/6 votes)'
    """
    subject = f'Amendment "{title}"' if title else "Amendment"
    outcome = "PASSED" if passed else "FAILED"
    return (
        f"{subject} {outcome} with {percentage:.1f}% approval "
        f"({approvals}/{approvals + rejections} votes)"
    )


def tally(
    votes: Iterable[Vote],
    quorum: int,
    threshold: float,
    *,
    title: str | None = None,
) -> VotingResult:
    """Compute the quorum/threshold outcome of a set of votes.

    This is a pure function: the same votes, quorum and threshold always
    produce an identical VotingResult.

    Args:
        votes: The votes cast.
        quorum: Minimum raw vote count for a valid result.
        threshold: Minimum weighted approval percentage to pass.
        title: Optional proposal title used in the summary.

    Returns:
        The VotingResult.
    """
    vote_list = list(votes)
    approvals = weighted_sum(vote_list, VoteDecision.APPROVE)
    rejections = weighted_sum(vote_list, VoteDecision.REJECT)
    abstentions = weighted_sum(vote_list, VoteDecision.ABSTAIN)
    total_weight = approvals + rejections + abstentions
    percentage = approval_percentage(approvals, total_weight)

    quorum_met = len(vote_list) >= quorum
    passed = quorum_met and percentage >= threshold

    return VotingResult(
        total_votes=len(vote_list),
        approvals=approvals,
        rejections=rejections,
        abstentions=abstentions,
        total_weight=total_weight,
        approval_percentage=percentage,
        quorum_met=quorum_met,
        passed=passed,
        summary=voting_summary(
            title=title,
            passed=passed,
            percentage=percentage,
            approvals=approvals,
            rejections=rejections,
        ),
    )


def tally_proposal(proposal: Proposal) -> VotingResult:
    """Tally a proposal using its own quorum, threshold and title."""
    return tally(
        proposal.voting.votes,
        proposal.voting.quorum,
        proposal.voting.threshold,
        title=proposal.title,
    )

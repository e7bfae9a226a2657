"""Voting result value object."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, eq=True)
class VotingResult:
    """Outcome of tallying a proposal's votes.

    Weighted sums are used for approvals, rejections and abstentions;
    total_votes is the raw (unweighted) vote count used for quorum.

    Attributes:
        total_votes: Number of votes cast.
        approvals: Sum of weights of approve votes.
        rejections: Sum of weights of reject votes.
        abstentions: Sum of weights of abstain votes.
        total_weight: approvals + rejections + abstentions.
        approval_percentage: approvals / total_weight * 100, 0 if no weight.
        quorum_met: total_votes >= quorum.
        passed: quorum_met and approval_percentage >= threshold.
        summary: One-line human-readable summary.
    """

    total_votes: int
    approvals: int
    rejections: int
    abstentions: int
    total_weight: int
    approval_percentage: float
    quorum_met: bool
    passed: bool
    summary: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to the camelCase document form used by the history log."""
        return {
            "totalVotes": self.total_votes,
            "approvals": self.approvals,
            "rejections": self.rejections,
            "abstentions": self.abstentions,
            "totalWeight": self.total_weight,
            "approvalPercentage": self.approval_percentage,
            "quorumMet": self.quorum_met,
            "passed": self.passed,
            "summary": self.summary,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> VotingResult:
        """Rebuild from the camelCase document form."""
        return cls(
            total_votes=int(data["totalVotes"]),
            approvals=int(data["approvals"]),
            rejections=int(data["rejections"]),
            abstentions=int(data["abstentions"]),
            total_weight=int(data["totalWeight"]),
            approval_percentage=float(data["approvalPercentage"]),
            quorum_met=bool(data["quorumMet"]),
            passed=bool(data["passed"]),
            summary=str(data["summary"]),
        )

"""Amendment history entry.

One entry is appended to the history log each time a proposal is
finalized, whether it passed or failed.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from amendment_engine.domain.models.voting_result import VotingResult


class FinalizationResult(Enum):
    """Final outcome recorded in the history log."""

    APPROVED = "approved"
    REJECTED = "rejected"


@dataclass(frozen=True, eq=True)
class AmendmentHistoryEntry:
    """A finalized amendment in the append-only history log.

    Attributes:
        proposal_id: ID of the finalized proposal.
        title: Proposal title at finalization.
        result: approved or rejected.
        voting_result: The tally the decision was based on.
        finalized_date: When finalization happened (UTC).
    """

    proposal_id: str
    title: str
    result: FinalizationResult
    voting_result: VotingResult
    finalized_date: datetime

    def to_dict(self) -> dict[str, Any]:
        """Convert to the camelCase document form."""
        return {
            "proposalId": self.proposal_id,
            "title": self.title,
            "result": self.result.value,
            "votingResult": self.voting_result.to_dict(),
            "finalizedDate": self.finalized_date.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AmendmentHistoryEntry:
        """Rebuild from the camelCase document form."""
        return cls(
            proposal_id=data["proposalId"],
            title=data["title"],
            result=FinalizationResult(data["result"]),
            voting_result=VotingResult.from_dict(data["votingResult"]),
            finalized_date=datetime.fromisoformat(data["finalizedDate"]),
        )

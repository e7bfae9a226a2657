"""Time-gated and voter guards of the amendment workflow.

Every error carries the compared values as attributes and renders them
in its message, e.g. "review ends 2025-01-10T00:00:00+00:00, now is
2025-01-08T00:00:00+00:00".
"""

from __future__ import annotations

from datetime import datetime

from amendment_engine.domain.errors.guard import GuardFailedError


class ReviewPeriodNotElapsedError(GuardFailedError):
    """Raised when voting is started before the review period has ended.

    Attributes:
        review_end: When the review period ends (UTC).
        now: Time at which the guard was evaluated (UTC).
    """

    def __init__(self, proposal_id: str, review_end: datetime, now: datetime) -> None:
        self.review_end = review_end
        self.now = now
        super().__init__(
            proposal_id,
            f"Review period for proposal {proposal_id} has not completed: "
            f"review ends {review_end.isoformat()}, now is {now.isoformat()}",
        )


class VotingClosedError(GuardFailedError):
    """Raised when a vote is cast after the voting period has ended.

    Attributes:
        voting_end: When the voting period ended (UTC).
        now: Time at which the guard was evaluated (UTC).
    """

    def __init__(self, proposal_id: str, voting_end: datetime, now: datetime) -> None:
        self.voting_end = voting_end
        self.now = now
        super().__init__(
            proposal_id,
            f"Voting period for proposal {proposal_id} has ended: "
            f"voting ended {voting_end.isoformat()}, now is {now.isoformat()}",
        )


class VotingPeriodNotElapsedError(GuardFailedError):
    """Raised when finalization is attempted while voting is still open.

    Attributes:
        voting_end: When the voting period ends (UTC).
        now: Time at which the guard was evaluated (UTC).
    """

    def __init__(self, proposal_id: str, voting_end: datetime, now: datetime) -> None:
        self.voting_end = voting_end
        self.now = now
        super().__init__(
            proposal_id,
            f"Voting period for proposal {proposal_id} has not ended: "
            f"voting ends {voting_end.isoformat()}, now is {now.isoformat()}",
        )


class IneligibleVoterError(GuardFailedError):
    """Raised when the voter registry reports the voter as ineligible.

    Attributes:
        voter: The rejected voter identity.
    """

    def __init__(self, proposal_id: str, voter: str) -> None:
        self.voter = voter
        super().__init__(
            proposal_id,
            f"Voter {voter!r} is not eligible to vote on proposal {proposal_id}",
        )


class DuplicateVoteError(GuardFailedError):
    """Raised when a voter tries to vote twice on the same proposal.

    Attributes:
        voter: The voter identity.
        existing_decision: Decision value of the vote already recorded.
    """

    def __init__(self, proposal_id: str, voter: str, existing_decision: str) -> None:
        self.voter = voter
        self.existing_decision = existing_decision
        super().__init__(
            proposal_id,
            f"Voter {voter!r} has already voted on proposal {proposal_id} "
            f"(recorded decision: {existing_decision})",
        )

"""Domain errors for the amendment engine.

Taxonomy:
- ProposalNotFoundError, CommentNotFoundError: the target does not exist (not-found)
- GuardFailedError and subclasses: a workflow guard rejected the call (guard-failed)
- StoreError and subclasses: persistence failed (store-error, retryable)
"""

from amendment_engine.domain.errors.guard import GuardFailedError
from amendment_engine.domain.errors.proposal import (
    CommentNotFoundError,
    IncompleteProposalError,
    InvalidStateTransitionError,
    ProposalClosedError,
    ProposalNotFoundError,
)
from amendment_engine.domain.errors.store import (
    ConcurrentModificationError,
    ProposalAlreadyExistsError,
    StoreError,
)
from amendment_engine.domain.errors.voting import (
    DuplicateVoteError,
    IneligibleVoterError,
    ReviewPeriodNotElapsedError,
    VotingClosedError,
    VotingPeriodNotElapsedError,
)

__all__: list[str] = [
    "CommentNotFoundError",
    "ConcurrentModificationError",
    "DuplicateVoteError",
    "GuardFailedError",
    "IncompleteProposalError",
    "IneligibleVoterError",
    "InvalidStateTransitionError",
    "ProposalAlreadyExistsError",
    "ProposalClosedError",
    "ProposalNotFoundError",
    "ReviewPeriodNotElapsedError",
    "StoreError",
    "VotingClosedError",
    "VotingPeriodNotElapsedError",
]

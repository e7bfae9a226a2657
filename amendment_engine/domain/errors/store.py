"""Proposal store errors.

Store errors are infrastructure failures rather than guard failures. The
API layer maps them to 5xx responses; callers should treat them as
transient and retry.
"""

from __future__ import annotations

from amendment_engine.domain.exceptions import AmendmentEngineError


class StoreError(AmendmentEngineError):
    """Raised when the proposal store or history log cannot complete an operation."""

    pass


class ConcurrentModificationError(StoreError):
    """Raised when a compare-and-swap update finds a newer record version.

    This is a recoverable error: the caller should re-read the proposal,
    re-run its guards and retry, or abort.

    Attributes:
        proposal_id: ID of the proposal that was being modified.
        expected_version: record_version the caller based its update on.
        actual_version: record_version currently stored.
    """

    def __init__(
        self,
        proposal_id: str,
        expected_version: int,
        actual_version: int,
    ) -> None:
        self.proposal_id = proposal_id
        self.expected_version = expected_version
        self.actual_version = actual_version
        super().__init__(
            f"Concurrent modification detected for proposal {proposal_id}: "
            f"expected record version {expected_version}, "
            f"stored version is {actual_version}"
        )


class ProposalAlreadyExistsError(StoreError):
    """Raised when creating a proposal whose ID is already stored.

    Attributes:
        proposal_id: The colliding proposal ID.
    """

    def __init__(self, proposal_id: str) -> None:
        self.proposal_id = proposal_id
        super().__init__(f"Proposal {proposal_id} already exists")

"""Proposal lifecycle errors.

Errors raised when a proposal or comment cannot be found, when a proposal
is incomplete and when it is asked to move along an edge missing from the
status transition matrix.
"""

from __future__ import annotations

from amendment_engine.domain.errors.guard import GuardFailedError
from amendment_engine.domain.exceptions import AmendmentEngineError


class ProposalNotFoundError(AmendmentEngineError):
    """Raised when a proposal does not exist in the store.

    Attributes:
        proposal_id: ID of the proposal that was not found.
    """

    def __init__(self, proposal_id: str) -> None:
        """Initialize proposal not found error.

        Args:
            proposal_id: ID of the proposal that was not found.
        """
        self.proposal_id = proposal_id
        super().__init__(f"Proposal {proposal_id} not found")


class CommentNotFoundError(AmendmentEngineError):
    """Raised when a reply or moderation action names an unknown comment.

    Attributes:
        comment_id: ID of the comment that was not found.
    """

    def __init__(self, comment_id: str) -> None:
        self.comment_id = comment_id
        super().__init__(f"Comment {comment_id} not found")


class IncompleteProposalError(GuardFailedError):
    """Raised when a proposal is submitted for review with empty required fields.

    Attributes:
        proposal_id: ID of the incomplete proposal.
        missing_fields: Names of the empty required fields, in check order.
    """

    def __init__(self, proposal_id: str, missing_fields: list[str]) -> None:
        """Initialize incomplete proposal error.

        Args:
            proposal_id: ID of the proposal.
            missing_fields: Names of the empty required fields.
        """
        self.missing_fields = list(missing_fields)
        super().__init__(
            proposal_id,
            f"Proposal {proposal_id} incomplete: missing {', '.join(self.missing_fields)}",
        )


class InvalidStateTransitionError(GuardFailedError):
    """Raised when a proposal is not in the status an operation requires.

    Used both for edges missing from the transition matrix and for
    operations that require a specific status without changing it
    (casting a vote requires voting).

    Attributes:
        proposal_id: ID of the proposal.
        from_status: Current status value.
        to_status: Target (or required) status value.
        allowed: Status values reachable from the current status.
        operation: Name of the rejected operation, if any.
    """

    def __init__(
        self,
        proposal_id: str,
        from_status: str,
        to_status: str,
        allowed: list[str] | None = None,
        operation: str | None = None,
    ) -> None:
        """Initialize invalid state transition error.

        Args:
            proposal_id: ID of the proposal.
            from_status: Current status value.
            to_status: Target or required status value.
            allowed: Valid target status values from the current status.
            operation: Name of the rejected operation (optional).
        """
        self.from_status = from_status
        self.to_status = to_status
        self.allowed = allowed or []
        self.operation = operation

        if operation is not None:
            message = (
                f"Cannot {operation} proposal {proposal_id}: "
                f"status is {from_status}, requires {to_status}"
            )
        else:
            allowed_str = (
                f" Valid transitions: {self.allowed}"
                if self.allowed
                else " Status is terminal."
            )
            message = (
                f"Invalid state transition for proposal {proposal_id}: "
                f"{from_status} -> {to_status}.{allowed_str}"
            )
        super().__init__(proposal_id, message)


class ProposalClosedError(GuardFailedError):
    """Raised when a comment is added to a proposal in a terminal status.

    Attributes:
        proposal_id: ID of the proposal.
        status: The terminal status value.
    """

    def __init__(self, proposal_id: str, status: str) -> None:
        """Initialize proposal closed error.

        Args:
            proposal_id: ID of the proposal.
            status: The terminal status value.
        """
        self.status = status
        super().__init__(
            proposal_id,
            f"Proposal {proposal_id} is {status}; comments are closed",
        )

"""Guard failure base error for the amendment workflow.

Guard failures are validation errors raised synchronously by the workflow
before any mutation happens. They are never silently ignored and never
retried by the engine; the caller corrects the condition and re-invokes.

The API layer maps every GuardFailedError to a 4xx response.
"""

from amendment_engine.domain.exceptions import AmendmentEngineError


class GuardFailedError(AmendmentEngineError):
    """Raised when a workflow guard rejects an operation.

    Subclasses MUST name the failed guard and the concrete values that were
    compared in their message, so a caller can act without reading source.

    Attributes:
        proposal_id: ID of the proposal the guard was evaluated against.
    """

    def __init__(self, proposal_id: str, message: str) -> None:
        """Initialize guard failure.

        Args:
            proposal_id: ID of the proposal.
            message: Human-readable description including compared values.
        """
        self.proposal_id = proposal_id
        super().__init__(message)

"""Application services (use cases) of the amendment engine."""

from amendment_engine.application.services.amendment_workflow_service import (
    AmendmentWorkflowService,
    CommentRequest,
    ProposalRequest,
    VoteRequest,
)
from amendment_engine.application.services.governance_status_service import (
    GovernanceStatus,
    GovernanceStatusService,
)

__all__: list[str] = [
    "AmendmentWorkflowService",
    "CommentRequest",
    "GovernanceStatus",
    "GovernanceStatusService",
    "ProposalRequest",
    "VoteRequest",
]

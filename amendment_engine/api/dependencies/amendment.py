"""Amendment API dependencies.

FastAPI dependency providers resolving services from the bootstrap
composition root.
"""

from amendment_engine.application.services.amendment_workflow_service import (
    AmendmentWorkflowService,
)
from amendment_engine.application.services.governance_status_service import (
    GovernanceStatusService,
)
from amendment_engine.bootstrap.workflow import (
    get_governance_status_service as _get_governance_status_service,
)
from amendment_engine.bootstrap.workflow import (
    get_workflow_service as _get_workflow_service,
)


def get_workflow_service() -> AmendmentWorkflowService:
    """Get the amendment workflow service."""
    return _get_workflow_service()


def get_governance_status_service() -> GovernanceStatusService:
    """Get the governance status service."""
    return _get_governance_status_service()

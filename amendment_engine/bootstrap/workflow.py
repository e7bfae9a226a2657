"""Bootstrap wiring for the amendment workflow.

Production wiring keeps proposals and history as JSON files under the
configured data directory. Tests replace any piece with set_*() and
restore defaults with reset_workflow_dependencies().
"""

from __future__ import annotations

from amendment_engine.application.ports.amendment_history import (
    AmendmentHistoryProtocol,
)
from amendment_engine.application.ports.notifier import NotifierProtocol
from amendment_engine.application.ports.proposal_store import ProposalStoreProtocol
from amendment_engine.application.ports.time_authority import TimeAuthorityProtocol
from amendment_engine.application.ports.voter_registry import VoterRegistryProtocol
from amendment_engine.application.services.amendment_workflow_service import (
    AmendmentWorkflowService,
)
from amendment_engine.application.services.governance_status_service import (
    GovernanceStatusService,
)
from amendment_engine.config.workflow_config import WorkflowConfig
from amendment_engine.infrastructure.adapters.logging_notifier import LoggingNotifier
from amendment_engine.infrastructure.adapters.persistence import (
    JsonAmendmentHistory,
    JsonProposalStore,
)
from amendment_engine.infrastructure.adapters.role_voter_registry import (
    RoleVoterRegistry,
)
from amendment_engine.infrastructure.adapters.system_time_authority import (
    SystemTimeAuthority,
)

_config: WorkflowConfig | None = None
_proposal_store: ProposalStoreProtocol | None = None
_amendment_history: AmendmentHistoryProtocol | None = None
_voter_registry: VoterRegistryProtocol | None = None
_notifier: NotifierProtocol | None = None
_time_authority: TimeAuthorityProtocol | None = None
_workflow_service: AmendmentWorkflowService | None = None
_status_service: GovernanceStatusService | None = None


def get_workflow_config() -> WorkflowConfig:
    """Get workflow configuration (read from the environment once)."""
    global _config
    if _config is None:
        _config = WorkflowConfig.from_environment()
    return _config


def get_proposal_store() -> ProposalStoreProtocol:
    """Get proposal store instance."""
    global _proposal_store
    if _proposal_store is None:
        _proposal_store = JsonProposalStore(get_workflow_config().proposals_dir)
    return _proposal_store


def get_amendment_history() -> AmendmentHistoryProtocol:
    """Get amendment history log instance."""
    global _amendment_history
    if _amendment_history is None:
        _amendment_history = JsonAmendmentHistory(get_workflow_config().history_path)
    return _amendment_history


def get_voter_registry() -> VoterRegistryProtocol:
    """Get voter registry instance (roster file if configured)."""
    global _voter_registry
    if _voter_registry is None:
        voters_file = get_workflow_config().voters_file
        if voters_file is not None:
            _voter_registry = RoleVoterRegistry.from_file(voters_file)
        else:
            _voter_registry = RoleVoterRegistry()
    return _voter_registry


def get_notifier() -> NotifierProtocol:
    """Get notifier instance."""
    global _notifier
    if _notifier is None:
        _notifier = LoggingNotifier()
    return _notifier


def get_time_authority() -> TimeAuthorityProtocol:
    """Get time authority instance."""
    global _time_authority
    if _time_authority is None:
        _time_authority = SystemTimeAuthority()
    return _time_authority


def get_workflow_service() -> AmendmentWorkflowService:
    """Get amendment workflow service instance."""
    global _workflow_service
    if _workflow_service is None:
        config = get_workflow_config()
        _workflow_service = AmendmentWorkflowService(
            store=get_proposal_store(),
            voter_registry=get_voter_registry(),
            time_authority=get_time_authority(),
            notifier=get_notifier(),
            history=get_amendment_history(),
            framework_version=config.framework_version,
            max_update_attempts=config.max_update_attempts,
        )
    return _workflow_service


def get_governance_status_service() -> GovernanceStatusService:
    """Get governance status service instance."""
    global _status_service
    if _status_service is None:
        _status_service = GovernanceStatusService(
            store=get_proposal_store(),
            history=get_amendment_history(),
            time_authority=get_time_authority(),
        )
    return _status_service


def set_workflow_config(config: WorkflowConfig) -> None:
    """Set workflow configuration (for testing)."""
    global _config, _proposal_store, _amendment_history, _voter_registry
    global _workflow_service, _status_service
    _config = config
    _proposal_store = None
    _amendment_history = None
    _voter_registry = None
    _workflow_service = None
    _status_service = None


def set_proposal_store(store: ProposalStoreProtocol) -> None:
    """Set proposal store (for testing)."""
    global _proposal_store, _workflow_service, _status_service
    _proposal_store = store
    _workflow_service = None
    _status_service = None


def set_amendment_history(history: AmendmentHistoryProtocol) -> None:
    """Set amendment history log (for testing)."""
    global _amendment_history, _workflow_service, _status_service
    _amendment_history = history
    _workflow_service = None
    _status_service = None


def set_voter_registry(registry: VoterRegistryProtocol) -> None:
    """Set voter registry (for testing)."""
    global _voter_registry, _workflow_service
    _voter_registry = registry
    _workflow_service = None


def set_notifier(notifier: NotifierProtocol) -> None:
    """Set notifier (for testing)."""
    global _notifier, _workflow_service
    _notifier = notifier
    _workflow_service = None


def set_time_authority(time_authority: TimeAuthorityProtocol) -> None:
    """Set time authority (for testing)."""
    global _time_authority, _workflow_service, _status_service
    _time_authority = time_authority
    _workflow_service = None
    _status_service = None


def reset_workflow_dependencies() -> None:
    """Reset all singletons (for testing)."""
    global _config, _proposal_store, _amendment_history, _voter_registry
    global _notifier, _time_authority, _workflow_service, _status_service
    _config = None
    _proposal_store = None
    _amendment_history = None
    _voter_registry = None
    _notifier = None
    _time_authority = None
    _workflow_service = None
    _status_service = None

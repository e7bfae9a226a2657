"""
Pytest configuration and shared fixtures for amendment engine tests.

Testing Standards:
- Async tests run in pytest-asyncio auto mode (configured in pyproject.toml)
- Time-dependent tests use FakeTimeAuthority, never the system clock
- Unit tests go in tests/unit/
- Integration tests go in tests/integration/
"""

import pytest

from amendment_engine.application.services.amendment_workflow_service import (
    AmendmentWorkflowService,
    ProposalRequest,
)
from amendment_engine.domain.models.proposal import ImpactLevel, ProposalType
from amendment_engine.infrastructure.adapters.role_voter_registry import (
    RoleVoterRegistry,
)
from amendment_engine.infrastructure.stubs import (
    AmendmentHistoryStub,
    NotifierStub,
    ProposalStoreStub,
)
from tests.helpers.fake_time_authority import DEFAULT_FROZEN_AT, FakeTimeAuthority

START = DEFAULT_FROZEN_AT


@pytest.fixture
def anyio_backend() -> str:
    """Use asyncio as the async backend."""
    return "asyncio"


@pytest.fixture
def project_version() -> str:
    """Provide the current project version for tests."""
    from amendment_engine import __version__

    return __version__


@pytest.fixture
def fake_time_authority() -> FakeTimeAuthority:
    """Provide a clock frozen at 2026-01-01T00:00:00Z."""
    return FakeTimeAuthority(frozen_at=START)


@pytest.fixture
def store() -> ProposalStoreStub:
    """Provide an in-memory proposal store."""
    return ProposalStoreStub()


@pytest.fixture
def history() -> AmendmentHistoryStub:
    """Provide an in-memory amendment history log."""
    return AmendmentHistoryStub()


@pytest.fixture
def notifier() -> NotifierStub:
    """Provide a recording notifier."""
    return NotifierStub()


@pytest.fixture
def voter_registry() -> RoleVoterRegistry:
    """Provide the reference role registry (core-team, contributor, community)."""
    return RoleVoterRegistry()


@pytest.fixture
def workflow(
    store: ProposalStoreStub,
    voter_registry: RoleVoterRegistry,
    fake_time_authority: FakeTimeAuthority,
    notifier: NotifierStub,
    history: AmendmentHistoryStub,
) -> AmendmentWorkflowService:
    """Provide a workflow service wired to stubs and a fake clock."""
    return AmendmentWorkflowService(
        store=store,
        voter_registry=voter_registry,
        time_authority=fake_time_authority,
        notifier=notifier,
        history=history,
        framework_version="1.1.0-beta",
    )


@pytest.fixture
def complete_request() -> ProposalRequest:
    """Provide a proposal request with every field required for review."""
    return ProposalRequest(
        title="Clarify Voting Rules",
        description="Clarifies how abstentions are counted",
        proposer="alice@example.org",
        type=ProposalType.GOVERNANCE_PROCESS,
        impact=ImpactLevel.MINOR,
        proposed_text="Abstentions count toward the approval denominator.",
        rationale="The current text is ambiguous.",
        implementation_plan=("Update Article 5",),
    )

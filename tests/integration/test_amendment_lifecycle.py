"""Integration tests: full amendment lifecycle on the JSON document store."""

import json
from datetime import timedelta
from pathlib import Path

import pytest

from amendment_engine.application.ports.notifier import (
    REVIEW_STARTED,
    VOTING_COMPLETED,
    VOTING_STARTED,
)
from amendment_engine.application.services.amendment_workflow_service import (
    AmendmentWorkflowService,
    CommentRequest,
    ProposalRequest,
    VoteRequest,
)
from amendment_engine.application.services.governance_status_service import (
    GovernanceStatusService,
)
from amendment_engine.config.workflow_config import WorkflowConfig
from amendment_engine.domain.errors import DuplicateVoteError
from amendment_engine.domain.models.proposal import (
    CommentType,
    ImpactLevel,
    ProposalStatus,
    VoteDecision,
)
from amendment_engine.infrastructure.adapters.persistence import (
    JsonAmendmentHistory,
    JsonProposalStore,
)
from amendment_engine.infrastructure.adapters.role_voter_registry import (
    RoleVoterRegistry,
)
from amendment_engine.infrastructure.stubs import NotifierStub
from tests.helpers.fake_time_authority import FakeTimeAuthority

pytestmark = pytest.mark.integration


@pytest.fixture
def config(tmp_path: Path) -> WorkflowConfig:
    return WorkflowConfig(data_dir=tmp_path / "governance", framework_version="1.2.0")


def _workflow(
    config: WorkflowConfig, clock: FakeTimeAuthority, notifier: NotifierStub
) -> AmendmentWorkflowService:
    return AmendmentWorkflowService(
        store=JsonProposalStore(config.proposals_dir),
        voter_registry=RoleVoterRegistry(),
        time_authority=clock,
        notifier=notifier,
        history=JsonAmendmentHistory(config.history_path),
        framework_version=config.framework_version,
    )


class TestAmendmentLifecycle:
    """Draft to implemented, persisted as JSON documents."""

    async def test_minor_amendment_passes_and_is_recorded(
        self,
        config: WorkflowConfig,
        fake_time_authority: FakeTimeAuthority,
        notifier: NotifierStub,
    ) -> None:
        workflow = _workflow(config, fake_time_authority, notifier)
        proposal = await workflow.create_proposal(
            ProposalRequest(
                title="Clarify Voting Rules",
                description="Clarifies how abstentions are counted",
                proposer="alice@example.org",
                impact=ImpactLevel.MINOR,
                proposed_text="Abstentions count toward the approval denominator.",
                rationale="The current text is ambiguous.",
                implementation_plan=("Update Article 5",),
            )
        )
        await workflow.submit_for_review(proposal.id)
        concern = await workflow.add_comment(
            proposal.id,
            CommentRequest(author="community", content="Is 60% enough?", type=CommentType.CONCERN),
        )
        await workflow.add_comment(
            proposal.id,
            CommentRequest(author="core-team", content="It matches minor impact.", reply_to=concern.id),
        )
        fake_time_authority.advance(delta=timedelta(days=7))
        await workflow.start_voting(proposal.id)

        ballots = [
            ("core-team", VoteDecision.APPROVE),
            ("contributor", VoteDecision.APPROVE),
            ("community", VoteDecision.APPROVE),
            ("carol@example.org", VoteDecision.APPROVE),
            ("dave@example.org", VoteDecision.ABSTAIN),
        ]
        for voter, decision in ballots:
            fake_time_authority.advance(seconds=60)
            await workflow.cast_vote(proposal.id, VoteRequest(voter=voter, decision=decision))
        with pytest.raises(DuplicateVoteError):
            await workflow.cast_vote(
                proposal.id, VoteRequest(voter="core-team", decision=VoteDecision.REJECT)
            )

        fake_time_authority.advance(delta=timedelta(days=5))
        finalized, result = await workflow.finalize_amendment(proposal.id)

        assert result.total_votes == 5
        assert result.approvals == 7
        assert result.abstentions == 1
        assert result.passed is True
        assert finalized.status == ProposalStatus.IMPLEMENTED
        assert finalized.version == "1.2.0"
        assert notifier.events_for(proposal.id) == [
            REVIEW_STARTED,
            VOTING_STARTED,
            VOTING_COMPLETED,
        ]

        document = json.loads(
            (config.proposals_dir / f"{proposal.id}.json").read_text(encoding="utf-8")
        )
        assert document["status"] == "implemented"
        assert len(document["voting"]["votes"]) == 5
        assert document["comments"][0]["replies"][0]["author"] == "core-team"
        assert document["metadata"]["implementation"]["implementedBy"] == "democratic-process"

        # A fresh process sees the same records
        reopened = GovernanceStatusService(
            store=JsonProposalStore(config.proposals_dir),
            history=JsonAmendmentHistory(config.history_path),
            time_authority=fake_time_authority,
        )
        assert await reopened.get_proposal(proposal.id) == finalized
        history = await reopened.list_history()
        assert [(e.proposal_id, e.result.value) for e in history] == [
            (proposal.id, "approved")
        ]
        status = await reopened.get_status()
        assert status.active_proposals == 0
        assert status.recent_activity == (
            f"{proposal.id}: implemented (Clarify Voting Rules)",
        )

    async def test_breaking_amendment_without_quorum_is_rejected(
        self,
        config: WorkflowConfig,
        fake_time_authority: FakeTimeAuthority,
        notifier: NotifierStub,
    ) -> None:
        workflow = _workflow(config, fake_time_authority, notifier)
        proposal = await workflow.create_proposal(
            ProposalRequest(
                title="Replace Article 1",
                description="Rewrites the core principle",
                impact=ImpactLevel.BREAKING,
                proposed_text="New principle",
                rationale="Old principle is obsolete",
            )
        )
        await workflow.submit_for_review(proposal.id)
        fake_time_authority.advance(delta=timedelta(days=21))
        await workflow.start_voting(proposal.id)
        for voter in ("core-team", "contributor", "community", "carol@example.org"):
            await workflow.cast_vote(
                proposal.id, VoteRequest(voter=voter, decision=VoteDecision.APPROVE)
            )

        fake_time_authority.advance(delta=timedelta(days=14, seconds=1))
        finalized, result = await workflow.finalize_amendment(proposal.id)

        assert result.approval_percentage == 100.0
        assert result.quorum_met is False
        assert result.passed is False
        assert finalized.status == ProposalStatus.REJECTED
        history = await JsonAmendmentHistory(config.history_path).list_entries()
        assert history[0].result.value == "rejected"

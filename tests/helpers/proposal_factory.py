"""Builders for Proposal values in tests."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta, timezone
from typing import Any

from amendment_engine.domain.models.impact_policy import policy_for
from amendment_engine.domain.models.proposal import (
    ImpactLevel,
    Proposal,
    ProposalMetadata,
    ProposalStatus,
    ProposalType,
    ReviewPeriod,
    Vote,
    VoteDecision,
    VotingSession,
)

BASE_TIME = datetime(2026, 1, 1, 0, 0, 0, tzinfo=timezone.utc)


def make_vote(
    voter: str,
    decision: VoteDecision = VoteDecision.APPROVE,
    weight: int = 1,
    timestamp: datetime = BASE_TIME,
) -> Vote:
    """Build a vote."""
    return Vote(voter=voter, decision=decision, timestamp=timestamp, weight=weight)


def make_proposal(
    proposal_id: str = "amendment-test-proposal-0",
    *,
    status: ProposalStatus = ProposalStatus.DRAFT,
    impact: ImpactLevel = ImpactLevel.MINOR,
    proposed_date: datetime = BASE_TIME,
    votes: tuple[Vote, ...] = (),
    **overrides: Any,
) -> Proposal:
    """Build a complete proposal with the impact-derived review and voting setup."""
    policy = policy_for(impact)
    proposal = Proposal(
        id=proposal_id,
        title="Test Proposal",
        description="A proposal used in tests",
        proposer="alice@example.org",
        proposed_date=proposed_date,
        status=status,
        type=ProposalType.FRAMEWORK_SPEC,
        impact=impact,
        version="1.1.0-beta",
        proposed_text="New text",
        rationale="Because",
        review_period=ReviewPeriod(
            start_date=proposed_date,
            end_date=proposed_date + timedelta(days=policy.review_days),
            duration_days=policy.review_days,
        ),
        voting=VotingSession(
            quorum=policy.quorum, threshold=policy.threshold, votes=votes
        ),
        metadata=ProposalMetadata(testing_required=policy.testing_required),
    )
    return replace(proposal, **overrides) if overrides else proposal

"""Domain models for the amendment engine."""

from amendment_engine.domain.models.amendment_history import (
    AmendmentHistoryEntry,
    FinalizationResult,
)
from amendment_engine.domain.models.impact_policy import (
    IMPACT_POLICIES,
    IMPACT_SEVERITY_ORDER,
    ImpactPolicy,
    policy_for,
)
from amendment_engine.domain.models.proposal import (
    STATUS_TRANSITIONS,
    TERMINAL_STATUSES,
    Comment,
    CommentType,
    ImpactLevel,
    ImplementationRecord,
    Proposal,
    ProposalMetadata,
    ProposalStatus,
    ProposalType,
    ReviewPeriod,
    Revision,
    Vote,
    VoteDecision,
    VotingSession,
)
from amendment_engine.domain.models.voting_result import VotingResult

__all__: list[str] = [
    "IMPACT_POLICIES",
    "IMPACT_SEVERITY_ORDER",
    "STATUS_TRANSITIONS",
    "TERMINAL_STATUSES",
    "AmendmentHistoryEntry",
    "Comment",
    "CommentType",
    "FinalizationResult",
    "ImpactLevel",
    "ImpactPolicy",
    "ImplementationRecord",
    "Proposal",
    "ProposalMetadata",
    "ProposalStatus",
    "ProposalType",
    "ReviewPeriod",
    "Revision",
    "Vote",
    "VoteDecision",
    "VotingResult",
    "VotingSession",
    "policy_for",
]

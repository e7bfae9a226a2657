"""Amendment API request/response models.

Pydantic models for the amendment workflow endpoints. Enum values and
field names mirror the domain model; dates are ISO 8601 with a Z suffix.

Developer Golden Rules:
1. VALIDATE EARLY - Pydantic handles schema validation
2. FAIL LOUD - Domain errors return RFC 7807 problem details
3. TYPE SAFETY - All fields typed
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Annotated

from pydantic import BaseModel, Field, PlainSerializer

from amendment_engine.application.services.governance_status_service import (
    GovernanceStatus,
)
from amendment_engine.domain.models.amendment_history import AmendmentHistoryEntry
from amendment_engine.domain.models.proposal import Comment, Proposal, Vote
from amendment_engine.domain.models.voting_result import VotingResult

# Custom datetime serializer for ISO 8601 with Z suffix (Pydantic v2)
DateTimeWithZ = Annotated[
    datetime,
    PlainSerializer(
        lambda v: v.isoformat().replace("+00:00", "Z") if v else None, return_type=str
    ),
]


class ProposalTypeEnum(str, Enum):
    """Kind of governance artefact amended."""

    CONSTITUTIONAL = "constitutional"
    FRAMEWORK_SPEC = "framework-spec"
    GOVERNANCE_PROCESS = "governance-process"
    ENFORCEMENT_RULE = "enforcement-rule"


class ImpactLevelEnum(str, Enum):
    """Impact level (drives review length, quorum and threshold)."""

    PATCH = "patch"
    MINOR = "minor"
    MAJOR = "major"
    BREAKING = "breaking"


class ProposalStatusEnum(str, Enum):
    """Lifecycle status of a proposal."""

    DRAFT = "draft"
    PROPOSED = "proposed"
    UNDER_REVIEW = "under-review"
    VOTING = "voting"
    APPROVED = "approved"
    REJECTED = "rejected"
    IMPLEMENTED = "implemented"


class VoteDecisionEnum(str, Enum):
    """Vote decision."""

    APPROVE = "approve"
    REJECT = "reject"
    ABSTAIN = "abstain"


class CommentTypeEnum(str, Enum):
    """Review comment type."""

    SUGGESTION = "suggestion"
    CONCERN = "concern"
    SUPPORT = "support"
    QUESTION = "question"


# =============================================================================
# Requests
# =============================================================================


class CreateProposalRequest(BaseModel):
    """Request body for creating a proposal.

    Omitted fields produce an untitled, anonymous framework-spec draft of
    minor impact.
    """

    title: str = Field(default="Untitled Amendment", max_length=500)
    description: str = Field(default="")
    proposer: str = Field(default="anonymous", max_length=200)
    type: ProposalTypeEnum = Field(default=ProposalTypeEnum.FRAMEWORK_SPEC)
    impact: ImpactLevelEnum = Field(default=ImpactLevelEnum.MINOR)
    proposed_text: str = Field(default="")
    rationale: str = Field(default="")
    current_text: str | None = Field(default=None)
    implementation_plan: list[str] = Field(default_factory=list)
    migration_guide: list[str] = Field(default_factory=list)
    supporters: list[str] = Field(default_factory=list)
    related_articles: list[str] = Field(default_factory=list)
    affected_files: list[str] = Field(default_factory=list)
    precedents: list[str] = Field(default_factory=list)
    community_discussion_url: str | None = Field(default=None, max_length=2048)


class AddCommentRequest(BaseModel):
    """Request body for adding a review comment or a reply."""

    author: str = Field(default="anonymous", max_length=200)
    content: str = Field(..., min_length=1, max_length=10_000)
    type: CommentTypeEnum = Field(default=CommentTypeEnum.SUGGESTION)
    reply_to: str | None = Field(
        default=None, description="ID of the comment being replied to"
    )


class CastVoteRequest(BaseModel):
    """Request body for casting a vote."""

    voter: str = Field(..., min_length=1, max_length=200)
    decision: VoteDecisionEnum = Field(...)
    rationale: str | None = Field(default=None, max_length=10_000)


# =============================================================================
# Responses
# =============================================================================


class VoteResponse(BaseModel):
    """A recorded vote."""

    voter: str
    decision: VoteDecisionEnum
    weight: int
    timestamp: DateTimeWithZ
    rationale: str | None = None

    @classmethod
    def from_domain(cls, vote: Vote) -> VoteResponse:
        return cls(
            voter=vote.voter,
            decision=VoteDecisionEnum(vote.decision.value),
            weight=vote.weight,
            timestamp=vote.timestamp,
            rationale=vote.rationale,
        )


class CommentResponse(BaseModel):
    """A review comment with its replies."""

    id: str
    author: str
    content: str
    timestamp: DateTimeWithZ
    type: CommentTypeEnum
    resolved: bool
    replies: list[CommentResponse] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, comment: Comment) -> CommentResponse:
        return cls(
            id=comment.id,
            author=comment.author,
            content=comment.content,
            timestamp=comment.timestamp,
            type=CommentTypeEnum(comment.type.value),
            resolved=comment.resolved,
            replies=[cls.from_domain(r) for r in comment.replies],
        )


CommentResponse.model_rebuild()


class VotingSessionResponse(BaseModel):
    """Voting configuration and votes cast."""

    quorum: int
    threshold: float
    start_date: DateTimeWithZ | None = None
    end_date: DateTimeWithZ | None = None
    votes: list[VoteResponse] = Field(default_factory=list)


class ProposalResponse(BaseModel):
    """Full proposal representation."""

    id: str
    title: str
    description: str
    proposer: str
    proposed_date: DateTimeWithZ
    status: ProposalStatusEnum
    type: ProposalTypeEnum
    impact: ImpactLevelEnum
    version: str
    current_text: str | None = None
    proposed_text: str
    rationale: str
    implementation_plan: list[str]
    migration_guide: list[str]
    review_start: DateTimeWithZ
    review_end: DateTimeWithZ
    review_duration_days: int
    voting: VotingSessionResponse
    comments: list[CommentResponse]
    supporters: list[str]
    testing_required: bool
    implemented_date: DateTimeWithZ | None = None
    implemented_by: str | None = None
    record_version: int

    @classmethod
    def from_domain(cls, proposal: Proposal) -> ProposalResponse:
        implementation = proposal.metadata.implementation
        return cls(
            id=proposal.id,
            title=proposal.title,
            description=proposal.description,
            proposer=proposal.proposer,
            proposed_date=proposal.proposed_date,
            status=ProposalStatusEnum(proposal.status.value),
            type=ProposalTypeEnum(proposal.type.value),
            impact=ImpactLevelEnum(proposal.impact.value),
            version=proposal.version,
            current_text=proposal.current_text,
            proposed_text=proposal.proposed_text,
            rationale=proposal.rationale,
            implementation_plan=list(proposal.implementation_plan),
            migration_guide=list(proposal.migration_guide),
            review_start=proposal.review_period.start_date,
            review_end=proposal.review_period.end_date,
            review_duration_days=proposal.review_period.duration_days,
            voting=VotingSessionResponse(
                quorum=proposal.voting.quorum,
                threshold=proposal.voting.threshold,
                start_date=proposal.voting.start_date,
                end_date=proposal.voting.end_date,
                votes=[VoteResponse.from_domain(v) for v in proposal.voting.votes],
            ),
            comments=[CommentResponse.from_domain(c) for c in proposal.comments],
            supporters=list(proposal.supporters),
            testing_required=proposal.metadata.testing_required,
            implemented_date=implementation.implemented_date if implementation else None,
            implemented_by=implementation.implemented_by if implementation else None,
            record_version=proposal.record_version,
        )


class ProposalSummaryResponse(BaseModel):
    """Listing entry for a proposal."""

    id: str
    title: str
    status: ProposalStatusEnum
    impact: ImpactLevelEnum
    proposer: str
    proposed_date: DateTimeWithZ
    votes_cast: int

    @classmethod
    def from_domain(cls, proposal: Proposal) -> ProposalSummaryResponse:
        return cls(
            id=proposal.id,
            title=proposal.title,
            status=ProposalStatusEnum(proposal.status.value),
            impact=ImpactLevelEnum(proposal.impact.value),
            proposer=proposal.proposer,
            proposed_date=proposal.proposed_date,
            votes_cast=len(proposal.voting.votes),
        )


class ProposalListResponse(BaseModel):
    """Proposals, newest first."""

    proposals: list[ProposalSummaryResponse]
    total: int


class VotingResultResponse(BaseModel):
    """Tally of a proposal's votes."""

    total_votes: int
    approvals: int
    rejections: int
    abstentions: int
    total_weight: int
    approval_percentage: float
    quorum_met: bool
    passed: bool
    summary: str

    @classmethod
    def from_domain(cls, result: VotingResult) -> VotingResultResponse:
        return cls(
            total_votes=result.total_votes,
            approvals=result.approvals,
            rejections=result.rejections,
            abstentions=result.abstentions,
            total_weight=result.total_weight,
            approval_percentage=round(result.approval_percentage, 2),
            quorum_met=result.quorum_met,
            passed=result.passed,
            summary=result.summary,
        )


class FinalizeResponse(BaseModel):
    """Outcome of finalizing a proposal."""

    proposal: ProposalResponse
    result: VotingResultResponse


class HistoryEntryResponse(BaseModel):
    """A finalized amendment."""

    proposal_id: str
    title: str
    result: str
    voting_result: VotingResultResponse
    finalized_date: DateTimeWithZ

    @classmethod
    def from_domain(cls, entry: AmendmentHistoryEntry) -> HistoryEntryResponse:
        return cls(
            proposal_id=entry.proposal_id,
            title=entry.title,
            result=entry.result.value,
            voting_result=VotingResultResponse.from_domain(entry.voting_result),
            finalized_date=entry.finalized_date,
        )


class HistoryResponse(BaseModel):
    """Amendment history in finalization order."""

    entries: list[HistoryEntryResponse]


class GovernanceStatusResponse(BaseModel):
    """At-a-glance status of the amendment process."""

    active_proposals: int
    pending_votes: int
    recent_activity: list[str]
    system_health: str

    @classmethod
    def from_domain(cls, status: GovernanceStatus) -> GovernanceStatusResponse:
        return cls(
            active_proposals=status.active_proposals,
            pending_votes=status.pending_votes,
            recent_activity=list(status.recent_activity),
            system_health=status.system_health,
        )


class AmendmentErrorResponse(BaseModel):
    """Error response for amendment operations (RFC 7807).

    Attributes:
        type: Error type URI.
        title: Human-readable error title.
        status: HTTP status code.
        detail: Detailed error message.
        instance: Request path that caused the error.
    """

    type: str = Field(..., description="Error type URI")
    title: str = Field(..., description="Human-readable error title")
    status: int = Field(..., description="HTTP status code")
    detail: str = Field(..., description="Detailed error message")
    instance: str = Field(..., description="Request path that caused the error")

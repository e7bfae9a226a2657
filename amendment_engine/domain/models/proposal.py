"""Amendment proposal domain model.

This module defines the central entity of the amendment engine: a
Proposal moving through drafting, community review, weighted voting
and finalization.

State Machine:
    DRAFT | PROPOSED -> UNDER_REVIEW (submit for review)
    UNDER_REVIEW -> VOTING (review period elapsed)
    VOTING -> APPROVED | REJECTED (voting period elapsed, tallied)
    APPROVED -> IMPLEMENTED (recorded immediately on approval)

Terminal States:
    REJECTED and IMPLEMENTED. No transitions leave a terminal state.

Invariants:
- A voter appears at most once in voting.votes
- Status only advances along STATUS_TRANSITIONS, never skipping a state
- voting.quorum and voting.threshold are fixed at creation
- Review and voting end dates are never shortened once set

Proposal values are frozen; every workflow operation builds a new value
with dataclasses.replace() and persists it with a compare-and-swap on
record_version.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum

from amendment_engine.domain.errors.proposal import InvalidStateTransitionError


class ProposalStatus(Enum):
    """Lifecycle status of an amendment proposal.

    DRAFT and PROPOSED both mean "not yet submitted for review".
    """

    DRAFT = "draft"
    PROPOSED = "proposed"
    UNDER_REVIEW = "under-review"
    VOTING = "voting"
    APPROVED = "approved"
    REJECTED = "rejected"
    IMPLEMENTED = "implemented"

    def is_terminal(self) -> bool:
        """Check if no further transitions are permitted from this status."""
        return self in TERMINAL_STATUSES

    def valid_transitions(self) -> frozenset[ProposalStatus]:
        """Get the statuses reachable from this status in one step.

        Returns:
            Frozenset of target statuses. Empty for terminal statuses.
        """
        return STATUS_TRANSITIONS.get(self, frozenset())


class ProposalType(Enum):
    """Kind of governance artefact a proposal amends."""

    CONSTITUTIONAL = "constitutional"
    FRAMEWORK_SPEC = "framework-spec"
    GOVERNANCE_PROCESS = "governance-process"
    ENFORCEMENT_RULE = "enforcement-rule"


class ImpactLevel(Enum):
    """Severity class driving review length, voting length, quorum and threshold.

    Ordered from least to most severe: PATCH < MINOR < MAJOR < BREAKING.
    """

    PATCH = "patch"
    MINOR = "minor"
    MAJOR = "major"
    BREAKING = "breaking"


class VoteDecision(Enum):
    """Decision carried by a single vote."""

    APPROVE = "approve"
    REJECT = "reject"
    ABSTAIN = "abstain"


class CommentType(Enum):
    """Kind of review comment.

    Unresolved CONCERN comments are surfaced as a warning when voting starts.
    """

    SUGGESTION = "suggestion"
    CONCERN = "concern"
    SUPPORT = "support"
    QUESTION = "question"


TERMINAL_STATUSES: frozenset[ProposalStatus] = frozenset(
    {
        ProposalStatus.REJECTED,
        ProposalStatus.IMPLEMENTED,
    }
)

# Statuses in which the proposal has not been submitted for review yet
UNSUBMITTED_STATUSES: frozenset[ProposalStatus] = frozenset(
    {
        ProposalStatus.DRAFT,
        ProposalStatus.PROPOSED,
    }
)

STATUS_TRANSITIONS: dict[ProposalStatus, frozenset[ProposalStatus]] = {
    ProposalStatus.DRAFT: frozenset({ProposalStatus.UNDER_REVIEW}),
    ProposalStatus.PROPOSED: frozenset({ProposalStatus.UNDER_REVIEW}),
    ProposalStatus.UNDER_REVIEW: frozenset({ProposalStatus.VOTING}),
    ProposalStatus.VOTING: frozenset(
        {
            ProposalStatus.APPROVED,
            ProposalStatus.REJECTED,
        }
    ),
    ProposalStatus.APPROVED: frozenset({ProposalStatus.IMPLEMENTED}),
    ProposalStatus.REJECTED: frozenset(),
    ProposalStatus.IMPLEMENTED: frozenset(),
}

# Fields that must be non-empty before a proposal can enter review
REQUIRED_FOR_REVIEW: tuple[str, ...] = (
    "title",
    "description",
    "proposed_text",
    "rationale",
)


@dataclass(frozen=True, eq=True)
class ReviewPeriod:
    """Community review window.

    Attributes:
        start_date: When review started (reset on submission).
        end_date: When review ends; voting may start at or after this time.
        duration_days: Review length, fixed by impact at creation.
    """

    start_date: datetime
    end_date: datetime
    duration_days: int


@dataclass(frozen=True, eq=True)
class Vote:
    """A single weighted vote.

    Attributes:
        voter: Voter identity.
        decision: approve, reject or abstain.
        timestamp: When the vote was cast (UTC).
        weight: Voting weight resolved from the voter registry.
        rationale: Optional free-text reason.
    """

    voter: str
    decision: VoteDecision
    timestamp: datetime
    weight: int
    rationale: str | None = None


@dataclass(frozen=True, eq=True)
class VotingSession:
    """Voting configuration and the votes cast so far.

    quorum and threshold are fixed at creation from the impact level.
    start_date and end_date are unset until voting starts.
    """

    quorum: int
    threshold: float
    votes: tuple[Vote, ...] = ()
    start_date: datetime | None = None
    end_date: datetime | None = None


@dataclass(frozen=True, eq=True)
class Comment:
    """A review comment with nested replies.

    Attributes:
        id: Generated UUID string.
        author: Comment author identity.
        content: Comment body.
        timestamp: When the comment was added (UTC).
        type: suggestion, concern, support or question.
        resolved: Flipped only by external moderation.
        replies: Nested reply comments, in insertion order.
    """

    id: str
    author: str
    content: str
    timestamp: datetime
    type: CommentType
    resolved: bool = False
    replies: tuple[Comment, ...] = ()


@dataclass(frozen=True, eq=True)
class Revision:
    """A recorded revision of the proposal text."""

    version: int
    changes: str
    timestamp: datetime
    reason: str


@dataclass(frozen=True, eq=True)
class ImplementationRecord:
    """Record of an approved amendment being marked implemented.

    The engine does not modify any documents; this is metadata only.
    """

    implemented_date: datetime
    implemented_by: str
    version: str
    changes: tuple[str, ...] = ()


@dataclass(frozen=True, eq=True)
class ProposalMetadata:
    """Supporting information attached to a proposal."""

    related_articles: tuple[str, ...] = ()
    affected_files: tuple[str, ...] = ()
    testing_required: bool = False
    precedents: tuple[str, ...] = ()
    community_discussion_url: str | None = None
    implementation: ImplementationRecord | None = None


@dataclass(frozen=True, eq=True)
class Proposal:
    """A constitutional amendment proposal.

    Attributes:
        id: Unique identifier (title slug + timestamp), immutable.
        title: Short title.
        description: What the amendment changes.
        proposer: Who proposed the amendment.
        proposed_date: When the proposal was created (UTC).
        status: Current lifecycle status.
        type: Kind of artefact amended.
        impact: Severity class.
        version: Framework version at creation time, immutable.
        proposed_text: The new text.
        rationale: Why the change is needed.
        review_period: Community review window.
        voting: Voting configuration and votes.
        current_text: The text being replaced, if any.
        implementation_plan: Ordered implementation steps.
        migration_guide: Ordered migration steps.
        comments: Review comments in insertion order.
        revisions: Text revisions in insertion order.
        supporters: Identities supporting the proposal.
        metadata: Supporting information.
        record_version: Optimistic-concurrency counter owned by the store.
    """

    id: str
    title: str
    description: str
    proposer: str
    proposed_date: datetime
    status: ProposalStatus
    type: ProposalType
    impact: ImpactLevel
    version: str
    proposed_text: str
    rationale: str
    review_period: ReviewPeriod
    voting: VotingSession
    current_text: str | None = None
    implementation_plan: tuple[str, ...] = ()
    migration_guide: tuple[str, ...] = ()
    comments: tuple[Comment, ...] = ()
    revisions: tuple[Revision, ...] = ()
    supporters: tuple[str, ...] = ()
    metadata: ProposalMetadata = field(default_factory=ProposalMetadata)
    record_version: int = 0

    def with_status(self, new_status: ProposalStatus) -> Proposal:
        """Create a new proposal with an advanced status.

        Enforces STATUS_TRANSITIONS. Since Proposal is frozen, returns
        a new instance.

        Args:
            new_status: The status to transition to.

        Returns:
            New Proposal with the updated status.

        Raises:
            InvalidStateTransitionError: If the transition is not in the matrix.
        """
        allowed = self.status.valid_transitions()
        if new_status not in allowed:
            raise InvalidStateTransitionError(
                proposal_id=self.id,
                from_status=self.status.value,
                to_status=new_status.value,
                allowed=sorted(s.value for s in allowed),
            )
        return replace(self, status=new_status)

    def has_vote_from(self, voter: str) -> bool:
        """Check whether the voter has already voted on this proposal."""
        return any(v.voter == voter for v in self.voting.votes)

    def missing_required_fields(self) -> list[str]:
        """Get the names of required review fields that are empty."""
        return [name for name in REQUIRED_FOR_REVIEW if not getattr(self, name)]

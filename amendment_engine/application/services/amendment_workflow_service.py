"""Amendment workflow service.

Orchestrates the proposal lifecycle: drafting, community review, weighted
voting and finalization.

Lifecycle:
    create -> DRAFT
    submit_for_review: DRAFT -> UNDER_REVIEW          (notifies review-started)
    start_voting: UNDER_REVIEW -> VOTING              (notifies voting-started)
    finalize_amendment: VOTING -> APPROVED -> IMPLEMENTED
                        VOTING -> REJECTED            (notifies voting-completed)

Developer Golden Rules:
1. GUARDS FIRST - Every guard runs before anything is written
2. IMMUTABLE VALUES - Each operation builds a new Proposal value
3. CAS ON WRITE - Every update carries the record_version it was based on
4. FAIL LOUD - Guard failures propagate; only CAS conflicts are retried

Concurrency:
Mutating operations run load -> guard -> build -> update(expected_version).
If another writer got there first the store raises
ConcurrentModificationError; the operation reloads, re-runs its guards
against the fresh record and tries again, up to max_update_attempts. A
second vote from the same voter racing the first therefore fails with
DuplicateVoteError instead of being stored twice.

Time:
All time-gated guards are evaluated lazily against the injected time
authority at the moment an operation is invoked. Nothing runs in the
background.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from uuid import uuid4

from structlog import get_logger

from amendment_engine.application.ports.amendment_history import (
    AmendmentHistoryProtocol,
)
from amendment_engine.application.ports.notifier import (
    REVIEW_STARTED,
    VOTING_COMPLETED,
    VOTING_STARTED,
    NotifierProtocol,
)
from amendment_engine.application.ports.proposal_store import ProposalStoreProtocol
from amendment_engine.application.ports.time_authority import TimeAuthorityProtocol
from amendment_engine.application.ports.voter_registry import VoterRegistryProtocol
from amendment_engine.domain.errors.proposal import (
    CommentNotFoundError,
    IncompleteProposalError,
    InvalidStateTransitionError,
    ProposalClosedError,
    ProposalNotFoundError,
)
from amendment_engine.domain.errors.store import (
    ConcurrentModificationError,
    ProposalAlreadyExistsError,
)
from amendment_engine.domain.errors.voting import (
    DuplicateVoteError,
    IneligibleVoterError,
    ReviewPeriodNotElapsedError,
    VotingClosedError,
    VotingPeriodNotElapsedError,
)
from amendment_engine.domain.models.amendment_history import (
    AmendmentHistoryEntry,
    FinalizationResult,
)
from amendment_engine.domain.models.impact_policy import policy_for
from amendment_engine.domain.models.proposal import (
    UNSUBMITTED_STATUSES,
    Comment,
    CommentType,
    ImpactLevel,
    ImplementationRecord,
    Proposal,
    ProposalMetadata,
    ProposalStatus,
    ProposalType,
    ReviewPeriod,
    Vote,
    VoteDecision,
    VotingSession,
)
from amendment_engine.domain.models.proposal_id import (
    epoch_millis,
    generate_proposal_id,
)
from amendment_engine.domain.models.voting_result import VotingResult
from amendment_engine.domain.services.comment_thread import (
    append_comment,
    append_reply,
    unresolved_concerns,
)
from amendment_engine.domain.services.vote_tally import tally_proposal

logger = get_logger()

DEFAULT_FRAMEWORK_VERSION: str = "1.1.0-beta"
DEFAULT_MAX_UPDATE_ATTEMPTS: int = 3
DEFAULT_TITLE: str = "Untitled Amendment"
ANONYMOUS: str = "anonymous"
IMPLEMENTED_BY: str = "democratic-process"

# Bound on ID collisions for proposals with the same title in the same millisecond
MAX_ID_ATTEMPTS: int = 10


@dataclass(frozen=True)
class ProposalRequest:
    """Request to create a new amendment proposal.

    Omitted fields take the defaults of a fresh draft: an untitled
    framework-spec amendment of minor impact by an anonymous proposer.
    """

    title: str = DEFAULT_TITLE
    description: str = ""
    proposer: str = ANONYMOUS
    type: ProposalType = ProposalType.FRAMEWORK_SPEC
    impact: ImpactLevel = ImpactLevel.MINOR
    proposed_text: str = ""
    rationale: str = ""
    current_text: str | None = None
    implementation_plan: tuple[str, ...] = ()
    migration_guide: tuple[str, ...] = ()
    supporters: tuple[str, ...] = ()
    related_articles: tuple[str, ...] = ()
    affected_files: tuple[str, ...] = ()
    precedents: tuple[str, ...] = ()
    community_discussion_url: str | None = None


@dataclass(frozen=True)
class CommentRequest:
    """Request to add a review comment.

    Attributes:
        author: Comment author (default anonymous).
        content: Comment body.
        type: Comment type (default suggestion).
        reply_to: ID of the comment being replied to, for nested replies.
    """

    author: str = ANONYMOUS
    content: str = ""
    type: CommentType = CommentType.SUGGESTION
    reply_to: str | None = None


@dataclass(frozen=True)
class VoteRequest:
    """Request to cast a vote (default: anonymous abstention)."""

    voter: str = ANONYMOUS
    decision: VoteDecision = VoteDecision.ABSTAIN
    rationale: str | None = None


class AmendmentWorkflowService:
    """State machine orchestrating the amendment proposal lifecycle.

    Example:
        service = AmendmentWorkflowService(
            store=store,
            voter_registry=registry,
            time_authority=time_authority,
            notifier=notifier,
            history=history,
        )

        proposal = await service.create_proposal(ProposalRequest(title="..."))
        await service.submit_for_review(proposal.id)
        # ... review period elapses ...
        await service.start_voting(proposal.id)
        await service.cast_vote(proposal.id, VoteRequest(voter="core-team",
                                                         decision=VoteDecision.APPROVE))
        # ... voting period elapses ...
        proposal, result = await service.finalize_amendment(proposal.id)
    """

    def __init__(
        self,
        store: ProposalStoreProtocol,
        voter_registry: VoterRegistryProtocol,
        time_authority: TimeAuthorityProtocol,
        notifier: NotifierProtocol,
        history: AmendmentHistoryProtocol,
        *,
        framework_version: str = DEFAULT_FRAMEWORK_VERSION,
        max_update_attempts: int = DEFAULT_MAX_UPDATE_ATTEMPTS,
    ) -> None:
        """Initialize the workflow.

        Args:
            store: Proposal storage with compare-and-swap updates.
            voter_registry: Eligibility and weighting of voters.
            time_authority: Clock used by every time-gated guard.
            notifier: Receives lifecycle notifications.
            history: Append-only log of finalized amendments.
            framework_version: Recorded on new proposals.
            max_update_attempts: CAS attempts before a conflict propagates.
        """
        if max_update_attempts < 1:
            raise ValueError(
                f"max_update_attempts must be at least 1, got {max_update_attempts}"
            )
        self._store = store
        self._voters = voter_registry
        self._time = time_authority
        self._notifier = notifier
        self._history = history
        self._framework_version = framework_version
        self._max_update_attempts = max_update_attempts

    # =========================================================================
    # Lifecycle operations
    # =========================================================================

    async def create_proposal(self, request: ProposalRequest) -> Proposal:
        """Create a new proposal in DRAFT.

        Review length, quorum and threshold are fixed here from the impact
        level and never change afterwards.

        Args:
            request: The proposal fields.

        Returns:
            The stored proposal.

        Raises:
            StoreError: If the proposal cannot be stored.
        """
        now = self._time.now()
        policy = policy_for(request.impact)
        title = request.title or DEFAULT_TITLE

        draft = Proposal(
            id="",
            title=title,
            description=request.description,
            proposer=request.proposer or ANONYMOUS,
            proposed_date=now,
            status=ProposalStatus.DRAFT,
            type=request.type,
            impact=request.impact,
            version=self._framework_version,
            proposed_text=request.proposed_text,
            rationale=request.rationale,
            current_text=request.current_text,
            implementation_plan=tuple(request.implementation_plan),
            migration_guide=tuple(request.migration_guide),
            review_period=ReviewPeriod(
                start_date=now,
                end_date=now + timedelta(days=policy.review_days),
                duration_days=policy.review_days,
            ),
            voting=VotingSession(quorum=policy.quorum, threshold=policy.threshold),
            supporters=tuple(request.supporters),
            metadata=ProposalMetadata(
                related_articles=tuple(request.related_articles),
                affected_files=tuple(request.affected_files),
                testing_required=policy.testing_required,
                precedents=tuple(request.precedents),
                community_discussion_url=request.community_discussion_url,
            ),
        )

        base_ms = epoch_millis(now)
        proposal_id = ""
        for offset in range(MAX_ID_ATTEMPTS):
            proposal_id = generate_proposal_id(title, base_ms + offset)
            try:
                stored = await self._store.create(replace(draft, id=proposal_id))
            except ProposalAlreadyExistsError:
                continue

            logger.bind(
                proposal_id=stored.id,
                impact=stored.impact.value,
                type=stored.type.value,
            ).info(
                "proposal_created",
                proposer=stored.proposer,
                review_days=stored.review_period.duration_days,
                quorum=stored.voting.quorum,
                threshold=stored.voting.threshold,
            )
            return stored

        logger.error(
            "proposal_id_exhausted", last_proposal_id=proposal_id, attempts=MAX_ID_ATTEMPTS
        )
        raise ProposalAlreadyExistsError(proposal_id)

    async def submit_for_review(self, proposal_id: str) -> Proposal:
        """Move a draft into community review.

        Guards:
        - status is DRAFT (or PROPOSED)
        - title, description, proposed_text and rationale are non-empty

        Resets the review window to [now, now + duration_days].

        Raises:
            ProposalNotFoundError: If the proposal doesn't exist.
            InvalidStateTransitionError: If the proposal was already submitted.
            IncompleteProposalError: Naming every empty required field.
        """

        def mutate(proposal: Proposal, now: datetime) -> Proposal:
            if proposal.status not in UNSUBMITTED_STATUSES:
                raise InvalidStateTransitionError(
                    proposal_id=proposal.id,
                    from_status=proposal.status.value,
                    to_status=ProposalStatus.UNDER_REVIEW.value,
                    allowed=sorted(s.value for s in proposal.status.valid_transitions()),
                )
            missing = proposal.missing_required_fields()
            if missing:
                raise IncompleteProposalError(proposal.id, missing)

            duration = proposal.review_period.duration_days
            return replace(
                proposal.with_status(ProposalStatus.UNDER_REVIEW),
                review_period=ReviewPeriod(
                    start_date=now,
                    end_date=now + timedelta(days=duration),
                    duration_days=duration,
                ),
            )

        stored = await self._apply(proposal_id, "submit_for_review", mutate)
        logger.bind(proposal_id=proposal_id).info(
            "proposal_under_review",
            review_start=stored.review_period.start_date.isoformat(),
            review_end=stored.review_period.end_date.isoformat(),
            duration_days=stored.review_period.duration_days,
        )
        await self._notify(stored, REVIEW_STARTED)
        return stored

    async def add_comment(self, proposal_id: str, request: CommentRequest) -> Comment:
        """Append a review comment (or a reply to one).

        Comments are accepted in every non-terminal status.

        Returns:
            The stored comment.

        Raises:
            ProposalNotFoundError: If the proposal doesn't exist.
            ProposalClosedError: If the proposal is rejected or implemented.
            CommentNotFoundError: If reply_to names a comment that doesn't exist.
        """
        comment_id = str(uuid4())

        def mutate(proposal: Proposal, now: datetime) -> Proposal:
            if proposal.status.is_terminal():
                raise ProposalClosedError(proposal.id, proposal.status.value)
            comment = Comment(
                id=comment_id,
                author=request.author or ANONYMOUS,
                content=request.content,
                timestamp=now,
                type=request.type,
            )
            if request.reply_to is not None:
                comments = append_reply(proposal.comments, request.reply_to, comment)
            else:
                comments = append_comment(proposal.comments, comment)
            return replace(proposal, comments=comments)

        stored = await self._apply(proposal_id, "add_comment", mutate)
        comment = _find_comment(stored.comments, comment_id)
        if comment is None:
            raise CommentNotFoundError(comment_id)
        logger.bind(proposal_id=proposal_id).info(
            "comment_added",
            comment_id=comment_id,
            author=comment.author,
            comment_type=comment.type.value,
            reply_to=request.reply_to,
        )
        return comment

    async def start_voting(self, proposal_id: str) -> Proposal:
        """Open voting once the review period has elapsed.

        Guards:
        - status is UNDER_REVIEW
        - now >= review_period.end_date

        Unresolved concern comments are logged as a warning and do not
        block the transition.

        Raises:
            ProposalNotFoundError: If the proposal doesn't exist.
            InvalidStateTransitionError: If the proposal is not under review.
            ReviewPeriodNotElapsedError: If review is still running.
        """
        concerns: list[Comment] = []

        def mutate(proposal: Proposal, now: datetime) -> Proposal:
            if proposal.status != ProposalStatus.UNDER_REVIEW:
                raise InvalidStateTransitionError(
                    proposal_id=proposal.id,
                    from_status=proposal.status.value,
                    to_status=ProposalStatus.VOTING.value,
                    allowed=sorted(s.value for s in proposal.status.valid_transitions()),
                )
            if now < proposal.review_period.end_date:
                raise ReviewPeriodNotElapsedError(
                    proposal.id, proposal.review_period.end_date, now
                )

            concerns[:] = unresolved_concerns(proposal.comments)
            voting_days = policy_for(proposal.impact).voting_days
            return replace(
                proposal.with_status(ProposalStatus.VOTING),
                voting=replace(
                    proposal.voting,
                    start_date=now,
                    end_date=now + timedelta(days=voting_days),
                ),
            )

        stored = await self._apply(proposal_id, "start_voting", mutate)
        log = logger.bind(proposal_id=proposal_id)
        if concerns:
            log.warning(
                "unresolved_concerns_at_voting_start",
                unresolved_concerns=len(concerns),
                comment_ids=[c.id for c in concerns],
            )
        log.info(
            "voting_started",
            voting_start=stored.voting.start_date.isoformat()
            if stored.voting.start_date
            else None,
            voting_end=stored.voting.end_date.isoformat()
            if stored.voting.end_date
            else None,
            quorum=stored.voting.quorum,
            threshold=stored.voting.threshold,
        )
        await self._notify(stored, VOTING_STARTED)
        return stored

    async def cast_vote(self, proposal_id: str, request: VoteRequest) -> Vote:
        """Record a weighted vote.

        Guards:
        - status is VOTING
        - now <= voting.end_date
        - the voter is eligible
        - the voter has not voted on this proposal yet

        Returns:
            The stored vote, with its weight resolved from the registry.

        Raises:
            ProposalNotFoundError: If the proposal doesn't exist.
            InvalidStateTransitionError: If the proposal is not in voting.
            VotingClosedError: If the voting period has ended.
            IneligibleVoterError: If the registry rejects the voter.
            DuplicateVoteError: If the voter already voted.
        """
        voter = request.voter or ANONYMOUS

        def mutate(proposal: Proposal, now: datetime) -> Proposal:
            if proposal.status != ProposalStatus.VOTING:
                raise InvalidStateTransitionError(
                    proposal_id=proposal.id,
                    from_status=proposal.status.value,
                    to_status=ProposalStatus.VOTING.value,
                    operation="cast vote on",
                )
            voting_end = _voting_end(proposal)
            if now > voting_end:
                raise VotingClosedError(proposal.id, voting_end, now)
            if not self._voters.is_eligible(voter):
                raise IneligibleVoterError(proposal.id, voter)
            existing = next((v for v in proposal.voting.votes if v.voter == voter), None)
            if existing is not None:
                raise DuplicateVoteError(proposal.id, voter, existing.decision.value)

            vote = Vote(
                voter=voter,
                decision=request.decision,
                timestamp=now,
                weight=self._voters.weight_of(voter),
                rationale=request.rationale,
            )
            return replace(
                proposal,
                voting=replace(proposal.voting, votes=(*proposal.voting.votes, vote)),
            )

        stored = await self._apply(proposal_id, "cast_vote", mutate)
        vote = next(v for v in stored.voting.votes if v.voter == voter)
        logger.bind(proposal_id=proposal_id).info(
            "vote_cast",
            voter=vote.voter,
            decision=vote.decision.value,
            weight=vote.weight,
            votes_cast=len(stored.voting.votes),
            quorum=stored.voting.quorum,
        )
        return vote

    async def tally_votes(self, proposal_id: str) -> VotingResult:
        """Tally the votes cast so far.

        Pure read: does not mutate and works in any status, so it can be
        used as an in-progress preview.

        Raises:
            ProposalNotFoundError: If the proposal doesn't exist.
        """
        proposal = await self._load(proposal_id)
        result = tally_proposal(proposal)
        logger.bind(proposal_id=proposal_id).debug(
            "votes_tallied",
            total_votes=result.total_votes,
            approvals=result.approvals,
            rejections=result.rejections,
            abstentions=result.abstentions,
            approval_percentage=round(result.approval_percentage, 1),
            quorum_met=result.quorum_met,
            passed=result.passed,
        )
        return result

    async def finalize_amendment(
        self, proposal_id: str
    ) -> tuple[Proposal, VotingResult]:
        """Close voting and record the outcome.

        Guards:
        - status is VOTING
        - now > voting.end_date

        A passing tally moves the proposal to APPROVED and immediately to
        IMPLEMENTED, recording an ImplementationRecord in its metadata. A
        failing tally moves it to REJECTED. Either way an entry is appended
        to the amendment history log before voting-completed is sent.

        The proposal is persisted before the history entry is written. If
        that write fails the StoreError propagates; calling finalize again
        on the finalized proposal then records the missing entry (and sends
        voting-completed) instead of failing the status guard.

        Returns:
            Tuple of (finalized proposal, voting result).

        Raises:
            ProposalNotFoundError: If the proposal doesn't exist.
            InvalidStateTransitionError: If the proposal is not in voting.
            VotingPeriodNotElapsedError: If voting is still open.
            StoreError: If the proposal or the history entry cannot be written.
        """
        current = await self._load(proposal_id)
        if current.status.is_terminal():
            if await self._history.get_entry(proposal_id) is None:
                return await self._complete_finalization(
                    current, tally_proposal(current), backfill=True
                )

        results: list[VotingResult] = []

        def mutate(proposal: Proposal, now: datetime) -> Proposal:
            if proposal.status != ProposalStatus.VOTING:
                raise InvalidStateTransitionError(
                    proposal_id=proposal.id,
                    from_status=proposal.status.value,
                    to_status=ProposalStatus.VOTING.value,
                    operation="finalize",
                )
            voting_end = _voting_end(proposal)
            if now <= voting_end:
                raise VotingPeriodNotElapsedError(proposal.id, voting_end, now)

            result = tally_proposal(proposal)
            results[:] = [result]
            if not result.passed:
                return proposal.with_status(ProposalStatus.REJECTED)

            approved = proposal.with_status(ProposalStatus.APPROVED)
            return replace(
                approved.with_status(ProposalStatus.IMPLEMENTED),
                metadata=replace(
                    approved.metadata,
                    implementation=ImplementationRecord(
                        implemented_date=now,
                        implemented_by=IMPLEMENTED_BY,
                        version=approved.version,
                        changes=approved.implementation_plan,
                    ),
                ),
            )

        stored = await self._apply(proposal_id, "finalize_amendment", mutate)
        result = results[0]
        logger.bind(proposal_id=proposal_id).info(
            "amendment_finalized",
            status=stored.status.value,
            passed=result.passed,
            summary=result.summary,
        )
        return await self._complete_finalization(stored, result)

    # =========================================================================
    # Internals
    # =========================================================================

    async def _complete_finalization(
        self, proposal: Proposal, result: VotingResult, *, backfill: bool = False
    ) -> tuple[Proposal, VotingResult]:
        """Record the history entry of a finalized proposal, then notify."""
        implementation = proposal.metadata.implementation
        entry = AmendmentHistoryEntry(
            proposal_id=proposal.id,
            title=proposal.title,
            result=FinalizationResult.APPROVED
            if proposal.status == ProposalStatus.IMPLEMENTED
            else FinalizationResult.REJECTED,
            voting_result=result,
            finalized_date=implementation.implemented_date
            if implementation is not None
            else self._time.now(),
        )
        written = await self._history.append(entry)
        logger.bind(proposal_id=proposal.id).info(
            "amendment_history_backfilled" if backfill else "amendment_history_recorded",
            result=entry.result.value,
            written=written,
        )
        await self._notify(proposal, VOTING_COMPLETED)
        return proposal, result

    async def _load(self, proposal_id: str) -> Proposal:
        proposal = await self._store.get(proposal_id)
        if proposal is None:
            raise ProposalNotFoundError(proposal_id)
        return proposal

    async def _apply(
        self,
        proposal_id: str,
        operation: str,
        mutate: Callable[[Proposal, datetime], Proposal],
    ) -> Proposal:
        """Run a guarded read-modify-write with compare-and-swap retries.

        mutate() runs its guards and returns the new proposal value. It is
        re-run against a freshly loaded record after every conflict, so its
        guards always see the latest state.
        """
        log = logger.bind(proposal_id=proposal_id, operation=operation)
        attempt = 0
        while True:
            attempt += 1
            current = await self._load(proposal_id)
            updated = mutate(current, self._time.now())
            try:
                return await self._store.update(
                    updated, expected_version=current.record_version
                )
            except ConcurrentModificationError as exc:
                if attempt >= self._max_update_attempts:
                    log.error(
                        "proposal_update_conflict_exhausted",
                        attempts=attempt,
                        expected_version=exc.expected_version,
                        actual_version=exc.actual_version,
                    )
                    raise
                log.warning(
                    "proposal_update_conflict",
                    attempt=attempt,
                    expected_version=exc.expected_version,
                    actual_version=exc.actual_version,
                )

    async def _notify(self, proposal: Proposal, event_name: str) -> None:
        """Deliver a notification; delivery failures are logged, not raised.

        The transition is already persisted when this runs.
        """
        try:
            await self._notifier.notify(proposal, event_name)
        except Exception:
            logger.bind(proposal_id=proposal.id).exception(
                "notification_failed",
                notification_event=event_name,
            )


def _voting_end(proposal: Proposal) -> datetime:
    """Voting end date of a proposal in VOTING (always set by start_voting)."""
    if proposal.voting.end_date is None:
        raise InvalidStateTransitionError(
            proposal_id=proposal.id,
            from_status=proposal.status.value,
            to_status=ProposalStatus.VOTING.value,
            operation="read voting period of",
        )
    return proposal.voting.end_date


def _find_comment(comments: tuple[Comment, ...], comment_id: str) -> Comment | None:
    for comment in comments:
        if comment.id == comment_id:
            return comment
        found = _find_comment(comment.replies, comment_id)
        if found is not None:
            return found
    return None

"""Amendment API routes.

FastAPI router exposing the amendment workflow: drafting, review comments,
weighted voting, tallies and finalization, plus read-only governance
status and history.

Developer Golden Rules:
1. THIN ADAPTER - Routes translate HTTP to service calls, nothing more
2. FAIL LOUD - Domain errors become RFC 7807 problem details
3. READS ARE PURE - GET endpoints never mutate a proposal

Error mapping:
- ProposalNotFoundError, CommentNotFoundError (unknown reply_to) -> 404
- IneligibleVoterError -> 403
- IncompleteProposalError -> 422
- Other guard failures, ConcurrentModificationError -> 409
- StoreError -> 503
"""

from typing import NoReturn

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from amendment_engine.api.dependencies.amendment import (
    get_governance_status_service,
    get_workflow_service,
)
from amendment_engine.api.models.amendment import (
    AddCommentRequest,
    AmendmentErrorResponse,
    CastVoteRequest,
    CommentResponse,
    CreateProposalRequest,
    FinalizeResponse,
    GovernanceStatusResponse,
    HistoryEntryResponse,
    HistoryResponse,
    ProposalListResponse,
    ProposalResponse,
    ProposalStatusEnum,
    ProposalSummaryResponse,
    VoteResponse,
    VotingResultResponse,
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
from amendment_engine.domain.errors import (
    CommentNotFoundError,
    ConcurrentModificationError,
    GuardFailedError,
    IncompleteProposalError,
    IneligibleVoterError,
    ProposalNotFoundError,
    StoreError,
)
from amendment_engine.domain.models.proposal import (
    CommentType,
    ImpactLevel,
    ProposalStatus,
    ProposalType,
    VoteDecision,
)

router = APIRouter(prefix="/v1/amendments", tags=["amendments"])

ERROR_TYPE_BASE = "urn:amendment-engine:error"

_ERROR_RESPONSES: dict[int | str, dict[str, object]] = {
    404: {"model": AmendmentErrorResponse, "description": "Proposal not found"},
    409: {"model": AmendmentErrorResponse, "description": "Workflow guard failed"},
    503: {"model": AmendmentErrorResponse, "description": "Proposal store unavailable"},
}


# =============================================================================
# Error Mapping
# =============================================================================


def _problem(
    request: Request, status: int, error_type: str, title: str, detail: str
) -> HTTPException:
    return HTTPException(
        status_code=status,
        detail={
            "type": f"{ERROR_TYPE_BASE}:{error_type}",
            "title": title,
            "status": status,
            "detail": detail,
            "instance": str(request.url.path),
        },
    )


def _raise_problem(exc: Exception, request: Request) -> NoReturn:
    """Translate a domain error into an HTTPException."""
    if isinstance(exc, ProposalNotFoundError):
        raise _problem(request, 404, "proposal-not-found", "Proposal Not Found", str(exc)) from None
    if isinstance(exc, CommentNotFoundError):
        raise _problem(request, 404, "comment-not-found", "Comment Not Found", str(exc)) from None
    if isinstance(exc, IncompleteProposalError):
        raise _problem(
            request, 422, "incomplete-proposal", "Incomplete Proposal", str(exc)
        ) from None
    if isinstance(exc, IneligibleVoterError):
        raise _problem(request, 403, "ineligible-voter", "Ineligible Voter", str(exc)) from None
    if isinstance(exc, GuardFailedError):
        raise _problem(
            request, 409, "guard-failed", type(exc).__name__.removesuffix("Error"), str(exc)
        ) from None
    if isinstance(exc, ConcurrentModificationError):
        raise _problem(
            request, 409, "concurrent-modification", "Concurrent Modification", str(exc)
        ) from None
    if isinstance(exc, StoreError):
        raise _problem(request, 503, "store-error", "Store Unavailable", str(exc)) from None
    raise exc


# =============================================================================
# Read Endpoints
# =============================================================================


@router.get(
    "",
    response_model=ProposalListResponse,
    responses={503: _ERROR_RESPONSES[503]},
    summary="List proposals",
)
async def list_proposals(
    request: Request,
    status: ProposalStatusEnum | None = Query(default=None),
    service: GovernanceStatusService = Depends(get_governance_status_service),
) -> ProposalListResponse:
    """List proposals, newest first, optionally filtered by status."""
    try:
        proposals = await service.list_proposals(
            ProposalStatus(status.value) if status is not None else None
        )
    except StoreError as e:
        _raise_problem(e, request)
    return ProposalListResponse(
        proposals=[ProposalSummaryResponse.from_domain(p) for p in proposals],
        total=len(proposals),
    )


@router.get(
    "/status",
    response_model=GovernanceStatusResponse,
    responses={503: _ERROR_RESPONSES[503]},
    summary="Governance status",
)
async def get_governance_status(
    request: Request,
    service: GovernanceStatusService = Depends(get_governance_status_service),
) -> GovernanceStatusResponse:
    """Active proposals, pending votes, recent activity and system health."""
    try:
        status = await service.get_status()
    except StoreError as e:
        _raise_problem(e, request)
    return GovernanceStatusResponse.from_domain(status)


@router.get(
    "/history",
    response_model=HistoryResponse,
    responses={503: _ERROR_RESPONSES[503]},
    summary="Amendment history",
)
async def get_history(
    request: Request,
    service: GovernanceStatusService = Depends(get_governance_status_service),
) -> HistoryResponse:
    """Finalized amendments in finalization order."""
    try:
        entries = await service.list_history()
    except StoreError as e:
        _raise_problem(e, request)
    return HistoryResponse(entries=[HistoryEntryResponse.from_domain(e) for e in entries])


@router.get(
    "/{proposal_id}",
    response_model=ProposalResponse,
    responses={404: _ERROR_RESPONSES[404], 503: _ERROR_RESPONSES[503]},
    summary="Get a proposal",
)
async def get_proposal(
    proposal_id: str,
    request: Request,
    service: GovernanceStatusService = Depends(get_governance_status_service),
) -> ProposalResponse:
    try:
        proposal = await service.get_proposal(proposal_id)
    except (ProposalNotFoundError, StoreError) as e:
        _raise_problem(e, request)
    return ProposalResponse.from_domain(proposal)


@router.get(
    "/{proposal_id}/tally",
    response_model=VotingResultResponse,
    responses={404: _ERROR_RESPONSES[404], 503: _ERROR_RESPONSES[503]},
    summary="Tally votes so far",
)
async def tally_votes(
    proposal_id: str,
    request: Request,
    service: AmendmentWorkflowService = Depends(get_workflow_service),
) -> VotingResultResponse:
    """In-progress (or final) tally. Does not change the proposal."""
    try:
        result = await service.tally_votes(proposal_id)
    except (ProposalNotFoundError, StoreError) as e:
        _raise_problem(e, request)
    return VotingResultResponse.from_domain(result)


# =============================================================================
# Workflow Endpoints
# =============================================================================


@router.post(
    "",
    response_model=ProposalResponse,
    status_code=201,
    responses={503: _ERROR_RESPONSES[503]},
    summary="Create a draft proposal",
)
async def create_proposal(
    request_data: CreateProposalRequest,
    request: Request,
    service: AmendmentWorkflowService = Depends(get_workflow_service),
) -> ProposalResponse:
    """Create a draft. Review length, quorum and threshold follow the impact."""
    try:
        proposal = await service.create_proposal(
            ProposalRequest(
                title=request_data.title,
                description=request_data.description,
                proposer=request_data.proposer,
                type=ProposalType(request_data.type.value),
                impact=ImpactLevel(request_data.impact.value),
                proposed_text=request_data.proposed_text,
                rationale=request_data.rationale,
                current_text=request_data.current_text,
                implementation_plan=tuple(request_data.implementation_plan),
                migration_guide=tuple(request_data.migration_guide),
                supporters=tuple(request_data.supporters),
                related_articles=tuple(request_data.related_articles),
                affected_files=tuple(request_data.affected_files),
                precedents=tuple(request_data.precedents),
                community_discussion_url=request_data.community_discussion_url,
            )
        )
    except StoreError as e:
        _raise_problem(e, request)
    return ProposalResponse.from_domain(proposal)


@router.post(
    "/{proposal_id}/submit",
    response_model=ProposalResponse,
    responses={
        **_ERROR_RESPONSES,
        422: {"model": AmendmentErrorResponse, "description": "Required fields empty"},
    },
    summary="Submit a draft for community review",
)
async def submit_for_review(
    proposal_id: str,
    request: Request,
    service: AmendmentWorkflowService = Depends(get_workflow_service),
) -> ProposalResponse:
    try:
        proposal = await service.submit_for_review(proposal_id)
    except (ProposalNotFoundError, GuardFailedError, StoreError) as e:
        _raise_problem(e, request)
    return ProposalResponse.from_domain(proposal)


@router.post(
    "/{proposal_id}/comments",
    response_model=CommentResponse,
    status_code=201,
    responses=_ERROR_RESPONSES,
    summary="Add a review comment",
)
async def add_comment(
    proposal_id: str,
    request_data: AddCommentRequest,
    request: Request,
    service: AmendmentWorkflowService = Depends(get_workflow_service),
) -> CommentResponse:
    try:
        comment = await service.add_comment(
            proposal_id,
            CommentRequest(
                author=request_data.author,
                content=request_data.content,
                type=CommentType(request_data.type.value),
                reply_to=request_data.reply_to,
            ),
        )
    except (
        ProposalNotFoundError, CommentNotFoundError, GuardFailedError, StoreError
    ) as e:
        _raise_problem(e, request)
    return CommentResponse.from_domain(comment)


@router.post(
    "/{proposal_id}/voting",
    response_model=ProposalResponse,
    responses=_ERROR_RESPONSES,
    summary="Open voting after the review period",
)
async def start_voting(
    proposal_id: str,
    request: Request,
    service: AmendmentWorkflowService = Depends(get_workflow_service),
) -> ProposalResponse:
    try:
        proposal = await service.start_voting(proposal_id)
    except (ProposalNotFoundError, GuardFailedError, StoreError) as e:
        _raise_problem(e, request)
    return ProposalResponse.from_domain(proposal)


@router.post(
    "/{proposal_id}/votes",
    response_model=VoteResponse,
    status_code=201,
    responses={
        **_ERROR_RESPONSES,
        403: {"model": AmendmentErrorResponse, "description": "Voter not eligible"},
    },
    summary="Cast a vote",
)
async def cast_vote(
    proposal_id: str,
    request_data: CastVoteRequest,
    request: Request,
    service: AmendmentWorkflowService = Depends(get_workflow_service),
) -> VoteResponse:
    """Cast a weighted vote. Each voter votes at most once per proposal."""
    try:
        vote = await service.cast_vote(
            proposal_id,
            VoteRequest(
                voter=request_data.voter,
                decision=VoteDecision(request_data.decision.value),
                rationale=request_data.rationale,
            ),
        )
    except (ProposalNotFoundError, GuardFailedError, StoreError) as e:
        _raise_problem(e, request)
    return VoteResponse.from_domain(vote)


@router.post(
    "/{proposal_id}/finalize",
    response_model=FinalizeResponse,
    responses=_ERROR_RESPONSES,
    summary="Close voting and record the outcome",
)
async def finalize_amendment(
    proposal_id: str,
    request: Request,
    service: AmendmentWorkflowService = Depends(get_workflow_service),
) -> FinalizeResponse:
    try:
        proposal, result = await service.finalize_amendment(proposal_id)
    except (ProposalNotFoundError, GuardFailedError, StoreError) as e:
        _raise_problem(e, request)
    return FinalizeResponse(
        proposal=ProposalResponse.from_domain(proposal),
        result=VotingResultResponse.from_domain(result),
    )

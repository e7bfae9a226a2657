"""Governance status service.

Read-only queries over the proposal store and the amendment history log:
proposal lookup, filtered listings and an at-a-glance status of the
democratic process.

System health is judged on proposals created in the last 30 days:
- none: "Quiet period"
- five or more: "Active engagement"
- otherwise: "Normal activity"
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

from structlog import get_logger

from amendment_engine.application.ports.amendment_history import (
    AmendmentHistoryProtocol,
)
from amendment_engine.application.ports.proposal_store import ProposalStoreProtocol
from amendment_engine.application.ports.time_authority import TimeAuthorityProtocol
from amendment_engine.domain.errors.proposal import ProposalNotFoundError
from amendment_engine.domain.models.amendment_history import AmendmentHistoryEntry
from amendment_engine.domain.models.proposal import Proposal, ProposalStatus

logger = get_logger()

ACTIVE_STATUSES: frozenset[ProposalStatus] = frozenset(
    {ProposalStatus.UNDER_REVIEW, ProposalStatus.VOTING}
)
RECENT_ACTIVITY_LIMIT: int = 5
HEALTH_WINDOW: timedelta = timedelta(days=30)
ACTIVE_ENGAGEMENT_MINIMUM: int = 5

QUIET_PERIOD: str = "Quiet period"
ACTIVE_ENGAGEMENT: str = "Active engagement"
NORMAL_ACTIVITY: str = "Normal activity"


@dataclass(frozen=True)
class GovernanceStatus:
    """Snapshot of the amendment process.

    Attributes:
        active_proposals: Proposals under review or in voting.
        pending_votes: Proposals in voting.
        recent_activity: Newest proposals as "<id>: <status> (<title>)".
        system_health: Quiet period, Normal activity or Active engagement.
    """

    active_proposals: int
    pending_votes: int
    recent_activity: tuple[str, ...]
    system_health: str


class GovernanceStatusService:
    """Read-side queries for proposals and amendment history."""

    def __init__(
        self,
        store: ProposalStoreProtocol,
        history: AmendmentHistoryProtocol,
        time_authority: TimeAuthorityProtocol,
    ) -> None:
        self._store = store
        self._history = history
        self._time = time_authority

    async def get_proposal(self, proposal_id: str) -> Proposal:
        """Get a proposal by ID.

        Raises:
            ProposalNotFoundError: If the proposal doesn't exist.
        """
        proposal = await self._store.get(proposal_id)
        if proposal is None:
            raise ProposalNotFoundError(proposal_id)
        return proposal

    async def list_proposals(
        self, status: ProposalStatus | None = None
    ) -> list[Proposal]:
        """List proposals, newest first, optionally filtered by status."""
        proposals = await self._store.list_proposals(status)
        logger.debug(
            "proposals_listed",
            status=status.value if status else None,
            count=len(proposals),
        )
        return proposals

    async def list_history(self) -> list[AmendmentHistoryEntry]:
        """Get every finalized amendment, in finalization order."""
        return await self._history.list_entries()

    async def get_status(self) -> GovernanceStatus:
        """Summarize the state of the amendment process."""
        proposals = await self._store.list_proposals()
        now = self._time.now()

        recent = [p for p in proposals if now - p.proposed_date < HEALTH_WINDOW]
        return GovernanceStatus(
            active_proposals=sum(1 for p in proposals if p.status in ACTIVE_STATUSES),
            pending_votes=sum(1 for p in proposals if p.status == ProposalStatus.VOTING),
            recent_activity=tuple(
                f"{p.id}: {p.status.value} ({p.title})"
                for p in proposals[:RECENT_ACTIVITY_LIMIT]
            ),
            system_health=assess_health(len(recent)),
        )


def assess_health(recent_proposals: int) -> str:
    """Classify engagement from the number of proposals in the health window.

    Examples:
        >>> assess_health(0)
        'Quiet period'
        >>> assess_health(5)
        'Active engagement'
    """
    if recent_proposals == 0:
        return QUIET_PERIOD
    if recent_proposals >= ACTIVE_ENGAGEMENT_MINIMUM:
        return ACTIVE_ENGAGEMENT
    return NORMAL_ACTIVITY

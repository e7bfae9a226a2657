"""Ports: the interfaces the amendment workflow depends on."""

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

__all__: list[str] = [
    "REVIEW_STARTED",
    "VOTING_COMPLETED",
    "VOTING_STARTED",
    "AmendmentHistoryProtocol",
    "NotifierProtocol",
    "ProposalStoreProtocol",
    "TimeAuthorityProtocol",
    "VoterRegistryProtocol",
]

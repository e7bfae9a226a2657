"""Proposal store stub implementation.

This module provides an in-memory stub implementation of
ProposalStoreProtocol for testing and development purposes.
"""

from __future__ import annotations

import asyncio
from dataclasses import replace

from amendment_engine.application.ports.proposal_store import ProposalStoreProtocol
from amendment_engine.domain.errors.proposal import ProposalNotFoundError
from amendment_engine.domain.errors.store import (
    ConcurrentModificationError,
    ProposalAlreadyExistsError,
)
from amendment_engine.domain.models.proposal import Proposal, ProposalStatus


class ProposalStoreStub(ProposalStoreProtocol):
    """In-memory stub for proposal storage (testing only).

    Proposals are stored in a dictionary keyed by ID. Compare-and-swap is
    simulated with an asyncio.Lock (in-memory equivalent of a row lock).

    Attributes:
        _proposals: Dictionary mapping proposal.id to Proposal.
        _interference: Queue of proposals to write "behind the caller's back"
            on the next update() calls, simulating a concurrent writer.
    """

    def __init__(self) -> None:
        """Initialize the stub with empty storage."""
        self._proposals: dict[str, Proposal] = {}
        self._cas_lock = asyncio.Lock()
        self._interference: list[Proposal] = []
        self.update_calls: int = 0

    def clear(self) -> None:
        """Clear all stored proposals (for test cleanup)."""
        self._proposals.clear()
        self._interference.clear()
        self.update_calls = 0

    async def create(self, proposal: Proposal) -> Proposal:
        """Store a new proposal as record version 1.

        Raises:
            ProposalAlreadyExistsError: If the ID is already stored.
        """
        async with self._cas_lock:
            if proposal.id in self._proposals:
                raise ProposalAlreadyExistsError(proposal.id)
            stored = replace(proposal, record_version=1)
            self._proposals[proposal.id] = stored
            return stored

    async def get(self, proposal_id: str) -> Proposal | None:
        """Retrieve a proposal by ID, None if absent."""
        return self._proposals.get(proposal_id)

    async def update(self, proposal: Proposal, expected_version: int) -> Proposal:
        """Compare-and-swap overwrite.

        Raises:
            ProposalNotFoundError: If the proposal doesn't exist.
            ConcurrentModificationError: If the stored version differs.
        """
        async with self._cas_lock:
            self.update_calls += 1
            if self._interference:
                competitor = self._interference.pop(0)
                current = self._proposals[competitor.id]
                self._proposals[competitor.id] = replace(
                    competitor, record_version=current.record_version + 1
                )

            current = self._proposals.get(proposal.id)
            if current is None:
                raise ProposalNotFoundError(proposal.id)
            if current.record_version != expected_version:
                raise ConcurrentModificationError(
                    proposal_id=proposal.id,
                    expected_version=expected_version,
                    actual_version=current.record_version,
                )
            stored = replace(proposal, record_version=expected_version + 1)
            self._proposals[proposal.id] = stored
            return stored

    async def list_proposals(
        self, status: ProposalStatus | None = None
    ) -> list[Proposal]:
        """List proposals, newest first, optionally filtered by status."""
        matching = [
            p for p in self._proposals.values() if status is None or p.status == status
        ]
        return sorted(matching, key=lambda p: p.proposed_date, reverse=True)

    # Test helper methods (not part of protocol)

    def interfere_with_next_update(self, competitor: Proposal) -> None:
        """Make the next update() find competitor written by another writer first."""
        self._interference.append(competitor)

    def put(self, proposal: Proposal) -> None:
        """Store a proposal directly, bypassing create() (for test setup)."""
        self._proposals[proposal.id] = proposal

    def get_proposal_count(self) -> int:
        """Get total number of stored proposals."""
        return len(self._proposals)

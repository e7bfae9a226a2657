"""Proposal store port.

This module defines the storage interface for amendment proposals.

Contract:
- create(proposal): store a new record; the ID must not exist yet
- get(id): the stored record, or None
- update(proposal, expected_version): whole-record compare-and-swap overwrite
- list_proposals(status): all records, optionally filtered by status, newest first

Atomicity:
update() MUST be atomic. No partially written record may ever be
observable, and a record whose stored record_version differs from
expected_version MUST NOT be overwritten.
"""

from __future__ import annotations

from typing import Protocol

from amendment_engine.domain.models.proposal import Proposal, ProposalStatus


class ProposalStoreProtocol(Protocol):
    """Protocol for proposal storage and retrieval.

    The store owns Proposal.record_version: create() stores version 1 and
    every successful update() increments it.
    """

    async def create(self, proposal: Proposal) -> Proposal:
        """Store a new proposal.

        Args:
            proposal: The proposal to store.

        Returns:
            The stored proposal with record_version set to 1.

        Raises:
            ProposalAlreadyExistsError: If the ID is already stored.
            StoreError: If the write fails.
        """
        ...

    async def get(self, proposal_id: str) -> Proposal | None:
        """Retrieve a proposal by ID.

        Args:
            proposal_id: The unique identifier of the proposal.

        Returns:
            The proposal if found, None otherwise.

        Raises:
            StoreError: If the read fails.
        """
        ...

    async def update(self, proposal: Proposal, expected_version: int) -> Proposal:
        """Overwrite a stored proposal with compare-and-swap semantics.

        Args:
            proposal: The full new record.
            expected_version: record_version the caller read before mutating.

        Returns:
            The stored proposal with its new record_version.

        Raises:
            ProposalNotFoundError: If the proposal doesn't exist.
            ConcurrentModificationError: If the stored version differs.
            StoreError: If the write fails.
        """
        ...

    async def list_proposals(
        self, status: ProposalStatus | None = None
    ) -> list[Proposal]:
        """List proposals, optionally filtered by status.

        Args:
            status: Only return proposals in this status, if given.

        Returns:
            Proposals ordered by proposed_date, newest first.

        Raises:
            StoreError: If the listing fails.
        """
        ...

"""Amendment history port.

Append-only log of finalized amendments, at most one entry per proposal.
History is never rewritten or truncated.

append() is idempotent on proposal_id, so a finalization that failed
after the proposal was persisted can safely record its entry again.
"""

from __future__ import annotations

from typing import Protocol

from amendment_engine.domain.models.amendment_history import AmendmentHistoryEntry


class AmendmentHistoryProtocol(Protocol):
    """Protocol for the append-only amendment history log."""

    async def append(self, entry: AmendmentHistoryEntry) -> bool:
        """Append a finalized amendment to the log.

        Returns:
            True if the entry was written, False if the proposal already
            has an entry (the log is left untouched).

        Raises:
            StoreError: If the read or write fails.
        """
        ...

    async def get_entry(self, proposal_id: str) -> AmendmentHistoryEntry | None:
        """Get the entry recorded for a proposal, None if there is none.

        Raises:
            StoreError: If the read fails.
        """
        ...

    async def list_entries(self) -> list[AmendmentHistoryEntry]:
        """Get every entry in append order.

        Raises:
            StoreError: If the read fails.
        """
        ...

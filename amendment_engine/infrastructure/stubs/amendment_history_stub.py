"""Amendment history stub implementation (in-memory, testing only)."""

from __future__ import annotations

from amendment_engine.application.ports.amendment_history import (
    AmendmentHistoryProtocol,
)
from amendment_engine.domain.errors.store import StoreError
from amendment_engine.domain.models.amendment_history import AmendmentHistoryEntry


class AmendmentHistoryStub(AmendmentHistoryProtocol):
    """In-memory append-only history log.

    Attributes:
        append_calls: Number of append() calls, including failed ones.
    """

    def __init__(self) -> None:
        self._entries: list[AmendmentHistoryEntry] = []
        self._failures: list[StoreError] = []
        self.append_calls: int = 0

    async def append(self, entry: AmendmentHistoryEntry) -> bool:
        self.append_calls += 1
        if self._failures:
            raise self._failures.pop(0)
        if any(e.proposal_id == entry.proposal_id for e in self._entries):
            return False
        self._entries.append(entry)
        return True

    async def get_entry(self, proposal_id: str) -> AmendmentHistoryEntry | None:
        return next((e for e in self._entries if e.proposal_id == proposal_id), None)

    async def list_entries(self) -> list[AmendmentHistoryEntry]:
        return list(self._entries)

    # Test helper methods (not part of protocol)

    def fail_next_append(self, error: StoreError | None = None) -> None:
        """Make the next append() raise instead of writing."""
        self._failures.append(error or StoreError("History log unavailable"))

    def clear(self) -> None:
        """Clear all entries (for test cleanup)."""
        self._entries.clear()
        self._failures.clear()
        self.append_calls = 0

    @property
    def entries(self) -> list[AmendmentHistoryEntry]:
        """Entries appended so far."""
        return list(self._entries)

"""JSON file amendment history log.

The whole history is one JSON array. Appending rewrites the file
atomically with the new entry at the end; entries are never removed or
reordered. A proposal that already has an entry is not appended again.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any

from structlog import get_logger

from amendment_engine.application.ports.amendment_history import (
    AmendmentHistoryProtocol,
)
from amendment_engine.domain.errors.store import StoreError
from amendment_engine.domain.models.amendment_history import AmendmentHistoryEntry
from amendment_engine.infrastructure.adapters.persistence.json_proposal_store import (
    atomic_write_text,
)

logger = get_logger()


class JsonAmendmentHistory(AmendmentHistoryProtocol):
    """Append-only amendment history kept in a single JSON file."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self._lock = asyncio.Lock()

    def _load_raw(self) -> list[dict[str, Any]]:
        try:
            document = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        except OSError as exc:
            raise StoreError(f"Failed to read amendment history {self.path}: {exc}") from exc
        try:
            entries = json.loads(document)
        except ValueError as exc:
            raise StoreError(f"Corrupt amendment history {self.path}: {exc}") from exc
        if not isinstance(entries, list):
            raise StoreError(f"Amendment history {self.path} is not a JSON array")
        return entries

    def _append_sync(self, entry: AmendmentHistoryEntry) -> int | None:
        entries = self._load_raw()
        if any(
            isinstance(item, dict) and item.get("proposalId") == entry.proposal_id
            for item in entries
        ):
            return None
        entries.append(entry.to_dict())
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            atomic_write_text(self.path, json.dumps(entries, indent=2) + "\n")
        except OSError as exc:
            raise StoreError(f"Failed to write amendment history {self.path}: {exc}") from exc
        return len(entries)

    async def append(self, entry: AmendmentHistoryEntry) -> bool:
        """Append an entry to the history file.

        Returns:
            False if the proposal already has an entry.

        Raises:
            StoreError: If the history cannot be read or written.
        """
        async with self._lock:
            count = await asyncio.to_thread(self._append_sync, entry)
        if count is None:
            logger.info("amendment_history_entry_exists", proposal_id=entry.proposal_id)
            return False
        logger.debug(
            "amendment_history_appended",
            proposal_id=entry.proposal_id,
            result=entry.result.value,
            entries=count,
        )
        return True

    async def get_entry(self, proposal_id: str) -> AmendmentHistoryEntry | None:
        """Get the entry recorded for a proposal, None if there is none.

        Raises:
            StoreError: If the history cannot be read or an entry is malformed.
        """
        for entry in await self.list_entries():
            if entry.proposal_id == proposal_id:
                return entry
        return None

    async def list_entries(self) -> list[AmendmentHistoryEntry]:
        """Read every entry in append order.

        Raises:
            StoreError: If the history cannot be read or an entry is malformed.
        """
        raw = await asyncio.to_thread(self._load_raw)
        try:
            return [AmendmentHistoryEntry.from_dict(item) for item in raw]
        except (KeyError, ValueError) as exc:
            raise StoreError(f"Malformed amendment history entry: {exc}") from exc

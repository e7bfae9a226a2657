"""JSON document proposal store.

Persists one JSON document per proposal (``<proposal_id>.json``) in a
directory. Documents are written to a temporary file in the same
directory and moved into place with os.replace(), so a reader never
observes a partially written record.

Compare-and-swap updates are serialized by an asyncio.Lock held for the
whole read-check-write sequence. The store assumes it is the only writer
of its directory (single process); all data is local and trusted.
"""

from __future__ import annotations

import asyncio
import os
import re
import tempfile
from dataclasses import replace
from pathlib import Path

from structlog import get_logger

from amendment_engine.application.ports.proposal_store import ProposalStoreProtocol
from amendment_engine.domain.errors.proposal import ProposalNotFoundError
from amendment_engine.domain.errors.store import (
    ConcurrentModificationError,
    ProposalAlreadyExistsError,
    StoreError,
)
from amendment_engine.domain.models.proposal import Proposal, ProposalStatus
from amendment_engine.infrastructure.adapters.persistence.proposal_codec import (
    decode_proposal,
    encode_proposal,
)

logger = get_logger()

DOCUMENT_SUFFIX = ".json"

# IDs become file names; anything else can never name a stored proposal
_SAFE_ID = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]*$")


def atomic_write_text(path: Path, content: str) -> None:
    """Write text to path atomically (temp file + os.replace).

    Raises:
        OSError: If the write or rename fails.
    """
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


class JsonProposalStore(ProposalStoreProtocol):
    """Directory of JSON documents, one per proposal.

    Attributes:
        directory: Where the proposal documents live.
    """

    def __init__(self, directory: Path | str) -> None:
        """Initialize the store.

        The directory is created lazily on the first write.

        Args:
            directory: Directory holding the proposal documents.
        """
        self.directory = Path(directory)
        self._lock = asyncio.Lock()

    def _path_for(self, proposal_id: str) -> Path | None:
        if not _SAFE_ID.match(proposal_id):
            return None
        return self.directory / f"{proposal_id}{DOCUMENT_SUFFIX}"

    def _read(self, path: Path) -> Proposal | None:
        try:
            document = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise StoreError(f"Failed to read proposal document {path}: {exc}") from exc
        try:
            return decode_proposal(document)
        except ValueError as exc:
            raise StoreError(f"Corrupt proposal document {path}: {exc}") from exc

    def _write(self, path: Path, proposal: Proposal) -> None:
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            atomic_write_text(path, encode_proposal(proposal))
        except OSError as exc:
            raise StoreError(f"Failed to write proposal document {path}: {exc}") from exc

    async def create(self, proposal: Proposal) -> Proposal:
        """Store a new proposal as record version 1.

        Raises:
            ProposalAlreadyExistsError: If a document with this ID exists.
            StoreError: If the ID is unusable or the write fails.
        """
        path = self._path_for(proposal.id)
        if path is None:
            raise StoreError(f"Invalid proposal ID for document store: {proposal.id!r}")

        async with self._lock:
            if await asyncio.to_thread(path.exists):
                raise ProposalAlreadyExistsError(proposal.id)
            stored = replace(proposal, record_version=1)
            await asyncio.to_thread(self._write, path, stored)

        logger.debug("proposal_document_created", proposal_id=proposal.id, path=str(path))
        return stored

    async def get(self, proposal_id: str) -> Proposal | None:
        """Load a proposal document, or None if there is none."""
        path = self._path_for(proposal_id)
        if path is None:
            return None
        return await asyncio.to_thread(self._read, path)

    async def update(self, proposal: Proposal, expected_version: int) -> Proposal:
        """Overwrite a proposal document if its version still matches.

        Raises:
            ProposalNotFoundError: If there is no document for the ID.
            ConcurrentModificationError: If the stored version differs.
            StoreError: If the read or write fails.
        """
        path = self._path_for(proposal.id)
        if path is None:
            raise ProposalNotFoundError(proposal.id)

        async with self._lock:
            current = await asyncio.to_thread(self._read, path)
            if current is None:
                raise ProposalNotFoundError(proposal.id)
            if current.record_version != expected_version:
                raise ConcurrentModificationError(
                    proposal_id=proposal.id,
                    expected_version=expected_version,
                    actual_version=current.record_version,
                )
            stored = replace(proposal, record_version=expected_version + 1)
            await asyncio.to_thread(self._write, path, stored)

        return stored

    async def list_proposals(
        self, status: ProposalStatus | None = None
    ) -> list[Proposal]:
        """List proposals, newest first.

        Documents that cannot be read or parsed are logged and skipped.
        """
        return await asyncio.to_thread(self._list_sync, status)

    def _list_sync(self, status: ProposalStatus | None) -> list[Proposal]:
        if not self.directory.is_dir():
            return []

        proposals: list[Proposal] = []
        for path in sorted(self.directory.glob(f"*{DOCUMENT_SUFFIX}")):
            try:
                proposal = self._read(path)
            except StoreError as exc:
                logger.warning(
                    "proposal_document_skipped",
                    path=str(path),
                    error=str(exc),
                )
                continue
            if proposal is None:
                continue
            if status is None or proposal.status == status:
                proposals.append(proposal)

        proposals.sort(key=lambda p: p.proposed_date, reverse=True)
        return proposals

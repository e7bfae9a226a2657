"""Unit tests for the JSON amendment history log."""

import json
from pathlib import Path

import pytest

from amendment_engine.domain.errors import StoreError
from amendment_engine.domain.models.amendment_history import (
    AmendmentHistoryEntry,
    FinalizationResult,
)
from amendment_engine.domain.services.vote_tally import tally
from amendment_engine.infrastructure.adapters.persistence import JsonAmendmentHistory
from tests.helpers.proposal_factory import BASE_TIME, make_vote


def _entry(proposal_id: str, result: FinalizationResult) -> AmendmentHistoryEntry:
    return AmendmentHistoryEntry(
        proposal_id=proposal_id,
        title="Clarify Voting Rules",
        result=result,
        voting_result=tally(
            [make_vote("core-team", weight=3)], quorum=1, threshold=50.0, title="Clarify"
        ),
        finalized_date=BASE_TIME,
    )


class TestJsonAmendmentHistory:
    """Tests for append() and list_entries()."""

    async def test_missing_file_is_empty(self, tmp_path: Path) -> None:
        history = JsonAmendmentHistory(tmp_path / "amendment-history.json")
        assert await history.list_entries() == []

    async def test_append_preserves_order(self, tmp_path: Path) -> None:
        path = tmp_path / "governance" / "amendment-history.json"
        history = JsonAmendmentHistory(path)
        first = _entry("amendment-a-0", FinalizationResult.APPROVED)
        second = _entry("amendment-b-0", FinalizationResult.REJECTED)

        await history.append(first)
        await history.append(second)

        assert await history.list_entries() == [first, second]
        raw = json.loads(path.read_text(encoding="utf-8"))
        assert [item["proposalId"] for item in raw] == ["amendment-a-0", "amendment-b-0"]
        assert raw[0]["votingResult"]["approvals"] == 3

    async def test_non_array_file_is_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "amendment-history.json"
        path.write_text('{"entries": []}', encoding="utf-8")
        history = JsonAmendmentHistory(path)

        with pytest.raises(StoreError):
            await history.list_entries()
        with pytest.raises(StoreError):
            await history.append(_entry("amendment-a-0", FinalizationResult.APPROVED))

    async def test_malformed_entry_is_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "amendment-history.json"
        path.write_text('[{"proposalId": "x"}]', encoding="utf-8")
        with pytest.raises(StoreError, match="Malformed"):
            await JsonAmendmentHistory(path).list_entries()

    async def test_second_entry_for_same_proposal_is_ignored(self, tmp_path: Path) -> None:
        path = tmp_path / "amendment-history.json"
        history = JsonAmendmentHistory(path)
        first = _entry("amendment-a-0", FinalizationResult.REJECTED)

        assert await history.append(first) is True
        assert await history.append(_entry("amendment-a-0", FinalizationResult.APPROVED)) is False

        assert await history.list_entries() == [first]
        assert len(json.loads(path.read_text(encoding="utf-8"))) == 1

    async def test_get_entry(self, tmp_path: Path) -> None:
        history = JsonAmendmentHistory(tmp_path / "amendment-history.json")
        entry = _entry("amendment-a-0", FinalizationResult.APPROVED)
        await history.append(entry)

        assert await history.get_entry("amendment-a-0") == entry
        assert await history.get_entry("amendment-b-0") is None

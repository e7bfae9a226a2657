"""Unit tests for proposal ID generation."""

from datetime import datetime, timezone

import pytest

from amendment_engine.domain.models.proposal_id import (
    epoch_millis,
    generate_proposal_id,
    slugify_title,
    to_base36,
)


class TestProposalId:
    """Tests for slug and timestamp parts of proposal IDs."""

    def test_slug_replaces_non_alphanumerics(self) -> None:
        assert slugify_title("Add Voting Rules!") == "add-voting-rules-"

    def test_slug_is_truncated(self) -> None:
        assert len(slugify_title("x" * 100)) == 30

    @pytest.mark.parametrize(("value", "expected"), [(0, "0"), (35, "z"), (36, "10")])
    def test_base36(self, value: int, expected: str) -> None:
        assert to_base36(value) == expected

    def test_negative_base36_rejected(self) -> None:
        with pytest.raises(ValueError):
            to_base36(-1)

    def test_generated_id(self) -> None:
        moment = datetime(2026, 1, 1, tzinfo=timezone.utc)
        proposal_id = generate_proposal_id("Clarify Voting Rules", epoch_millis(moment))
        assert proposal_id == f"amendment-clarify-voting-rules-{to_base36(1767225600000)}"

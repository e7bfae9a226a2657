"""Unit tests for the proposal document codec."""

import json
from datetime import timedelta

import pytest

from amendment_engine.domain.models.proposal import (
    ImplementationRecord,
    ProposalMetadata,
    ProposalStatus,
)
from amendment_engine.infrastructure.adapters.persistence.proposal_codec import (
    decode_proposal,
    encode_proposal,
    proposal_to_dict,
)
from tests.helpers.proposal_factory import BASE_TIME, make_proposal, make_vote


class TestProposalCodec:
    """Document layout and error handling."""

    def test_document_uses_camel_case_keys(self) -> None:
        document = proposal_to_dict(make_proposal(record_version=4))
        assert document["proposedDate"] == "2026-01-01T00:00:00+00:00"
        assert document["reviewPeriod"]["durationDays"] == 7
        assert document["voting"]["startDate"] is None
        assert document["recordVersion"] == 4
        assert document["status"] == "draft"

    def test_encoded_document_is_sorted_and_indented(self) -> None:
        text = encode_proposal(make_proposal())
        assert text.endswith("}\n")
        keys = list(json.loads(text))
        assert keys == sorted(keys)
        assert '\n  "comments"' in text

    def test_implementation_record_survives(self) -> None:
        record = ImplementationRecord(
            implemented_date=BASE_TIME + timedelta(days=20),
            implemented_by="democratic-process",
            version="1.1.0-beta",
            changes=("Update Article 5",),
        )
        proposal = make_proposal(
            status=ProposalStatus.IMPLEMENTED,
            votes=(make_vote("core-team", weight=3),),
            metadata=ProposalMetadata(implementation=record),
        )
        assert decode_proposal(encode_proposal(proposal)) == proposal

    def test_missing_key_is_value_error(self) -> None:
        with pytest.raises(ValueError, match="missing key"):
            decode_proposal('{"id": "amendment-x-0"}')

    def test_bad_enum_is_value_error(self) -> None:
        document = proposal_to_dict(make_proposal())
        document["status"] = "archived"
        with pytest.raises(ValueError):
            decode_proposal(json.dumps(document))

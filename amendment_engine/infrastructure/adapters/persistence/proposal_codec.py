"""Proposal document codec.

Converts Proposal values to and from the self-describing JSON document
stored per proposal. Keys are camelCase, dates are ISO-8601 strings and
votes and comments keep their insertion order.

Documents are rendered with sorted keys and two-space indentation, so
encoding a decoded document reproduces it byte for byte.
"""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any

from amendment_engine.domain.models.proposal import (
    Comment,
    CommentType,
    ImpactLevel,
    ImplementationRecord,
    Proposal,
    ProposalMetadata,
    ProposalStatus,
    ProposalType,
    ReviewPeriod,
    Revision,
    Vote,
    VoteDecision,
    VotingSession,
)


def _dt(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def _parse_dt(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value is not None else None


def _require_dt(value: str) -> datetime:
    return datetime.fromisoformat(value)


def vote_to_dict(vote: Vote) -> dict[str, Any]:
    return {
        "voter": vote.voter,
        "decision": vote.decision.value,
        "rationale": vote.rationale,
        "timestamp": _dt(vote.timestamp),
        "weight": vote.weight,
    }


def vote_from_dict(data: dict[str, Any]) -> Vote:
    return Vote(
        voter=data["voter"],
        decision=VoteDecision(data["decision"]),
        rationale=data.get("rationale"),
        timestamp=_require_dt(data["timestamp"]),
        weight=int(data["weight"]),
    )


def comment_to_dict(comment: Comment) -> dict[str, Any]:
    return {
        "id": comment.id,
        "author": comment.author,
        "content": comment.content,
        "timestamp": _dt(comment.timestamp),
        "type": comment.type.value,
        "resolved": comment.resolved,
        "replies": [comment_to_dict(r) for r in comment.replies],
    }


def comment_from_dict(data: dict[str, Any]) -> Comment:
    return Comment(
        id=data["id"],
        author=data["author"],
        content=data["content"],
        timestamp=_require_dt(data["timestamp"]),
        type=CommentType(data["type"]),
        resolved=bool(data.get("resolved", False)),
        replies=tuple(comment_from_dict(r) for r in data.get("replies", [])),
    )


def _implementation_to_dict(record: ImplementationRecord | None) -> dict[str, Any] | None:
    if record is None:
        return None
    return {
        "implementedDate": _dt(record.implemented_date),
        "implementedBy": record.implemented_by,
        "version": record.version,
        "changes": list(record.changes),
    }


def _implementation_from_dict(data: dict[str, Any] | None) -> ImplementationRecord | None:
    if data is None:
        return None
    return ImplementationRecord(
        implemented_date=_require_dt(data["implementedDate"]),
        implemented_by=data["implementedBy"],
        version=data["version"],
        changes=tuple(data.get("changes", [])),
    )


def proposal_to_dict(proposal: Proposal) -> dict[str, Any]:
    """Convert a proposal to its document form."""
    return {
        "id": proposal.id,
        "title": proposal.title,
        "description": proposal.description,
        "proposer": proposal.proposer,
        "proposedDate": _dt(proposal.proposed_date),
        "status": proposal.status.value,
        "type": proposal.type.value,
        "impact": proposal.impact.value,
        "version": proposal.version,
        "currentText": proposal.current_text,
        "proposedText": proposal.proposed_text,
        "rationale": proposal.rationale,
        "implementationPlan": list(proposal.implementation_plan),
        "migrationGuide": list(proposal.migration_guide),
        "reviewPeriod": {
            "startDate": _dt(proposal.review_period.start_date),
            "endDate": _dt(proposal.review_period.end_date),
            "durationDays": proposal.review_period.duration_days,
        },
        "voting": {
            "startDate": _dt(proposal.voting.start_date),
            "endDate": _dt(proposal.voting.end_date),
            "votes": [vote_to_dict(v) for v in proposal.voting.votes],
            "quorum": proposal.voting.quorum,
            "threshold": proposal.voting.threshold,
        },
        "comments": [comment_to_dict(c) for c in proposal.comments],
        "revisions": [
            {
                "version": r.version,
                "changes": r.changes,
                "timestamp": _dt(r.timestamp),
                "reason": r.reason,
            }
            for r in proposal.revisions
        ],
        "supporters": list(proposal.supporters),
        "metadata": {
            "relatedArticles": list(proposal.metadata.related_articles),
            "affectedFiles": list(proposal.metadata.affected_files),
            "testingRequired": proposal.metadata.testing_required,
            "communityDiscussionUrl": proposal.metadata.community_discussion_url,
            "precedents": list(proposal.metadata.precedents),
            "implementation": _implementation_to_dict(proposal.metadata.implementation),
        },
        "recordVersion": proposal.record_version,
    }


def proposal_from_dict(data: dict[str, Any]) -> Proposal:
    """Rebuild a proposal from its document form.

    Raises:
        KeyError: If a required key is missing.
        ValueError: If an enum value or date is malformed.
    """
    review = data["reviewPeriod"]
    voting = data["voting"]
    metadata = data.get("metadata", {})
    return Proposal(
        id=data["id"],
        title=data["title"],
        description=data["description"],
        proposer=data["proposer"],
        proposed_date=_require_dt(data["proposedDate"]),
        status=ProposalStatus(data["status"]),
        type=ProposalType(data["type"]),
        impact=ImpactLevel(data["impact"]),
        version=data["version"],
        current_text=data.get("currentText"),
        proposed_text=data["proposedText"],
        rationale=data["rationale"],
        implementation_plan=tuple(data.get("implementationPlan", [])),
        migration_guide=tuple(data.get("migrationGuide", [])),
        review_period=ReviewPeriod(
            start_date=_require_dt(review["startDate"]),
            end_date=_require_dt(review["endDate"]),
            duration_days=int(review["durationDays"]),
        ),
        voting=VotingSession(
            start_date=_parse_dt(voting.get("startDate")),
            end_date=_parse_dt(voting.get("endDate")),
            votes=tuple(vote_from_dict(v) for v in voting.get("votes", [])),
            quorum=int(voting["quorum"]),
            threshold=float(voting["threshold"]),
        ),
        comments=tuple(comment_from_dict(c) for c in data.get("comments", [])),
        revisions=tuple(
            Revision(
                version=int(r["version"]),
                changes=r["changes"],
                timestamp=_require_dt(r["timestamp"]),
                reason=r["reason"],
            )
            for r in data.get("revisions", [])
        ),
        supporters=tuple(data.get("supporters", [])),
        metadata=ProposalMetadata(
            related_articles=tuple(metadata.get("relatedArticles", [])),
            affected_files=tuple(metadata.get("affectedFiles", [])),
            testing_required=bool(metadata.get("testingRequired", False)),
            community_discussion_url=metadata.get("communityDiscussionUrl"),
            precedents=tuple(metadata.get("precedents", [])),
            implementation=_implementation_from_dict(metadata.get("implementation")),
        ),
        record_version=int(data.get("recordVersion", 0)),
    )


def encode_proposal(proposal: Proposal) -> str:
    """Render a proposal as a canonical JSON document."""
    return json.dumps(proposal_to_dict(proposal), indent=2, sort_keys=True) + "\n"


def decode_proposal(document: str) -> Proposal:
    """Parse a JSON document into a proposal.

    Raises:
        ValueError: If the document is not valid JSON or not a proposal.
    """
    try:
        return proposal_from_dict(json.loads(document))
    except KeyError as exc:
        raise ValueError(f"Proposal document missing key: {exc}") from exc

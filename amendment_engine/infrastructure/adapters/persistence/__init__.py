"""File-backed persistence adapters (JSON documents)."""

from amendment_engine.infrastructure.adapters.persistence.json_amendment_history import (
    JsonAmendmentHistory,
)
from amendment_engine.infrastructure.adapters.persistence.json_proposal_store import (
    JsonProposalStore,
)

__all__: list[str] = ["JsonAmendmentHistory", "JsonProposalStore"]

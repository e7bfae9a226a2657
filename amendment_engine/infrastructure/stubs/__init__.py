"""In-memory stubs of the amendment engine ports (testing and development)."""

from amendment_engine.infrastructure.stubs.amendment_history_stub import (
    AmendmentHistoryStub,
)
from amendment_engine.infrastructure.stubs.notifier_stub import NotifierStub
from amendment_engine.infrastructure.stubs.proposal_store_stub import ProposalStoreStub

__all__: list[str] = [
    "AmendmentHistoryStub",
    "NotifierStub",
    "ProposalStoreStub",
]

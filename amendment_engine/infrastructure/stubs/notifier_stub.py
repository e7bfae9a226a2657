"""Notifier stub that records notifications for assertions."""

from __future__ import annotations

from amendment_engine.application.ports.notifier import NotifierProtocol
from amendment_engine.domain.models.proposal import Proposal


class NotifierStub(NotifierProtocol):
    """Records (proposal_id, event_name) pairs in call order.

    Attributes:
        notifications: Recorded (proposal_id, event_name) pairs.
        fail_with: If set, notify() records the call and then raises it.
    """

    def __init__(self, fail_with: Exception | None = None) -> None:
        self.notifications: list[tuple[str, str]] = []
        self.fail_with = fail_with

    async def notify(self, proposal: Proposal, event_name: str) -> None:
        self.notifications.append((proposal.id, event_name))
        if self.fail_with is not None:
            raise self.fail_with

    def events_for(self, proposal_id: str) -> list[str]:
        """Event names recorded for one proposal."""
        return [event for pid, event in self.notifications if pid == proposal_id]

    def clear(self) -> None:
        self.notifications.clear()

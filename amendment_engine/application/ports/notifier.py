"""Notifier port for workflow lifecycle events.

The workflow calls notify() after a transition has been persisted. The
engine has no expectation about delivery or retries; what a notifier does
with the event is up to the implementation.
"""

from __future__ import annotations

from typing import Protocol

from amendment_engine.domain.models.proposal import Proposal

REVIEW_STARTED: str = "review-started"
VOTING_STARTED: str = "voting-started"
VOTING_COMPLETED: str = "voting-completed"


class NotifierProtocol(Protocol):
    """Port for publishing proposal lifecycle notifications."""

    async def notify(self, proposal: Proposal, event_name: str) -> None:
        """Publish a notification for a proposal event.

        Args:
            proposal: The proposal after the transition.
            event_name: review-started, voting-started or voting-completed.
        """
        ...

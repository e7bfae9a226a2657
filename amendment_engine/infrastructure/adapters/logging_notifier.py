"""Notifier that records lifecycle notifications in the structured log."""

from __future__ import annotations

from structlog import get_logger

from amendment_engine.application.ports.notifier import NotifierProtocol
from amendment_engine.domain.models.proposal import Proposal

logger = get_logger()


class LoggingNotifier(NotifierProtocol):
    """Default notifier: emits a community_notification log entry per event."""

    async def notify(self, proposal: Proposal, event_name: str) -> None:
        logger.bind(proposal_id=proposal.id).info(
            "community_notification",
            notification_event=event_name,
            title=proposal.title,
            status=proposal.status.value,
        )

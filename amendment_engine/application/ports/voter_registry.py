"""Voter registry port.

Maps a voter identity to eligibility and voting weight. The workflow only
depends on this interface, so the reference eligibility heuristic can be
swapped for a real membership check without touching the workflow.
"""

from __future__ import annotations

from typing import Protocol


class VoterRegistryProtocol(Protocol):
    """Protocol for voter eligibility and weighting."""

    def is_eligible(self, voter_id: str) -> bool:
        """Check whether the identity may vote.

        Args:
            voter_id: Voter identity.

        Returns:
            True if the voter may cast a vote.
        """
        ...

    def weight_of(self, voter_id: str) -> int:
        """Get the voting weight of an identity.

        Args:
            voter_id: Voter identity.

        Returns:
            Positive integer weight. Eligible but unregistered voters weigh 1.
        """
        ...

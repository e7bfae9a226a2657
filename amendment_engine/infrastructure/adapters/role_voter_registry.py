"""Role-based voter registry.

Reference voting policy:
- Registered voters carry the fixed weight of their role:
  maintainer = 3, contributor = 2, community = 1
- Unregistered identities are eligible when they look like an email
  address (contain "@") or are longer than 3 characters, with weight 1

The eligibility heuristic lives only here and can be
replaced by a real membership check behind VoterRegistryProtocol.

Roster file format (JSON object, voter id -> role):
    {"core-team": "maintainer", "alice@example.org": "contributor"}
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from enum import Enum
from pathlib import Path

from structlog import get_logger

from amendment_engine.application.ports.voter_registry import VoterRegistryProtocol

logger = get_logger()

UNREGISTERED_WEIGHT: int = 1
MIN_UNREGISTERED_ID_LENGTH: int = 4


class VoterRole(Enum):
    """Voter roles and their fixed weights."""

    MAINTAINER = "maintainer"
    CONTRIBUTOR = "contributor"
    COMMUNITY = "community"

    @property
    def weight(self) -> int:
        """Voting weight carried by this role."""
        return ROLE_WEIGHTS[self]


ROLE_WEIGHTS: dict[VoterRole, int] = {
    VoterRole.MAINTAINER: 3,
    VoterRole.CONTRIBUTOR: 2,
    VoterRole.COMMUNITY: 1,
}

# Identities every registry starts with
DEFAULT_ROSTER: dict[str, VoterRole] = {
    "core-team": VoterRole.MAINTAINER,
    "contributor": VoterRole.CONTRIBUTOR,
    "community": VoterRole.COMMUNITY,
}


class RoleVoterRegistry(VoterRegistryProtocol):
    """Voter registry mapping identities to roles.

    Example:
        >>> registry = RoleVoterRegistry({"maintainer": VoterRole.MAINTAINER})
        >>> registry.weight_of("maintainer")
        3
        >>> registry.weight_of("someone@example.org")
        1
    """

    def __init__(
        self,
        roster: Mapping[str, VoterRole] | None = None,
        *,
        include_defaults: bool = True,
    ) -> None:
        """Initialize the registry.

        Args:
            roster: Voter id -> role assignments.
            include_defaults: Seed DEFAULT_ROSTER before applying roster.
        """
        self._roles: dict[str, VoterRole] = dict(DEFAULT_ROSTER) if include_defaults else {}
        if roster:
            self._roles.update(roster)

    @classmethod
    def from_file(cls, path: Path | str, *, include_defaults: bool = True) -> RoleVoterRegistry:
        """Load a roster from a JSON file.

        Raises:
            OSError: If the file cannot be read.
            ValueError: If the file is not a JSON object of known roles.
        """
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
        if not isinstance(raw, dict):
            raise ValueError(f"Voter roster {path} must be a JSON object")
        roster = {str(voter): VoterRole(role) for voter, role in raw.items()}
        logger.info("voter_roster_loaded", path=str(path), voters=len(roster))
        return cls(roster, include_defaults=include_defaults)

    def register(self, voter_id: str, role: VoterRole) -> None:
        """Assign (or reassign) a role to a voter."""
        self._roles[voter_id] = role

    def role_of(self, voter_id: str) -> VoterRole | None:
        """Get the registered role of a voter, if any."""
        return self._roles.get(voter_id)

    def is_eligible(self, voter_id: str) -> bool:
        """Registered voters, email-like ids and ids longer than 3 chars are eligible."""
        return (
            voter_id in self._roles
            or "@" in voter_id
            or len(voter_id) >= MIN_UNREGISTERED_ID_LENGTH
        )

    def weight_of(self, voter_id: str) -> int:
        """Role weight for registered voters, 1 otherwise."""
        role = self._roles.get(voter_id)
        return role.weight if role is not None else UNREGISTERED_WEIGHT

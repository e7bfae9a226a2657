"""Production adapters for the amendment engine ports."""

from amendment_engine.infrastructure.adapters.logging_notifier import LoggingNotifier
from amendment_engine.infrastructure.adapters.role_voter_registry import (
    RoleVoterRegistry,
    VoterRole,
)
from amendment_engine.infrastructure.adapters.system_time_authority import (
    SystemTimeAuthority,
)

__all__: list[str] = [
    "LoggingNotifier",
    "RoleVoterRegistry",
    "SystemTimeAuthority",
    "VoterRole",
]

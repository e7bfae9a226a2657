"""System clock implementation of TimeAuthorityProtocol."""

from datetime import datetime, timezone

from amendment_engine.application.ports.time_authority import TimeAuthorityProtocol


class SystemTimeAuthority(TimeAuthorityProtocol):
    """Production time authority backed by the system clock (UTC)."""

    def now(self) -> datetime:
        """Return current UTC time."""
        return datetime.now(timezone.utc)

    def utcnow(self) -> datetime:
        """Return current UTC time."""
        return datetime.now(timezone.utc)

"""Time Authority Protocol - interface for consistent timestamp provisioning.

Every time-gated guard of the workflow (review elapsed, voting open,
voting elapsed) reads the clock through this port. Services MUST inject a
TimeAuthorityProtocol implementation instead of calling datetime.now().

Benefits:
1. **Testability**: Tests inject FakeTimeAuthority for deterministic guards
2. **Consistency**: All timestamps on a proposal come from one source
"""

from abc import ABC, abstractmethod
from datetime import datetime


class TimeAuthorityProtocol(ABC):
    """Abstract interface for time authority.

    For production:
        Use SystemTimeAuthority from amendment_engine/infrastructure/adapters/

    For testing:
        Use FakeTimeAuthority from tests/helpers/fake_time_authority.py
    """

    @abstractmethod
    def now(self) -> datetime:
        """Return current time with timezone awareness.

        Note:
            Implementations should return timezone-aware datetimes in UTC.
        """
        ...

    @abstractmethod
    def utcnow(self) -> datetime:
        """Return current UTC time (timezone-aware)."""
        ...

"""FakeTimeAuthority - Controllable time authority for deterministic tests.

Every time-gated workflow guard (review elapsed, voting open, voting
elapsed) reads the clock through TimeAuthorityProtocol. Tests inject this
fake and move time explicitly instead of sleeping.

Usage:
    def test_start_voting_after_review(fake_time_authority, workflow):
        ...
        fake_time_authority.advance(delta=timedelta(days=7))
        await workflow.start_voting(proposal.id)
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from amendment_engine.application.ports.time_authority import TimeAuthorityProtocol

DEFAULT_FROZEN_AT = datetime(2026, 1, 1, 0, 0, 0, tzinfo=timezone.utc)


class FakeTimeAuthority(TimeAuthorityProtocol):
    """Controllable time authority for deterministic tests.

    Time never moves on its own; use advance() or set_time().
    Naive datetimes are treated as UTC.
    """

    def __init__(self, frozen_at: datetime | None = None) -> None:
        """Initialize the fake time authority.

        Args:
            frozen_at: Time to freeze at. Defaults to 2026-01-01T00:00:00 UTC.
        """
        self._current_time: datetime = _aware(frozen_at or DEFAULT_FROZEN_AT)

    def now(self) -> datetime:
        return self._current_time

    def utcnow(self) -> datetime:
        return self._current_time

    def advance(
        self,
        seconds: float | int | None = None,
        delta: timedelta | None = None,
    ) -> None:
        """Advance time by the specified amount.

        Args:
            seconds: Number of seconds to advance.
            delta: A timedelta to advance by. Takes precedence over seconds.

        Raises:
            ValueError: If neither is given, or the amount is negative.
        """
        if delta is not None:
            step = delta
        elif seconds is not None:
            step = timedelta(seconds=float(seconds))
        else:
            raise ValueError("Must provide either 'seconds' or 'delta' argument")

        if step < timedelta(0):
            raise ValueError(
                f"Cannot advance time backwards. Got {step.total_seconds()} seconds. "
                "Use set_time() for explicit time changes."
            )
        self._current_time += step

    def set_time(self, dt: datetime) -> None:
        """Jump to an explicit time (may go backwards)."""
        self._current_time = _aware(dt)

    def reset(self, to: datetime | None = None) -> None:
        """Reset to the given time or the default."""
        self._current_time = _aware(to or DEFAULT_FROZEN_AT)

    @property
    def current_time(self) -> datetime:
        """The current controlled time."""
        return self._current_time

    def __repr__(self) -> str:
        return f"FakeTimeAuthority(current_time={self._current_time.isoformat()})"


def _aware(dt: datetime) -> datetime:
    return dt if dt.tzinfo is not None else dt.replace(tzinfo=timezone.utc)

"""
Clock -- Injectable time source.

Responsibility:
    Domain and service code never call ``datetime.now()`` or
    ``date.today()`` directly.  The submission date window, claim
    timestamps, decision timestamps and activity log cut-offs all read
    from an injected Clock.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O (except SystemClock,
    which is the one sanctioned I/O boundary for time).
"""

from abc import ABC, abstractmethod
from datetime import date, datetime, timedelta, timezone, tzinfo


class Clock(ABC):
    """
    Abstract clock interface.

    Guarantees:
        - ``now()`` returns a timezone-aware ``datetime``.
        - ``today(tz)`` is the calendar date of ``now()`` in ``tz``.
    """

    @abstractmethod
    def now(self) -> datetime:
        """Get the current time."""
        ...

    def today(self, tz: tzinfo | None = None) -> date:
        """Calendar date of ``now()`` as seen in ``tz`` (UTC when omitted)."""
        return self.now().astimezone(tz or timezone.utc).date()


class SystemClock(Clock):
    """Production clock backed by the system time, in UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class DeterministicClock(Clock):
    """
    Test clock pinned to a fixed instant.

    ``now()`` returns the same value on repeated calls until ``advance()``
    moves it forward.
    """

    def __init__(self, fixed_time: datetime | None = None):
        self._fixed_time = fixed_time or datetime(
            2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc
        )
        self._advance_seconds = 0

    def now(self) -> datetime:
        return self._fixed_time + timedelta(seconds=self._advance_seconds)

    def advance(self, seconds: int = 1) -> None:
        """Move the clock forward by ``seconds``."""
        self._advance_seconds += seconds

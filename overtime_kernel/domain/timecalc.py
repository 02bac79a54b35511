"""
Time & calendar utilities (``overtime_kernel.domain.timecalc``).

Responsibility
--------------
Pure functions for parsing clock times, computing session durations
across day boundaries, rounding hour quantities, and deriving the
"YYYY-MM" month key used to group claims and summaries.

Architecture position
---------------------
**Kernel domain layer** -- stateless, no clock, no I/O.

Invariants enforced
-------------------
* Hour quantities are ``Decimal`` rounded half-up to two places.
* ``compute_duration_hours`` always returns a value in ``[0, 24)``.

Failure modes
-------------
* Malformed "HH:MM[:SS]" text -> ``FormatError``.
* Malformed month key -> ``FormatError``.
"""

from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta
from decimal import ROUND_HALF_UP, Decimal

from overtime_kernel.exceptions import FormatError

HOURS_QUANTUM = Decimal("0.01")
SECONDS_PER_HOUR = Decimal(3600)
SECONDS_PER_DAY = 24 * 3600

_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2}))?$")
_MONTH_KEY_RE = re.compile(r"^(\d{4})-(\d{2})$")


def quantize_hours(value: Decimal | int | str) -> Decimal:
    """Round an hour (or day) quantity half-up to two decimal places."""
    return Decimal(value).quantize(HOURS_QUANTUM, rounding=ROUND_HALF_UP)


def parse_time_of_day(value: str | time) -> time:
    """
    Parse "HH:MM" or "HH:MM:SS" into a ``datetime.time``.

    Already-parsed ``time`` values pass through unchanged.

    Raises:
        FormatError: If the text is not a valid 24-hour clock time.
    """
    if isinstance(value, time):
        return value
    if not isinstance(value, str):
        raise FormatError("time", value, "expected 'HH:MM' or 'HH:MM:SS'")

    match = _TIME_RE.match(value.strip())
    if match is None:
        raise FormatError("time", value, "expected 'HH:MM' or 'HH:MM:SS'")

    hour, minute = int(match.group(1)), int(match.group(2))
    second = int(match.group(3) or 0)
    if hour > 23 or minute > 59 or second > 59:
        raise FormatError("time", value, "clock field out of range")
    return time(hour, minute, second)


def parse_date(value: str | date) -> date:
    """Parse an ISO "YYYY-MM-DD" date. ``date`` values pass through."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError:
        raise FormatError("date", value, "expected 'YYYY-MM-DD'") from None


def combine_date_and_time(day: date, clock_time: time) -> datetime:
    """Single naive local instant from a calendar day and a clock time."""
    return datetime.combine(day, clock_time)


def _seconds_of_day(clock_time: time) -> int:
    return clock_time.hour * 3600 + clock_time.minute * 60 + clock_time.second


def compute_duration_hours(start: time, end: time) -> Decimal:
    """
    Hours from ``start`` to ``end``, wrapping past midnight.

    A negative difference means the session crosses midnight, so one day
    is added: 22:00 -> 02:00 is 4.00 hours.  Equal times yield 0.00.
    """
    seconds = _seconds_of_day(end) - _seconds_of_day(start)
    if seconds < 0:
        seconds += SECONDS_PER_DAY
    return quantize_hours(Decimal(seconds) / SECONDS_PER_HOUR)


def hours_between(earlier: datetime, later: datetime) -> Decimal:
    """Elapsed hours between two instants, rounded to two places."""
    seconds = Decimal(str((later - earlier).total_seconds()))
    return quantize_hours(seconds / SECONDS_PER_HOUR)


def month_key(day: date) -> str:
    """Zero-padded "YYYY-MM" grouping key."""
    return f"{day.year:04d}-{day.month:02d}"


def parse_month_key(key: str) -> tuple[int, int]:
    """Split "YYYY-MM" into ``(year, month)``."""
    match = _MONTH_KEY_RE.match(key or "")
    if match is None:
        raise FormatError("month_key", key, "expected 'YYYY-MM'")
    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        raise FormatError("month_key", key, "month out of range")
    return year, month


def month_bounds(key: str) -> tuple[date, date]:
    """First day of the month and first day of the following month."""
    year, month = parse_month_key(key)
    first = date(year, month, 1)
    if month == 12:
        return first, date(year + 1, 1, 1)
    return first, date(year, month + 1, 1)


def first_day_of_previous_month(day: date) -> date:
    """Earliest OT date accepted when ``day`` is today."""
    first_of_month = day.replace(day=1)
    return (first_of_month - timedelta(days=1)).replace(day=1)

"""
OT hours calculator (``overtime_kernel.domain.hours``).

Responsibility
--------------
Converts a start/end clock pair plus a holiday flag into base hours,
multiplier, and credited hours; converts credited hours into leave days.

Architecture position
---------------------
**Kernel domain layer** -- pure functions.  Called by the application
validator, the draft path, and the summary fold.

Invariants enforced
-------------------
* ``total_hours == base_hours * multiplier`` (rounded to 0.01).
* ``multiplier`` is 1 on ordinary days and the configured public
  holiday multiplier on holidays.
* ``0 < base_hours <= max_hours_per_session``.

Failure modes
-------------
* ``SessionTooLongError`` when base hours exceed the session cap.
* ``ZeroDurationError`` when start and end coincide.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from decimal import Decimal

from overtime_kernel.domain.config import OvertimeConfig
from overtime_kernel.domain.timecalc import compute_duration_hours, quantize_hours
from overtime_kernel.exceptions import SessionTooLongError, ZeroDurationError


@dataclass(frozen=True)
class OTHours:
    """Result of an hours calculation."""

    base_hours: Decimal
    multiplier: int
    total_hours: Decimal


def calculate_ot_hours(
    start: time,
    end: time,
    is_holiday: bool,
    config: OvertimeConfig,
) -> OTHours:
    """
    Calculate credited OT hours for one session.

    Preconditions:
        - ``start`` and ``end`` are clock times; ``end`` before ``start``
          is read as an overnight session.
    Postconditions:
        - ``total_hours == base_hours * multiplier``.
    Raises:
        SessionTooLongError: If base hours exceed ``max_hours_per_session``.
        ZeroDurationError: If base hours are zero.
    """
    base_hours = compute_duration_hours(start, end)
    if base_hours > config.max_hours_per_session:
        raise SessionTooLongError(base_hours, quantize_hours(config.max_hours_per_session))
    if base_hours <= 0:
        raise ZeroDurationError(base_hours)

    multiplier = config.public_holiday_multiplier if is_holiday else 1
    return OTHours(
        base_hours=base_hours,
        multiplier=multiplier,
        total_hours=quantize_hours(base_hours * multiplier),
    )


def hours_to_leave_days(hours: Decimal, config: OvertimeConfig) -> Decimal:
    """12 hours -> 2.00 days, 4 hours -> 0.67 days with the default divisor."""
    return quantize_hours(Decimal(hours) / Decimal(config.hours_per_leave_day))


def leave_days_to_hours(days: Decimal, config: OvertimeConfig) -> Decimal:
    """Inverse of ``hours_to_leave_days``, up to rounding."""
    return quantize_hours(Decimal(days) * Decimal(config.hours_per_leave_day))

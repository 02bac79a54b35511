"""
Rest-gap search (``overtime_kernel.domain.rest_gap``).

Finds the closest qualifying predecessor clock-out for a proposed OT
start: the latest clock-out instant that is strictly before the start.
This is the maximum of a filtered set, not the chronologically last
attendance row.  No predecessor means the policy data is absent, which
is reported as an invalid gap of zero hours rather than a pass.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from overtime_kernel.domain.claims import AttendanceRecord
from overtime_kernel.domain.config import OvertimeConfig
from overtime_kernel.domain.timecalc import hours_between


@dataclass(frozen=True)
class RestGapResult:
    """Rest between the last clock-out and the OT start."""

    valid: bool
    gap_hours: Decimal
    last_clock_out: datetime | None

    @property
    def has_record(self) -> bool:
        return self.last_clock_out is not None


def latest_clock_out_before(
    records: Iterable[AttendanceRecord],
    ot_start: datetime,
) -> datetime | None:
    """Latest non-empty clock-out strictly before ``ot_start``."""
    candidates = [
        out
        for out in (r.clock_out_at for r in records)
        if out is not None and out < ot_start
    ]
    return max(candidates, default=None)


def evaluate_rest_gap(
    records: Iterable[AttendanceRecord],
    ot_start: datetime,
    config: OvertimeConfig,
) -> RestGapResult:
    last_clock_out = latest_clock_out_before(records, ot_start)
    if last_clock_out is None:
        return RestGapResult(valid=False, gap_hours=Decimal("0.00"), last_clock_out=None)

    gap_hours = hours_between(last_clock_out, ot_start)
    return RestGapResult(
        valid=gap_hours >= config.min_rest_gap_hours,
        gap_hours=gap_hours,
        last_clock_out=last_clock_out,
    )

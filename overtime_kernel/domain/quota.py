"""
Monthly quota classification (``overtime_kernel.domain.quota``).

Pure half of the quota engine: given already-approved hours and a
prospective addition, decide allow / warn / block.  The service half
(``overtime_kernel.services.quota_service``) sums approved hours from the
claim store.

Rules (``projected = current + additional``):

    projected >  max_ot_hours        -> can_apply=False, RED   (hard block)
    projected >= warning_threshold   -> can_apply=True,  AMBER (soft warning)
    otherwise                        -> can_apply=True,  GREEN

So exactly 104.00 projected hours is allowed (Amber) and 104.01 is blocked.
Summaries use ``summary_status`` instead, which is Red at >= max.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from overtime_kernel.domain.claims import TrafficLight
from overtime_kernel.domain.config import OvertimeConfig
from overtime_kernel.domain.timecalc import quantize_hours


@dataclass(frozen=True)
class QuotaCheck:
    """Outcome of a quota check for one staff member and month."""

    staff_id: str
    month_key: str
    can_apply: bool
    status: TrafficLight
    current_hours: Decimal
    projected_hours: Decimal
    remaining_hours: Decimal
    max_hours: Decimal

    @property
    def is_blocked(self) -> bool:
        return not self.can_apply

    @property
    def message(self) -> str | None:
        if self.status is TrafficLight.RED:
            return (
                f"Monthly OT limit of {self.max_hours} hours would be exceeded: "
                f"projected {self.projected_hours} hours "
                f"({self.current_hours} already approved)"
            )
        if self.status is TrafficLight.AMBER:
            return (
                f"Approaching monthly OT limit: projected {self.projected_hours} "
                f"of {self.max_hours} hours ({self.remaining_hours} remaining)"
            )
        return None


def classify_quota(
    staff_id: str,
    month_key: str,
    current_hours: Decimal,
    additional_hours: Decimal,
    config: OvertimeConfig,
) -> QuotaCheck:
    """Classify a prospective addition against the monthly cap."""
    current = quantize_hours(current_hours)
    projected = quantize_hours(current + Decimal(additional_hours))
    max_hours = quantize_hours(config.max_ot_hours)

    if projected > max_hours:
        can_apply, status = False, TrafficLight.RED
    elif projected >= config.warning_threshold:
        can_apply, status = True, TrafficLight.AMBER
    else:
        can_apply, status = True, TrafficLight.GREEN

    return QuotaCheck(
        staff_id=staff_id,
        month_key=month_key,
        can_apply=can_apply,
        status=status,
        current_hours=current,
        projected_hours=projected,
        remaining_hours=quantize_hours(max(max_hours - projected, Decimal("0"))),
        max_hours=max_hours,
    )


def summary_status(total_hours: Decimal, config: OvertimeConfig) -> TrafficLight:
    """Traffic light for an already-approved total."""
    if total_hours >= config.max_ot_hours:
        return TrafficLight.RED
    if total_hours >= config.warning_threshold:
        return TrafficLight.AMBER
    return TrafficLight.GREEN

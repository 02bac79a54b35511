"""
Monthly summary fold (``overtime_kernel.domain.summary``).

Folds the Approved claims of one staff member and month into a
``MonthlySummary``.  Non-approved claims passed in are ignored, so the
result is always recomputable from the approved set alone.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from decimal import Decimal

from overtime_kernel.domain.claims import (
    ClaimStatus,
    ClaimType,
    MonthlySummary,
    OTClaim,
)
from overtime_kernel.domain.config import OvertimeConfig
from overtime_kernel.domain.hours import hours_to_leave_days
from overtime_kernel.domain.quota import summary_status
from overtime_kernel.domain.timecalc import month_key as to_month_key
from overtime_kernel.domain.timecalc import quantize_hours


def fold_monthly_summary(
    staff_id: str,
    month_key: str,
    claims: Iterable[OTClaim],
    config: OvertimeConfig,
    recalculated_at: datetime | None = None,
) -> MonthlySummary:
    money = Decimal("0")
    leave = Decimal("0")
    count = 0
    for claim in claims:
        if (
            claim.status is not ClaimStatus.APPROVED
            or claim.staff_id != staff_id
            or to_month_key(claim.ot_date) != month_key
        ):
            continue
        count += 1
        if claim.claim_type is ClaimType.LEAVE:
            leave += claim.total_hours
        else:
            money += claim.total_hours

    total = quantize_hours(money + leave)
    return MonthlySummary(
        staff_id=staff_id,
        month_key=month_key,
        total_ot_hours=total,
        money_claim_hours=quantize_hours(money),
        leave_claim_hours=quantize_hours(leave),
        leave_days_earned=hours_to_leave_days(leave, config),
        status=summary_status(total, config),
        approved_claim_count=count,
        recalculated_at=recalculated_at,
    )

"""
MonthlyQuotaEngine -- rolling monthly cap on approved OT hours.

Responsibility:
    Sums a staff member's Approved hours for a month and classifies a
    prospective addition as allow (Green), warn (Amber) or block (Red).

Usage:
    Called before submission with the new claim's credited hours, and
    again at approval time with the claim's own hours, because other
    claims may have been approved in between.
"""

from __future__ import annotations

from decimal import Decimal

from overtime_kernel.domain.claims import ClaimFilter, ClaimStatus
from overtime_kernel.domain.config import OvertimeConfig
from overtime_kernel.domain.quota import QuotaCheck, classify_quota
from overtime_kernel.domain.timecalc import quantize_hours
from overtime_kernel.logging_config import get_logger
from overtime_kernel.ports import ClaimStore

logger = get_logger("services.quota")


class MonthlyQuotaEngine:
    def __init__(self, claims: ClaimStore, config: OvertimeConfig) -> None:
        self._claims = claims
        self._config = config

    def approved_hours(self, staff_id: str, month_key: str) -> Decimal:
        approved = self._claims.list_claims(
            ClaimFilter(
                staff_id=staff_id,
                month_key=month_key,
                statuses=(ClaimStatus.APPROVED,),
            )
        )
        return quantize_hours(sum((c.total_hours for c in approved), Decimal("0")))

    def check_ot_limit(
        self,
        staff_id: str,
        additional_hours: Decimal,
        month_key: str,
    ) -> QuotaCheck:
        check = classify_quota(
            staff_id,
            month_key,
            self.approved_hours(staff_id, month_key),
            additional_hours,
            self._config,
        )
        if check.is_blocked:
            logger.info(
                "ot_quota_blocked",
                extra={
                    "staff_id": staff_id,
                    "month_key": month_key,
                    "projected_hours": check.projected_hours,
                    "max_hours": check.max_hours,
                },
            )
        return check

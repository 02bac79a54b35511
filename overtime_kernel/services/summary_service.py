"""
MonthlySummaryAggregator -- per-staff monthly roll-up of approved OT.

Responsibility:
    Folds Approved claims into ``MonthlySummary`` rows and upserts them
    into the summary store.  The summary is a cache; the approved claims
    are the source of truth and a recompute always overwrites.

Architecture position:
    Kernel > Services.  Triggered by approvals and by the operator's
    bulk recalculation.  Rejections never trigger it.
"""

from __future__ import annotations

from overtime_kernel.domain.claims import (
    ActivityAction,
    ClaimFilter,
    ClaimStatus,
    MonthlySummary,
)
from overtime_kernel.domain.clock import Clock, SystemClock
from overtime_kernel.domain.config import OvertimeConfig
from overtime_kernel.domain.summary import fold_monthly_summary
from overtime_kernel.domain.timecalc import parse_month_key
from overtime_kernel.logging_config import get_logger
from overtime_kernel.ports import AuditLog, ClaimStore, SummaryStore
from overtime_kernel.services.side_effects import best_effort

logger = get_logger("services.summary")

SYSTEM_ACTOR = "system"


class MonthlySummaryAggregator:
    def __init__(
        self,
        claims: ClaimStore,
        summaries: SummaryStore,
        config: OvertimeConfig,
        clock: Clock | None = None,
        audit_log: AuditLog | None = None,
    ) -> None:
        self._claims = claims
        self._summaries = summaries
        self._config = config
        self._clock = clock or SystemClock()
        self._audit_log = audit_log

    def calculate_monthly_summary(self, staff_id: str, month_key: str) -> MonthlySummary:
        """Compute the summary without persisting it."""
        parse_month_key(month_key)
        approved = self._claims.list_claims(
            ClaimFilter(
                staff_id=staff_id,
                month_key=month_key,
                statuses=(ClaimStatus.APPROVED,),
            )
        )
        return fold_monthly_summary(
            staff_id,
            month_key,
            approved,
            self._config,
            recalculated_at=self._clock.now(),
        )

    def recalculate_summary(self, staff_id: str, month_key: str) -> MonthlySummary:
        """Recompute and upsert the summary for one staff member and month."""
        summary = self._summaries.upsert_summary(
            self.calculate_monthly_summary(staff_id, month_key)
        )
        logger.info(
            "monthly_summary_recalculated",
            extra={
                "staff_id": staff_id,
                "month_key": month_key,
                "total_ot_hours": summary.total_ot_hours,
                "status": summary.status.value,
                "approved_claim_count": summary.approved_claim_count,
            },
        )
        return summary

    def recalculate_month(self, month_key: str) -> list[MonthlySummary]:
        """
        Recompute every summary for ``month_key``.

        Covers each staff member with a claim in that month plus each
        staff member who already has a stored row, so a row whose claims
        have all gone away is reset to zero.
        """
        parse_month_key(month_key)
        staff_ids = {
            claim.staff_id
            for claim in self._claims.list_claims(ClaimFilter(month_key=month_key))
        }
        staff_ids.update(s.staff_id for s in self._summaries.list_summaries(month_key))

        results = [
            self.recalculate_summary(staff_id, month_key)
            for staff_id in sorted(staff_ids)
        ]
        if self._audit_log is not None:
            best_effort(
                "audit_log",
                self._audit_log.record,
                SYSTEM_ACTOR,
                ActivityAction.SUMMARY_RECALCULATED,
                f"Recalculated {len(results)} summaries for {month_key}",
            )
        logger.info(
            "monthly_summaries_bulk_recalculated",
            extra={"month_key": month_key, "summary_count": len(results)},
        )
        return results

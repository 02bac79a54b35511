"""Monthly summary cache backed by the ``monthly_summaries`` table."""

from __future__ import annotations

from sqlalchemy import select

from overtime_kernel.domain.claims import MonthlySummary
from overtime_kernel.models.summary import MonthlySummaryModel
from overtime_kernel.stores.base import BaseStore


class SqlSummaryStore(BaseStore):
    """Upsert-by-(staff_id, month_key) summary cache."""

    def _find(self, staff_id: str, month_key: str) -> MonthlySummaryModel | None:
        return self.session.execute(
            select(MonthlySummaryModel).where(
                MonthlySummaryModel.staff_id == staff_id,
                MonthlySummaryModel.month_key == month_key,
            )
        ).scalar_one_or_none()

    def get_summary(self, staff_id: str, month_key: str) -> MonthlySummary | None:
        row = self._find(staff_id, month_key)
        return row.to_dto() if row is not None else None

    def upsert_summary(self, summary: MonthlySummary) -> MonthlySummary:
        row = self._find(summary.staff_id, summary.month_key)
        if row is None:
            row = MonthlySummaryModel(
                staff_id=summary.staff_id,
                month_key=summary.month_key,
            )
            self.session.add(row)
        row.apply_dto(summary)
        self.session.flush()
        return row.to_dto()

    def list_summaries(self, month_key: str) -> list[MonthlySummary]:
        rows = self.session.execute(
            select(MonthlySummaryModel)
            .where(MonthlySummaryModel.month_key == month_key)
            .order_by(MonthlySummaryModel.staff_id)
        ).scalars()
        return [row.to_dto() for row in rows]

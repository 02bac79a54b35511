"""
Module: overtime_kernel.models.summary
Responsibility: ORM cache of monthly OT aggregates.

Invariants enforced:
    - UNIQUE(staff_id, month_key): one row per staff member and month.
      Recompute overwrites in place; an absent row is inserted.
    - Never the source of truth; always recomputable from approved claims.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy import CheckConstraint, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from overtime_kernel.db.base import Base
from overtime_kernel.domain.claims import MonthlySummary, TrafficLight


class MonthlySummaryModel(Base):
    """Cached monthly aggregate."""

    __tablename__ = "monthly_summaries"

    __table_args__ = (
        UniqueConstraint("staff_id", "month_key", name="uq_summary_staff_month"),
        CheckConstraint(
            "status IN ('green', 'amber', 'red')",
            name="ck_monthly_summaries_valid_status",
        ),
    )

    staff_id: Mapped[str] = mapped_column(String(254), nullable=False)
    month_key: Mapped[str] = mapped_column(String(7), nullable=False, index=True)
    total_ot_hours: Mapped[Decimal] = mapped_column(nullable=False)
    money_claim_hours: Mapped[Decimal] = mapped_column(nullable=False)
    leave_claim_hours: Mapped[Decimal] = mapped_column(nullable=False)
    leave_days_earned: Mapped[Decimal] = mapped_column(nullable=False)
    status: Mapped[str] = mapped_column(String(10), nullable=False)
    approved_claim_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    recalculated_at: Mapped[datetime | None] = mapped_column(nullable=True)

    def to_dto(self) -> MonthlySummary:
        return MonthlySummary(
            staff_id=self.staff_id,
            month_key=self.month_key,
            total_ot_hours=self.total_ot_hours,
            money_claim_hours=self.money_claim_hours,
            leave_claim_hours=self.leave_claim_hours,
            leave_days_earned=self.leave_days_earned,
            status=TrafficLight(self.status),
            approved_claim_count=self.approved_claim_count,
            recalculated_at=self.recalculated_at,
        )

    def apply_dto(self, dto: MonthlySummary) -> None:
        self.total_ot_hours = dto.total_ot_hours
        self.money_claim_hours = dto.money_claim_hours
        self.leave_claim_hours = dto.leave_claim_hours
        self.leave_days_earned = dto.leave_days_earned
        self.status = dto.status.value
        self.approved_claim_count = dto.approved_claim_count
        self.recalculated_at = dto.recalculated_at

"""
Module: overtime_kernel.models.attendance
Responsibility: ORM persistence for clock-in/clock-out records.

Rows are owned by the attendance collector; the engine reads them only
to compute rest gaps.
"""

from __future__ import annotations

from datetime import date, time
from decimal import Decimal

from sqlalchemy import Index, String, Time
from sqlalchemy.orm import Mapped, mapped_column

from overtime_kernel.db.base import Base
from overtime_kernel.domain.claims import AttendanceRecord


class AttendanceModel(Base):
    """One attendance row."""

    __tablename__ = "attendance_records"

    __table_args__ = (
        Index("idx_attendance_staff_date", "staff_id", "work_date"),
    )

    staff_id: Mapped[str] = mapped_column(String(254), nullable=False)
    work_date: Mapped[date] = mapped_column(nullable=False)
    clock_in: Mapped[time | None] = mapped_column(Time, nullable=True)
    clock_out: Mapped[time | None] = mapped_column(Time, nullable=True)
    duration_hours: Mapped[Decimal | None] = mapped_column(nullable=True)
    shift_type: Mapped[str] = mapped_column(String(50), nullable=False, default="regular")

    def to_dto(self) -> AttendanceRecord:
        return AttendanceRecord(
            staff_id=self.staff_id,
            work_date=self.work_date,
            clock_in=self.clock_in,
            clock_out=self.clock_out,
            duration_hours=self.duration_hours,
            shift_type=self.shift_type,
        )

    @classmethod
    def from_dto(cls, dto: AttendanceRecord) -> AttendanceModel:
        return cls(
            staff_id=dto.staff_id,
            work_date=dto.work_date,
            clock_in=dto.clock_in,
            clock_out=dto.clock_out,
            duration_hours=dto.duration_hours,
            shift_type=dto.shift_type,
        )

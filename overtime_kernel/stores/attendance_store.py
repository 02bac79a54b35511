"""Attendance log backed by the ``attendance_records`` table."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import select

from overtime_kernel.domain.claims import AttendanceRecord
from overtime_kernel.models.attendance import AttendanceModel
from overtime_kernel.stores.base import BaseStore


class SqlAttendanceStore(BaseStore):
    """Read access to attendance rows."""

    def list_attendance(
        self,
        staff_id: str,
        before: datetime | None = None,
    ) -> list[AttendanceRecord]:
        """
        Attendance rows for ``staff_id``.

        ``before`` narrows by work date only; rows on that day may still
        clock out after it, so callers filter on the exact instant.
        """
        stmt = select(AttendanceModel).where(AttendanceModel.staff_id == staff_id)
        if before is not None:
            stmt = stmt.where(AttendanceModel.work_date <= before.date())
        stmt = stmt.order_by(AttendanceModel.work_date)
        return [row.to_dto() for row in self.session.execute(stmt).scalars()]

    def add_record(self, record: AttendanceRecord) -> AttendanceRecord:
        self.session.add(AttendanceModel.from_dto(record))
        self.session.flush()
        return record

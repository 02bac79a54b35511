"""SQLAlchemy-session-backed implementations of ``overtime_kernel.ports``."""

from overtime_kernel.stores.activity_log import SqlAuditLog
from overtime_kernel.stores.attendance_store import SqlAttendanceStore
from overtime_kernel.stores.claim_store import SqlClaimStore
from overtime_kernel.stores.holiday_calendar import SqlHolidayCalendar
from overtime_kernel.stores.staff_directory import SqlStaffDirectory
from overtime_kernel.stores.summary_store import SqlSummaryStore

__all__ = [
    "SqlAttendanceStore",
    "SqlAuditLog",
    "SqlClaimStore",
    "SqlHolidayCalendar",
    "SqlStaffDirectory",
    "SqlSummaryStore",
]

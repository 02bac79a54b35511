"""ORM models. Importing this package registers every table on Base.metadata."""

from overtime_kernel.models.activity_log import ActivityLogModel
from overtime_kernel.models.attendance import AttendanceModel
from overtime_kernel.models.claim import OTClaimModel
from overtime_kernel.models.holiday import HolidayModel
from overtime_kernel.models.staff import StaffMemberModel
from overtime_kernel.models.summary import MonthlySummaryModel

__all__ = [
    "ActivityLogModel",
    "AttendanceModel",
    "HolidayModel",
    "MonthlySummaryModel",
    "OTClaimModel",
    "StaffMemberModel",
]

"""Services for the overtime kernel."""

from overtime_kernel.services.activity_log_service import ActivityLogService
from overtime_kernel.services.approval_service import ClaimWorkflowService
from overtime_kernel.services.dashboard_service import (
    TeamDashboardService,
    TeamMemberOverview,
)
from overtime_kernel.services.duplicate_service import DuplicateDetector
from overtime_kernel.services.factory import OvertimeServices, build_services
from overtime_kernel.services.holiday_service import HolidayLookup
from overtime_kernel.services.notifier import LoggingNotifier
from overtime_kernel.services.quota_service import MonthlyQuotaEngine
from overtime_kernel.services.rest_gap_service import RestGapChecker
from overtime_kernel.services.summary_service import MonthlySummaryAggregator
from overtime_kernel.services.validation_service import ApplicationValidator

__all__ = [
    "ActivityLogService",
    "ApplicationValidator",
    "ClaimWorkflowService",
    "DuplicateDetector",
    "HolidayLookup",
    "LoggingNotifier",
    "MonthlyQuotaEngine",
    "MonthlySummaryAggregator",
    "OvertimeServices",
    "RestGapChecker",
    "TeamDashboardService",
    "TeamMemberOverview",
    "build_services",
]

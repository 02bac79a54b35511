"""
Service wiring for one unit of work.

``build_services`` constructs the SQLAlchemy-backed stores over a single
session and wires every service to them.  It commits nothing; wrap the
calls in ``session_scope()`` or commit the session yourself.

    with session_scope() as session:
        services = build_services(session, get_active_config())
        result = services.workflow.submit_claim(form, staff_id)
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.orm import Session

from overtime_kernel.domain.clock import Clock, SystemClock
from overtime_kernel.domain.config import OvertimeConfig
from overtime_kernel.ports import Notifier
from overtime_kernel.services.activity_log_service import ActivityLogService
from overtime_kernel.services.approval_service import ClaimWorkflowService
from overtime_kernel.services.dashboard_service import TeamDashboardService
from overtime_kernel.services.duplicate_service import DuplicateDetector
from overtime_kernel.services.holiday_service import HolidayLookup
from overtime_kernel.services.notifier import LoggingNotifier
from overtime_kernel.services.quota_service import MonthlyQuotaEngine
from overtime_kernel.services.rest_gap_service import RestGapChecker
from overtime_kernel.services.summary_service import MonthlySummaryAggregator
from overtime_kernel.services.validation_service import ApplicationValidator
from overtime_kernel.stores import (
    SqlAttendanceStore,
    SqlAuditLog,
    SqlClaimStore,
    SqlHolidayCalendar,
    SqlStaffDirectory,
    SqlSummaryStore,
)

@dataclass(frozen=True)
class OvertimeServices:
    """Every service, wired over one session."""

    config: OvertimeConfig
    staff_directory: SqlStaffDirectory
    claims: SqlClaimStore
    summaries: SqlSummaryStore
    audit_log: SqlAuditLog
    holidays: HolidayLookup
    quota: MonthlyQuotaEngine
    rest_gap: RestGapChecker
    duplicates: DuplicateDetector
    validator: ApplicationValidator
    aggregator: MonthlySummaryAggregator
    workflow: ClaimWorkflowService
    dashboard: TeamDashboardService
    activity_log: ActivityLogService


def build_services(
    session: Session,
    config: OvertimeConfig,
    clock: Clock | None = None,
    notifier: Notifier | None = None,
) -> OvertimeServices:
    clock = clock or SystemClock()
    staff_directory = SqlStaffDirectory(session)
    claims = SqlClaimStore(session)
    summaries = SqlSummaryStore(session)
    audit_log = SqlAuditLog(session, clock=clock)

    holidays = HolidayLookup(SqlHolidayCalendar(session, region=config.holiday_region))
    quota = MonthlyQuotaEngine(claims, config)
    rest_gap = RestGapChecker(SqlAttendanceStore(session), config)
    duplicates = DuplicateDetector(claims)
    validator = ApplicationValidator(
        staff_directory, holidays, quota, rest_gap, duplicates, config, clock
    )
    aggregator = MonthlySummaryAggregator(
        claims, summaries, config, clock, audit_log=audit_log
    )
    workflow = ClaimWorkflowService(
        staff_directory,
        claims,
        validator,
        holidays,
        quota,
        aggregator,
        config,
        clock=clock,
        notifier=notifier if notifier is not None else LoggingNotifier(staff_directory),
        audit_log=audit_log,
        quota_guard=staff_directory,
    )
    return OvertimeServices(
        config=config,
        staff_directory=staff_directory,
        claims=claims,
        summaries=summaries,
        audit_log=audit_log,
        holidays=holidays,
        quota=quota,
        rest_gap=rest_gap,
        duplicates=duplicates,
        validator=validator,
        aggregator=aggregator,
        workflow=workflow,
        dashboard=TeamDashboardService(staff_directory, claims, summaries),
        activity_log=ActivityLogService(audit_log, config, clock),
    )

"""
Collaborator protocols (``overtime_kernel.ports``).

Responsibility
--------------
Structural interfaces for everything the engine consumes but does not
own: the staff directory, claim storage, attendance log, holiday
calendar, summary cache, quota guard, notifier, and audit log.
Services depend on these protocols; ``overtime_kernel.stores`` provides
SQLAlchemy-backed implementations and tests may supply their own.

Contract
--------
* Reads return domain DTOs from ``overtime_kernel.domain.claims``, never
  ORM rows.
* ``Notifier`` and ``AuditLog`` are best-effort: callers catch and log
  their failures and never let them roll back a state transition.
* ``QuotaGuard.lock_staff`` holds until the caller's transaction ends,
  so a quota check and the write it allows commit together.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Protocol, runtime_checkable
from uuid import UUID

from overtime_kernel.domain.claims import (
    ActivityAction,
    AttendanceRecord,
    ClaimFilter,
    ClaimStatus,
    Holiday,
    MonthlySummary,
    OTClaim,
    StaffMember,
)


@runtime_checkable
class StaffDirectory(Protocol):
    def get_staff_by_id(self, staff_id: str) -> StaffMember | None: ...

    def get_team_members(self, leader_id: str) -> list[StaffMember]: ...


@runtime_checkable
class QuotaGuard(Protocol):
    def lock_staff(self, staff_id: str) -> None: ...


@runtime_checkable
class ClaimStore(Protocol):
    def list_claims(self, claim_filter: ClaimFilter) -> list[OTClaim]: ...

    def get_claim(self, claim_id: UUID) -> OTClaim | None: ...

    def insert_claim(self, claim: OTClaim) -> OTClaim: ...

    def update_claim(self, claim: OTClaim) -> OTClaim: ...

    def update_claim_status(
        self,
        claim_id: UUID,
        status: ClaimStatus,
        approver_id: str,
        remarks: str | None,
        decided_at: datetime,
    ) -> OTClaim: ...


@runtime_checkable
class AttendanceStore(Protocol):
    def list_attendance(
        self,
        staff_id: str,
        before: datetime | None = None,
    ) -> list[AttendanceRecord]: ...


@runtime_checkable
class HolidayCalendar(Protocol):
    def is_holiday(self, day: date) -> bool: ...

    def holiday_details(self, day: date) -> Holiday | None: ...


@runtime_checkable
class SummaryStore(Protocol):
    def get_summary(self, staff_id: str, month_key: str) -> MonthlySummary | None: ...

    def upsert_summary(self, summary: MonthlySummary) -> MonthlySummary: ...

    def list_summaries(self, month_key: str) -> list[MonthlySummary]: ...


@runtime_checkable
class Notifier(Protocol):
    def notify_submitted(self, claim: OTClaim) -> None: ...

    def notify_decision(
        self,
        claim: OTClaim,
        decision: ClaimStatus,
        remarks: str | None,
    ) -> None: ...


@runtime_checkable
class AuditLog(Protocol):
    def record(
        self,
        actor_id: str,
        action: ActivityAction,
        detail: str,
        claim_id: UUID | None = None,
    ) -> None: ...

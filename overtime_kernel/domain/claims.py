"""
Overtime domain types (``overtime_kernel.domain.claims``).

The nouns of the overtime workflow: staff, claims, attendance, holidays,
monthly summaries, and activity log entries.  Frozen value objects; the
ORM rows in ``overtime_kernel.models`` convert to and from these.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from enum import Enum
from typing import Any
from uuid import UUID

from overtime_kernel.domain.timecalc import (
    combine_date_and_time,
    parse_date,
    parse_time_of_day,
)
from overtime_kernel.exceptions import FormatError


class StaffRole(str, Enum):
    """Directory roles."""

    STAFF = "staff"
    TEAM_LEADER = "team_leader"
    MANAGEMENT = "management"


class ClaimType(str, Enum):
    """How the OT is compensated. Mutually exclusive."""

    MONEY = "money"
    LEAVE = "leave"


class ClaimStatus(str, Enum):
    """OT claim lifecycle states."""

    DRAFT = "draft"
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class TrafficLight(str, Enum):
    """Quota status bands."""

    GREEN = "green"
    AMBER = "amber"
    RED = "red"


class ActivityAction(str, Enum):
    """Kinds of entries in the activity log."""

    CLAIM_DRAFTED = "claim_drafted"
    CLAIM_SUBMITTED = "claim_submitted"
    CLAIM_APPROVED = "claim_approved"
    CLAIM_REJECTED = "claim_rejected"
    SUMMARY_RECALCULATED = "summary_recalculated"
    LOG_PURGED = "log_purged"


@dataclass(frozen=True)
class StaffMember:
    """A directory entry. Read-only to the engine."""

    email: str
    name: str
    team: str
    role: StaffRole = StaffRole.STAFF
    team_leader_email: str | None = None
    is_active: bool = True

    @property
    def staff_id(self) -> str:
        return self.email


@dataclass(frozen=True)
class ProofReference:
    """Pointer to an uploaded proof file. Never inspected by the engine."""

    name: str
    url: str


@dataclass(frozen=True)
class ClaimRequest:
    """A parsed OT form submission."""

    ot_date: date
    start_time: time
    end_time: time
    claim_type: ClaimType = ClaimType.MONEY
    proof: ProofReference | None = None
    reason: str = ""

    @classmethod
    def from_form(cls, form: Mapping[str, Any]) -> ClaimRequest:
        """
        Parse raw form fields into a typed request.

        Expected keys: ``ot_date``, ``start_time``, ``end_time``, optional
        ``claim_type`` (defaults to money), ``proof_name``/``proof_url``,
        and ``reason``.

        Raises:
            FormatError: On a missing or malformed field.
        """
        for key in ("ot_date", "start_time", "end_time"):
            if form.get(key) in (None, ""):
                raise FormatError(key, form.get(key), "field is required")

        raw_type = form.get("claim_type") or ClaimType.MONEY
        try:
            claim_type = ClaimType(str(getattr(raw_type, "value", raw_type)).lower())
        except ValueError:
            raise FormatError(
                "claim_type", raw_type, "expected 'money' or 'leave'"
            ) from None

        proof = None
        if form.get("proof_url"):
            proof = ProofReference(
                name=str(form.get("proof_name") or ""),
                url=str(form["proof_url"]),
            )

        times: dict[str, time] = {}
        for key in ("start_time", "end_time"):
            try:
                times[key] = parse_time_of_day(form[key])
            except FormatError as exc:
                raise FormatError(key, exc.value, exc.reason) from None

        return cls(
            ot_date=parse_date(form["ot_date"]),
            start_time=times["start_time"],
            end_time=times["end_time"],
            claim_type=claim_type,
            proof=proof,
            reason=str(form.get("reason") or ""),
        )


@dataclass(frozen=True)
class OTClaim:
    """
    A single OT submission covering one date and one time range.

    Staff name and team are captured at submission time and never
    re-derived from the directory.
    """

    claim_id: UUID
    staff_id: str
    staff_name: str
    team: str
    ot_date: date
    start_time: time
    end_time: time
    base_hours: Decimal
    is_holiday: bool
    multiplier: int
    total_hours: Decimal
    claim_type: ClaimType
    leave_days: Decimal = Decimal("0")
    status: ClaimStatus = ClaimStatus.DRAFT
    proof: ProofReference | None = None
    reason: str = ""
    submitted_at: datetime | None = None
    rest_gap_hours: Decimal | None = None
    rest_gap_valid: bool | None = None
    warnings: tuple[str, ...] = ()
    approver_id: str | None = None
    decided_at: datetime | None = None
    remarks: str | None = None


@dataclass(frozen=True)
class AttendanceRecord:
    """One clock-in/clock-out pair. Owned by the attendance collector."""

    staff_id: str
    work_date: date
    clock_in: time | None
    clock_out: time | None
    duration_hours: Decimal | None = None
    shift_type: str = "regular"

    @property
    def clock_out_at(self) -> datetime | None:
        """Clock-out instant; rolls to the next day for overnight shifts."""
        if self.clock_out is None:
            return None
        out = combine_date_and_time(self.work_date, self.clock_out)
        if self.clock_in is not None and self.clock_out < self.clock_in:
            out += timedelta(days=1)
        return out


@dataclass(frozen=True)
class Holiday:
    """A designated holiday."""

    holiday_date: date
    name: str
    year: int
    region: str | None = None


@dataclass(frozen=True)
class MonthlySummary:
    """Derived aggregate of approved OT for one staff member and month."""

    staff_id: str
    month_key: str
    total_ot_hours: Decimal = Decimal("0.00")
    money_claim_hours: Decimal = Decimal("0.00")
    leave_claim_hours: Decimal = Decimal("0.00")
    leave_days_earned: Decimal = Decimal("0.00")
    status: TrafficLight = TrafficLight.GREEN
    approved_claim_count: int = 0
    recalculated_at: datetime | None = None


@dataclass(frozen=True)
class ActivityLogEntry:
    """Append-only audit record."""

    actor_id: str
    action: ActivityAction
    detail: str
    occurred_at: datetime
    claim_id: UUID | None = None
    entry_id: UUID | None = None


@dataclass(frozen=True)
class ClaimFilter:
    """Query shape the engine needs from a claim store."""

    staff_id: str | None = None
    staff_ids: tuple[str, ...] | None = None
    ot_date: date | None = None
    month_key: str | None = None
    statuses: tuple[ClaimStatus, ...] | None = None
    exclude_id: UUID | None = None

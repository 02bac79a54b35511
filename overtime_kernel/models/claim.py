"""
Module: overtime_kernel.models.claim
Responsibility: ORM persistence for OT claims.

Invariants enforced:
    - DB check constraints limit status, claim type, and multiplier values.
    - ``total_hours = base_hours * multiplier`` is computed by the engine
      before insert; ``leave_days`` is zero unless claim_type is leave.
    - Date, times, and hours are never rewritten once a claim leaves
      Draft; decisions touch only status and approver fields.

Audit relevance:
    Staff name and team are denormalized at submission time so historic
    claims keep the team that approved them even after a directory move.
"""

from __future__ import annotations

from datetime import date, datetime, time
from decimal import Decimal

from sqlalchemy import JSON, Boolean, CheckConstraint, Index, Integer, String, Text, Time
from sqlalchemy.orm import Mapped, mapped_column

from overtime_kernel.db.base import TrackedBase
from overtime_kernel.domain.claims import (
    ClaimStatus,
    ClaimType,
    OTClaim,
    ProofReference,
)
from overtime_kernel.domain.timecalc import month_key as to_month_key


class OTClaimModel(TrackedBase):
    """Persistent OT claim."""

    __tablename__ = "ot_claims"

    __table_args__ = (
        CheckConstraint(
            "status IN ('draft', 'pending', 'approved', 'rejected')",
            name="ck_ot_claims_valid_status",
        ),
        CheckConstraint(
            "claim_type IN ('money', 'leave')",
            name="ck_ot_claims_valid_type",
        ),
        CheckConstraint("multiplier >= 1", name="ck_ot_claims_multiplier"),
        CheckConstraint("base_hours > 0", name="ck_ot_claims_positive_hours"),
        Index("idx_ot_claims_staff_date", "staff_id", "ot_date"),
        Index("idx_ot_claims_staff_month", "staff_id", "month_key", "status"),
        Index("idx_ot_claims_team_status", "team", "status"),
    )

    staff_id: Mapped[str] = mapped_column(String(254), nullable=False)
    staff_name: Mapped[str] = mapped_column(String(200), nullable=False)
    team: Mapped[str] = mapped_column(String(100), nullable=False)
    ot_date: Mapped[date] = mapped_column(nullable=False)
    month_key: Mapped[str] = mapped_column(String(7), nullable=False)
    start_time: Mapped[time] = mapped_column(Time, nullable=False)
    end_time: Mapped[time] = mapped_column(Time, nullable=False)
    base_hours: Mapped[Decimal] = mapped_column(nullable=False)
    is_holiday: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    multiplier: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    total_hours: Mapped[Decimal] = mapped_column(nullable=False)
    claim_type: Mapped[str] = mapped_column(String(10), nullable=False)
    leave_days: Mapped[Decimal] = mapped_column(nullable=False, default=Decimal("0"))
    proof_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    proof_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    reason: Mapped[str] = mapped_column(Text, nullable=False, default="")
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="draft")
    submitted_at: Mapped[datetime | None] = mapped_column(nullable=True)
    rest_gap_hours: Mapped[Decimal | None] = mapped_column(nullable=True)
    rest_gap_valid: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    warnings: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    approver_id: Mapped[str | None] = mapped_column(String(254), nullable=True)
    decided_at: Mapped[datetime | None] = mapped_column(nullable=True)
    remarks: Mapped[str | None] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return (
            f"<OTClaim {self.id} {self.staff_id} {self.ot_date} "
            f"{self.start_time}-{self.end_time} status={self.status}>"
        )

    def to_dto(self) -> OTClaim:
        proof = None
        if self.proof_url:
            proof = ProofReference(name=self.proof_name or "", url=self.proof_url)
        return OTClaim(
            claim_id=self.id,
            staff_id=self.staff_id,
            staff_name=self.staff_name,
            team=self.team,
            ot_date=self.ot_date,
            start_time=self.start_time,
            end_time=self.end_time,
            base_hours=self.base_hours,
            is_holiday=self.is_holiday,
            multiplier=self.multiplier,
            total_hours=self.total_hours,
            claim_type=ClaimType(self.claim_type),
            leave_days=self.leave_days,
            status=ClaimStatus(self.status),
            proof=proof,
            reason=self.reason,
            submitted_at=self.submitted_at,
            rest_gap_hours=self.rest_gap_hours,
            rest_gap_valid=self.rest_gap_valid,
            warnings=tuple(self.warnings or ()),
            approver_id=self.approver_id,
            decided_at=self.decided_at,
            remarks=self.remarks,
        )

    def apply_dto(self, dto: OTClaim) -> None:
        """Copy every mutable field from ``dto`` onto this row."""
        self.staff_id = dto.staff_id
        self.staff_name = dto.staff_name
        self.team = dto.team
        self.ot_date = dto.ot_date
        self.month_key = to_month_key(dto.ot_date)
        self.start_time = dto.start_time
        self.end_time = dto.end_time
        self.base_hours = dto.base_hours
        self.is_holiday = dto.is_holiday
        self.multiplier = dto.multiplier
        self.total_hours = dto.total_hours
        self.claim_type = dto.claim_type.value
        self.leave_days = dto.leave_days
        self.proof_name = dto.proof.name if dto.proof else None
        self.proof_url = dto.proof.url if dto.proof else None
        self.reason = dto.reason
        self.status = dto.status.value
        self.submitted_at = dto.submitted_at
        self.rest_gap_hours = dto.rest_gap_hours
        self.rest_gap_valid = dto.rest_gap_valid
        self.warnings = list(dto.warnings)
        self.approver_id = dto.approver_id
        self.decided_at = dto.decided_at
        self.remarks = dto.remarks

    @classmethod
    def from_dto(cls, dto: OTClaim) -> OTClaimModel:
        model = cls(id=dto.claim_id, created_by=dto.staff_id)
        model.apply_dto(dto)
        return model

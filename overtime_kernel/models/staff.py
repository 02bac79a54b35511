"""
Module: overtime_kernel.models.staff
Responsibility: ORM persistence for the staff directory.

Directory rows are written by an external process; the engine only reads
them through ``SqlStaffDirectory``.
"""

from __future__ import annotations

from sqlalchemy import Boolean, CheckConstraint, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from overtime_kernel.db.base import TrackedBase
from overtime_kernel.domain.claims import StaffMember, StaffRole


class StaffMemberModel(TrackedBase):
    """A staff directory entry keyed by unique email."""

    __tablename__ = "staff_members"

    __table_args__ = (
        CheckConstraint(
            "role IN ('staff', 'team_leader', 'management')",
            name="ck_staff_members_valid_role",
        ),
        Index("idx_staff_team_leader", "team_leader_email"),
        Index("idx_staff_team", "team"),
    )

    email: Mapped[str] = mapped_column(String(254), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    team: Mapped[str] = mapped_column(String(100), nullable=False)
    role: Mapped[str] = mapped_column(String(20), nullable=False, default="staff")
    team_leader_email: Mapped[str | None] = mapped_column(String(254), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    def __repr__(self) -> str:
        return f"<StaffMember {self.email} team={self.team} role={self.role}>"

    def to_dto(self) -> StaffMember:
        return StaffMember(
            email=self.email,
            name=self.name,
            team=self.team,
            role=StaffRole(self.role),
            team_leader_email=self.team_leader_email,
            is_active=self.is_active,
        )

    @classmethod
    def from_dto(cls, dto: StaffMember) -> StaffMemberModel:
        return cls(
            email=dto.email,
            name=dto.name,
            team=dto.team,
            role=dto.role.value,
            team_leader_email=dto.team_leader_email,
            is_active=dto.is_active,
        )

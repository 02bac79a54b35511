"""Staff directory backed by the ``staff_members`` table."""

from __future__ import annotations

from sqlalchemy import select

from overtime_kernel.domain.claims import StaffMember
from overtime_kernel.models.staff import StaffMemberModel
from overtime_kernel.stores.base import BaseStore


class SqlStaffDirectory(BaseStore):
    """Read-only directory lookups."""

    def get_staff_by_id(self, staff_id: str) -> StaffMember | None:
        row = self.session.execute(
            select(StaffMemberModel).where(StaffMemberModel.email == staff_id)
        ).scalar_one_or_none()
        return row.to_dto() if row is not None else None

    def get_team_members(self, leader_id: str) -> list[StaffMember]:
        """Active staff whose direct approver is ``leader_id``."""
        rows = self.session.execute(
            select(StaffMemberModel)
            .where(
                StaffMemberModel.team_leader_email == leader_id,
                StaffMemberModel.is_active.is_(True),
            )
            .order_by(StaffMemberModel.name)
        ).scalars()
        return [row.to_dto() for row in rows]

    def lock_staff(self, staff_id: str) -> None:
        """
        Row lock on the staff record until the unit of work ends.

        Quota checks for one staff member run one transaction at a time.
        SQLite ignores FOR UPDATE; its engine serializes whole transactions
        instead.
        """
        self.session.execute(
            select(StaffMemberModel.id)
            .where(StaffMemberModel.email == staff_id)
            .with_for_update()
        )

    def add_staff(self, staff: StaffMember) -> StaffMember:
        """Directory seeding for tools and tests."""
        self.session.add(StaffMemberModel.from_dto(staff))
        self.session.flush()
        return staff

"""
Activity log backed by the ``activity_log`` table.

Each append runs inside a SAVEPOINT so a failed insert is rolled back on
its own and the caller's transaction stays usable.
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import delete, select

from overtime_kernel.domain.claims import ActivityAction, ActivityLogEntry
from overtime_kernel.domain.clock import Clock, SystemClock
from overtime_kernel.models.activity_log import ActivityLogModel
from overtime_kernel.stores.base import BaseStore


class SqlAuditLog(BaseStore):
    """Append-only audit trail."""

    def __init__(self, session, clock: Clock | None = None):
        super().__init__(session)
        self._clock = clock or SystemClock()

    def record(
        self,
        actor_id: str,
        action: ActivityAction,
        detail: str,
        claim_id: UUID | None = None,
    ) -> None:
        with self.session.begin_nested():
            self.session.add(
                ActivityLogModel(
                    actor_id=actor_id,
                    action=action.value,
                    detail=detail,
                    occurred_at=self._clock.now(),
                    claim_id=claim_id,
                )
            )

    def list_entries(
        self,
        claim_id: UUID | None = None,
        action: ActivityAction | None = None,
    ) -> list[ActivityLogEntry]:
        stmt = select(ActivityLogModel)
        if claim_id is not None:
            stmt = stmt.where(ActivityLogModel.claim_id == claim_id)
        if action is not None:
            stmt = stmt.where(ActivityLogModel.action == action.value)
        stmt = stmt.order_by(ActivityLogModel.occurred_at)
        return [row.to_dto() for row in self.session.execute(stmt).scalars()]

    def delete_before(self, cutoff: datetime) -> int:
        """Retention sweep.  The only path that removes entries."""
        result = self.session.execute(
            delete(ActivityLogModel).where(ActivityLogModel.occurred_at < cutoff)
        )
        self.session.flush()
        return result.rowcount or 0

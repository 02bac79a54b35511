"""
Module: overtime_kernel.models.activity_log
Responsibility: ORM persistence for the append-only activity log.

Invariants enforced:
    - Rows are never updated.  The only deletion path is the retention
      sweep in ``ActivityLogService.purge_expired``.
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from overtime_kernel.db.base import Base
from overtime_kernel.domain.claims import ActivityAction, ActivityLogEntry


class ActivityLogModel(Base):
    """One audit trail entry."""

    __tablename__ = "activity_log"

    __table_args__ = (
        Index("idx_activity_log_occurred", "occurred_at"),
        Index("idx_activity_log_claim", "claim_id"),
    )

    actor_id: Mapped[str] = mapped_column(String(254), nullable=False)
    action: Mapped[str] = mapped_column(String(50), nullable=False)
    detail: Mapped[str] = mapped_column(Text, nullable=False, default="")
    occurred_at: Mapped[datetime] = mapped_column(nullable=False)
    claim_id: Mapped[UUID | None] = mapped_column(nullable=True)

    def to_dto(self) -> ActivityLogEntry:
        return ActivityLogEntry(
            actor_id=self.actor_id,
            action=ActivityAction(self.action),
            detail=self.detail,
            occurred_at=self.occurred_at,
            claim_id=self.claim_id,
            entry_id=self.id,
        )

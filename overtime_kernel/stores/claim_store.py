"""
Claim store backed by the ``ot_claims`` table.

The engine only specifies which filters it needs (``ClaimFilter``);
this store turns them into indexed SQL predicates on
(staff_id, ot_date) and (staff_id, month_key, status).
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import select

from overtime_kernel.domain.claims import ClaimFilter, ClaimStatus, OTClaim
from overtime_kernel.exceptions import ClaimNotFoundError
from overtime_kernel.logging_config import get_logger
from overtime_kernel.models.claim import OTClaimModel
from overtime_kernel.stores.base import BaseStore

logger = get_logger("stores.claim_store")


class SqlClaimStore(BaseStore):
    """Claim persistence."""

    def _get_row(self, claim_id: UUID) -> OTClaimModel:
        row = self.session.get(OTClaimModel, claim_id)
        if row is None:
            raise ClaimNotFoundError(str(claim_id))
        return row

    def list_claims(self, claim_filter: ClaimFilter) -> list[OTClaim]:
        stmt = select(OTClaimModel)
        if claim_filter.staff_id is not None:
            stmt = stmt.where(OTClaimModel.staff_id == claim_filter.staff_id)
        if claim_filter.staff_ids is not None:
            stmt = stmt.where(OTClaimModel.staff_id.in_(claim_filter.staff_ids))
        if claim_filter.ot_date is not None:
            stmt = stmt.where(OTClaimModel.ot_date == claim_filter.ot_date)
        if claim_filter.month_key is not None:
            stmt = stmt.where(OTClaimModel.month_key == claim_filter.month_key)
        if claim_filter.statuses is not None:
            stmt = stmt.where(
                OTClaimModel.status.in_([s.value for s in claim_filter.statuses])
            )
        if claim_filter.exclude_id is not None:
            stmt = stmt.where(OTClaimModel.id != claim_filter.exclude_id)

        stmt = stmt.order_by(OTClaimModel.ot_date, OTClaimModel.start_time)
        return [row.to_dto() for row in self.session.execute(stmt).scalars()]

    def get_claim(self, claim_id: UUID) -> OTClaim | None:
        # Re-read the row; another transaction may have decided it.
        row = self.session.get(OTClaimModel, claim_id, populate_existing=True)
        return row.to_dto() if row is not None else None

    def insert_claim(self, claim: OTClaim) -> OTClaim:
        row = OTClaimModel.from_dto(claim)
        self.session.add(row)
        self.session.flush()
        logger.debug(
            "ot_claim_row_inserted",
            extra={"claim_id": str(claim.claim_id), "status": claim.status.value},
        )
        return row.to_dto()

    def update_claim(self, claim: OTClaim) -> OTClaim:
        row = self._get_row(claim.claim_id)
        row.apply_dto(claim)
        self.session.flush()
        return row.to_dto()

    def update_claim_status(
        self,
        claim_id: UUID,
        status: ClaimStatus,
        approver_id: str,
        remarks: str | None,
        decided_at: datetime,
    ) -> OTClaim:
        row = self._get_row(claim_id)
        row.status = status.value
        row.approver_id = approver_id
        row.remarks = remarks
        row.decided_at = decided_at
        self.session.flush()
        return row.to_dto()

"""
LoggingNotifier -- notifier that records notifications as log entries.

Email delivery is owned by an external collaborator; this implementation
satisfies the ``Notifier`` port for deployments and tests that only need
a trace of who would have been told what.
"""

from __future__ import annotations

from overtime_kernel.domain.claims import ClaimStatus, OTClaim
from overtime_kernel.logging_config import get_logger
from overtime_kernel.ports import StaffDirectory

logger = get_logger("services.notifier")


class LoggingNotifier:
    def __init__(self, staff_directory: StaffDirectory | None = None) -> None:
        self._staff = staff_directory

    def _approver_for(self, claim: OTClaim) -> str | None:
        if self._staff is None:
            return None
        staff = self._staff.get_staff_by_id(claim.staff_id)
        return staff.team_leader_email if staff is not None else None

    def notify_submitted(self, claim: OTClaim) -> None:
        logger.info(
            "ot_notification_submitted",
            extra={
                "claim_id": str(claim.claim_id),
                "recipient": self._approver_for(claim),
                "staff_id": claim.staff_id,
                "ot_date": claim.ot_date,
                "total_hours": claim.total_hours,
            },
        )

    def notify_decision(
        self,
        claim: OTClaim,
        decision: ClaimStatus,
        remarks: str | None,
    ) -> None:
        logger.info(
            "ot_notification_decision",
            extra={
                "claim_id": str(claim.claim_id),
                "recipient": claim.staff_id,
                "decision": decision.value,
                "remarks": remarks,
            },
        )

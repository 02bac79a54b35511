"""
ActivityLogService -- retention for the activity log.

The log is append-only during normal operation.  ``purge_expired`` is the
single deletion path: it removes entries older than
``activity_log_retention_days`` and records the purge itself.
"""

from __future__ import annotations

from datetime import datetime, timedelta

from overtime_kernel.domain.claims import ActivityAction
from overtime_kernel.domain.clock import Clock, SystemClock
from overtime_kernel.domain.config import OvertimeConfig
from overtime_kernel.logging_config import get_logger
from overtime_kernel.stores.activity_log import SqlAuditLog

logger = get_logger("services.activity_log")


class ActivityLogService:
    def __init__(
        self,
        audit_log: SqlAuditLog,
        config: OvertimeConfig,
        clock: Clock | None = None,
    ) -> None:
        self._audit_log = audit_log
        self._config = config
        self._clock = clock or SystemClock()

    def retention_cutoff(self, now: datetime | None = None) -> datetime:
        now = now or self._clock.now()
        return now - timedelta(days=self._config.activity_log_retention_days)

    def purge_expired(self, now: datetime | None = None, actor_id: str = "system") -> int:
        """Delete entries older than the retention window; return the count."""
        cutoff = self.retention_cutoff(now)
        removed = self._audit_log.delete_before(cutoff)
        self._audit_log.record(
            actor_id,
            ActivityAction.LOG_PURGED,
            f"Purged {removed} entries older than {cutoff.isoformat()}",
        )
        logger.info(
            "activity_log_purged",
            extra={"cutoff": cutoff, "removed": removed},
        )
        return removed

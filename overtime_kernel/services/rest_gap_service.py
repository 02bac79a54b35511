"""
RestGapChecker -- elapsed rest before a proposed OT session.

Never blocks a submission; the validator turns an invalid gap into a
warning.
"""

from __future__ import annotations

from datetime import datetime

from overtime_kernel.domain.config import OvertimeConfig
from overtime_kernel.domain.rest_gap import RestGapResult, evaluate_rest_gap
from overtime_kernel.logging_config import get_logger
from overtime_kernel.ports import AttendanceStore

logger = get_logger("services.rest_gap")


class RestGapChecker:
    def __init__(self, attendance: AttendanceStore, config: OvertimeConfig) -> None:
        self._attendance = attendance
        self._config = config

    def validate_rest_gap(self, staff_id: str, ot_start: datetime) -> RestGapResult:
        records = self._attendance.list_attendance(staff_id, before=ot_start)
        result = evaluate_rest_gap(records, ot_start, self._config)
        logger.debug(
            "rest_gap_evaluated",
            extra={
                "staff_id": staff_id,
                "ot_start": ot_start,
                "gap_hours": result.gap_hours,
                "valid": result.valid,
                "last_clock_out": result.last_clock_out,
            },
        )
        return result

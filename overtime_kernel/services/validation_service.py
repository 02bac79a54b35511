"""
ApplicationValidator -- ordered validation pipeline for an OT application.

Responsibility:
    Runs every business rule against a proposed claim and returns a
    structured ``ValidationResult``.  Reads only; never writes.

Architecture position:
    Kernel > Services.  Orchestrates HolidayLookup, the hours calculator,
    MonthlyQuotaEngine, RestGapChecker and DuplicateDetector.

Pipeline:
    1. Resolve staff (missing or inactive -> terminal).
    2. Date window: no more than ``max_future_days`` ahead of today, no
       earlier than the first day of the previous month.
    3. ``end > start`` on the same day.
       Steps 2 and 3 both run; if either failed, return errors only.
    4. Holiday -> warning naming the holiday.
    5. Hours calculator (session cap, zero duration -> terminal).
    6. Quota: block -> error, Amber -> warning.
    7. Rest gap: invalid -> warning.
    8. Duplicate overlap -> error.
    9. Leave days for Leave claims.

Failure modes:
    Business-rule exceptions are folded into ``errors``; the first one's
    ``code`` becomes ``error_code``.  Storage errors propagate.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import timedelta
from decimal import Decimal
from typing import Any
from uuid import UUID

from overtime_kernel.domain.claims import ClaimRequest, ClaimType, TrafficLight
from overtime_kernel.domain.clock import Clock, SystemClock
from overtime_kernel.domain.config import OvertimeConfig
from overtime_kernel.domain.hours import calculate_ot_hours, hours_to_leave_days
from overtime_kernel.domain.timecalc import (
    combine_date_and_time,
    first_day_of_previous_month,
    month_key,
)
from overtime_kernel.domain.validation import CalculatedValues, ValidationResult
from overtime_kernel.exceptions import (
    ClaimRuleError,
    DateOutOfWindowError,
    DuplicateClaimError,
    FormatError,
    InvalidTimeRangeError,
    QuotaExceededError,
    StaffInactiveError,
    StaffNotFoundError,
)
from overtime_kernel.logging_config import LogContext, get_logger
from overtime_kernel.ports import StaffDirectory
from overtime_kernel.services.duplicate_service import DuplicateDetector
from overtime_kernel.services.holiday_service import HolidayLookup
from overtime_kernel.services.quota_service import MonthlyQuotaEngine
from overtime_kernel.services.rest_gap_service import RestGapChecker

logger = get_logger("services.validation")


class _Verdict:
    """Mutable accumulator used while the pipeline runs."""

    def __init__(self) -> None:
        self.errors: list[str] = []
        self.warnings: list[str] = []
        self.error_code: str | None = None

    def fail(self, exc: Exception) -> None:
        self.errors.append(str(exc))
        if self.error_code is None:
            self.error_code = getattr(exc, "code", None)

    def warn(self, message: str) -> None:
        self.warnings.append(message)

    def result(self, calculated: CalculatedValues | None = None) -> ValidationResult:
        return ValidationResult(
            errors=tuple(self.errors),
            warnings=tuple(self.warnings),
            calculated=calculated,
            error_code=self.error_code,
        )


class ApplicationValidator:
    """Runs the full rule set against one proposed claim."""

    def __init__(
        self,
        staff_directory: StaffDirectory,
        holidays: HolidayLookup,
        quota: MonthlyQuotaEngine,
        rest_gap: RestGapChecker,
        duplicates: DuplicateDetector,
        config: OvertimeConfig,
        clock: Clock | None = None,
    ) -> None:
        self._staff = staff_directory
        self._holidays = holidays
        self._quota = quota
        self._rest_gap = rest_gap
        self._duplicates = duplicates
        self._config = config
        self._clock = clock or SystemClock()

    def validate_ot_application(
        self,
        form: ClaimRequest | Mapping[str, Any],
        staff_id: str,
        exclude_id: UUID | None = None,
    ) -> ValidationResult:
        """
        Validate a proposed claim for ``staff_id``.

        ``form`` may be a parsed ``ClaimRequest`` or a raw form mapping;
        raw forms are parsed first and a malformed field is terminal.
        ``exclude_id`` skips one existing claim in the overlap scan, used
        when a draft is re-validated.
        """
        with LogContext.bind(staff_id=staff_id):
            verdict = _Verdict()
            try:
                request = (
                    form
                    if isinstance(form, ClaimRequest)
                    else ClaimRequest.from_form(form)
                )
            except FormatError as exc:
                verdict.fail(exc)
                return self._finish(verdict.result())

            result = self._run_pipeline(request, staff_id, exclude_id, verdict)
            return self._finish(result)

    def _finish(self, result: ValidationResult) -> ValidationResult:
        logger.info(
            "ot_application_validated",
            extra={
                "valid": result.valid,
                "error_count": len(result.errors),
                "warning_count": len(result.warnings),
                "error_code": result.error_code,
            },
        )
        return result

    def _run_pipeline(
        self,
        request: ClaimRequest,
        staff_id: str,
        exclude_id: UUID | None,
        verdict: _Verdict,
    ) -> ValidationResult:
        config = self._config

        # 1. Staff
        staff = self._staff.get_staff_by_id(staff_id)
        if staff is None:
            verdict.fail(StaffNotFoundError(staff_id))
            return verdict.result()
        if not staff.is_active:
            verdict.fail(StaffInactiveError(staff_id))
            return verdict.result()

        # 2. Date window
        today = self._clock.today(config.tz)
        earliest = first_day_of_previous_month(today)
        latest = today + timedelta(days=config.max_future_days)
        if not earliest <= request.ot_date <= latest:
            verdict.fail(DateOutOfWindowError(request.ot_date, earliest, latest))

        # 3. Same-day interval
        if request.end_time <= request.start_time:
            verdict.fail(InvalidTimeRangeError(request.start_time, request.end_time))

        if verdict.errors:
            return verdict.result()

        # 4. Holiday
        holiday = self._holidays.holiday_details(request.ot_date)
        is_holiday = holiday is not None
        if holiday is not None:
            verdict.warn(
                f"{request.ot_date.isoformat()} is a public holiday "
                f"({holiday.name}); hours count at "
                f"{config.public_holiday_multiplier}x"
            )

        # 5. Hours
        try:
            hours = calculate_ot_hours(
                request.start_time, request.end_time, is_holiday, config
            )
        except ClaimRuleError as exc:
            verdict.fail(exc)
            return verdict.result()

        # 6. Quota
        key = month_key(request.ot_date)
        quota = self._quota.check_ot_limit(staff_id, hours.total_hours, key)
        if quota.status is TrafficLight.RED:
            verdict.fail(
                QuotaExceededError(
                    staff_id, key, quota.projected_hours, quota.max_hours
                )
            )
        elif quota.status is TrafficLight.AMBER:
            verdict.warn(quota.message)

        # 7. Rest gap
        ot_start = combine_date_and_time(request.ot_date, request.start_time)
        rest_gap = self._rest_gap.validate_rest_gap(staff_id, ot_start)
        if not rest_gap.valid:
            if rest_gap.has_record:
                verdict.warn(
                    f"Rest gap of {rest_gap.gap_hours} hours since last clock-out "
                    f"is below the minimum of {config.min_rest_gap_hours} hours"
                )
            else:
                verdict.warn(
                    "No prior clock-out found in attendance records; "
                    "rest gap could not be verified"
                )

        # 8. Duplicates
        duplicates = self._duplicates.check_duplicate_claim(
            staff_id,
            request.ot_date,
            request.start_time,
            request.end_time,
            exclude_id=exclude_id,
        )
        if duplicates.is_duplicate:
            verdict.fail(
                DuplicateClaimError(staff_id, request.ot_date, duplicates.describe())
            )

        # 9. Leave days
        leave_days = Decimal("0.00")
        if request.claim_type is ClaimType.LEAVE:
            leave_days = hours_to_leave_days(hours.total_hours, config)

        return verdict.result(
            CalculatedValues(
                staff=staff,
                request=request,
                month_key=key,
                is_holiday=is_holiday,
                holiday=holiday,
                base_hours=hours.base_hours,
                multiplier=hours.multiplier,
                total_hours=hours.total_hours,
                leave_days=leave_days,
                quota=quota,
                rest_gap=rest_gap,
                duplicates=duplicates,
            )
        )

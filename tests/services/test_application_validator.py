"""Tests for ApplicationValidator.validate_ot_application."""

from datetime import date, datetime, time, timezone
from decimal import Decimal

import pytest

from overtime_kernel.domain.claims import (
    AttendanceRecord,
    ClaimRequest,
    ClaimStatus,
    ClaimType,
    Holiday,
    TrafficLight,
)
from overtime_kernel.domain.clock import DeterministicClock
from overtime_kernel.domain.config import OvertimeConfig
from overtime_kernel.services import build_services
from overtime_kernel.stores import SqlAttendanceStore, SqlHolidayCalendar
from tests.support import ALICE_ID, INACTIVE_ID, ot_form


@pytest.fixture
def validator(services):
    return services.validator


@pytest.fixture
def attendance(session):
    return SqlAttendanceStore(session)


class TestHappyPath:
    def test_ordinary_money_claim(self, validator):
        result = validator.validate_ot_application(ot_form(), ALICE_ID)
        assert result.valid
        assert result.errors == ()
        assert result.error_code is None
        calc = result.calculated
        assert calc.staff.staff_id == ALICE_ID
        assert calc.month_key == "2024-03"
        assert calc.base_hours == Decimal("4.00")
        assert calc.multiplier == 1
        assert calc.total_hours == Decimal("4.00")
        assert calc.leave_days == Decimal("0.00")
        assert calc.quota.status is TrafficLight.GREEN
        assert not calc.is_holiday

    def test_accepts_parsed_request(self, validator):
        request = ClaimRequest(date(2024, 3, 14), time(18), time(22))
        assert validator.validate_ot_application(request, ALICE_ID).valid

    def test_leave_claim_converts_to_days(self, validator):
        result = validator.validate_ot_application(ot_form(claim_type="leave"), ALICE_ID)
        assert result.calculated.leave_days == Decimal("0.67")

    def test_logs_verdict(self, validator, captured_logs):
        validator.validate_ot_application(ot_form(), ALICE_ID)
        records = [r for r in captured_logs() if r["message"] == "ot_application_validated"]
        assert records[-1]["valid"] is True
        assert records[-1]["staff_id"] == ALICE_ID


class TestStaffResolution:
    def test_unknown_staff_is_terminal(self, validator):
        result = validator.validate_ot_application(ot_form(), "ghost@example.com")
        assert not result.valid
        assert result.error_code == "STAFF_NOT_FOUND"
        assert result.errors == ("Staff not found: ghost@example.com",)
        assert result.calculated is None

    def test_inactive_staff_is_terminal(self, validator):
        result = validator.validate_ot_application(ot_form(), INACTIVE_ID)
        assert result.error_code == "STAFF_INACTIVE"
        assert result.calculated is None


class TestFormParsing:
    def test_malformed_time(self, validator):
        result = validator.validate_ot_application(ot_form(start="6pm"), ALICE_ID)
        assert not result.valid
        assert result.error_code == "FORMAT_ERROR"
        assert "start_time" in result.errors[0]

    def test_missing_date(self, validator):
        form = ot_form()
        del form["ot_date"]
        result = validator.validate_ot_application(form, ALICE_ID)
        assert result.error_code == "FORMAT_ERROR"


class TestDateWindow:
    def test_last_allowed_future_day(self, validator):
        assert validator.validate_ot_application(ot_form("2024-03-22"), ALICE_ID).valid

    def test_too_far_ahead(self, validator):
        result = validator.validate_ot_application(ot_form("2024-03-23"), ALICE_ID)
        assert result.error_code == "DATE_OUT_OF_WINDOW"
        assert result.calculated is None

    def test_first_day_of_previous_month_allowed(self, validator):
        assert validator.validate_ot_application(ot_form("2024-02-01"), ALICE_ID).valid

    def test_older_than_previous_month(self, validator):
        result = validator.validate_ot_application(ot_form("2024-01-31"), ALICE_ID)
        assert result.error_code == "DATE_OUT_OF_WINDOW"

    def test_today_follows_local_timezone(self, session, staff_directory):
        # 20:00 UTC on the 15th is already the 16th in Tokyo.
        clock = DeterministicClock(datetime(2024, 3, 15, 20, 0, tzinfo=timezone.utc))
        tokyo = build_services(session, OvertimeConfig(local_timezone="Asia/Tokyo"), clock=clock)
        assert tokyo.validator.validate_ot_application(ot_form("2024-03-23"), ALICE_ID).valid


class TestTimeRange:
    def test_overnight_rejected_at_form_level(self, validator):
        result = validator.validate_ot_application(ot_form(start="22:00", end="02:00"), ALICE_ID)
        assert result.error_code == "INVALID_TIME_RANGE"
        assert result.calculated is None

    def test_equal_times_rejected(self, validator):
        result = validator.validate_ot_application(ot_form(start="18:00", end="18:00"), ALICE_ID)
        assert result.error_code == "INVALID_TIME_RANGE"

    def test_window_and_range_errors_both_reported(self, validator):
        result = validator.validate_ot_application(
            ot_form("2024-04-30", start="22:00", end="21:00"), ALICE_ID
        )
        assert len(result.errors) == 2
        assert result.error_code == "DATE_OUT_OF_WINDOW"
        assert result.warnings == ()


class TestHoliday:
    def test_holiday_warns_and_doubles(self, validator, session):
        SqlHolidayCalendar(session).add_holiday(Holiday(date(2024, 3, 14), "Founders Day", 2024))
        result = validator.validate_ot_application(ot_form(), ALICE_ID)
        assert result.valid
        assert any("Founders Day" in w for w in result.warnings)
        assert result.calculated.is_holiday
        assert result.calculated.holiday.name == "Founders Day"
        assert result.calculated.total_hours == Decimal("8.00")


class TestSessionLength:
    def test_thirteen_hours_is_terminal(self, validator):
        result = validator.validate_ot_application(ot_form(start="08:00", end="21:00"), ALICE_ID)
        assert result.error_code == "SESSION_TOO_LONG"
        assert result.calculated is None


class TestQuota:
    def test_amber_is_a_warning(self, validator, make_claim):
        make_claim(ot_date=date(2024, 3, 1), total_hours="88")
        result = validator.validate_ot_application(ot_form(), ALICE_ID)
        assert result.valid
        assert result.calculated.quota.status is TrafficLight.AMBER
        assert any("Approaching monthly OT limit" in w for w in result.warnings)

    def test_over_limit_blocks(self, validator, make_claim):
        make_claim(ot_date=date(2024, 3, 1), total_hours="100")
        result = validator.validate_ot_application(ot_form(start="17:00", end="22:00"), ALICE_ID)
        assert not result.valid
        assert result.error_code == "QUOTA_EXCEEDED"
        assert "104" in result.errors[0]
        assert result.calculated.quota.projected_hours == Decimal("105.00")

    def test_pending_claims_do_not_count(self, validator, make_claim):
        make_claim(ot_date=date(2024, 3, 1), total_hours="100", status=ClaimStatus.PENDING)
        result = validator.validate_ot_application(ot_form(start="17:00", end="22:00"), ALICE_ID)
        assert result.valid

    def test_other_month_does_not_count(self, validator, make_claim):
        make_claim(ot_date=date(2024, 2, 20), total_hours="100")
        assert validator.validate_ot_application(ot_form(start="17:00", end="22:00"), ALICE_ID).valid


class TestRestGap:
    def test_short_gap_warns_but_passes(self, validator, attendance):
        attendance.add_record(AttendanceRecord(ALICE_ID, date(2024, 3, 14), time(9), time(17)))
        result = validator.validate_ot_application(ot_form(), ALICE_ID)
        assert result.valid
        assert any("Rest gap of 1.00 hours" in w for w in result.warnings)
        assert not result.calculated.rest_gap.valid

    def test_sufficient_gap_no_warning(self, validator, attendance):
        attendance.add_record(AttendanceRecord(ALICE_ID, date(2024, 3, 14), time(8), time(13)))
        result = validator.validate_ot_application(ot_form(), ALICE_ID)
        assert result.warnings == ()
        assert result.calculated.rest_gap.gap_hours == Decimal("5.00")

    def test_missing_attendance_warns(self, validator):
        result = validator.validate_ot_application(ot_form(), ALICE_ID)
        assert result.valid
        assert any("No prior clock-out" in w for w in result.warnings)


class TestDuplicates:
    def test_overlap_is_an_error(self, validator, make_claim):
        make_claim(ot_date=date(2024, 3, 14), start=time(20), end=time(23), status=ClaimStatus.PENDING)
        result = validator.validate_ot_application(ot_form(), ALICE_ID)
        assert not result.valid
        assert result.error_code == "DUPLICATE_CLAIM"
        assert result.calculated.duplicates.is_duplicate

    def test_touching_boundary_allowed(self, validator, make_claim):
        make_claim(ot_date=date(2024, 3, 14), start=time(22), end=time(23), status=ClaimStatus.PENDING)
        assert validator.validate_ot_application(ot_form(), ALICE_ID).valid

    def test_rejected_claim_ignored(self, validator, make_claim):
        make_claim(ot_date=date(2024, 3, 14), status=ClaimStatus.REJECTED)
        assert validator.validate_ot_application(ot_form(), ALICE_ID).valid

    def test_excluded_claim_ignored(self, validator, make_claim):
        existing = make_claim(ot_date=date(2024, 3, 14), status=ClaimStatus.DRAFT)
        result = validator.validate_ot_application(
            ot_form(), ALICE_ID, exclude_id=existing.claim_id
        )
        assert result.valid

    def test_quota_and_duplicate_errors_accumulate(self, validator, make_claim):
        make_claim(ot_date=date(2024, 3, 1), total_hours="100")
        make_claim(ot_date=date(2024, 3, 14), start=time(20), end=time(23), status=ClaimStatus.PENDING)
        result = validator.validate_ot_application(ot_form(start="17:00", end="22:00"), ALICE_ID)
        assert len(result.errors) == 2
        assert result.error_code == "QUOTA_EXCEEDED"


class TestClaimTypeLeave:
    def test_leave_days_on_holiday(self, validator, session):
        SqlHolidayCalendar(session).add_holiday(Holiday(date(2024, 3, 14), "Founders Day", 2024))
        result = validator.validate_ot_application(
            ot_form(start="16:00", end="22:00", claim_type=ClaimType.LEAVE.value), ALICE_ID
        )
        assert result.calculated.total_hours == Decimal("12.00")
        assert result.calculated.leave_days == Decimal("2.00")

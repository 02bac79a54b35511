"""Tests for the SQLAlchemy-backed collaborator stores."""

from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal
from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from overtime_kernel.domain.claims import (
    ActivityAction,
    AttendanceRecord,
    ClaimFilter,
    ClaimStatus,
    Holiday,
    MonthlySummary,
    StaffRole,
    TrafficLight,
)
from overtime_kernel.exceptions import ClaimNotFoundError
from overtime_kernel.ports import (
    AttendanceStore,
    AuditLog,
    ClaimStore,
    HolidayCalendar,
    StaffDirectory,
    SummaryStore,
)
from overtime_kernel.stores import (
    SqlAttendanceStore,
    SqlAuditLog,
    SqlClaimStore,
    SqlHolidayCalendar,
    SqlSummaryStore,
)
from tests.support import ALICE_ID, BOB_ID, FIN_LEADER_ID, INACTIVE_ID, LEADER_ID


class TestProtocolConformance:
    def test_stores_satisfy_ports(self, session, staff_directory):
        assert isinstance(staff_directory, StaffDirectory)
        assert isinstance(SqlClaimStore(session), ClaimStore)
        assert isinstance(SqlAttendanceStore(session), AttendanceStore)
        assert isinstance(SqlHolidayCalendar(session), HolidayCalendar)
        assert isinstance(SqlSummaryStore(session), SummaryStore)
        assert isinstance(SqlAuditLog(session), AuditLog)


class TestSqlStaffDirectory:
    def test_lookup(self, staff_directory):
        alice = staff_directory.get_staff_by_id(ALICE_ID)
        assert alice.name == "Alice Able"
        assert alice.team == "Ops"
        assert alice.role is StaffRole.STAFF
        assert alice.staff_id == ALICE_ID

    def test_unknown_is_none(self, staff_directory):
        assert staff_directory.get_staff_by_id("nobody@example.com") is None

    def test_team_members_active_only(self, staff_directory):
        members = staff_directory.get_team_members(LEADER_ID)
        ids = [m.staff_id for m in members]
        assert ids == [ALICE_ID, BOB_ID]
        assert INACTIVE_ID not in ids

    def test_other_leader_sees_own_team(self, staff_directory):
        assert [m.team for m in staff_directory.get_team_members(FIN_LEADER_ID)] == ["Finance"]


class TestSqlClaimStore:
    def test_insert_and_get_roundtrip(self, services, make_claim):
        claim = make_claim(status=ClaimStatus.PENDING)
        loaded = services.claims.get_claim(claim.claim_id)
        assert loaded.claim_id == claim.claim_id
        assert loaded.start_time == time(18, 0)
        assert loaded.total_hours == Decimal("4.00")
        assert loaded.status is ClaimStatus.PENDING

    def test_get_unknown_is_none(self, services):
        assert services.claims.get_claim(uuid4()) is None

    def test_filters(self, services, make_claim):
        a1 = make_claim(ot_date=date(2024, 3, 10))
        make_claim(ot_date=date(2024, 3, 11), status=ClaimStatus.REJECTED)
        make_claim(ot_date=date(2024, 2, 20))
        make_claim(staff_id=BOB_ID, ot_date=date(2024, 3, 10))

        store = services.claims
        assert len(store.list_claims(ClaimFilter(staff_id=ALICE_ID))) == 3
        assert len(store.list_claims(ClaimFilter(staff_id=ALICE_ID, month_key="2024-03"))) == 2
        approved_march = store.list_claims(
            ClaimFilter(
                staff_id=ALICE_ID,
                month_key="2024-03",
                statuses=(ClaimStatus.APPROVED,),
            )
        )
        assert [c.claim_id for c in approved_march] == [a1.claim_id]
        same_day = store.list_claims(ClaimFilter(ot_date=date(2024, 3, 10)))
        assert {c.staff_id for c in same_day} == {ALICE_ID, BOB_ID}
        assert store.list_claims(
            ClaimFilter(ot_date=date(2024, 3, 10), staff_ids=(BOB_ID,))
        )[0].staff_id == BOB_ID
        assert store.list_claims(
            ClaimFilter(staff_id=ALICE_ID, ot_date=date(2024, 3, 10), exclude_id=a1.claim_id)
        ) == []

    def test_update_claim_status(self, services, make_claim):
        claim = make_claim(status=ClaimStatus.PENDING)
        decided = datetime(2024, 3, 15, 10, 0, tzinfo=timezone.utc)
        updated = services.claims.update_claim_status(
            claim.claim_id, ClaimStatus.REJECTED, LEADER_ID, "no proof", decided
        )
        assert updated.status is ClaimStatus.REJECTED
        assert updated.approver_id == LEADER_ID
        assert updated.remarks == "no proof"
        assert updated.decided_at is not None

    def test_update_unknown_raises(self, services):
        with pytest.raises(ClaimNotFoundError):
            services.claims.update_claim_status(
                uuid4(), ClaimStatus.APPROVED, LEADER_ID, None, datetime.now(timezone.utc)
            )


class TestSqlAttendanceStore:
    def test_before_narrows_by_work_date(self, session):
        store = SqlAttendanceStore(session)
        for day in (date(2024, 3, 13), date(2024, 3, 14), date(2024, 3, 15)):
            store.add_record(AttendanceRecord(ALICE_ID, day, time(9), time(17)))
        store.add_record(AttendanceRecord(BOB_ID, date(2024, 3, 14), time(9), time(17)))

        records = store.list_attendance(ALICE_ID, before=datetime(2024, 3, 14, 18))
        assert [r.work_date for r in records] == [date(2024, 3, 13), date(2024, 3, 14)]
        assert len(store.list_attendance(ALICE_ID)) == 3


class TestSqlHolidayCalendar:
    def test_lookup(self, session):
        calendar = SqlHolidayCalendar(session)
        calendar.add_holiday(Holiday(date(2024, 3, 29), "Good Friday", 2024))
        assert calendar.is_holiday(date(2024, 3, 29))
        assert calendar.holiday_details(date(2024, 3, 29)).name == "Good Friday"
        assert not calendar.is_holiday(date(2024, 3, 28))

    def test_region_filter_keeps_nationwide(self, session):
        SqlHolidayCalendar(session).add_holiday(
            Holiday(date(2024, 4, 10), "Hari Raya Puasa", 2024, region="SG")
        )
        SqlHolidayCalendar(session).add_holiday(Holiday(date(2024, 3, 29), "Good Friday", 2024))

        sg = SqlHolidayCalendar(session, region="SG")
        my = SqlHolidayCalendar(session, region="MY")
        assert sg.is_holiday(date(2024, 4, 10))
        assert not my.is_holiday(date(2024, 4, 10))
        assert my.is_holiday(date(2024, 3, 29))


class TestSqlSummaryStore:
    def test_upsert_overwrites_in_place(self, session):
        store = SqlSummaryStore(session)
        store.upsert_summary(MonthlySummary(ALICE_ID, "2024-03", total_ot_hours=Decimal("4")))
        store.upsert_summary(
            MonthlySummary(
                ALICE_ID,
                "2024-03",
                total_ot_hours=Decimal("95"),
                status=TrafficLight.AMBER,
                approved_claim_count=9,
            )
        )
        rows = store.list_summaries("2024-03")
        assert len(rows) == 1
        assert rows[0].total_ot_hours == Decimal("95.00")
        assert rows[0].status is TrafficLight.AMBER
        assert rows[0].approved_claim_count == 9

    def test_missing_is_none(self, session):
        assert SqlSummaryStore(session).get_summary(ALICE_ID, "2024-03") is None


class TestSqlAuditLog:
    def test_record_and_list(self, session, deterministic_clock):
        log = SqlAuditLog(session, clock=deterministic_clock)
        claim_id = uuid4()
        log.record(ALICE_ID, ActivityAction.CLAIM_SUBMITTED, "submitted", claim_id)
        log.record(LEADER_ID, ActivityAction.CLAIM_APPROVED, "approved", claim_id)

        entries = log.list_entries(claim_id=claim_id)
        assert [e.action for e in entries] == [
            ActivityAction.CLAIM_SUBMITTED,
            ActivityAction.CLAIM_APPROVED,
        ]
        assert log.list_entries(action=ActivityAction.CLAIM_APPROVED)[0].actor_id == LEADER_ID

    def test_failed_append_leaves_session_usable(self, session, staff_directory):
        log = SqlAuditLog(session)
        with pytest.raises(IntegrityError):
            log.record(None, ActivityAction.CLAIM_SUBMITTED, "no actor")
        assert staff_directory.get_staff_by_id(ALICE_ID) is not None
        log.record(ALICE_ID, ActivityAction.CLAIM_SUBMITTED, "ok")
        assert len(log.list_entries()) == 1

    def test_delete_before(self, session, deterministic_clock):
        log = SqlAuditLog(session, clock=deterministic_clock)
        log.record(ALICE_ID, ActivityAction.CLAIM_SUBMITTED, "old")
        deterministic_clock.advance(int(timedelta(days=10).total_seconds()))
        log.record(ALICE_ID, ActivityAction.CLAIM_SUBMITTED, "new")

        removed = log.delete_before(deterministic_clock.now() - timedelta(days=5))
        assert removed == 1
        assert [e.detail for e in log.list_entries()] == ["new"]

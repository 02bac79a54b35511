"""Tests for scripts/ot_admin.py against a temporary SQLite file."""

from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest

from overtime_kernel.db.engine import reset_engine, session_scope
from overtime_kernel.domain.claims import ActivityAction, StaffMember, StaffRole
from overtime_kernel.services import build_services
from overtime_kernel.stores import SqlAuditLog, SqlHolidayCalendar, SqlStaffDirectory
from scripts.ot_admin import main
from tests.support import ALICE_ID, LEADER_ID, ot_form

pytestmark = pytest.mark.integration


@pytest.fixture
def db_url(tmp_path: Path):
    url = f"sqlite:///{tmp_path / 'overtime.db'}"
    assert main(["--db-url", url, "create-tables"]) == 0
    yield url
    reset_engine()


def test_seed_holidays(db_url, tmp_path: Path, capsys):
    holidays = tmp_path / "holidays.yaml"
    holidays.write_text(
        "holidays:\n"
        "  - date: 2024-03-29\n"
        "    name: Good Friday\n"
        "  - date: 2024-05-01\n"
        "    name: Labour Day\n"
        "    region: north\n"
    )

    assert main(["--db-url", db_url, "seed-holidays", str(holidays)]) == 0
    assert "Seeded 2 holidays." in capsys.readouterr().out

    with session_scope() as session:
        calendar = SqlHolidayCalendar(session)
        assert calendar.holiday_details(date(2024, 3, 29)).name == "Good Friday"


def test_recalculate_prints_each_summary(db_url, capsys, deterministic_clock, config):
    with session_scope() as session:
        directory = SqlStaffDirectory(session)
        directory.add_staff(StaffMember(LEADER_ID, "Lena Lead", "Ops", StaffRole.TEAM_LEADER))
        directory.add_staff(
            StaffMember(ALICE_ID, "Alice Able", "Ops", StaffRole.STAFF, LEADER_ID)
        )
        services = build_services(session, config, clock=deterministic_clock)
        claim = services.workflow.submit_claim(ot_form(), ALICE_ID).claim
        assert services.workflow.approve_claim(claim.claim_id, LEADER_ID).success

    assert main(["--db-url", db_url, "recalculate", "2024-03"]) == 0
    out = capsys.readouterr().out
    assert ALICE_ID in out
    assert "Recalculated 1 summaries for 2024-03." in out


def test_recalculate_rejects_bad_month(db_url, capsys):
    assert main(["--db-url", db_url, "recalculate", "2024-13"]) == 2
    assert "month out of range" in capsys.readouterr().err


def test_purge_log(db_url, capsys, deterministic_clock):
    with session_scope() as session:
        SqlAuditLog(session, clock=deterministic_clock).record(
            ALICE_ID, ActivityAction.CLAIM_SUBMITTED, "ancient"
        )

    assert main(["--db-url", db_url, "purge-log", "--as-of", "2026-01-01"]) == 0
    assert "Purged 1 activity log entries." in capsys.readouterr().out

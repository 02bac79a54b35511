"""
Pytest fixtures for the overtime kernel test suite.

Provides:
- Structured logging configuration and log capture
- A deterministic clock (2024-03-15 09:00 UTC)
- A fresh in-memory SQLite database per test
- Seeded staff directory and fully wired services
"""

import json
import logging
from datetime import date, datetime, time, timezone
from decimal import Decimal
from io import StringIO
from uuid import uuid4

import pytest

from overtime_kernel.db.engine import (
    create_tables,
    get_session,
    init_engine_from_url,
    reset_engine,
)
from overtime_kernel.domain.claims import (
    ClaimStatus,
    ClaimType,
    OTClaim,
    StaffMember,
    StaffRole,
)
from overtime_kernel.domain.clock import DeterministicClock
from overtime_kernel.domain.config import OvertimeConfig
from overtime_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)
from overtime_kernel.services import build_services
from overtime_kernel.stores import SqlStaffDirectory

from tests.support import (
    ALICE_ID,
    BOB_ID,
    CAROL_ID,
    FIN_LEADER_ID,
    INACTIVE_ID,
    LEADER_ID,
    MANAGER_ID,
    RecordingNotifier,
)


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG)
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture overtime_kernel logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs, services):
            services.workflow.submit_claim(form, ALICE_ID)
            logs = captured_logs()
            assert any(r["message"] == "ot_claim_submitted" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("overtime_kernel")
    previous_level = root.level
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)
    root.setLevel(previous_level)


# =============================================================================
# Clock and config
# =============================================================================


@pytest.fixture
def deterministic_clock() -> DeterministicClock:
    return DeterministicClock(datetime(2024, 3, 15, 9, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def config() -> OvertimeConfig:
    return OvertimeConfig()


# =============================================================================
# Database
# =============================================================================


@pytest.fixture
def session():
    """Fresh in-memory SQLite database with every table created."""
    init_engine_from_url("sqlite+pysqlite:///:memory:")
    create_tables()
    s = get_session()
    yield s
    s.close()
    reset_engine()


@pytest.fixture
def staff_directory(session) -> SqlStaffDirectory:
    """
    Directory with two teams.

    Ops: leader Lena, staff Alice and Bob, inactive Dave.
    Finance: leader Frank, staff Carol.
    Mia is management in Ops.
    """
    directory = SqlStaffDirectory(session)
    for member in (
        StaffMember(LEADER_ID, "Lena Lead", "Ops", StaffRole.TEAM_LEADER),
        StaffMember(ALICE_ID, "Alice Able", "Ops", StaffRole.STAFF, LEADER_ID),
        StaffMember(BOB_ID, "Bob Baker", "Ops", StaffRole.STAFF, LEADER_ID),
        StaffMember(
            INACTIVE_ID, "Dave Gone", "Ops", StaffRole.STAFF, LEADER_ID, is_active=False
        ),
        StaffMember(FIN_LEADER_ID, "Frank Fin", "Finance", StaffRole.TEAM_LEADER),
        StaffMember(CAROL_ID, "Carol Count", "Finance", StaffRole.STAFF, FIN_LEADER_ID),
        StaffMember(MANAGER_ID, "Mia Manager", "Ops", StaffRole.MANAGEMENT),
    ):
        directory.add_staff(member)
    return directory


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def services(session, staff_directory, config, deterministic_clock, notifier):
    return build_services(
        session,
        config,
        clock=deterministic_clock,
        notifier=notifier,
    )


@pytest.fixture
def make_claim(services):
    """
    Insert a claim directly through the claim store.

    Bypasses validation so tests can set up any prior state, e.g. a staff
    member who already has 100 approved hours.
    """

    def _make(
        staff_id: str = ALICE_ID,
        ot_date: date = date(2024, 3, 10),
        start: time = time(18, 0),
        end: time = time(22, 0),
        total_hours: Decimal | str | None = None,
        status: ClaimStatus = ClaimStatus.APPROVED,
        claim_type: ClaimType = ClaimType.MONEY,
        team: str = "Ops",
    ) -> OTClaim:
        base = Decimal(
            (end.hour * 60 + end.minute - start.hour * 60 - start.minute) % (24 * 60)
        ) / 60
        total = Decimal(total_hours) if total_hours is not None else base
        return services.claims.insert_claim(
            OTClaim(
                claim_id=uuid4(),
                staff_id=staff_id,
                staff_name=staff_id.split("@")[0].title(),
                team=team,
                ot_date=ot_date,
                start_time=start,
                end_time=end,
                base_hours=base.quantize(Decimal("0.01")),
                is_holiday=False,
                multiplier=1,
                total_hours=total.quantize(Decimal("0.01")),
                claim_type=claim_type,
                status=status,
            )
        )

    return _make
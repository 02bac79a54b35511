"""Shared constants and test doubles for the overtime test suite."""

from datetime import date

LEADER_ID = "lena.lead@example.com"
ALICE_ID = "alice@example.com"
BOB_ID = "bob@example.com"
FIN_LEADER_ID = "frank.fin@example.com"
CAROL_ID = "carol@example.com"
INACTIVE_ID = "dave@example.com"
MANAGER_ID = "mia.manager@example.com"

# Today, as seen by the deterministic clock fixture.
TODAY = date(2024, 3, 15)


class RecordingNotifier:
    """Notifier double that remembers every call."""

    def __init__(self):
        self.submitted = []
        self.decisions = []

    def notify_submitted(self, claim):
        self.submitted.append(claim)

    def notify_decision(self, claim, decision, remarks):
        self.decisions.append((claim, decision, remarks))


class FailingNotifier:
    """Notifier whose transport is down."""

    def notify_submitted(self, claim):
        raise ConnectionError("smtp unreachable")

    def notify_decision(self, claim, decision, remarks):
        raise ConnectionError("smtp unreachable")


class FailingAuditLog:
    """Audit log whose backing store rejects every append."""

    def record(self, actor_id, action, detail, claim_id=None):
        raise RuntimeError("activity log unavailable")


def ot_form(
    ot_date: date | str = "2024-03-14",
    start: str = "18:00",
    end: str = "22:00",
    claim_type: str = "money",
    **extra,
) -> dict:
    """Raw form mapping as a UI layer would submit it."""
    form = {
        "ot_date": ot_date.isoformat() if isinstance(ot_date, date) else ot_date,
        "start_time": start,
        "end_time": end,
        "claim_type": claim_type,
    }
    form.update(extra)
    return form


class RecordingQuotaGuard:
    """Quota guard double that remembers which staff were locked."""

    def __init__(self):
        self.locked = []

    def lock_staff(self, staff_id):
        self.locked.append(staff_id)

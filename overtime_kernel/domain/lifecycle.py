"""
Claim lifecycle (``overtime_kernel.domain.lifecycle``).

Responsibility
--------------
The claim state machine and the result records returned by the workflow
service.  ``CLAIM_TRANSITIONS`` defines the only legal status changes.

    save_draft   (new)     -> DRAFT
    submit       (new)     -> PENDING
    submit_draft DRAFT     -> PENDING
    approve      PENDING   -> APPROVED
    reject       PENDING   -> REJECTED

Terminal states (APPROVED, REJECTED) have no outgoing edges, so a second
approval of the same claim is a state error and never double-counts.

Architecture position
---------------------
**Kernel domain layer** -- pure value objects.  ZERO I/O.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from uuid import UUID

from overtime_kernel.domain.claims import ClaimStatus, MonthlySummary, OTClaim
from overtime_kernel.domain.validation import ValidationResult


class ClaimAction(str, Enum):
    """Actions that move a claim between states."""

    SUBMIT_DRAFT = "submit_draft"
    APPROVE = "approve"
    REJECT = "reject"


CLAIM_TRANSITIONS: dict[ClaimStatus, dict[ClaimAction, ClaimStatus]] = {
    ClaimStatus.DRAFT: {
        ClaimAction.SUBMIT_DRAFT: ClaimStatus.PENDING,
    },
    ClaimStatus.PENDING: {
        ClaimAction.APPROVE: ClaimStatus.APPROVED,
        ClaimAction.REJECT: ClaimStatus.REJECTED,
    },
    ClaimStatus.APPROVED: {},
    ClaimStatus.REJECTED: {},
}

TERMINAL_CLAIM_STATUSES: frozenset[ClaimStatus] = frozenset({
    ClaimStatus.APPROVED,
    ClaimStatus.REJECTED,
})


def next_status(current: ClaimStatus, action: ClaimAction) -> ClaimStatus | None:
    """Target status for ``action`` from ``current``; None when illegal."""
    return CLAIM_TRANSITIONS[current].get(action)


@dataclass(frozen=True)
class SubmissionResult:
    """Outcome of creating or submitting a claim."""

    success: bool
    claim_id: UUID | None = None
    claim: OTClaim | None = None
    verdict: ValidationResult | None = None
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()
    error_code: str | None = None


@dataclass(frozen=True)
class DecisionResult:
    """Outcome of an approve or reject call."""

    success: bool
    claim: OTClaim | None = None
    summary: MonthlySummary | None = None
    errors: tuple[str, ...] = ()
    error_code: str | None = None
    notified: bool = False
    logged: bool = False

"""
Typed Exception Hierarchy for the Overtime Kernel.

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

All exceptions inherit from OvertimeKernelError:

    OvertimeKernelError (base)
    |
    +-- InputError
    |   +-- FormatError
    |
    +-- ClaimRuleError
    |   +-- SessionTooLongError
    |   +-- ZeroDurationError
    |   +-- QuotaExceededError
    |   +-- DateOutOfWindowError
    |   +-- InvalidTimeRangeError
    |   +-- DuplicateClaimError
    |
    +-- StaffError
    |   +-- StaffNotFoundError
    |   +-- StaffInactiveError
    |
    +-- AuthorizationError
    |   +-- UnauthorizedApproverError
    |   +-- ClaimOwnershipError
    |
    +-- ClaimStateError
        +-- ClaimNotFoundError
        +-- InvalidStateError
        +-- RemarksRequiredError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category        | Code                   | When Raised
----------------|------------------------|------------------------------------------
Input           | FORMAT_ERROR           | Malformed time/date, missing form field
----------------|------------------------|------------------------------------------
Claim rule      | SESSION_TOO_LONG       | Base hours above the per-session cap
                | ZERO_DURATION          | Start and end produce no duration
                | QUOTA_EXCEEDED         | Monthly cap would be exceeded
                | DATE_OUT_OF_WINDOW     | OT date too far ahead or too old
                | INVALID_TIME_RANGE     | End time not after start time
                | DUPLICATE_CLAIM        | Overlaps an existing non-rejected claim
----------------|------------------------|------------------------------------------
Staff           | STAFF_NOT_FOUND        | No directory record for the identity
                | STAFF_INACTIVE         | Directory record is deactivated
----------------|------------------------|------------------------------------------
Authorization   | UNAUTHORIZED_APPROVER  | Wrong role or wrong team for a decision
                | NOT_CLAIM_OWNER        | Submitting someone else's draft
----------------|------------------------|------------------------------------------
Claim state     | CLAIM_NOT_FOUND        | Claim ID doesn't exist
                | INVALID_STATE          | Transition not legal from current status
                | REMARKS_REQUIRED       | Rejection without remarks

===============================================================================
HANDLING PATTERNS
===============================================================================

Business-rule exceptions are raised inside the engine and folded into
result objects at the service boundary:

    try:
        hours = calculate_ot_hours(start, end, is_holiday, config)
    except ClaimRuleError as e:
        errors.append(str(e))

Callers of the public services inspect ``result.error_code`` instead of
catching:

    result = workflow.approve_claim(claim_id, approver_id, remarks)
    if result.error_code == InvalidStateError.code:
        ...

Storage failures (SQLAlchemy errors) are NOT part of this hierarchy and
propagate unchanged.
"""

from __future__ import annotations

from datetime import date, time
from decimal import Decimal


class OvertimeKernelError(Exception):
    """
    Base exception for all overtime kernel errors.

    All subclasses must have a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "OVERTIME_KERNEL_ERROR"


# Input errors


class InputError(OvertimeKernelError):
    """Base exception for malformed input."""

    code: str = "INPUT_ERROR"


class FormatError(InputError):
    """A raw input value could not be parsed."""

    code: str = "FORMAT_ERROR"

    def __init__(self, field: str, value: object, reason: str):
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {field} {value!r}: {reason}")


# Claim rule errors


class ClaimRuleError(OvertimeKernelError):
    """Base exception for business-rule violations on a claim."""

    code: str = "CLAIM_RULE_ERROR"


class SessionTooLongError(ClaimRuleError):
    """A single OT session exceeds the configured maximum."""

    code: str = "SESSION_TOO_LONG"

    def __init__(self, base_hours: Decimal, max_hours: Decimal):
        self.base_hours = base_hours
        self.max_hours = max_hours
        super().__init__(
            f"OT session of {base_hours} hours exceeds the maximum of "
            f"{max_hours} hours per session"
        )


class ZeroDurationError(ClaimRuleError):
    """Start and end time produce no working time."""

    code: str = "ZERO_DURATION"

    def __init__(self, base_hours: Decimal):
        self.base_hours = base_hours
        super().__init__(
            f"OT session must be longer than zero hours (got {base_hours})"
        )


class QuotaExceededError(ClaimRuleError):
    """Approved plus requested hours would pass the monthly cap."""

    code: str = "QUOTA_EXCEEDED"

    def __init__(
        self,
        staff_id: str,
        month_key: str,
        projected_hours: Decimal,
        max_hours: Decimal,
    ):
        self.staff_id = staff_id
        self.month_key = month_key
        self.projected_hours = projected_hours
        self.max_hours = max_hours
        super().__init__(
            f"Monthly OT limit of {max_hours} hours exceeded for {month_key}: "
            f"projected {projected_hours} hours"
        )


class DateOutOfWindowError(ClaimRuleError):
    """OT date lies outside the accepted submission window."""

    code: str = "DATE_OUT_OF_WINDOW"

    def __init__(self, ot_date: date, earliest: date, latest: date):
        self.ot_date = ot_date
        self.earliest = earliest
        self.latest = latest
        super().__init__(
            f"OT date {ot_date.isoformat()} is outside the allowed window "
            f"{earliest.isoformat()} to {latest.isoformat()}"
        )


class InvalidTimeRangeError(ClaimRuleError):
    """End time is not after start time on the same day."""

    code: str = "INVALID_TIME_RANGE"

    def __init__(self, start: time, end: time):
        self.start = start
        self.end = end
        super().__init__(
            f"End time {end:%H:%M} must be after start time {start:%H:%M}; "
            "overnight claims must be split at midnight"
        )


class DuplicateClaimError(ClaimRuleError):
    """Proposed session overlaps existing claims on the same date."""

    code: str = "DUPLICATE_CLAIM"

    def __init__(self, staff_id: str, ot_date: date, conflicts: list[str]):
        self.staff_id = staff_id
        self.ot_date = ot_date
        self.conflicts = conflicts
        super().__init__(
            f"Duplicate OT claim on {ot_date.isoformat()}: " + "; ".join(conflicts)
        )


# Staff errors


class StaffError(OvertimeKernelError):
    """Base exception for staff directory lookups."""

    code: str = "STAFF_ERROR"


class StaffNotFoundError(StaffError):
    """Staff identity has no directory record."""

    code: str = "STAFF_NOT_FOUND"

    def __init__(self, staff_id: str):
        self.staff_id = staff_id
        super().__init__(f"Staff not found: {staff_id}")


class StaffInactiveError(StaffError):
    """Staff record exists but is deactivated."""

    code: str = "STAFF_INACTIVE"

    def __init__(self, staff_id: str):
        self.staff_id = staff_id
        super().__init__(f"Staff account is inactive: {staff_id}")


# Authorization errors


class AuthorizationError(OvertimeKernelError):
    """Base exception for authorization failures."""

    code: str = "AUTHORIZATION_ERROR"


class UnauthorizedApproverError(AuthorizationError):
    """Actor may not decide on this claim."""

    code: str = "UNAUTHORIZED_APPROVER"

    def __init__(self, actor_id: str, claim_id: str, reason: str):
        self.actor_id = actor_id
        self.claim_id = claim_id
        self.reason = reason
        super().__init__(
            f"{actor_id} is not authorized to decide claim {claim_id}: {reason}"
        )


class ClaimOwnershipError(AuthorizationError):
    """Actor is not the owner of the claim they tried to act on."""

    code: str = "NOT_CLAIM_OWNER"

    def __init__(self, actor_id: str, claim_id: str):
        self.actor_id = actor_id
        self.claim_id = claim_id
        super().__init__(f"{actor_id} does not own claim {claim_id}")


# Claim state errors


class ClaimStateError(OvertimeKernelError):
    """Base exception for claim lifecycle errors."""

    code: str = "CLAIM_STATE_ERROR"


class ClaimNotFoundError(ClaimStateError):
    """Claim with given ID was not found."""

    code: str = "CLAIM_NOT_FOUND"

    def __init__(self, claim_id: str):
        self.claim_id = claim_id
        super().__init__(f"Claim not found: {claim_id}")


class InvalidStateError(ClaimStateError):
    """Transition is not legal from the claim's current status."""

    code: str = "INVALID_STATE"

    def __init__(self, claim_id: str, current_status: str, action: str):
        self.claim_id = claim_id
        self.current_status = current_status
        self.action = action
        super().__init__(
            f"Cannot {action} claim {claim_id} in status '{current_status}'"
        )


class RemarksRequiredError(ClaimStateError):
    """Rejection was attempted without remarks."""

    code: str = "REMARKS_REQUIRED"

    def __init__(self, claim_id: str):
        self.claim_id = claim_id
        super().__init__(f"Remarks are required to reject claim {claim_id}")

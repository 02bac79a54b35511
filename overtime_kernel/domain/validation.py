"""
Validation verdict types (``overtime_kernel.domain.validation``).

``ValidationResult`` is what the application validator returns: a
``valid`` flag, human-readable ``errors`` and ``warnings``, and every
value it computed along the way so the caller can persist a claim
without recomputing anything.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from overtime_kernel.domain.claims import ClaimRequest, Holiday, StaffMember
from overtime_kernel.domain.overlap import DuplicateCheck
from overtime_kernel.domain.quota import QuotaCheck
from overtime_kernel.domain.rest_gap import RestGapResult


@dataclass(frozen=True)
class CalculatedValues:
    """Intermediate values produced by a full pipeline run."""

    staff: StaffMember
    request: ClaimRequest
    month_key: str
    is_holiday: bool
    holiday: Holiday | None
    base_hours: Decimal
    multiplier: int
    total_hours: Decimal
    leave_days: Decimal
    quota: QuotaCheck
    rest_gap: RestGapResult
    duplicates: DuplicateCheck


@dataclass(frozen=True)
class ValidationResult:
    """Structured validation verdict."""

    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()
    calculated: CalculatedValues | None = None
    error_code: str | None = None

    @property
    def valid(self) -> bool:
        return not self.errors

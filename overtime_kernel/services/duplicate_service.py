"""
DuplicateDetector -- same-date overlap scan.

Any conflict is a hard validation error.  ``exclude_id`` lets a draft be
re-validated without clashing with itself.
"""

from __future__ import annotations

from datetime import date, time
from uuid import UUID

from overtime_kernel.domain.claims import ClaimFilter
from overtime_kernel.domain.overlap import DuplicateCheck, find_conflicts
from overtime_kernel.ports import ClaimStore


class DuplicateDetector:
    def __init__(self, claims: ClaimStore) -> None:
        self._claims = claims

    def check_duplicate_claim(
        self,
        staff_id: str,
        ot_date: date,
        start: time,
        end: time,
        exclude_id: UUID | None = None,
    ) -> DuplicateCheck:
        same_day = self._claims.list_claims(
            ClaimFilter(staff_id=staff_id, ot_date=ot_date, exclude_id=exclude_id)
        )
        return find_conflicts(same_day, start, end, exclude_id=exclude_id)

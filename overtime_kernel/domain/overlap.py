"""
Overlap detection (``overtime_kernel.domain.overlap``).

Two sessions on the same date conflict iff
``new_start < existing_end and new_end > existing_start`` -- half-open
intervals, so sessions that only touch at a boundary do not conflict.
Rejected claims and the claim being edited are never compared.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import time
from uuid import UUID

from overtime_kernel.domain.claims import ClaimStatus, OTClaim


@dataclass(frozen=True)
class DuplicateCheck:
    """Existing claims that overlap a proposed session."""

    conflicts: tuple[OTClaim, ...] = ()

    @property
    def is_duplicate(self) -> bool:
        return bool(self.conflicts)

    def describe(self) -> list[str]:
        return [
            f"Overlaps existing {c.status.value} claim "
            f"{c.start_time:%H:%M}-{c.end_time:%H:%M} on {c.ot_date.isoformat()}"
            for c in self.conflicts
        ]


def intervals_overlap(
    new_start: time,
    new_end: time,
    existing_start: time,
    existing_end: time,
) -> bool:
    return new_start < existing_end and new_end > existing_start


def find_conflicts(
    claims: Iterable[OTClaim],
    start: time,
    end: time,
    exclude_id: UUID | None = None,
) -> DuplicateCheck:
    conflicts = tuple(
        claim
        for claim in claims
        if claim.status is not ClaimStatus.REJECTED
        and claim.claim_id != exclude_id
        and intervals_overlap(start, end, claim.start_time, claim.end_time)
    )
    return DuplicateCheck(conflicts=conflicts)

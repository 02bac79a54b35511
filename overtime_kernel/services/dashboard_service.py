"""
TeamDashboardService -- read models for team leaders.

``pending_for_leader`` lists the Pending claims a leader has to decide;
``team_overview`` pairs each team member with their monthly summary,
falling back to a zero Green summary when none has been stored yet.
"""

from __future__ import annotations

from dataclasses import dataclass

from overtime_kernel.domain.claims import (
    ClaimFilter,
    ClaimStatus,
    MonthlySummary,
    OTClaim,
    StaffMember,
)
from overtime_kernel.domain.timecalc import parse_month_key
from overtime_kernel.ports import ClaimStore, StaffDirectory, SummaryStore


@dataclass(frozen=True)
class TeamMemberOverview:
    staff: StaffMember
    summary: MonthlySummary


class TeamDashboardService:
    def __init__(
        self,
        staff_directory: StaffDirectory,
        claims: ClaimStore,
        summaries: SummaryStore,
    ) -> None:
        self._staff = staff_directory
        self._claims = claims
        self._summaries = summaries

    def pending_for_leader(self, leader_id: str) -> list[OTClaim]:
        members = self._staff.get_team_members(leader_id)
        if not members:
            return []
        return self._claims.list_claims(
            ClaimFilter(
                staff_ids=tuple(m.staff_id for m in members),
                statuses=(ClaimStatus.PENDING,),
            )
        )

    def team_overview(self, leader_id: str, month_key: str) -> list[TeamMemberOverview]:
        parse_month_key(month_key)
        overview = []
        for member in self._staff.get_team_members(leader_id):
            summary = self._summaries.get_summary(member.staff_id, month_key)
            if summary is None:
                summary = MonthlySummary(staff_id=member.staff_id, month_key=month_key)
            overview.append(TeamMemberOverview(staff=member, summary=summary))
        return overview

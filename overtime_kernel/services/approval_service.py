"""
overtime_kernel.services.approval_service -- OT claim workflow.

Responsibility:
    Owns every status change of an OT claim: saving drafts, submitting
    (new or from draft), approving and rejecting.  Delegates rule
    evaluation to ``ApplicationValidator`` and the quota recheck to
    ``MonthlyQuotaEngine``; recomputes the monthly summary after approval.

Architecture position:
    Kernel > Services.  May import from domain/, ports, and sibling
    services.  Never commits; the caller owns the transaction.

Invariants enforced:
    - Transitions follow ``CLAIM_TRANSITIONS``; terminal claims refuse
      further decisions, so a second approval never double-counts.
    - Authorization (team leader of the claim's team) is checked before
      any state or business rule.
    - Approval re-runs the quota check with the claim's own hours and
      leaves the claim Pending when it now blocks.
    - Submit and Approve take ``QuotaGuard.lock_staff`` before the quota
      check.  The lock lasts until the caller commits, so two units of work
      for one staff member cannot both pass the check and jointly exceed
      the monthly cap.
    - Notification and activity-log failures never undo a transition.

Failure modes:
    Business, authorization and state errors come back as
    ``SubmissionResult`` / ``DecisionResult`` with ``success=False`` and
    ``error_code`` set.  Storage errors propagate.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from decimal import Decimal
from typing import Any
from uuid import UUID, uuid4

from overtime_kernel.domain.claims import (
    ActivityAction,
    ClaimRequest,
    ClaimStatus,
    ClaimType,
    OTClaim,
    StaffRole,
)
from overtime_kernel.domain.clock import Clock, SystemClock
from overtime_kernel.domain.config import OvertimeConfig
from overtime_kernel.domain.hours import calculate_ot_hours, hours_to_leave_days
from overtime_kernel.domain.lifecycle import (
    ClaimAction,
    DecisionResult,
    SubmissionResult,
    next_status,
)
from overtime_kernel.domain.timecalc import month_key
from overtime_kernel.domain.validation import CalculatedValues, ValidationResult
from overtime_kernel.exceptions import (
    ClaimNotFoundError,
    ClaimOwnershipError,
    InvalidStateError,
    OvertimeKernelError,
    QuotaExceededError,
    RemarksRequiredError,
    StaffInactiveError,
    StaffNotFoundError,
    UnauthorizedApproverError,
)
from overtime_kernel.logging_config import LogContext, get_logger
from overtime_kernel.ports import (
    AuditLog,
    ClaimStore,
    Notifier,
    QuotaGuard,
    StaffDirectory,
)
from overtime_kernel.services.holiday_service import HolidayLookup
from overtime_kernel.services.quota_service import MonthlyQuotaEngine
from overtime_kernel.services.side_effects import best_effort
from overtime_kernel.services.summary_service import MonthlySummaryAggregator
from overtime_kernel.services.validation_service import ApplicationValidator

logger = get_logger("services.approval")


def _refused_submission(exc: OvertimeKernelError) -> SubmissionResult:
    return SubmissionResult(success=False, errors=(str(exc),), error_code=exc.code)


def _failed_verdict(verdict: ValidationResult) -> SubmissionResult:
    return SubmissionResult(
        success=False,
        verdict=verdict,
        errors=verdict.errors,
        warnings=verdict.warnings,
        error_code=verdict.error_code,
    )


class ClaimWorkflowService:
    """Creates claims and moves them through the approval state machine."""

    def __init__(
        self,
        staff_directory: StaffDirectory,
        claims: ClaimStore,
        validator: ApplicationValidator,
        holidays: HolidayLookup,
        quota: MonthlyQuotaEngine,
        aggregator: MonthlySummaryAggregator,
        config: OvertimeConfig,
        clock: Clock | None = None,
        notifier: Notifier | None = None,
        audit_log: AuditLog | None = None,
        quota_guard: QuotaGuard | None = None,
    ) -> None:
        self._staff = staff_directory
        self._claims = claims
        self._validator = validator
        self._holidays = holidays
        self._quota = quota
        self._aggregator = aggregator
        self._config = config
        self._clock = clock or SystemClock()
        self._notifier = notifier
        self._audit_log = audit_log
        self._quota_guard = quota_guard

    # ------------------------------------------------------------------
    # Validation and creation
    # ------------------------------------------------------------------

    def validate(
        self,
        form: ClaimRequest | Mapping[str, Any],
        staff_id: str,
    ) -> ValidationResult:
        """Dry run of the validator.  No writes."""
        return self._validator.validate_ot_application(form, staff_id)

    def save_draft(
        self,
        form: ClaimRequest | Mapping[str, Any],
        staff_id: str,
    ) -> SubmissionResult:
        """
        Persist an unvalidated Draft.

        Only form parsing and the hours calculator run, so a draft can
        sit outside the date window or over quota until it is submitted.
        """
        with LogContext.bind(staff_id=staff_id, actor_id=staff_id):
            try:
                request = self._parse(form)
                staff = self._staff.get_staff_by_id(staff_id)
                if staff is None:
                    raise StaffNotFoundError(staff_id)
                if not staff.is_active:
                    raise StaffInactiveError(staff_id)
                holiday = self._holidays.holiday_details(request.ot_date)
                hours = calculate_ot_hours(
                    request.start_time,
                    request.end_time,
                    holiday is not None,
                    self._config,
                )
            except OvertimeKernelError as exc:
                logger.info("ot_draft_refused", extra={"error_code": exc.code})
                return _refused_submission(exc)

            leave_days = Decimal("0.00")
            if request.claim_type is ClaimType.LEAVE:
                leave_days = hours_to_leave_days(hours.total_hours, self._config)

            claim = self._claims.insert_claim(
                OTClaim(
                    claim_id=uuid4(),
                    staff_id=staff_id,
                    staff_name=staff.name,
                    team=staff.team,
                    ot_date=request.ot_date,
                    start_time=request.start_time,
                    end_time=request.end_time,
                    base_hours=hours.base_hours,
                    is_holiday=holiday is not None,
                    multiplier=hours.multiplier,
                    total_hours=hours.total_hours,
                    claim_type=request.claim_type,
                    leave_days=leave_days,
                    status=ClaimStatus.DRAFT,
                    proof=request.proof,
                    reason=request.reason,
                )
            )
            logger.info(
                "ot_draft_saved",
                extra={"claim_id": str(claim.claim_id), "total_hours": claim.total_hours},
            )
            self._record(
                staff_id,
                ActivityAction.CLAIM_DRAFTED,
                f"Draft saved for {claim.ot_date.isoformat()}",
                claim.claim_id,
            )
            return SubmissionResult(success=True, claim_id=claim.claim_id, claim=claim)

    def submit_claim(
        self,
        form: ClaimRequest | Mapping[str, Any],
        staff_id: str,
    ) -> SubmissionResult:
        """Validate and persist a new Pending claim, then notify the approver."""
        with LogContext.bind(staff_id=staff_id, actor_id=staff_id):
            try:
                request = self._parse(form)
            except OvertimeKernelError as exc:
                return _refused_submission(exc)

            self._guard(staff_id)
            verdict = self._validator.validate_ot_application(request, staff_id)
            if not verdict.valid:
                logger.info(
                    "ot_claim_submission_rejected",
                    extra={"error_code": verdict.error_code},
                )
                return _failed_verdict(verdict)

            claim = self._claims.insert_claim(
                self._claim_from(uuid4(), verdict, self._clock.now())
            )
            return self._after_submit(claim, verdict)

    def submit_draft(self, claim_id: UUID, staff_id: str) -> SubmissionResult:
        """
        Draft -> Pending.

        Only the owner may submit.  The full pipeline re-runs with the
        draft itself excluded from the overlap scan, and the stored draft
        is rewritten with the fresh calculated values.
        """
        with LogContext.bind(staff_id=staff_id, actor_id=staff_id, claim_id=claim_id):
            try:
                draft = self._load(claim_id)
                if draft.staff_id != staff_id:
                    raise ClaimOwnershipError(staff_id, str(claim_id))
                self._require_transition(draft, ClaimAction.SUBMIT_DRAFT, "submit")
            except OvertimeKernelError as exc:
                return _refused_submission(exc)

            request = ClaimRequest(
                ot_date=draft.ot_date,
                start_time=draft.start_time,
                end_time=draft.end_time,
                claim_type=draft.claim_type,
                proof=draft.proof,
                reason=draft.reason,
            )
            self._guard(staff_id)
            verdict = self._validator.validate_ot_application(
                request, staff_id, exclude_id=claim_id
            )
            if not verdict.valid:
                return _failed_verdict(verdict)

            claim = self._claims.update_claim(
                self._claim_from(claim_id, verdict, self._clock.now())
            )
            return self._after_submit(claim, verdict)

    # ------------------------------------------------------------------
    # Decisions
    # ------------------------------------------------------------------

    def approve_claim(
        self,
        claim_id: UUID,
        approver_id: str,
        remarks: str | None = None,
    ) -> DecisionResult:
        """
        Pending -> Approved.

        Re-checks the monthly quota with the claim's own hours under the
        staff lock, then recomputes the monthly summary.
        """
        with LogContext.bind(actor_id=approver_id, claim_id=claim_id):
            try:
                claim = self._load(claim_id)
                self._authorize(approver_id, claim)
                self._guard(claim.staff_id)
                claim = self._load(claim_id)
                self._require_transition(claim, ClaimAction.APPROVE, "approve")

                key = month_key(claim.ot_date)
                quota = self._quota.check_ot_limit(claim.staff_id, claim.total_hours, key)
                if quota.is_blocked:
                    raise QuotaExceededError(
                        claim.staff_id, key, quota.projected_hours, quota.max_hours
                    )

                claim = self._claims.update_claim_status(
                    claim_id,
                    ClaimStatus.APPROVED,
                    approver_id,
                    remarks,
                    self._clock.now(),
                )
                summary = self._aggregator.recalculate_summary(claim.staff_id, key)
            except OvertimeKernelError as exc:
                return self._refused_decision(claim_id, ClaimAction.APPROVE, exc)

            logger.info(
                "ot_claim_approved",
                extra={
                    "staff_id": claim.staff_id,
                    "total_hours": claim.total_hours,
                    "month_key": summary.month_key,
                    "month_total_hours": summary.total_ot_hours,
                },
            )
            notified, logged = self._after_decision(
                claim, ClaimStatus.APPROVED, approver_id, remarks
            )
            return DecisionResult(
                success=True,
                claim=claim,
                summary=summary,
                notified=notified,
                logged=logged,
            )

    def reject_claim(
        self,
        claim_id: UUID,
        approver_id: str,
        remarks: str | None,
    ) -> DecisionResult:
        """Pending -> Rejected.  Remarks are mandatory; no summary recompute."""
        with LogContext.bind(actor_id=approver_id, claim_id=claim_id):
            try:
                claim = self._load(claim_id)
                self._authorize(approver_id, claim)
                self._require_transition(claim, ClaimAction.REJECT, "reject")
                if remarks is None or not remarks.strip():
                    raise RemarksRequiredError(str(claim_id))

                claim = self._claims.update_claim_status(
                    claim_id,
                    ClaimStatus.REJECTED,
                    approver_id,
                    remarks.strip(),
                    self._clock.now(),
                )
            except OvertimeKernelError as exc:
                return self._refused_decision(claim_id, ClaimAction.REJECT, exc)

            logger.info(
                "ot_claim_rejected",
                extra={"staff_id": claim.staff_id, "total_hours": claim.total_hours},
            )
            notified, logged = self._after_decision(
                claim, ClaimStatus.REJECTED, approver_id, claim.remarks
            )
            return DecisionResult(
                success=True,
                claim=claim,
                notified=notified,
                logged=logged,
            )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @staticmethod
    def _parse(form: ClaimRequest | Mapping[str, Any]) -> ClaimRequest:
        return form if isinstance(form, ClaimRequest) else ClaimRequest.from_form(form)

    def _load(self, claim_id: UUID) -> OTClaim:
        claim = self._claims.get_claim(claim_id)
        if claim is None:
            raise ClaimNotFoundError(str(claim_id))
        return claim

    def _guard(self, staff_id: str) -> None:
        if self._quota_guard is not None:
            self._quota_guard.lock_staff(staff_id)

    def _authorize(self, approver_id: str, claim: OTClaim) -> None:
        approver = self._staff.get_staff_by_id(approver_id)
        reason = None
        if approver is None:
            reason = "approver not found in staff directory"
        elif not approver.is_active:
            reason = "approver account is inactive"
        elif approver.role is not StaffRole.TEAM_LEADER:
            reason = "only team leaders may decide claims"
        elif approver.team != claim.team:
            reason = f"approver team '{approver.team}' does not match claim team '{claim.team}'"
        if reason is not None:
            raise UnauthorizedApproverError(approver_id, str(claim.claim_id), reason)

    @staticmethod
    def _require_transition(claim: OTClaim, action: ClaimAction, verb: str) -> ClaimStatus:
        target = next_status(claim.status, action)
        if target is None:
            raise InvalidStateError(str(claim.claim_id), claim.status.value, verb)
        return target

    def _claim_from(
        self,
        claim_id: UUID,
        verdict: ValidationResult,
        submitted_at: datetime,
    ) -> OTClaim:
        calc: CalculatedValues = verdict.calculated
        request = calc.request
        return OTClaim(
            claim_id=claim_id,
            staff_id=calc.staff.staff_id,
            staff_name=calc.staff.name,
            team=calc.staff.team,
            ot_date=request.ot_date,
            start_time=request.start_time,
            end_time=request.end_time,
            base_hours=calc.base_hours,
            is_holiday=calc.is_holiday,
            multiplier=calc.multiplier,
            total_hours=calc.total_hours,
            claim_type=request.claim_type,
            leave_days=calc.leave_days,
            status=ClaimStatus.PENDING,
            proof=request.proof,
            reason=request.reason,
            submitted_at=submitted_at,
            rest_gap_hours=calc.rest_gap.gap_hours,
            rest_gap_valid=calc.rest_gap.valid,
            warnings=verdict.warnings,
        )

    def _after_submit(self, claim: OTClaim, verdict: ValidationResult) -> SubmissionResult:
        logger.info(
            "ot_claim_submitted",
            extra={
                "claim_id": str(claim.claim_id),
                "ot_date": claim.ot_date,
                "total_hours": claim.total_hours,
                "claim_type": claim.claim_type.value,
                "warning_count": len(verdict.warnings),
            },
        )
        if self._notifier is not None:
            best_effort("notify_submitted", self._notifier.notify_submitted, claim)
        self._record(
            claim.staff_id,
            ActivityAction.CLAIM_SUBMITTED,
            f"Submitted {claim.total_hours} hours for {claim.ot_date.isoformat()}",
            claim.claim_id,
        )
        return SubmissionResult(
            success=True,
            claim_id=claim.claim_id,
            claim=claim,
            verdict=verdict,
            warnings=verdict.warnings,
        )

    def _after_decision(
        self,
        claim: OTClaim,
        decision: ClaimStatus,
        approver_id: str,
        remarks: str | None,
    ) -> tuple[bool, bool]:
        notified = False
        if self._notifier is not None:
            notified = best_effort(
                "notify_decision", self._notifier.notify_decision, claim, decision, remarks
            )
        action = (
            ActivityAction.CLAIM_APPROVED
            if decision is ClaimStatus.APPROVED
            else ActivityAction.CLAIM_REJECTED
        )
        detail = f"{decision.value.capitalize()} claim for {claim.staff_id}"
        if remarks:
            detail += f": {remarks}"
        logged = self._record(approver_id, action, detail, claim.claim_id)
        return notified, logged

    def _record(
        self,
        actor_id: str,
        action: ActivityAction,
        detail: str,
        claim_id: UUID | None,
    ) -> bool:
        if self._audit_log is None:
            return False
        return best_effort(
            "audit_log", self._audit_log.record, actor_id, action, detail, claim_id
        )

    def _refused_decision(
        self,
        claim_id: UUID,
        action: ClaimAction,
        exc: OvertimeKernelError,
    ) -> DecisionResult:
        logger.warning(
            "ot_claim_decision_refused",
            extra={"action": action.value, "error_code": exc.code, "reason": str(exc)},
        )
        return DecisionResult(
            success=False,
            claim=self._claims.get_claim(claim_id),
            errors=(str(exc),),
            error_code=exc.code,
        )

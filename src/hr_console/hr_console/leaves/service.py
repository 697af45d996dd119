from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Callable

from ..common.datetime_utils import now_local, parse_year_month, year_month_of
from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_SUMMARY_WRITE_RETRIES
from ..core.enums import LeaveStatus, Role
from ..core.exceptions import AuthorizationError, ConcurrencyError, NotFoundError, ValidationError
from ..employees.model import Identity
from ..summary.repository import SummaryRepository
from .adjustment import compute_leave_adjustment
from .model import LeaveAdjustment, LeaveHistoryEntry, LeaveRequest
from .repository import LeaveRepository

logger = logging.getLogger(__name__)


class LeaveApprovalService:
    """Use case: employees request leave, HR accepts or rejects.

    Accepting a leave patches the month's summary in place (no rescan). The
    patch is a compare-and-swap on the summary version, retried on conflict,
    so concurrent reviewers in the same month do not lose each other's updates.
    """

    def __init__(
        self,
        leaves: LeaveRepository,
        summaries: SummaryRepository,
        *,
        max_retries: int = DEFAULT_SUMMARY_WRITE_RETRIES,
        clock: Callable[[], datetime] = now_local,
    ):
        self._leaves = leaves
        self._summaries = summaries
        self._max_retries = max(1, int(max_retries))
        self._clock = clock

    def request_leave(self, *, employee_id: str, leave_date: date, reason: str) -> LeaveRequest:
        reason = require_non_empty(reason, "Reason")
        request = LeaveRequest(
            employee_id=employee_id,
            leave_date=leave_date,
            reason=reason,
            status=LeaveStatus.PENDING,
            created_at=self._clock(),
        )
        if not self._leaves.create(request):
            raise ValidationError(f"A leave request for {leave_date.isoformat()} already exists")
        logger.info("Leave requested by %s for %s", employee_id, leave_date)
        return request

    def accept(self, *, employee_id: str, leave_date: date, comment: str, reviewer: Identity) -> LeaveAdjustment:
        comment = self._require_decision(comment, reviewer)
        request = self._get_pending(employee_id, leave_date)

        if not self._leaves.decide(
            request,
            status=LeaveStatus.ACCEPTED,
            hr_comment=comment,
            decided_by=reviewer.uid,
            decided_at=self._clock(),
        ):
            raise ValidationError("Leave request was already decided")

        adjustment = self._apply_adjustment(employee_id, leave_date)
        if not adjustment.already_counted:
            self._record_history(request, adjustment, comment=comment, decided_by=reviewer.uid)

        logger.info(
            "Leave %s_%s accepted by %s (marked %s, carry-forward %d -> %d)",
            employee_id,
            leave_date,
            reviewer.uid,
            adjustment.marked_as.value if adjustment.marked_as else "unchanged",
            adjustment.carry_forward_before,
            adjustment.carry_forward_after,
        )
        return adjustment

    def reject(self, *, employee_id: str, leave_date: date, comment: str, reviewer: Identity) -> None:
        comment = self._require_decision(comment, reviewer)
        request = self._get_pending(employee_id, leave_date)

        if not self._leaves.decide(
            request,
            status=LeaveStatus.REJECTED,
            hr_comment=comment,
            decided_by=reviewer.uid,
            decided_at=self._clock(),
        ):
            raise ValidationError("Leave request was already decided")
        logger.info("Leave %s_%s rejected by %s", employee_id, leave_date, reviewer.uid)

    def reconcile(self, *, employee_id: str, leave_date: date, reviewer: Identity) -> LeaveAdjustment:
        """Re-apply the summary side of an accepted leave (e.g. after a failed write)."""

        if reviewer.role != Role.ADMIN:
            raise AuthorizationError("Only HR can reconcile leave requests")
        request = self._leaves.get(employee_id, leave_date)
        if not request:
            raise NotFoundError("Leave request not found")
        if request.status != LeaveStatus.ACCEPTED:
            raise ValidationError("Only accepted leave requests can be reconciled")

        adjustment = self._apply_adjustment(employee_id, leave_date)
        if not adjustment.already_counted and not self._leaves.get_history(employee_id, leave_date):
            self._record_history(
                request,
                adjustment,
                comment=request.hr_comment or "",
                decided_by=request.decided_by or reviewer.uid,
            )
        return adjustment

    def list_pending(self, year_month: str) -> list[LeaveRequest]:
        parse_year_month(year_month)
        return list(self._leaves.list_for_month(year_month, status=LeaveStatus.PENDING))

    def list_decided(self, year_month: str) -> list[LeaveRequest]:
        parse_year_month(year_month)
        return [r for r in self._leaves.list_for_month(year_month) if r.status != LeaveStatus.PENDING]

    def list_history(self, year_month: str) -> list[LeaveHistoryEntry]:
        parse_year_month(year_month)
        return list(self._leaves.list_history(year_month))

    @staticmethod
    def _require_decision(comment: str, reviewer: Identity) -> str:
        comment = require_non_empty(comment or "", "Comment")
        if reviewer.role != Role.ADMIN:
            raise AuthorizationError("Only HR can decide leave requests")
        return comment

    def _get_pending(self, employee_id: str, leave_date: date) -> LeaveRequest:
        request = self._leaves.get(employee_id, leave_date)
        if not request:
            raise NotFoundError("Leave request not found")
        if request.status != LeaveStatus.PENDING:
            raise ValidationError("Leave request was already decided")
        return request

    def _apply_adjustment(self, employee_id: str, leave_date: date) -> LeaveAdjustment:
        month = year_month_of(leave_date)
        for attempt in range(1, self._max_retries + 1):
            summary = self._summaries.get(employee_id, month)
            adjustment = compute_leave_adjustment(summary, leave_date)
            if adjustment.already_counted:
                logger.info("%s already counted in summary %s_%s, skipping", leave_date, employee_id, month)
                return adjustment
            try:
                self._summaries.patch(
                    employee_id,
                    month,
                    adjustment.to_fields(employee_id),
                    expected_version=summary.version if summary else 0,
                )
                return adjustment
            except ConcurrencyError:
                logger.warning(
                    "Summary %s_%s changed during leave adjustment (attempt %d/%d)",
                    employee_id,
                    month,
                    attempt,
                    self._max_retries,
                )
        raise ConcurrencyError(f"Could not update summary {employee_id}_{month} after {self._max_retries} attempts")

    def _record_history(self, request: LeaveRequest, adjustment: LeaveAdjustment, *, comment: str, decided_by: str) -> None:
        entry = LeaveHistoryEntry(
            employee_id=request.employee_id,
            leave_date=request.leave_date,
            status=LeaveStatus.ACCEPTED,
            reason=request.reason,
            hr_comment=comment,
            decided_by=decided_by,
            carry_forward_at_that_time=adjustment.carry_forward_before,
            carry_forward_used=adjustment.carry_forward_used,
            marked_as=adjustment.marked_as,
            final_carry_forward_left=adjustment.carry_forward_after,
            timestamp=self._clock(),
        )
        if not self._leaves.add_history(entry):
            logger.warning("Leave history for %s already exists, kept the original entry", request.doc_id)

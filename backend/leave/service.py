"""Leave service layer — leave types, balances, request lifecycle.

Business logic:
  - Leave request creation with ordered validation (first failure wins)
  - Inclusive day counting and overlap detection
  - Status transitions with balance debit on approval and credit on reversal
  - Read accessors for leave types, balances and requests

Nothing touches the ledger at creation time; balances move only when a
request becomes APPROVED or leaves APPROVED for REJECTED.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Union

from backend.common.constants import LeaveStatus
from backend.common.dates import (
    DateInput,
    inclusive_days,
    parse_calendar_date,
    ranges_overlap,
)
from backend.common.exceptions import (
    BusinessRuleException,
    ErrorCode,
    NotFoundException,
    ValidationException,
)
from backend.leave.ledger import insufficient_balance
from backend.leave.models import LeaveBalance, LeaveRequest, LeaveType
from backend.store import DataStore

logger = logging.getLogger(__name__)


# ═════════════════════════════════════════════════════════════════════
# LeaveService
# ═════════════════════════════════════════════════════════════════════


class LeaveService:
    """Leave operations: types, balances, requests, approvals."""

    def __init__(self, store: DataStore) -> None:
        self.store = store

    # ─────────────────────────────────────────────────────────────────
    # Helpers
    # ─────────────────────────────────────────────────────────────────

    @staticmethod
    def calculate_leave_days(start_date: date, end_date: date) -> int:
        """Inclusive calendar-day count of a request span."""
        return inclusive_days(start_date, end_date)

    def has_overlapping_request(
        self,
        employee_id: int,
        start_date: date,
        end_date: date,
        *,
        exclude_id: Optional[int] = None,
    ) -> bool:
        """True if a non-rejected request of the employee shares a day."""
        for req in self.store.leave_requests.all():
            if req.employee_id != employee_id or req.id == exclude_id:
                continue
            if req.status == LeaveStatus.rejected:
                continue
            if ranges_overlap(start_date, end_date, req.start_date, req.end_date):
                return True
        return False

    @staticmethod
    def _coerce_status(value: Union[LeaveStatus, str, None]) -> LeaveStatus:
        try:
            return LeaveStatus(value)
        except ValueError:
            raise ValidationException(
                ErrorCode.invalid_status, "status", "Invalid status",
            ) from None

    # ─────────────────────────────────────────────────────────────────
    # Leave Types
    # ─────────────────────────────────────────────────────────────────

    def list_leave_types(self) -> list[LeaveType]:
        return self.store.leave_types.all()

    def get_leave_type(self, leave_type_id: int) -> LeaveType:
        leave_type = self.store.leave_types.get(leave_type_id)
        if leave_type is None:
            raise NotFoundException(
                "LeaveType", leave_type_id, code=ErrorCode.invalid_leave_type,
            )
        return leave_type

    # ─────────────────────────────────────────────────────────────────
    # Balances
    # ─────────────────────────────────────────────────────────────────

    def list_leave_balances(self, employee_id: int) -> list[LeaveBalance]:
        """All balance rows of an employee (empty for unknown employees)."""
        return self.store.ledger.for_employee(employee_id)

    def get_leave_balance(
        self,
        employee_id: int,
        leave_type_id: int,
    ) -> Optional[LeaveBalance]:
        return self.store.ledger.get(employee_id, leave_type_id)

    # ─────────────────────────────────────────────────────────────────
    # Requests — queries
    # ─────────────────────────────────────────────────────────────────

    def list_leave_requests(
        self,
        employee_id: Optional[int] = None,
    ) -> list[LeaveRequest]:
        if employee_id is None:
            return self.store.leave_requests.all()
        return self.store.leave_requests.filter(
            lambda r: r.employee_id == employee_id,
        )

    def get_leave_request(self, request_id: int) -> LeaveRequest:
        leave_req = self.store.leave_requests.get(request_id)
        if leave_req is None:
            raise NotFoundException(
                "LeaveRequest", request_id, code=ErrorCode.request_not_found,
            )
        return leave_req

    # ─────────────────────────────────────────────────────────────────
    # Apply Leave
    # ─────────────────────────────────────────────────────────────────

    def create_leave_request(
        self,
        employee_id: Optional[int],
        leave_type_id: Optional[int],
        start_date: DateInput,
        end_date: DateInput,
        reason: Optional[str],
    ) -> LeaveRequest:
        """Create a PENDING leave request.

        Checks run in a fixed order and the first failure is reported:
        employee, leave type, required fields, date parsing, range order,
        joining date, day count, balance row, balance amount, overlap.
        """

        with self.store.lock:
            # ── Employee / leave type ───────────────────────────────
            employee = self.store.employees.get(employee_id)
            if employee is None:
                raise NotFoundException(
                    "Employee", employee_id,
                    code=ErrorCode.employee_not_found,
                    detail="Employee not found",
                )

            if not self.store.leave_types.exists(leave_type_id):
                raise NotFoundException(
                    "LeaveType", leave_type_id,
                    code=ErrorCode.invalid_leave_type,
                    detail="Invalid leave type",
                )

            # ── Required fields ─────────────────────────────────────
            missing = [
                name for name, value in (
                    ("start_date", start_date),
                    ("end_date", end_date),
                    ("reason", reason),
                )
                if value is None or (isinstance(value, str) and not value.strip())
            ]
            if missing:
                raise ValidationException(
                    ErrorCode.missing_field, missing[0], "All fields are required",
                )

            # ── Dates ───────────────────────────────────────────────
            start = parse_calendar_date(start_date)
            end = parse_calendar_date(end_date)
            if start is None or end is None:
                raise ValidationException(
                    ErrorCode.invalid_date,
                    "start_date" if start is None else "end_date",
                    "Invalid dates",
                )

            if end < start:
                raise ValidationException(
                    ErrorCode.invalid_range,
                    "end_date",
                    "End date cannot be before start date",
                )

            if start < employee.joining_date:
                raise ValidationException(
                    ErrorCode.predates_joining,
                    "start_date",
                    "Cannot apply for leave before joining date",
                )

            days = self.calculate_leave_days(start, end)
            if days <= 0:
                raise ValidationException(
                    ErrorCode.empty_range,
                    "dates",
                    "Leave request must be for at least one day",
                )

            # ── Balance ─────────────────────────────────────────────
            balance = self.store.ledger.get(employee.id, leave_type_id)
            if balance is None:
                raise NotFoundException(
                    "LeaveBalance", f"{employee.id}/{leave_type_id}",
                    code=ErrorCode.balance_not_found,
                    detail="Leave balance not found",
                )
            if days > balance.balance:
                raise insufficient_balance(balance.balance, days)

            # ── Overlap ─────────────────────────────────────────────
            if self.has_overlapping_request(employee.id, start, end):
                raise BusinessRuleException(
                    ErrorCode.overlapping_request,
                    "Overlapping leave request exists",
                    errors={"dates": [
                        "A pending or approved leave request already covers "
                        "some of these dates."
                    ]},
                )

            leave_request = self.store.leave_requests.insert(
                LeaveRequest(
                    employee_id=employee.id,
                    leave_type_id=leave_type_id,
                    start_date=start,
                    end_date=end,
                    reason=reason,
                    status=LeaveStatus.pending,
                )
            )

        logger.info(
            "Leave request %d created: employee=%d type=%d %s→%s (%d days)",
            leave_request.id, employee.id, leave_type_id, start, end, days,
        )
        self.store.persist()
        return leave_request

    # ─────────────────────────────────────────────────────────────────
    # Status transitions
    # ─────────────────────────────────────────────────────────────────

    def update_leave_request_status(
        self,
        request_id: int,
        status: Union[LeaveStatus, str, None],
    ) -> LeaveRequest:
        """Move a request to *status*, debiting or crediting the ledger.

        - nothing may go back to PENDING
        - same status is a no-op
        - → APPROVED debits the span's day count (fails when short)
        - APPROVED → REJECTED credits it back
        """

        with self.store.lock:
            leave_req = self.store.leave_requests.get(request_id)
            if leave_req is None:
                raise NotFoundException(
                    "LeaveRequest", request_id,
                    code=ErrorCode.request_not_found,
                    detail="Leave request not found",
                )

            new_status = self._coerce_status(status)
            old_status = leave_req.status

            if old_status != LeaveStatus.pending and new_status == LeaveStatus.pending:
                raise BusinessRuleException(
                    ErrorCode.illegal_transition,
                    "Cannot change status back to pending",
                )

            if old_status == new_status:
                return leave_req

            days = self.calculate_leave_days(leave_req.start_date, leave_req.end_date)
            balance = self.store.ledger.get(leave_req.employee_id, leave_req.leave_type_id)

            if new_status == LeaveStatus.approved:
                # A rejected request no longer blocks its dates; re-check
                # before it starts counting again.
                if old_status == LeaveStatus.rejected and self.has_overlapping_request(
                    leave_req.employee_id,
                    leave_req.start_date,
                    leave_req.end_date,
                    exclude_id=leave_req.id,
                ):
                    raise BusinessRuleException(
                        ErrorCode.overlapping_request,
                        "Overlapping leave request exists",
                    )
                if balance is None:
                    raise BusinessRuleException(
                        ErrorCode.insufficient_balance,
                        "Insufficient leave balance. No balance record for this leave type",
                    )
                self.store.ledger.debit(balance, days)

            elif old_status == LeaveStatus.approved and new_status == LeaveStatus.rejected:
                if balance is None:
                    logger.warning(
                        "No balance row for employee %d / leave type %d; "
                        "rejecting request %d without credit",
                        leave_req.employee_id, leave_req.leave_type_id, leave_req.id,
                    )
                else:
                    self.store.ledger.credit(balance, days)

            leave_req.status = new_status
            leave_req.touch()

        logger.info(
            "Leave request %d: %s → %s",
            leave_req.id, old_status.value, new_status.value,
        )
        self.store.persist()
        return leave_req

"""Operations facade — the logical request/response boundary.

Each method maps one external operation onto the services and always returns
an ``OperationResult``: ``success=True`` with ``data``, or ``success=False``
with an error code, category and message. Nothing raises to the caller.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional, TypeVar, Union

from backend.common.constants import LeaveStatus
from backend.common.dates import DateInput
from backend.common.exceptions import AppException
from backend.common.results import OperationResult
from backend.core_hr.models import Employee
from backend.core_hr.service import EmployeeService
from backend.leave.models import LeaveBalance, LeaveRequest, LeaveType
from backend.leave.service import LeaveService
from backend.store import DataStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


class LeaveOperations:
    """Discriminated-result wrappers over ``EmployeeService`` and ``LeaveService``."""

    def __init__(self, store: DataStore) -> None:
        self.store = store
        self.employees = EmployeeService(store)
        self.leave = LeaveService(store)

    @staticmethod
    def _run(func: Callable[..., T], *args: Any) -> OperationResult[T]:
        try:
            return OperationResult.ok(func(*args))
        except AppException as exc:
            logger.debug("%s failed: %s (%s)", func.__name__, exc.detail, exc.code.value)
            return OperationResult.from_exception(exc)
        except Exception as exc:
            logger.exception("Unexpected error in %s", func.__name__)
            return OperationResult.unexpected(str(exc) or exc.__class__.__name__)

    # ── Employees ───────────────────────────────────────────────────

    def list_employees(self) -> OperationResult[list[Employee]]:
        return self._run(self.employees.list_employees)

    def create_employee(
        self,
        name: Optional[str],
        email: Optional[str],
        department: Optional[str],
        joining_date: DateInput,
    ) -> OperationResult[Employee]:
        return self._run(
            self.employees.create_employee, name, email, department, joining_date,
        )

    # ── Leave types / balances ──────────────────────────────────────

    def list_leave_types(self) -> OperationResult[list[LeaveType]]:
        return self._run(self.leave.list_leave_types)

    def list_leave_balances(self, employee_id: int) -> OperationResult[list[LeaveBalance]]:
        return self._run(self.leave.list_leave_balances, employee_id)

    # ── Leave requests ──────────────────────────────────────────────

    def list_leave_requests(
        self,
        employee_id: Optional[int] = None,
    ) -> OperationResult[list[LeaveRequest]]:
        return self._run(self.leave.list_leave_requests, employee_id)

    def create_leave_request(
        self,
        employee_id: Optional[int],
        leave_type_id: Optional[int],
        start_date: DateInput,
        end_date: DateInput,
        reason: Optional[str],
    ) -> OperationResult[LeaveRequest]:
        return self._run(
            self.leave.create_leave_request,
            employee_id, leave_type_id, start_date, end_date, reason,
        )

    def update_leave_request_status(
        self,
        request_id: int,
        status: Union[LeaveStatus, str, None],
    ) -> OperationResult[LeaveRequest]:
        return self._run(self.leave.update_leave_request_status, request_id, status)

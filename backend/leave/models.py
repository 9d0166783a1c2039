"""Leave records: LeaveType, LeaveBalance, LeaveRequest."""

from __future__ import annotations

from datetime import date

from pydantic import Field

from backend.common.constants import LeaveStatus
from backend.common.models import Record


class LeaveType(Record):
    name: str
    description: str = ""
    days_allowed: int = Field(0, ge=0)


class LeaveBalance(Record):
    """Remaining days for one (employee, leave type) pair."""

    employee_id: int
    leave_type_id: int
    balance: int = Field(0, ge=0)

    @property
    def key(self) -> tuple[int, int]:
        return (self.employee_id, self.leave_type_id)


class LeaveRequest(Record):
    employee_id: int
    leave_type_id: int
    start_date: date
    end_date: date
    reason: str
    status: LeaveStatus = LeaveStatus.pending

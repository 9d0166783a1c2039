"""Core HR service layer — employee registration and lookups.

Registration validates the payload, inserts the employee and provisions one
balance row per known leave type inside the same locked section, so callers
never observe an employee without its balances.
"""

from __future__ import annotations

import logging
import re
from datetime import date
from typing import Optional

from backend.common.constants import EMAIL_PATTERN
from backend.common.dates import DateInput, parse_calendar_date
from backend.common.exceptions import (
    ConflictError,
    ErrorCode,
    NotFoundException,
    ValidationException,
)
from backend.core_hr.models import Employee
from backend.store import DataStore

logger = logging.getLogger(__name__)

_EMAIL_RE = re.compile(EMAIL_PATTERN)


def _is_blank(value: object) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


# ═════════════════════════════════════════════════════════════════════
# EmployeeService
# ═════════════════════════════════════════════════════════════════════


class EmployeeService:
    """Employee registration and read accessors over a ``DataStore``."""

    def __init__(self, store: DataStore) -> None:
        self.store = store

    # ── List / get ──────────────────────────────────────────────────

    def list_employees(self) -> list[Employee]:
        return self.store.employees.all()

    def get_employee(self, employee_id: int) -> Employee:
        employee = self.store.employees.get(employee_id)
        if employee is None:
            raise NotFoundException(
                "Employee", employee_id, code=ErrorCode.employee_not_found,
            )
        return employee

    def employee_exists(self, employee_id: int) -> bool:
        return self.store.employees.exists(employee_id)

    def find_by_email(self, email: str) -> Optional[Employee]:
        needle = email.strip().lower()
        for emp in self.store.employees.all():
            if emp.email.strip().lower() == needle:
                return emp
        return None

    # ── Create ──────────────────────────────────────────────────────

    def create_employee(
        self,
        name: Optional[str],
        email: Optional[str],
        department: Optional[str],
        joining_date: DateInput,
    ) -> Employee:
        """Register an employee and provision their leave balances.

        Checks, in order: all fields present, email format, email unique,
        joining date parses, joining date not in the future.
        """

        if any(_is_blank(v) for v in (name, email, department, joining_date)):
            raise ValidationException(
                ErrorCode.missing_field, "employee", "All fields are required",
            )

        email = email.strip()
        if not _EMAIL_RE.match(email):
            raise ValidationException(
                ErrorCode.invalid_email, "email", "Invalid email format",
            )

        with self.store.lock:
            if self.find_by_email(email) is not None:
                raise ConflictError(
                    "email",
                    email,
                    code=ErrorCode.duplicate_email,
                    detail="Employee with this email already exists",
                )

            joined = parse_calendar_date(joining_date)
            if joined is None:
                raise ValidationException(
                    ErrorCode.invalid_date, "joining_date", "Invalid joining date",
                )
            if joined > date.today():
                raise ValidationException(
                    ErrorCode.future_joining_date,
                    "joining_date",
                    "Joining date cannot be in the future",
                )

            # Insert has no undo, so clashes are checked against the id
            # the employee is about to receive.
            leave_types = self.store.leave_types.all()
            self.store.ledger.ensure_unprovisioned(
                self.store.employees.next_id, leave_types,
            )

            employee = self.store.employees.insert(
                Employee(
                    name=name.strip(),
                    email=email,
                    department=department.strip(),
                    joining_date=joined,
                )
            )
            balances = self.store.ledger.provision(employee, leave_types)

        logger.info(
            "Employee registered: id=%d email=%s (%d balances)",
            employee.id, employee.email, len(balances),
        )
        self.store.persist()
        return employee

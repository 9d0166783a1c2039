"""Balance ledger — one remaining-days counter per (employee, leave type).

Rows are indexed by the ``(employee_id, leave_type_id)`` pair, so a second
row for the same pair can never be provisioned or loaded. Balances move only
through ``debit`` / ``credit``, which the leave lifecycle calls on approval
and on reversal of an approval.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

from backend.common.exceptions import BusinessRuleException, ConflictError, ErrorCode
from backend.common.repository import Repository
from backend.core_hr.models import Employee
from backend.leave.models import LeaveBalance, LeaveType

logger = logging.getLogger(__name__)


def insufficient_balance(available: int, requested: int) -> BusinessRuleException:
    return BusinessRuleException(
        ErrorCode.insufficient_balance,
        f"Insufficient leave balance. Available: {available} days, "
        f"Requested: {requested} days",
        errors={"balance": [f"Available: {available}, Requested: {requested}."]},
    )


class BalanceLedger:
    """Owns the LeaveBalance collection and its pair index."""

    def __init__(self) -> None:
        self.rows: Repository[LeaveBalance] = Repository("leave_balances")
        self._index: dict[tuple[int, int], LeaveBalance] = {}

    def __len__(self) -> int:
        return len(self.rows)

    # ── Lookups ─────────────────────────────────────────────────────

    def get(self, employee_id: int, leave_type_id: int) -> Optional[LeaveBalance]:
        return self._index.get((employee_id, leave_type_id))

    def for_employee(self, employee_id: int) -> list[LeaveBalance]:
        rows = [row for key, row in self._index.items() if key[0] == employee_id]
        return sorted(rows, key=lambda r: r.leave_type_id)

    def all(self) -> list[LeaveBalance]:
        return self.rows.all()

    # ── Provisioning ────────────────────────────────────────────────

    def ensure_unprovisioned(
        self,
        employee_id: int,
        leave_types: Sequence[LeaveType],
    ) -> None:
        """Raise DuplicateBalance if any (employee, leave type) row exists."""
        for lt in leave_types:
            if (employee_id, lt.id) in self._index:
                raise ConflictError(
                    "leave_type_id",
                    lt.id,
                    code=ErrorCode.duplicate_balance,
                    detail=(
                        f"Employee {employee_id} already has a balance for "
                        f"leave type {lt.id}."
                    ),
                )

    def provision(
        self,
        employee: Employee,
        leave_types: Sequence[LeaveType],
    ) -> list[LeaveBalance]:
        """Create one row per leave type, seeded to its full allowance."""

        self.ensure_unprovisioned(employee.id, leave_types)

        created: list[LeaveBalance] = []
        for lt in leave_types:
            row = self.rows.insert(
                LeaveBalance(
                    employee_id=employee.id,
                    leave_type_id=lt.id,
                    balance=lt.days_allowed,
                )
            )
            self._index[row.key] = row
            created.append(row)

        logger.debug(
            "Provisioned %d balance rows for employee %d", len(created), employee.id,
        )
        return created

    # ── Mutations ───────────────────────────────────────────────────

    def debit(self, row: LeaveBalance, days: int) -> LeaveBalance:
        if row.balance - days < 0:
            raise insufficient_balance(row.balance, days)
        row.balance -= days
        row.touch()
        logger.debug(
            "Debited %d days from balance %d (employee=%d, type=%d) → %d",
            days, row.id, row.employee_id, row.leave_type_id, row.balance,
        )
        return row

    def credit(self, row: LeaveBalance, days: int) -> LeaveBalance:
        row.balance += days
        row.touch()
        logger.debug(
            "Credited %d days to balance %d (employee=%d, type=%d) → %d",
            days, row.id, row.employee_id, row.leave_type_id, row.balance,
        )
        return row

    # ── Persistence ─────────────────────────────────────────────────

    def load(self, rows: Iterable[LeaveBalance]) -> None:
        """Rebuild from persisted rows; a repeated pair keeps its first row."""

        kept: list[LeaveBalance] = []
        index: dict[tuple[int, int], LeaveBalance] = {}
        for row in rows:
            if row.key in index:
                logger.warning(
                    "Skipping duplicate balance row %d for employee %d / leave type %d",
                    row.id, row.employee_id, row.leave_type_id,
                )
                continue
            index[row.key] = row
            kept.append(row)

        self.rows.load(kept)
        self._index = index

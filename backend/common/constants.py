"""Enums and constants for the leave management service."""

from __future__ import annotations

import enum


# ── Leave ───────────────────────────────────────────────────────────

class LeaveStatus(str, enum.Enum):
    pending = "PENDING"
    approved = "APPROVED"
    rejected = "REJECTED"


# Reference set installed when no leave types have been persisted yet.
DEFAULT_LEAVE_TYPES: list[dict] = [
    {"name": "Annual", "description": "Annual leave", "days_allowed": 20},
    {"name": "Sick", "description": "Sick leave", "days_allowed": 10},
    {"name": "Maternity", "description": "Maternity leave", "days_allowed": 90},
    {"name": "Paternity", "description": "Paternity leave", "days_allowed": 15},
]


# ── Validation ──────────────────────────────────────────────────────

EMAIL_PATTERN = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"


# ── Snapshot files (one JSON array per collection) ──────────────────

SNAPSHOT_FILES: dict[str, str] = {
    "employees": "employees.json",
    "leave_types": "leaveTypes.json",
    "leave_balances": "leaveBalances.json",
    "leave_requests": "leaveRequests.json",
}

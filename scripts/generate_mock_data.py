#!/usr/bin/env python3
"""Mock data generator — writes the four JSON snapshot collections.

Produces random employees, leave requests and balances for the default leave
types and saves them where the service loads its snapshot from.

Usage:
    python scripts/generate_mock_data.py                    # 50 employees → ./data
    python scripts/generate_mock_data.py --employees 200
    python scripts/generate_mock_data.py --data-dir /tmp/leave --seed 42

Reads DATA_DIR from .env at project root when --data-dir is not given.
"""

from __future__ import annotations

import argparse
import logging
import os
import random
import sys
from datetime import date, timedelta
from pathlib import Path

# ── Path setup ────────────────────────────────────────────────────────
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from dotenv import load_dotenv

load_dotenv(PROJECT_ROOT / ".env")

from backend.common.constants import LeaveStatus
from backend.core_hr.models import Employee
from backend.leave.models import LeaveBalance, LeaveRequest
from backend.persistence import JsonSnapshotBackend
from backend.store import DataStore

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s — %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("generate_mock_data")


FIRST_NAMES = [
    "James", "Mary", "John", "Patricia", "Robert", "Jennifer", "Michael", "Linda",
    "William", "Elizabeth", "David", "Barbara", "Richard", "Susan", "Joseph",
    "Jessica", "Thomas", "Sarah", "Charles", "Karen", "Christopher", "Nancy",
    "Daniel", "Lisa", "Matthew", "Betty", "Anthony", "Helen", "Mark", "Sandra",
]

LAST_NAMES = [
    "Smith", "Johnson", "Williams", "Brown", "Jones", "Garcia", "Miller", "Davis",
    "Rodriguez", "Martinez", "Hernandez", "Lopez", "Gonzalez", "Wilson",
    "Anderson", "Thomas", "Taylor", "Moore", "Jackson", "Martin", "Lee", "Perez",
    "Thompson", "White", "Harris", "Sanchez", "Clark", "Ramirez", "Lewis", "Walker",
]

DEPARTMENTS = [
    "Engineering", "Marketing", "Sales", "Human Resources", "Finance", "Operations",
    "Information Technology", "Customer Service", "Research and Development", "Legal",
]

REASONS = [
    "Family vacation", "Medical appointment", "Personal matters",
    "Rest and relaxation", "Home maintenance", "Family event", "Travel",
    "Health checkup", "Mental health break", "Visiting relatives",
    "Outdoor activities", "Cultural event", "Workshop attendance",
]

# 7 approved : 2 pending : 1 rejected
STATUS_WEIGHTS = {
    LeaveStatus.approved: 7,
    LeaveStatus.pending: 2,
    LeaveStatus.rejected: 1,
}


# ══════════════════════════════════════════════════════════════════════
# Generators
# ══════════════════════════════════════════════════════════════════════


def generate_employees(store: DataStore, count: int, rng: random.Random) -> list[Employee]:
    today = date.today()
    employees: list[Employee] = []
    for i in range(1, count + 1):
        first = rng.choice(FIRST_NAMES)
        last = rng.choice(LAST_NAMES)
        joined = date(
            today.year - rng.randint(1, 5),
            rng.randint(1, 12),
            rng.randint(1, 28),
        )
        employees.append(
            store.employees.insert(
                Employee(
                    name=f"{first} {last}",
                    email=f"{first.lower()}.{last.lower()}{i}@company.com",
                    department=rng.choice(DEPARTMENTS),
                    joining_date=joined,
                )
            )
        )
    return employees


def generate_leave_requests(
    store: DataStore,
    employees: list[Employee],
    rng: random.Random,
) -> list[LeaveRequest]:
    statuses = list(STATUS_WEIGHTS)
    weights = list(STATUS_WEIGHTS.values())
    leave_types = store.leave_types.all()

    requests: list[LeaveRequest] = []
    for emp in employees:
        for _ in range(rng.randint(1, 5)):
            start = emp.joining_date + timedelta(days=rng.randrange(365))
            end = start + timedelta(days=rng.randint(1, 10))
            requests.append(
                store.leave_requests.insert(
                    LeaveRequest(
                        employee_id=emp.id,
                        leave_type_id=rng.choice(leave_types).id,
                        start_date=start,
                        end_date=end,
                        reason=rng.choice(REASONS),
                        status=rng.choices(statuses, weights)[0],
                    )
                )
            )
    return requests


def generate_leave_balances(
    store: DataStore,
    employees: list[Employee],
    rng: random.Random,
) -> list[LeaveBalance]:
    """Random remaining days per (employee, leave type), not tied to requests."""
    rows: list[LeaveBalance] = []
    for emp in employees:
        for lt in store.leave_types.all():
            rows.append(
                LeaveBalance(
                    id=len(rows) + 1,
                    employee_id=emp.id,
                    leave_type_id=lt.id,
                    balance=rng.randint(0, lt.days_allowed),
                )
            )
    store.ledger.load(rows)
    return rows


def generate(store: DataStore, employee_count: int, seed: int | None = None) -> None:
    """Fill *store* with mock data (leave types are seeded when missing)."""
    rng = random.Random(seed)
    store.seed_leave_types()
    employees = generate_employees(store, employee_count, rng)
    generate_leave_requests(store, employees, rng)
    generate_leave_balances(store, employees, rng)


# ══════════════════════════════════════════════════════════════════════
# CLI
# ══════════════════════════════════════════════════════════════════════


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Generate mock leave-management data")
    parser.add_argument("--employees", type=int, default=50, help="Number of employees")
    parser.add_argument(
        "--data-dir",
        default=os.environ.get("DATA_DIR", "data"),
        help="Directory for the JSON snapshot files",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    args = parser.parse_args(argv)

    backend = JsonSnapshotBackend(args.data_dir)
    store = DataStore(snapshot_backend=backend)
    generate(store, args.employees, args.seed)
    backend.save(store)

    logger.info("Mock data written to %s", Path(args.data_dir).resolve())
    logger.info("  Total employees:      %d", len(store.employees))
    logger.info("  Total leave requests: %d", len(store.leave_requests))
    logger.info("  Total leave balances: %d", len(store.ledger))
    logger.info("  Total leave types:    %d", len(store.leave_types))
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""In-memory data store and snapshot wiring.

One ``DataStore`` is built at startup and handed to the services through the
FastAPI dependency in ``backend.dependencies``. Every read-check-write
sequence runs under ``store.lock``.
"""

from __future__ import annotations

import logging
import threading
from typing import Iterable, Optional

from backend.common.constants import DEFAULT_LEAVE_TYPES
from backend.common.repository import Repository
from backend.core_hr.models import Employee
from backend.leave.ledger import BalanceLedger
from backend.leave.models import LeaveRequest, LeaveType
from backend.persistence import NullSnapshotBackend, SnapshotBackend

logger = logging.getLogger(__name__)


class DataStore:
    """Employees, leave types, balance ledger and leave requests."""

    def __init__(self, snapshot_backend: Optional[SnapshotBackend] = None) -> None:
        # Re-entrant so a service may call another locked helper.
        self.lock = threading.RLock()
        self.employees: Repository[Employee] = Repository("employees")
        self.leave_types: Repository[LeaveType] = Repository("leave_types")
        self.leave_requests: Repository[LeaveRequest] = Repository("leave_requests")
        self.ledger = BalanceLedger()
        self.snapshot_backend: SnapshotBackend = snapshot_backend or NullSnapshotBackend()

    def seed_leave_types(
        self,
        seed: Iterable[dict] = DEFAULT_LEAVE_TYPES,
    ) -> list[LeaveType]:
        """Install the reference leave types if none exist yet."""
        with self.lock:
            if len(self.leave_types):
                return self.leave_types.all()
            created = [self.leave_types.insert(LeaveType(**data)) for data in seed]
        logger.info("Seeded %d leave types", len(created))
        return created

    def restore(self, *, seed_leave_types: bool = True) -> None:
        """Populate from the snapshot backend (process start)."""
        with self.lock:
            self.snapshot_backend.load(self)
            if seed_leave_types:
                self.seed_leave_types()
        logger.info(
            "Store ready: %d employees, %d leave types, %d balances, %d requests",
            len(self.employees),
            len(self.leave_types),
            len(self.ledger),
            len(self.leave_requests),
        )

    def persist(self) -> None:
        """Best-effort snapshot after a mutation; never fails the caller."""
        try:
            self.snapshot_backend.save(self)
        except OSError as exc:
            logger.error("Snapshot save failed: %s", exc)

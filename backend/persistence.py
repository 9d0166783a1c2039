"""Snapshot persistence — load/save the store as flat JSON collections.

Layout (one array of camelCase records per file, keyed by integer ``id``)::

    <DATA_DIR>/employees.json
    <DATA_DIR>/leaveTypes.json
    <DATA_DIR>/leaveBalances.json
    <DATA_DIR>/leaveRequests.json

Snapshots sit outside the validation path: the store writes one after a
mutation has been committed in memory.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, Any, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from backend.common.constants import SNAPSHOT_FILES
from backend.common.models import utcnow
from backend.core_hr.models import Employee
from backend.leave.models import LeaveBalance, LeaveRequest, LeaveType

if TYPE_CHECKING:
    from backend.store import DataStore

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


class SnapshotBackend(ABC):
    """Abstract base class for store snapshots."""

    @abstractmethod
    def load(self, store: "DataStore") -> None:
        ...

    @abstractmethod
    def save(self, store: "DataStore") -> None:
        ...


class NullSnapshotBackend(SnapshotBackend):
    """Keeps everything in memory only."""

    def load(self, store: "DataStore") -> None:
        return None

    def save(self, store: "DataStore") -> None:
        return None


class JsonSnapshotBackend(SnapshotBackend):
    """Reads and writes one JSON file per collection under *data_dir*."""

    def __init__(self, data_dir: str | os.PathLike[str]) -> None:
        self.data_dir = Path(data_dir)
        # Collections whose unreadable file could not be moved aside.
        self.held: set[str] = set()

    def path_for(self, collection: str) -> Path:
        return self.data_dir / SNAPSHOT_FILES[collection]

    # ── Load ────────────────────────────────────────────────────────

    def _set_aside(self, collection: str, path: Path) -> None:
        """Move an unreadable file out of the way so a save cannot replace it."""
        target = path.with_name(f"{path.name}.{utcnow():%Y%m%dT%H%M%S}.corrupt")
        try:
            os.replace(path, target)
        except OSError as exc:
            logger.error("Cannot move %s aside (%s); it will not be overwritten", path, exc)
            self.held.add(collection)
            return
        logger.warning("Moved unreadable %s to %s", path.name, target.name)

    def _read(self, collection: str, model: type[M]) -> list[M]:
        """Missing or unreadable files load as an empty collection.

        An unreadable file is kept as ``<name>.<timestamp>.corrupt``.
        """
        path = self.path_for(collection)
        if not path.exists():
            return []
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
            return TypeAdapter(list[model]).validate_python(raw)
        except (OSError, json.JSONDecodeError, ValidationError) as exc:
            logger.error("Error loading %s: %s", path, exc)
            self._set_aside(collection, path)
            return []

    def load(self, store: "DataStore") -> None:
        store.employees.load(self._read("employees", Employee))
        store.leave_types.load(self._read("leave_types", LeaveType))
        store.ledger.load(self._read("leave_balances", LeaveBalance))
        store.leave_requests.load(self._read("leave_requests", LeaveRequest))
        logger.info("Loaded snapshot from %s", self.data_dir)

    # ── Save ────────────────────────────────────────────────────────

    @staticmethod
    def _dump(rows: list[BaseModel]) -> list[dict[str, Any]]:
        return [row.model_dump(mode="json", by_alias=True) for row in rows]

    def _write(self, collection: str, payload: list[dict[str, Any]]) -> None:
        path = self.path_for(collection)
        fd, tmp_name = tempfile.mkstemp(
            dir=self.data_dir, prefix=f".{path.name}.", suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(payload, fh, indent=2)
            os.replace(tmp_name, path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def save(self, store: "DataStore") -> None:
        with store.lock:
            payloads = {
                "employees": self._dump(store.employees.all()),
                "leave_types": self._dump(store.leave_types.all()),
                "leave_balances": self._dump(store.ledger.all()),
                "leave_requests": self._dump(store.leave_requests.all()),
            }
        self.data_dir.mkdir(parents=True, exist_ok=True)
        for collection, payload in payloads.items():
            if collection in self.held:
                continue
            self._write(collection, payload)
        logger.debug("Saved snapshot to %s", self.data_dir)

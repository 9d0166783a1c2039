"""Mock data script tests — generated snapshot is loadable and consistent."""

from __future__ import annotations

import importlib.util
import json
from pathlib import Path

import pytest

from backend.common.constants import LeaveStatus
from backend.persistence import JsonSnapshotBackend
from backend.store import DataStore

SCRIPT = Path(__file__).resolve().parent.parent / "scripts" / "generate_mock_data.py"


@pytest.fixture(scope="module")
def mock_data():
    spec = importlib.util.spec_from_file_location("generate_mock_data", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class TestGenerateMockData:

    def test_generate_fills_store(self, mock_data):
        store = DataStore()
        mock_data.generate(store, 10, seed=7)

        assert len(store.employees) == 10
        assert len(store.leave_types) == 4
        assert len(store.ledger) == 40
        assert 10 <= len(store.leave_requests) <= 50

        for row in store.ledger.all():
            allowance = store.leave_types.get(row.leave_type_id).days_allowed
            assert 0 <= row.balance <= allowance

        for req in store.leave_requests.all():
            emp = store.employees.get(req.employee_id)
            assert req.start_date >= emp.joining_date
            assert req.end_date > req.start_date
            assert req.status in set(LeaveStatus)

    def test_same_seed_same_data(self, mock_data):
        a, b = DataStore(), DataStore()
        mock_data.generate(a, 5, seed=1)
        mock_data.generate(b, 5, seed=1)
        assert [e.email for e in a.employees.all()] == [e.email for e in b.employees.all()]

    def test_emails_unique(self, mock_data):
        store = DataStore()
        mock_data.generate(store, 60, seed=3)
        emails = [e.email for e in store.employees.all()]
        assert len(set(emails)) == len(emails)

    def test_main_writes_loadable_snapshot(self, mock_data, tmp_path):
        assert mock_data.main(["--employees", "3", "--data-dir", str(tmp_path), "--seed", "5"]) == 0

        employees = json.loads((tmp_path / "employees.json").read_text(encoding="utf-8"))
        assert len(employees) == 3
        assert "joiningDate" in employees[0]

        store = DataStore(snapshot_backend=JsonSnapshotBackend(tmp_path))
        store.restore()
        assert len(store.employees) == 3
        assert len(store.ledger) == 12

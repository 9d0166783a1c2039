"""Shared test fixtures — isolated store, services, app, client, factories.

Every test gets its own in-memory ``DataStore`` seeded with the default leave
types and a ``NullSnapshotBackend``, so nothing touches the filesystem unless
a test wires a ``JsonSnapshotBackend`` to ``tmp_path`` itself.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import AsyncGenerator, Optional

import pytest
from httpx import ASGITransport, AsyncClient

from backend.common.constants import LeaveStatus
from backend.core_hr.models import Employee
from backend.core_hr.service import EmployeeService
from backend.leave.models import LeaveRequest
from backend.leave.service import LeaveService
from backend.main import create_app
from backend.operations import LeaveOperations
from backend.persistence import NullSnapshotBackend
from backend.store import DataStore

# Default leave type ids after seeding
ANNUAL, SICK, MATERNITY, PATERNITY = 1, 2, 3, 4


# ── Store / services ────────────────────────────────────────────────

@pytest.fixture
def store() -> DataStore:
    data_store = DataStore(snapshot_backend=NullSnapshotBackend())
    data_store.seed_leave_types()
    return data_store


@pytest.fixture
def employee_service(store) -> EmployeeService:
    return EmployeeService(store)


@pytest.fixture
def leave_service(store) -> LeaveService:
    return LeaveService(store)


@pytest.fixture
def operations(store) -> LeaveOperations:
    return LeaveOperations(store)


@pytest.fixture(autouse=True)
def _reset_rate_limiter():
    """Reset rate limiter storage between tests to prevent cross-test interference."""
    from backend.common.rate_limit import limiter

    limiter.reset()
    yield


# ── FastAPI test client ─────────────────────────────────────────────

@pytest.fixture
async def app(store):
    """A fresh app bound to the test store."""
    yield create_app(store=store)


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client wired to the test app."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


# ── Factories ───────────────────────────────────────────────────────

def _make_employee(
    service: EmployeeService,
    *,
    name: str = "Test User",
    email: str = "test.user@example.com",
    department: str = "Engineering",
    joining_date: str = "2023-01-10",
) -> Employee:
    return service.create_employee(name, email, department, joining_date)


def _make_request(
    service: LeaveService,
    employee_id: int,
    *,
    leave_type_id: int = ANNUAL,
    start_date: str = "2023-02-01",
    end_date: str = "2023-02-05",
    reason: str = "trip",
    status: Optional[LeaveStatus] = None,
) -> LeaveRequest:
    req = service.create_leave_request(
        employee_id, leave_type_id, start_date, end_date, reason,
    )
    if status is not None and status != LeaveStatus.pending:
        req = service.update_leave_request_status(req.id, status)
    return req


@pytest.fixture
def test_employee(employee_service) -> Employee:
    """Registered employee who joined 2023-01-10 (Annual balance 20)."""
    return _make_employee(employee_service)


def days_ago(n: int) -> date:
    return date.today() - timedelta(days=n)

"""HTTP API tests — status codes, camelCase bodies and problem details.

Drives the FastAPI app through httpx's ASGI transport against the per-test
in-memory store.
"""

from __future__ import annotations

import asyncio

import pytest
from fastapi.routing import APIRoute

from backend.main import create_app
from backend.store import DataStore
from tests.conftest import ANNUAL

EMPLOYEE = {
    "name": "Test User",
    "email": "test.user@example.com",
    "department": "Engineering",
    "joiningDate": "2023-01-10",
}


async def _post_employee(client, **overrides) -> dict:
    resp = await client.post("/api/v1/employees", json={**EMPLOYEE, **overrides})
    assert resp.status_code == 201, resp.text
    return resp.json()


async def _post_request(client, employee_id: int, **overrides) -> dict:
    payload = {
        "employeeId": employee_id,
        "leaveTypeId": ANNUAL,
        "startDate": "2023-02-01",
        "endDate": "2023-02-05",
        "reason": "trip",
    }
    payload.update(overrides)
    resp = await client.post("/api/v1/leave-requests", json=payload)
    assert resp.status_code == 201, resp.text
    return resp.json()


class TestSystem:

    async def test_health(self, client):
        resp = await client.get("/api/v1/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "healthy"


class TestEmployeesApi:

    async def test_create_returns_camel_case(self, client):
        body = await _post_employee(client)
        assert body["id"] == 1
        assert body["joiningDate"] == "2023-01-10"
        assert "createdAt" in body and "updatedAt" in body

    async def test_list_and_get(self, client):
        created = await _post_employee(client)

        listed = await client.get("/api/v1/employees")
        assert [e["email"] for e in listed.json()] == ["test.user@example.com"]

        resp = await client.get(f"/api/v1/employees/{created['id']}")
        assert resp.status_code == 200
        assert resp.json()["name"] == "Test User"

    async def test_get_unknown_is_404_problem(self, client):
        resp = await client.get("/api/v1/employees/99")
        assert resp.status_code == 404
        assert resp.headers["content-type"].startswith("application/problem+json")
        body = resp.json()
        assert body["code"] == "EmployeeNotFound"
        assert body["category"] == "not_found"
        assert body["instance"] == "/api/v1/employees/99"

    async def test_missing_fields_is_400(self, client):
        resp = await client.post("/api/v1/employees", json={"name": "Only Name"})
        assert resp.status_code == 400
        assert resp.json()["code"] == "MissingField"
        assert resp.json()["detail"] == "All fields are required"

    async def test_duplicate_email_is_409(self, client):
        await _post_employee(client)
        resp = await client.post("/api/v1/employees", json={**EMPLOYEE, "email": "TEST.USER@example.com"})
        assert resp.status_code == 409
        assert resp.json()["code"] == "DuplicateEmail"

    async def test_wrong_type_is_422(self, client):
        resp = await client.post("/api/v1/employees", json={**EMPLOYEE, "name": ["x"]})
        assert resp.status_code == 422
        assert resp.json()["code"] == "RequestValidation"


class TestLeaveTypesAndBalancesApi:

    async def test_list_leave_types(self, client):
        resp = await client.get("/api/v1/leave-types")
        assert resp.status_code == 200
        assert [(t["name"], t["daysAllowed"]) for t in resp.json()] == [
            ("Annual", 20), ("Sick", 10), ("Maternity", 90), ("Paternity", 15),
        ]

    async def test_balances_require_employee_id(self, client):
        resp = await client.get("/api/v1/leave-balances")
        assert resp.status_code == 400
        assert resp.json()["detail"] == "Missing employeeId parameter"

    async def test_balances_for_employee(self, client):
        emp = await _post_employee(client)
        resp = await client.get("/api/v1/leave-balances", params={"employeeId": emp["id"]})
        assert resp.status_code == 200
        assert {b["leaveTypeId"]: b["balance"] for b in resp.json()} == {1: 20, 2: 10, 3: 90, 4: 15}

    async def test_balances_for_unknown_employee_empty(self, client):
        resp = await client.get("/api/v1/leave-balances", params={"employeeId": 42})
        assert resp.json() == []


class TestLeaveRequestsApi:

    async def test_create_and_fetch(self, client):
        emp = await _post_employee(client)
        created = await _post_request(client, emp["id"])

        assert created["status"] == "PENDING"
        assert created["employeeId"] == emp["id"]
        assert created["endDate"] == "2023-02-05"

        resp = await client.get(f"/api/v1/leave-requests/{created['id']}")
        assert resp.json()["reason"] == "trip"

    async def test_list_filtered_by_employee(self, client):
        a = await _post_employee(client, email="a@example.com")
        b = await _post_employee(client, email="b@example.com")
        await _post_request(client, a["id"])
        await _post_request(client, b["id"])

        everything = await client.get("/api/v1/leave-requests")
        assert len(everything.json()) == 2

        mine = await client.get("/api/v1/leave-requests", params={"employeeId": b["id"]})
        assert [r["employeeId"] for r in mine.json()] == [b["id"]]

    @pytest.mark.parametrize(
        "overrides, status, code",
        [
            ({"employeeId": 99}, 404, "EmployeeNotFound"),
            ({"leaveTypeId": 99}, 404, "InvalidLeaveType"),
            ({"reason": ""}, 400, "MissingField"),
            ({"startDate": "2023-02-31"}, 400, "InvalidDate"),
            ({"startDate": "2023-02-06"}, 400, "InvalidRange"),
            ({"startDate": "2023-01-01"}, 400, "PredatesJoining"),
            ({"endDate": "2023-03-31"}, 409, "InsufficientBalance"),
        ],
    )
    async def test_create_failures(self, client, overrides, status, code):
        emp = await _post_employee(client)
        payload = {
            "employeeId": emp["id"],
            "leaveTypeId": ANNUAL,
            "startDate": "2023-02-01",
            "endDate": "2023-02-05",
            "reason": "trip",
            **overrides,
        }
        resp = await client.post("/api/v1/leave-requests", json=payload)
        assert resp.status_code == status
        assert resp.json()["code"] == code

    async def test_overlap_is_409(self, client):
        emp = await _post_employee(client)
        await _post_request(client, emp["id"])
        resp = await client.post("/api/v1/leave-requests", json={
            "employeeId": emp["id"], "leaveTypeId": 2,
            "startDate": "2023-02-05", "endDate": "2023-02-06", "reason": "sick",
        })
        assert resp.status_code == 409
        assert resp.json()["detail"] == "Overlapping leave request exists"

    async def test_approve_and_reject_move_balance(self, client):
        emp = await _post_employee(client)
        req = await _post_request(client, emp["id"])

        resp = await client.patch(f"/api/v1/leave-requests/{req['id']}", json={"status": "APPROVED"})
        assert resp.status_code == 200
        assert resp.json()["status"] == "APPROVED"

        balances = await client.get("/api/v1/leave-balances", params={"employeeId": emp["id"]})
        assert next(b for b in balances.json() if b["leaveTypeId"] == ANNUAL)["balance"] == 15

        resp = await client.patch(f"/api/v1/leave-requests/{req['id']}", json={"status": "REJECTED"})
        assert resp.json()["status"] == "REJECTED"

        balances = await client.get("/api/v1/leave-balances", params={"employeeId": emp["id"]})
        assert next(b for b in balances.json() if b["leaveTypeId"] == ANNUAL)["balance"] == 20

    async def test_patch_errors(self, client):
        emp = await _post_employee(client)
        req = await _post_request(client, emp["id"])

        missing = await client.patch("/api/v1/leave-requests/99", json={"status": "APPROVED"})
        assert missing.status_code == 404
        assert missing.json()["code"] == "RequestNotFound"

        invalid = await client.patch(f"/api/v1/leave-requests/{req['id']}", json={"status": "DONE"})
        assert invalid.status_code == 400
        assert invalid.json()["code"] == "InvalidStatus"

        await client.patch(f"/api/v1/leave-requests/{req['id']}", json={"status": "REJECTED"})
        back = await client.patch(f"/api/v1/leave-requests/{req['id']}", json={"status": "PENDING"})
        assert back.status_code == 409
        assert back.json()["code"] == "IllegalTransition"


class TestRateLimiting:

    async def test_write_endpoint_is_throttled(self, client):
        """Writes past the per-minute allowance get 429."""
        for i in range(120):
            resp = await client.post("/api/v1/employees", json={**EMPLOYEE, "email": f"u{i}@example.com"})
            assert resp.status_code == 201, f"Request {i + 1} should succeed"

        resp = await client.post("/api/v1/employees", json={**EMPLOYEE, "email": "late@example.com"})
        assert resp.status_code == 429


class TestWriteRoutes:

    @pytest.mark.parametrize(
        "path, method",
        [
            ("/api/v1/employees", "POST"),
            ("/api/v1/leave-requests", "POST"),
            ("/api/v1/leave-requests/{request_id}", "PATCH"),
        ],
    )
    def test_write_handlers_run_in_threadpool(self, path, method):
        """Snapshot-writing handlers are sync so they stay off the event loop."""
        app = create_app(store=DataStore())
        route = next(
            r for r in app.routes
            if isinstance(r, APIRoute) and r.path == path and method in r.methods
        )
        assert not asyncio.iscoroutinefunction(route.endpoint)

"""Leave router — leave types, balances, requests and status updates.

Write routes are plain ``def``: they end in a snapshot file write, which
FastAPI then runs in its threadpool.
"""


from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from backend.common.exceptions import ErrorCode, ValidationException
from backend.common.rate_limit import limiter
from backend.config import settings
from backend.dependencies import get_leave_service
from backend.leave.models import LeaveBalance, LeaveRequest, LeaveType
from backend.leave.schemas import LeaveRequestCreate, LeaveStatusUpdate
from backend.leave.service import LeaveService

leave_types_router = APIRouter(prefix="", tags=["leave-types"])
leave_balances_router = APIRouter(prefix="", tags=["leave-balances"])
leave_requests_router = APIRouter(prefix="", tags=["leave-requests"])


# ── GET /leave-types ────────────────────────────────────────────────

@leave_types_router.get("", response_model=list[LeaveType])
async def list_leave_types(
    service: LeaveService = Depends(get_leave_service),
):
    """List the leave types and their annual allowances."""
    return service.list_leave_types()


# ── GET /leave-balances?employeeId= ─────────────────────────────────

@leave_balances_router.get("", response_model=list[LeaveBalance])
async def list_leave_balances(
    employee_id: Optional[int] = Query(None, alias="employeeId"),
    service: LeaveService = Depends(get_leave_service),
):
    """Remaining days per leave type for one employee."""
    if employee_id is None:
        raise ValidationException(
            ErrorCode.missing_field, "employeeId", "Missing employeeId parameter",
        )
    return service.list_leave_balances(employee_id)


# ── GET /leave-requests ─────────────────────────────────────────────

@leave_requests_router.get("", response_model=list[LeaveRequest])
async def list_leave_requests(
    employee_id: Optional[int] = Query(None, alias="employeeId"),
    service: LeaveService = Depends(get_leave_service),
):
    """All leave requests, or one employee's when ``employeeId`` is given."""
    return service.list_leave_requests(employee_id)


# ── POST /leave-requests ────────────────────────────────────────────

@leave_requests_router.post("", response_model=LeaveRequest, status_code=201)
@limiter.limit(settings.WRITE_RATE_LIMIT)
def create_leave_request(
    request: Request,
    body: LeaveRequestCreate,
    service: LeaveService = Depends(get_leave_service),
):
    """Apply for leave. Validates dates, joining date, balance and overlap."""
    return service.create_leave_request(
        body.employee_id,
        body.leave_type_id,
        body.start_date,
        body.end_date,
        body.reason,
    )


# ── GET /leave-requests/{id} ────────────────────────────────────────

@leave_requests_router.get("/{request_id}", response_model=LeaveRequest)
async def get_leave_request(
    request_id: int,
    service: LeaveService = Depends(get_leave_service),
):
    return service.get_leave_request(request_id)


# ── PATCH /leave-requests/{id} ──────────────────────────────────────

@leave_requests_router.patch("/{request_id}", response_model=LeaveRequest)
@limiter.limit(settings.WRITE_RATE_LIMIT)
def update_leave_request_status(
    request: Request,
    request_id: int,
    body: LeaveStatusUpdate,
    service: LeaveService = Depends(get_leave_service),
):
    """Approve (debits balance) or reject (refunds an approved request)."""
    return service.update_leave_request_status(request_id, body.status)

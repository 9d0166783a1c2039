"""Core HR router — employee endpoints.

Routes:
    /employees       — List, register employees
    /employees/{id}  — Get employee
"""


from fastapi import APIRouter, Depends, Request

from backend.common.rate_limit import limiter
from backend.config import settings
from backend.core_hr.models import Employee
from backend.core_hr.schemas import EmployeeCreate
from backend.core_hr.service import EmployeeService
from backend.dependencies import get_employee_service

employees_router = APIRouter(prefix="", tags=["employees"])


# ── GET /employees ──────────────────────────────────────────────────

@employees_router.get("", response_model=list[Employee])
async def list_employees(
    service: EmployeeService = Depends(get_employee_service),
):
    """List all employees."""
    return service.list_employees()


# ── POST /employees ─────────────────────────────────────────────────

@employees_router.post("", response_model=Employee, status_code=201)
@limiter.limit(settings.WRITE_RATE_LIMIT)
def create_employee(
    request: Request,
    body: EmployeeCreate,
    service: EmployeeService = Depends(get_employee_service),
):
    """Register an employee; one leave balance per leave type is created with it."""
    return service.create_employee(
        body.name, body.email, body.department, body.joining_date,
    )


# ── GET /employees/{id} ─────────────────────────────────────────────

@employees_router.get("/{employee_id}", response_model=Employee)
async def get_employee(
    employee_id: int,
    service: EmployeeService = Depends(get_employee_service),
):
    return service.get_employee(employee_id)

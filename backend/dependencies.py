"""Shared FastAPI dependencies."""

from fastapi import Depends, Request

from backend.core_hr.service import EmployeeService
from backend.leave.service import LeaveService
from backend.store import DataStore


def get_store(request: Request) -> DataStore:
    """The process-wide store built in ``create_app``."""
    return request.app.state.store


def get_employee_service(store: DataStore = Depends(get_store)) -> EmployeeService:
    return EmployeeService(store)


def get_leave_service(store: DataStore = Depends(get_store)) -> LeaveService:
    return LeaveService(store)

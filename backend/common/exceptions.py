"""Custom exceptions and RFC 7807 Problem Detail error handlers."""

from __future__ import annotations

import enum
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

BASE_ERROR_URI = "https://leave.local/errors"


# ── Error taxonomy ──────────────────────────────────────────────────

class ErrorCategory(str, enum.Enum):
    not_found = "not_found"
    validation = "validation"
    business_rule = "business_rule"
    unexpected = "unexpected"


class ErrorCode(str, enum.Enum):
    # not found
    employee_not_found = "EmployeeNotFound"
    invalid_leave_type = "InvalidLeaveType"
    request_not_found = "RequestNotFound"
    balance_not_found = "BalanceNotFound"
    # validation
    missing_field = "MissingField"
    invalid_email = "InvalidEmail"
    invalid_date = "InvalidDate"
    invalid_range = "InvalidRange"
    future_joining_date = "FutureJoiningDate"
    predates_joining = "PredatesJoining"
    empty_range = "EmptyRange"
    invalid_status = "InvalidStatus"
    # business rules
    duplicate_email = "DuplicateEmail"
    duplicate_balance = "DuplicateBalance"
    insufficient_balance = "InsufficientBalance"
    overlapping_request = "OverlappingRequest"
    illegal_transition = "IllegalTransition"
    # anything else
    unexpected = "Unexpected"
    request_validation = "RequestValidation"


# ── Exception hierarchy ─────────────────────────────────────────────

class AppException(Exception):
    """Base for all application exceptions → RFC 7807 JSON."""

    def __init__(
        self,
        status_code: int,
        error_type: str,
        title: str,
        detail: str,
        errors: Optional[dict[str, Any]] = None,
        *,
        code: ErrorCode = ErrorCode.unexpected,
        category: ErrorCategory = ErrorCategory.unexpected,
    ) -> None:
        self.status_code = status_code
        self.error_type = error_type
        self.title = title
        self.detail = detail
        self.errors = errors
        self.code = code
        self.category = category
        super().__init__(detail)


class NotFoundException(AppException):
    """404 — entity not found."""

    def __init__(
        self,
        entity_type: str,
        entity_id: Any,
        *,
        code: ErrorCode,
        detail: Optional[str] = None,
    ) -> None:
        super().__init__(
            status_code=404,
            error_type="not-found",
            title=f"{entity_type} Not Found",
            detail=detail or f"{entity_type} with id '{entity_id}' does not exist.",
            code=code,
            category=ErrorCategory.not_found,
        )


class ValidationException(AppException):
    """400 — missing or malformed field, bad date, range problems."""

    def __init__(self, code: ErrorCode, field: str, message: str) -> None:
        super().__init__(
            status_code=400,
            error_type="validation-error",
            title="Validation Error",
            detail=message,
            errors={field: [message]},
            code=code,
            category=ErrorCategory.validation,
        )


class BusinessRuleException(AppException):
    """409 — request is well-formed but breaks a leave rule."""

    def __init__(
        self,
        code: ErrorCode,
        detail: str,
        errors: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            status_code=409,
            error_type="business-rule",
            title="Business Rule Violation",
            detail=detail,
            errors=errors,
            code=code,
            category=ErrorCategory.business_rule,
        )


class ConflictError(BusinessRuleException):
    """409 — unique value already taken."""

    def __init__(
        self,
        field: str,
        value: Any,
        *,
        code: ErrorCode = ErrorCode.duplicate_email,
        detail: Optional[str] = None,
    ) -> None:
        super().__init__(
            code,
            detail or f"An entry with {field}='{value}' already exists.",
            errors={field: [f"'{value}' is already in use."]},
        )
        self.error_type = "conflict"
        self.title = "Conflict"


# ── RFC 7807 builder ────────────────────────────────────────────────

def _build_problem_detail(exc: AppException, request: Request) -> dict[str, Any]:
    body: dict[str, Any] = {
        "type": f"{BASE_ERROR_URI}/{exc.error_type}",
        "title": exc.title,
        "status": exc.status_code,
        "detail": exc.detail,
        "instance": str(request.url.path),
        "code": exc.code.value,
        "category": exc.category.value,
    }
    if exc.errors:
        body["errors"] = exc.errors
    return body


# ── FastAPI handlers ────────────────────────────────────────────────

async def _handle_app_exception(
    request: Request,
    exc: AppException,
) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=_build_problem_detail(exc, request),
        media_type="application/problem+json",
    )


async def _handle_validation_error(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    field_errors: dict[str, list[str]] = {}
    for err in exc.errors():
        loc = err.get("loc", ())
        name = (
            ".".join(str(p) for p in loc[1:])
            if len(loc) > 1
            else str(loc[0]) if loc else "unknown"
        )
        field_errors.setdefault(name, []).append(err.get("msg", "Invalid value"))

    return JSONResponse(
        status_code=422,
        content={
            "type": f"{BASE_ERROR_URI}/validation-error",
            "title": "Validation Error",
            "status": 422,
            "detail": "Request validation failed.",
            "instance": str(request.url.path),
            "code": ErrorCode.request_validation.value,
            "category": ErrorCategory.unexpected.value,
            "errors": field_errors,
        },
        media_type="application/problem+json",
    )


# ── Registration helper (called from main.py) ──────────────────────

def register_exception_handlers(app: FastAPI) -> None:
    """Attach all custom exception handlers to the FastAPI app."""
    app.add_exception_handler(AppException, _handle_app_exception)          # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _handle_validation_error)  # type: ignore[arg-type]

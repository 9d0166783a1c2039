"""Common module — shared utilities for the leave management service."""

from backend.common.constants import (
    DEFAULT_LEAVE_TYPES,
    EMAIL_PATTERN,
    SNAPSHOT_FILES,
    LeaveStatus,
)
from backend.common.dates import inclusive_days, parse_calendar_date, ranges_overlap
from backend.common.exceptions import (
    AppException,
    BusinessRuleException,
    ConflictError,
    ErrorCategory,
    ErrorCode,
    NotFoundException,
    ValidationException,
    register_exception_handlers,
)
from backend.common.models import CamelModel, Record, utcnow
from backend.common.repository import Repository
from backend.common.results import OperationError, OperationResult

__all__ = [
    # Constants / Enums
    "LeaveStatus",
    "DEFAULT_LEAVE_TYPES",
    "EMAIL_PATTERN",
    "SNAPSHOT_FILES",
    # Dates
    "inclusive_days",
    "parse_calendar_date",
    "ranges_overlap",
    # Exceptions
    "AppException",
    "BusinessRuleException",
    "ConflictError",
    "ErrorCategory",
    "ErrorCode",
    "NotFoundException",
    "ValidationException",
    "register_exception_handlers",
    # Records
    "CamelModel",
    "Record",
    "utcnow",
    "Repository",
    # Results
    "OperationError",
    "OperationResult",
]

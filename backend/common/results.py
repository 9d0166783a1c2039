"""Discriminated success / failure envelope for in-process callers."""

from __future__ import annotations

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel

from backend.common.exceptions import AppException, ErrorCategory, ErrorCode

T = TypeVar("T")


class OperationError(BaseModel):
    """Failure half of an ``OperationResult``."""

    code: ErrorCode
    category: ErrorCategory
    message: str


class OperationResult(BaseModel, Generic[T]):
    """Standard envelope: ``{"success": bool, "data": ..., "error": ...}``."""

    success: bool
    data: Optional[T] = None
    error: Optional[OperationError] = None

    @classmethod
    def ok(cls, data: T) -> "OperationResult[T]":
        return cls(success=True, data=data)

    @classmethod
    def from_exception(cls, exc: AppException) -> "OperationResult[T]":
        return cls(
            success=False,
            error=OperationError(
                code=exc.code,
                category=exc.category,
                message=exc.detail,
            ),
        )

    @classmethod
    def unexpected(cls, message: str) -> "OperationResult[T]":
        return cls(
            success=False,
            error=OperationError(
                code=ErrorCode.unexpected,
                category=ErrorCategory.unexpected,
                message=message,
            ),
        )

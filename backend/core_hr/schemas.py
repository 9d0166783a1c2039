"""Core HR Pydantic v2 schemas — request bodies.

Responses reuse ``backend.core_hr.models.Employee``.
"""

from typing import Optional

from pydantic import Field

from backend.common.models import CamelModel


class EmployeeCreate(CamelModel):
    """Payload for registering a new employee."""

    name: Optional[str] = Field(None, max_length=200)
    email: Optional[str] = Field(None, max_length=320)
    department: Optional[str] = Field(None, max_length=200)
    joining_date: Optional[str] = Field(None, description="YYYY-MM-DD, not in the future")

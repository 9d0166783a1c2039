"""Leave Pydantic v2 schemas — request bodies.

Responses reuse the records in ``backend.leave.models``. Date and status
fields arrive as raw strings; the service parses them so that each problem
is reported with its own error code and in the documented order.
"""

from __future__ import annotations

from typing import Optional

from pydantic import Field

from backend.common.models import CamelModel


class LeaveRequestCreate(CamelModel):
    """Payload for applying a leave request."""

    employee_id: Optional[int] = None
    leave_type_id: Optional[int] = None
    start_date: Optional[str] = Field(None, description="Leave start date (inclusive), YYYY-MM-DD")
    end_date: Optional[str] = Field(None, description="Leave end date (inclusive), YYYY-MM-DD")
    reason: Optional[str] = Field(None, max_length=1000)


class LeaveStatusUpdate(CamelModel):
    """Payload for moving a leave request to a new status."""

    status: Optional[str] = Field(None, description="PENDING | APPROVED | REJECTED")

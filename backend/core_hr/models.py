"""Core HR records: Employee."""

from __future__ import annotations

from datetime import date

from backend.common.models import Record


class Employee(Record):
    name: str
    email: str
    department: str
    joining_date: date

"""Core HR module — Employee record, schemas and registration service."""

from backend.core_hr.models import Employee

__all__ = ["Employee"]

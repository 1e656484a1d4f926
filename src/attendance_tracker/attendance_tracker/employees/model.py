from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Employee:
    """Domain entity: Employee, owned by exactly one admin."""

    employee_id: int
    admin_id: int
    name: str
    email: str
    phone: Optional[str]
    position: Optional[str] = None
    department: Optional[str] = None
    qr_code: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "admin_id": self.admin_id,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "position": self.position,
            "department": self.department,
            "qr_code": self.qr_code,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    def to_contact(self) -> dict:
        """Short form used by search results and error suggestions."""
        return {
            "employee_id": self.employee_id,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
        }

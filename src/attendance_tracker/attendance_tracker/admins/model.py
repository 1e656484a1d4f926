from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Admin:
    """Domain entity: Admin (tenant owner).

    Note: Plain data object, holds the hashes but never leaves the service layer as-is;
    use `to_profile()` for anything returned to clients.
    """

    admin_id: int
    name: str
    email: str
    phone: Optional[str]
    organization: Optional[str]
    username: str
    password_hash: str
    security_question: Optional[str] = None
    security_answer_hash: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_profile(self) -> dict:
        return {
            "admin_id": self.admin_id,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "organization": self.organization,
            "username": self.username,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

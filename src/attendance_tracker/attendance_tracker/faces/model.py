from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class FaceSample:
    """Stored face training data for one employee, joined with the owner's name/email.

    `face_data` is opaque JSON text produced by the browser-side recognizer.
    """

    training_id: int
    employee_id: int
    face_data: Optional[str]
    quality_score: Optional[float]
    name: str = ""
    email: str = ""
    created_at: Optional[datetime] = None

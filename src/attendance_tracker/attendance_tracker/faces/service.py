from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Optional, Sequence

from ..common.validators import parse_int
from ..core.constants import DEFAULT_FACE_QUALITY
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from .repository import FaceRepository

logger = logging.getLogger(__name__)

_FORMAT_QUALITY = (
    ("data:image/jpeg", 0.8),
    ("data:image/png", 0.9),
)
_OTHER_FORMAT_QUALITY = 0.6


def calculate_face_quality(images: Sequence[Any]) -> float:
    """Heuristic: mean per-image score by declared format, plus up to 0.2 for more images."""
    if not images:
        return 0.5

    total = 0.0
    for image in images:
        text = str(image)
        total += next((score for prefix, score in _FORMAT_QUALITY if prefix in text), _OTHER_FORMAT_QUALITY)

    avg = total / len(images)
    bonus = min(0.2, len(images) * 0.05)
    return round(min(1.0, avg + bonus), 2)


class FaceService:
    """Stores opaque face samples; recognition matching happens client-side."""

    def __init__(self, faces: FaceRepository, employees: EmployeeRepository):
        self._faces = faces
        self._employees = employees

    def _require_owned(self, employee_id: int, admin_id: int) -> None:
        if not self._employees.get_for_admin(employee_id, admin_id):
            raise NotFoundError("Employee not found")

    def train_face(self, admin_id: int, *, employee_id: Any, face_data: Any, now: Optional[datetime] = None) -> float:
        if not employee_id or not face_data:
            raise ValidationError("Employee ID and face data are required")
        if not isinstance(face_data, dict):
            raise ValidationError("Face data must be an object with descriptor and images")

        employee_id = parse_int(employee_id, "Employee ID")
        self._require_owned(employee_id, admin_id)

        images = face_data.get("images") or []
        quality = calculate_face_quality(images)
        stored = json.dumps(
            {
                "descriptor": face_data.get("descriptor") or [],
                "images": images,
                "timestamp": (now or datetime.now(timezone.utc)).isoformat(),
                "quality_score": quality,
            }
        )

        if self._faces.count_for_employee(employee_id) > 0:
            self._faces.update_for_employee(employee_id=employee_id, face_data=stored, quality_score=quality)
        else:
            self._faces.insert(employee_id=employee_id, face_data=stored, quality_score=quality)

        logger.info("Face training saved for employee %s (quality=%.2f)", employee_id, quality)
        return quality

    def face_database(self, admin_id: int) -> list[dict]:
        out: list[dict] = []
        for sample in self._faces.list_for_admin(admin_id):
            data = self._parse(sample.employee_id, sample.face_data)
            if data is None:
                continue
            out.append(
                {
                    "employee_id": sample.employee_id,
                    "name": sample.name,
                    "email": sample.email,
                    "descriptor": data.get("descriptor") or [],
                    "images": data.get("images") or [],
                    "quality_score": sample.quality_score,
                }
            )
        return out

    def face_descriptors(self, admin_id: int) -> list[dict]:
        out: list[dict] = []
        for sample in self._faces.list_for_admin(admin_id):
            data = self._parse(sample.employee_id, sample.face_data)
            if data is None:
                continue
            out.append(
                {
                    "employee_id": sample.employee_id,
                    "name": sample.name,
                    "descriptor": data.get("descriptor") or [],
                    "quality": sample.quality_score or DEFAULT_FACE_QUALITY,
                }
            )
        return out

    def face_status(self, admin_id: int, employee_id: int) -> dict:
        self._require_owned(employee_id, admin_id)
        count = self._faces.count_for_employee(employee_id)
        return {"employee_id": employee_id, "faces_trained": count, "has_face_data": count > 0}

    def delete_face_data(self, admin_id: int, employee_id: int) -> int:
        self._require_owned(employee_id, admin_id)
        return self._faces.delete_for_employee(employee_id)

    @staticmethod
    def _parse(employee_id: int, face_data: Optional[str]) -> Optional[dict]:
        if not face_data:
            return None
        try:
            data = json.loads(face_data)
        except ValueError:
            logger.warning("Error parsing face data for employee %s", employee_id)
            return None
        return data if isinstance(data, dict) else None

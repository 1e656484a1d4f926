from __future__ import annotations

from typing import Protocol, Sequence

from .model import FaceSample


class FaceRepository(Protocol):
    def count_for_employee(self, employee_id: int) -> int:
        raise NotImplementedError

    def insert(self, *, employee_id: int, face_data: str, quality_score: float) -> int:
        raise NotImplementedError

    def update_for_employee(self, *, employee_id: int, face_data: str, quality_score: float) -> bool:
        raise NotImplementedError

    def list_for_admin(self, admin_id: int) -> Sequence[FaceSample]:
        """Newest first."""
        raise NotImplementedError

    def delete_for_employee(self, employee_id: int) -> int:
        raise NotImplementedError

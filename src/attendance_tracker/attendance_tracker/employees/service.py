from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..common.validators import optional_str, require_fields
from ..core.constants import MIN_SEARCH_LENGTH, SEARCH_LIMIT
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..faces.repository import FaceRepository
from .model import Employee
from .qr import build_qr_payload, render_qr_data_url
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QRResult:
    employee_id: int
    employee_name: str
    qr_data: str
    qr_code: str


class EmployeeService:
    """Use cases: tenant-scoped employee roster and QR codes."""

    def __init__(self, employees: EmployeeRepository, attendance: AttendanceRepository, faces: FaceRepository):
        self._employees = employees
        self._attendance = attendance
        self._faces = faces

    def add_employee(
        self,
        admin_id: int,
        *,
        name: str,
        email: str,
        phone: str,
        position: Optional[str] = None,
        department: Optional[str] = None,
    ) -> QRResult:
        require_fields(
            {"name": name, "email": email, "phone": phone},
            ("name", "email", "phone"),
            "Name, email, and phone are required",
        )
        name = str(name).strip()
        email = str(email).strip()

        # Email is unique across every tenant, not per admin.
        if self._employees.email_exists(email):
            raise ConflictError("Email already exists")

        # The id is generated by the database, so insert with a placeholder payload first.
        placeholder = build_qr_payload(int(time.time() * 1000), name)
        employee_id = self._employees.create_employee(
            admin_id=admin_id,
            name=name,
            email=email,
            phone=str(phone).strip(),
            position=optional_str(position),
            department=optional_str(department),
            qr_code=placeholder,
        )

        payload = build_qr_payload(employee_id, name)
        self._employees.update_qr_code(employee_id, payload)
        logger.info("Employee added: %s (id=%s, admin=%s)", name, employee_id, admin_id)

        return QRResult(
            employee_id=employee_id,
            employee_name=name,
            qr_data=payload,
            qr_code=render_qr_data_url(payload),
        )

    def list_employees(self, admin_id: int) -> list[Employee]:
        return list(self._employees.list_for_admin(admin_id))

    def search_employees(self, admin_id: int, q: Optional[str]) -> list[Employee]:
        term = (q or "").strip()
        if len(term) < MIN_SEARCH_LENGTH:
            raise ValidationError(f"Search term must be at least {MIN_SEARCH_LENGTH} characters")
        return list(self._employees.search_for_admin(admin_id, term, limit=SEARCH_LIMIT))

    def get_employee(self, employee_id: int, admin_id: int) -> Employee:
        employee = self._employees.get_for_admin(employee_id, admin_id)
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def regenerate_qr(self, employee_id: int, admin_id: int) -> QRResult:
        employee = self.get_employee(employee_id, admin_id)
        payload = build_qr_payload(employee.employee_id, employee.name)
        self._employees.update_qr_code(employee.employee_id, payload)
        return QRResult(
            employee_id=employee.employee_id,
            employee_name=employee.name,
            qr_data=payload,
            qr_code=render_qr_data_url(payload),
        )

    def regenerate_all_qr(self, admin_id: int) -> tuple[int, int]:
        """Return (updated, total); one failing employee does not abort the batch."""
        employees = self._employees.list_for_admin(admin_id)
        updated = 0
        for employee in employees:
            try:
                payload = build_qr_payload(employee.employee_id, employee.name)
                if self._employees.update_qr_code(employee.employee_id, payload):
                    updated += 1
                else:
                    logger.warning("Employee %s vanished during QR regeneration", employee.employee_id)
            except Exception:
                logger.exception("Error updating QR for employee %s", employee.employee_id)
        return updated, len(employees)

    def delete_employee(self, employee_id: int, admin_id: int) -> int:
        employee = self.get_employee(employee_id, admin_id)

        # Dependent rows go first; failures here are logged and do not block the delete.
        try:
            self._faces.delete_for_employee(employee.employee_id)
        except Exception:
            logger.exception("Could not delete face data for employee %s", employee.employee_id)
        try:
            self._attendance.delete_for_employee(employee.employee_id)
        except Exception:
            logger.exception("Could not delete attendance for employee %s", employee.employee_id)

        if not self._employees.delete_for_admin(employee.employee_id, admin_id):
            raise NotFoundError("Employee not found")
        logger.info("Employee deleted: %s (id=%s)", employee.name, employee.employee_id)
        return employee.employee_id

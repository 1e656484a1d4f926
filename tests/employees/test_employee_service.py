from __future__ import annotations

import json
from dataclasses import replace

import pytest

from src.attendance_tracker.attendance_tracker.core.exceptions import (
    ConflictError,
    NotFoundError,
    ValidationError,
)


@pytest.fixture
def other_admin(container) -> int:
    return container.auth_service.signup(
        name="Eve",
        email="eve@example.com",
        phone=None,
        organization=None,
        username="eve",
        password="secret123",
        security_question="q",
        security_answer="a",
    )


def _add(container, admin_id, name="Bob", email="bob@example.com", phone="555-0100"):
    return container.employee_service.add_employee(admin_id, name=name, email=email, phone=phone)


def test_add_rewrites_qr_payload_with_generated_id(container, admin_id, store):
    result = _add(container, admin_id, name="  Bob  ")

    assert json.loads(result.qr_data) == {"id": result.employee_id, "name": "Bob"}
    assert store.employees[result.employee_id].qr_code == result.qr_data
    assert result.qr_code.startswith("data:image/png;base64,")


def test_add_requires_name_email_phone(container, admin_id):
    with pytest.raises(ValidationError, match="Name, email, and phone are required"):
        _add(container, admin_id, phone="")


def test_email_is_unique_across_tenants(container, admin_id, other_admin):
    _add(container, admin_id)

    with pytest.raises(ConflictError, match="Email already exists"):
        _add(container, other_admin, name="Other Bob")


def test_email_taken_between_check_and_insert_is_conflict(container, admin_id, store, monkeypatch):
    def taken(**fields):
        raise ConflictError("Email already exists")

    monkeypatch.setattr(container.employees_repo, "create_employee", taken)

    with pytest.raises(ConflictError, match="Email already exists"):
        _add(container, admin_id)
    assert store.employees == {}


def test_employees_of_other_admin_are_invisible(container, admin_id, other_admin):
    emp_id = _add(container, other_admin, email="x@example.com").employee_id

    with pytest.raises(NotFoundError):
        container.employee_service.get_employee(emp_id, admin_id)
    with pytest.raises(NotFoundError):
        container.employee_service.delete_employee(emp_id, admin_id)
    assert container.employee_service.list_employees(admin_id) == []


def test_list_is_ordered_by_name(container, admin_id):
    _add(container, admin_id, name="Zed", email="z@example.com")
    _add(container, admin_id, name="Amy", email="a@example.com")

    assert [e.name for e in container.employee_service.list_employees(admin_id)] == ["Amy", "Zed"]


def test_search_requires_two_characters(container, admin_id):
    with pytest.raises(ValidationError):
        container.employee_service.search_employees(admin_id, " b ")


def test_search_ranks_name_matches_before_email_matches(container, admin_id):
    _add(container, admin_id, name="Carl", email="carl.smith@example.com")
    _add(container, admin_id, name="Smith Jones", email="sj@example.com")

    hits = container.employee_service.search_employees(admin_id, "smith")

    assert [e.name for e in hits] == ["Smith Jones", "Carl"]


def test_regenerate_qr_returns_name_and_image(container, admin_id):
    emp_id = _add(container, admin_id).employee_id

    result = container.employee_service.regenerate_qr(emp_id, admin_id)

    assert result.employee_name == "Bob"
    assert json.loads(result.qr_data)["id"] == emp_id


def test_regenerate_all_counts_updated_and_total(container, admin_id, store):
    first = _add(container, admin_id, name="A", email="a@example.com").employee_id
    _add(container, admin_id, name="B", email="b@example.com")
    store.employees[first] = replace(store.employees[first], qr_code="stale")

    updated, total = container.employee_service.regenerate_all_qr(admin_id)

    assert (updated, total) == (2, 2)
    assert json.loads(store.employees[first].qr_code) == {"id": first, "name": "A"}


def test_regenerate_all_skips_failing_items(container, admin_id, monkeypatch):
    _add(container, admin_id, name="A", email="a@example.com")
    _add(container, admin_id, name="B", email="b@example.com")
    repo = container.employees_repo
    real_update = repo.update_qr_code

    def flaky(employee_id, qr_code):
        if json.loads(qr_code)["name"] == "A":
            raise RuntimeError("db hiccup")
        return real_update(employee_id, qr_code)

    monkeypatch.setattr(repo, "update_qr_code", flaky)

    assert container.employee_service.regenerate_all_qr(admin_id) == (1, 2)


def test_delete_removes_attendance_and_face_rows(container, admin_id, store, fixed_now):
    emp_id = _add(container, admin_id).employee_id
    container.attendance_service.mark_attendance(emp_id, now=fixed_now)
    container.face_service.train_face(admin_id, employee_id=emp_id, face_data={"descriptor": [0.1], "images": []})

    assert container.employee_service.delete_employee(emp_id, admin_id) == emp_id

    assert emp_id not in store.employees
    assert not store.attendance
    assert not store.faces

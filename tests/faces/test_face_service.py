from __future__ import annotations

import json

import pytest

from src.attendance_tracker.attendance_tracker.core.exceptions import NotFoundError, ValidationError
from src.attendance_tracker.attendance_tracker.faces.service import calculate_face_quality

JPEG = "data:image/jpeg;base64,AAAA"
PNG = "data:image/png;base64,AAAA"
GIF = "data:image/gif;base64,AAAA"


@pytest.mark.parametrize(
    "images, expected",
    [
        ([], 0.5),
        ([JPEG], 0.85),
        ([PNG, PNG], 1.0),
        ([GIF], 0.65),
        ([JPEG, GIF], 0.8),
    ],
)
def test_quality_score(images, expected):
    assert calculate_face_quality(images) == pytest.approx(expected)


@pytest.fixture
def emp_id(container, admin_id) -> int:
    return container.employee_service.add_employee(
        admin_id, name="Bob", email="bob@example.com", phone="555"
    ).employee_id


def test_train_face_upserts_single_row(container, admin_id, emp_id, store):
    svc = container.face_service
    svc.train_face(admin_id, employee_id=emp_id, face_data={"descriptor": [0.1], "images": [JPEG]})
    quality = svc.train_face(admin_id, employee_id=str(emp_id), face_data={"descriptor": [0.2], "images": [PNG]})

    assert quality == pytest.approx(0.95)
    assert len(store.faces) == 1
    stored = json.loads(next(iter(store.faces.values())).face_data)
    assert stored["descriptor"] == [0.2]
    assert stored["quality_score"] == pytest.approx(0.95)


def test_train_face_validates_input(container, admin_id, emp_id):
    with pytest.raises(ValidationError):
        container.face_service.train_face(admin_id, employee_id=emp_id, face_data=None)
    with pytest.raises(ValidationError):
        container.face_service.train_face(admin_id, employee_id=emp_id, face_data=["not", "a", "dict"])
    with pytest.raises(NotFoundError):
        container.face_service.train_face(admin_id, employee_id=emp_id + 100, face_data={"images": []})


def test_descriptors_skip_unparsable_rows(container, admin_id, emp_id, store):
    container.face_service.train_face(admin_id, employee_id=emp_id, face_data={"descriptor": [1.0], "images": []})
    container.faces_repo.insert(employee_id=emp_id, face_data="{broken", quality_score=None)

    descriptors = container.face_service.face_descriptors(admin_id)

    assert descriptors == [{"employee_id": emp_id, "name": "Bob", "descriptor": [1.0], "quality": 0.5}]


def test_face_status_and_delete(container, admin_id, emp_id):
    svc = container.face_service
    assert svc.face_status(admin_id, emp_id)["has_face_data"] is False

    svc.train_face(admin_id, employee_id=emp_id, face_data={"descriptor": [], "images": []})
    assert svc.face_status(admin_id, emp_id) == {"employee_id": emp_id, "faces_trained": 1, "has_face_data": True}

    assert svc.delete_face_data(admin_id, emp_id) == 1
    assert svc.face_status(admin_id, emp_id)["faces_trained"] == 0


def test_face_status_after_employee_deleted(container, admin_id, emp_id):
    container.employee_service.delete_employee(emp_id, admin_id)

    with pytest.raises(NotFoundError):
        container.face_service.face_status(admin_id, emp_id)

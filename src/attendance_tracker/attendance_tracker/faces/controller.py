from __future__ import annotations

from flask import Flask, g, jsonify

from ..common.web import json_body, login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/employee/train-face", methods=["POST"], endpoint="face_train")
    @login_required
    def train_face():
        data = json_body()
        quality = container.face_service.train_face(
            g.admin_id,
            employee_id=data.get("employee_id"),
            face_data=data.get("face_data"),
        )
        return jsonify({"message": "Face training data saved successfully", "quality_score": quality})

    @app.route("/employee/face-database", methods=["GET"], endpoint="face_database")
    @login_required
    def face_database():
        return jsonify(container.face_service.face_database(g.admin_id))

    @app.route("/employee/face-descriptors", methods=["GET"], endpoint="face_descriptors")
    @login_required
    def face_descriptors():
        return jsonify(container.face_service.face_descriptors(g.admin_id))

    @app.route("/employee/face-status/<int:employee_id>", methods=["GET"], endpoint="face_status")
    @login_required
    def face_status(employee_id: int):
        return jsonify(container.face_service.face_status(g.admin_id, employee_id))

    @app.route("/employee/face-data/<int:employee_id>", methods=["DELETE"], endpoint="face_delete")
    @login_required
    def delete_face_data(employee_id: int):
        deleted = container.face_service.delete_face_data(g.admin_id, employee_id)
        return jsonify(
            {
                "message": "Face training data deleted successfully",
                "employee_id": employee_id,
                "deleted": deleted,
            }
        )

from __future__ import annotations

from flask import Flask, g, jsonify, request

from ..common.web import json_body, login_required
from ..container import Container
from ..core.exceptions import ValidationError
from .scanner import decode_qr_image


def register(app: Flask, container: Container) -> None:
    # mark/update/stats stay open for the scanner kiosk.

    @app.route("/attendance/mark", methods=["POST"], endpoint="attendance_mark")
    def mark():
        data = json_body()
        if data.get("qr_data"):
            result = container.attendance_service.mark_from_qr(data["qr_data"])
        else:
            result = container.attendance_service.mark_attendance(data.get("employee_id"))
        return jsonify(result.to_dict())

    @app.route("/attendance/scan-image", methods=["POST"], endpoint="attendance_scan_image")
    @login_required
    def scan_image():
        file = request.files.get("image")
        if file is None or not file.filename:
            raise ValidationError("No image uploaded")
        result = container.attendance_service.mark_from_qr(decode_qr_image(file.stream))
        return jsonify(result.to_dict())

    @app.route("/attendance/update/<employee_id>", methods=["PUT"], endpoint="attendance_update")
    def update(employee_id: str):
        data = json_body()
        old_status, new_status = container.attendance_service.update_attendance(
            employee_id,
            status=data.get("status"),
            reason=data.get("reason"),
        )
        return jsonify(
            {
                "message": "Attendance updated successfully",
                "oldStatus": old_status.value,
                "newStatus": new_status.value,
            }
        )

    @app.route("/attendance/stats/<employee_id>", methods=["GET"], endpoint="attendance_stats")
    def stats(employee_id: str):
        return jsonify(container.attendance_service.get_stats(employee_id).to_dict())

    @app.route("/attendance/export", methods=["GET"], endpoint="attendance_export")
    @login_required
    def export():
        csv_text = container.attendance_service.export_csv(g.admin_id)
        return app.response_class(
            csv_text.encode("utf-8"),
            mimetype="text/csv",
            headers={"Content-Disposition": "attachment; filename=attendance.csv"},
        )

from __future__ import annotations

import io

from flask import Flask, g, jsonify, request, send_file

from ..common.web import json_body, login_required
from ..container import Container

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def register(app: Flask, container: Container) -> None:
    @app.route("/reports/generate", methods=["POST"], endpoint="reports_generate")
    @login_required
    def generate():
        data = json_body()
        report = container.report_service.generate(
            g.admin_id,
            start_date=data.get("startDate"),
            end_date=data.get("endDate"),
            report_type=data.get("type"),
            period=data.get("period"),
        )
        return jsonify(report.to_dict())

    @app.route("/reports/summary", methods=["GET"], endpoint="reports_summary")
    @login_required
    def summary():
        return jsonify(container.report_service.summary(g.admin_id))

    @app.route("/reports/export.xlsx", methods=["GET"], endpoint="reports_export_xlsx")
    @login_required
    def export_xlsx():
        start = request.args.get("start")
        end = request.args.get("end")
        content = container.report_service.export_excel(g.admin_id, start_date=start, end_date=end)
        return send_file(
            io.BytesIO(content),
            download_name=f"attendance_report_{start}_{end}.xlsx",
            as_attachment=True,
            mimetype=XLSX_MIMETYPE,
        )

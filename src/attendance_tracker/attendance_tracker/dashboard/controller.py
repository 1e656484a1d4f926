from __future__ import annotations

from flask import Flask, g, jsonify, request

from ..common.web import login_required
from ..container import Container
from ..core.constants import DEFAULT_TREND_DAYS


def register(app: Flask, container: Container) -> None:
    @app.route("/dashboard/summary", methods=["GET"], endpoint="dashboard_summary")
    @login_required
    def summary():
        return jsonify(container.dashboard_service.summary(g.admin_id))

    @app.route("/dashboard/employee-status", methods=["GET"], endpoint="dashboard_employee_status")
    @login_required
    def employee_status():
        return jsonify({"employees": container.dashboard_service.employee_status(g.admin_id)})

    @app.route("/dashboard/recent-activity", methods=["GET"], endpoint="dashboard_recent_activity")
    @login_required
    def recent_activity():
        return jsonify({"activities": container.dashboard_service.recent_activity(g.admin_id)})

    @app.route("/dashboard/attendance-trend", methods=["GET"], endpoint="dashboard_attendance_trend")
    @login_required
    def attendance_trend():
        days = request.args.get("days", DEFAULT_TREND_DAYS)
        return jsonify(container.dashboard_service.attendance_trend(g.admin_id, days))

    @app.route("/dashboard/department-performance", methods=["GET"], endpoint="dashboard_department_performance")
    @login_required
    def department_performance():
        return jsonify(container.dashboard_service.department_performance(g.admin_id))

    @app.route("/dashboard/search-employees", methods=["GET"], endpoint="dashboard_search_employees")
    @login_required
    def search_employees():
        return jsonify({"employees": container.dashboard_service.search_employees(g.admin_id, request.args.get("q"))})

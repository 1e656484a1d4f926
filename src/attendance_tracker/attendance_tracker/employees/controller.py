from __future__ import annotations

from flask import Flask, g, jsonify, request

from ..common.web import json_body, login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/employee/add", methods=["POST"], endpoint="employee_add")
    @login_required
    def add():
        data = json_body()
        result = container.employee_service.add_employee(
            g.admin_id,
            name=data.get("name", ""),
            email=data.get("email", ""),
            phone=data.get("phone", ""),
            position=data.get("position"),
            department=data.get("department"),
        )
        return (
            jsonify(
                {
                    "message": "Employee added successfully",
                    "employee_id": result.employee_id,
                    "qr_code": result.qr_code,
                    "qr_data": result.qr_data,
                }
            ),
            201,
        )

    @app.route("/employee/list", methods=["GET"], endpoint="employee_list")
    @login_required
    def list_employees():
        employees = container.employee_service.list_employees(g.admin_id)
        return jsonify({"employees": [e.to_dict() for e in employees]})

    @app.route("/employee/search", methods=["GET"], endpoint="employee_search")
    @login_required
    def search():
        q = request.args.get("q", "")
        employees = container.employee_service.search_employees(g.admin_id, q)
        return jsonify(
            {
                "employees": [e.to_dict() for e in employees],
                "searchTerm": q.strip(),
                "totalFound": len(employees),
            }
        )

    @app.route("/employee/get/<int:employee_id>", methods=["GET"], endpoint="employee_get")
    @login_required
    def get(employee_id: int):
        employee = container.employee_service.get_employee(employee_id, g.admin_id)
        return jsonify({"success": True, "employee": employee.to_dict()})

    @app.route("/employee/<int:employee_id>", methods=["GET"], endpoint="employee_detail")
    @login_required
    def detail(employee_id: int):
        return jsonify(container.employee_service.get_employee(employee_id, g.admin_id).to_dict())

    @app.route("/employee/generate-qr/<int:employee_id>", methods=["POST"], endpoint="employee_generate_qr")
    @login_required
    def generate_qr(employee_id: int):
        result = container.employee_service.regenerate_qr(employee_id, g.admin_id)
        return jsonify(
            {
                "success": True,
                "qr_code": result.qr_code,
                "qr_data": result.qr_data,
                "employee_name": result.employee_name,
            }
        )

    @app.route("/employee/regenerate-all-qr", methods=["POST"], endpoint="employee_regenerate_all_qr")
    @login_required
    def regenerate_all_qr():
        updated, total = container.employee_service.regenerate_all_qr(g.admin_id)
        return jsonify(
            {
                "success": True,
                "message": f"Successfully regenerated {updated} QR codes",
                "updated": updated,
                "total": total,
            }
        )

    @app.route("/employee/<int:employee_id>", methods=["DELETE"], endpoint="employee_delete")
    @login_required
    def delete(employee_id: int):
        deleted_id = container.employee_service.delete_employee(employee_id, g.admin_id)
        return jsonify({"success": True, "message": "Employee deleted successfully", "employee_id": deleted_id})

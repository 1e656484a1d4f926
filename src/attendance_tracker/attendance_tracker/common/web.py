"""Shared Flask helpers: auth decorator, request parsing and JSON error mapping."""

from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, g, jsonify, request, session
from werkzeug.exceptions import HTTPException

from ..core.exceptions import DomainError

logger = logging.getLogger(__name__)

SESSION_ADMIN_KEY = "admin_id"


def login_required(view):
    """Reject anonymous requests with 401 and expose the tenant id as `g.admin_id`."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        admin_id = session.get(SESSION_ADMIN_KEY)
        if not admin_id:
            return jsonify({"error": "Authentication required"}), 401
        g.admin_id = int(admin_id)
        return view(*args, **kwargs)

    return wrapper


def json_body() -> dict:
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()


def error_response(message: str, status: int, **extra):
    body = {"error": message}
    body.update(extra)
    return jsonify(body), status


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        return error_response(e.message, e.status_code, **e.payload)

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return error_response(e.description or e.name, e.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        if bool(app.config.get("DEBUG", False)):
            return error_response(f"Internal server error: {e}", 500)
        return error_response("Internal server error", 500)

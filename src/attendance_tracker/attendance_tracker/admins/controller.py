from __future__ import annotations

import logging

from flask import Flask, g, jsonify, session

from ..common.web import SESSION_ADMIN_KEY, json_body, login_required
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/auth/signup", methods=["POST"], endpoint="auth_signup")
    def signup():
        data = json_body()
        container.auth_service.signup(
            name=data.get("name", ""),
            email=data.get("email", ""),
            phone=data.get("phone"),
            organization=data.get("organization"),
            username=data.get("username", ""),
            password=data.get("password", ""),
            security_question=data.get("security_question", ""),
            security_answer=data.get("security_answer", ""),
        )
        return jsonify({"message": "Admin registered successfully"}), 201

    @app.route("/auth/signin", methods=["POST"], endpoint="auth_signin")
    def signin():
        data = json_body()
        admin = container.auth_service.authenticate(data.get("username", ""), data.get("password", ""))

        # Fixed lifetime: SESSION_REFRESH_EACH_REQUEST is off, so the cookie is not slid.
        session.clear()
        session.permanent = True
        session[SESSION_ADMIN_KEY] = admin.admin_id
        logger.info("Admin signed in: %s", admin.username)
        return jsonify({"message": "Signin successful"})

    @app.route("/auth/check", methods=["GET"], endpoint="auth_check")
    def check():
        admin_id = session.get(SESSION_ADMIN_KEY)
        if admin_id:
            return jsonify({"authenticated": True, "adminId": int(admin_id)})
        return jsonify({"authenticated": False}), 401

    @app.route("/auth/logout", methods=["POST"], endpoint="auth_logout")
    def logout():
        session.clear()
        return jsonify({"message": "Logged out successfully"})

    @app.route("/auth/profile", methods=["GET"], endpoint="auth_profile")
    @login_required
    def profile():
        return jsonify({"success": True, "admin": container.auth_service.get_profile(g.admin_id)})

    @app.route("/auth/profile", methods=["PUT"], endpoint="auth_update_profile")
    @login_required
    def update_profile():
        data = json_body()
        container.auth_service.update_profile(
            g.admin_id,
            name=data.get("name", ""),
            email=data.get("email", ""),
            phone=data.get("phone"),
            organization=data.get("organization"),
            username=data.get("username", ""),
        )
        return jsonify({"success": True, "message": "Profile updated successfully"})

    @app.route("/auth/password", methods=["PUT"], endpoint="auth_change_password")
    @login_required
    def change_password():
        data = json_body()
        container.auth_service.change_password(
            g.admin_id,
            current_password=data.get("current_password", ""),
            new_password=data.get("new_password", ""),
        )
        return jsonify({"success": True, "message": "Password updated successfully"})

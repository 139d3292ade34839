from __future__ import annotations

from datetime import timedelta

from flask import Flask, session

from ..common.http import json_body, json_endpoint, login_required, ok
from ..core.constants import DEFAULT_SESSION_DAYS
from ..container import Container


def register(app: Flask, container: Container) -> None:
    app.permanent_session_lifetime = timedelta(days=DEFAULT_SESSION_DAYS)

    @app.route("/api/v1/auth/login", methods=["POST"], endpoint="login")
    @json_endpoint("Login failed")
    def login():
        body = json_body()
        s_user = container.auth_service.authenticate(body.get("username", ""), body.get("password", ""))

        session.clear()
        session.permanent = bool(body.get("rememberMe"))
        session["user_id"] = s_user.user_id
        session["name"] = s_user.full_name
        session["role"] = s_user.role.value

        return ok({"userId": s_user.user_id, "fullName": s_user.full_name, "role": s_user.role.value})

    @app.route("/api/v1/auth/logout", methods=["POST"], endpoint="logout")
    @login_required
    def logout():
        session.clear()
        return ok({"message": "Logged out"})

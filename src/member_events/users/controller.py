from __future__ import annotations

from flask import Flask, jsonify, session

from ..common.http import fail, json_errors, request_data
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/login", methods=["POST"], endpoint="login")
    @json_errors
    def login():
        data = request_data()
        operator = container.auth_service.authenticate(data.get("email", ""), data.get("password", ""))

        session.clear()
        session["user_id"] = operator.user_id
        session["name"] = operator.name
        app.logger.info("operator %s logged in", operator.user_id)

        return jsonify(
            {
                "id": operator.user_id,
                "name": operator.name,
                "email": operator.email,
                "mobile_number": operator.mobile_number,
            }
        ), 200

    @app.route("/logout", methods=["POST"], endpoint="logout")
    def logout():
        if "user_id" not in session:
            return fail("Not logged in", 400)
        session.clear()
        return jsonify({"success": True, "message": "Logged out"}), 200

from __future__ import annotations

from flask import Flask

from ..common.http import json_body, json_endpoint, ok
from ..common.validators import require_int, require_non_empty
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def _credentials() -> tuple[int, str]:
        body = json_body()
        employee_id = require_int(body.get("employeeId"), "employeeId")
        pin = require_non_empty(str(body.get("pin") or ""), "PIN")
        return employee_id, pin

    @app.route("/api/v1/kiosk/verify-pin", methods=["POST"], endpoint="kiosk_verify_pin")
    @json_endpoint("Failed to verify PIN")
    def kiosk_verify_pin():
        pin = require_non_empty(str(json_body().get("pin") or ""), "PIN")
        holder = container.pin_service.resolve(pin)
        return ok(holder.to_dict())

    @app.route("/api/v1/kiosk/employee/clockin", methods=["POST"], endpoint="kiosk_clock_in")
    @json_endpoint("Failed to clock in")
    def kiosk_clock_in():
        employee_id, pin = _credentials()
        return ok(container.kiosk_service.clock_in(employee_id=employee_id, pin=pin))

    @app.route("/api/v1/kiosk/employee/clockout", methods=["POST"], endpoint="kiosk_clock_out")
    @json_endpoint("Failed to clock out")
    def kiosk_clock_out():
        employee_id, pin = _credentials()
        return ok(container.kiosk_service.clock_out(employee_id=employee_id, pin=pin))

    @app.route("/api/v1/kiosk/employee/lunch/start", methods=["POST"], endpoint="kiosk_lunch_start")
    @json_endpoint("Failed to start lunch break")
    def kiosk_lunch_start():
        employee_id, pin = _credentials()
        return ok(container.kiosk_service.start_lunch(employee_id=employee_id, pin=pin))

    @app.route("/api/v1/kiosk/employee/lunch/end", methods=["POST"], endpoint="kiosk_lunch_end")
    @json_endpoint("Failed to end lunch break")
    def kiosk_lunch_end():
        employee_id, pin = _credentials()
        return ok(container.kiosk_service.end_lunch(employee_id=employee_id, pin=pin))

    @app.route("/api/v1/kiosk/employee/status", methods=["POST"], endpoint="kiosk_status")
    @json_endpoint("Failed to get status")
    def kiosk_status():
        employee_id, pin = _credentials()
        return ok(container.kiosk_service.get_status(employee_id=employee_id, pin=pin))

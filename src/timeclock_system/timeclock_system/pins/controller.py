from __future__ import annotations

from flask import Flask, request

from ..common.http import admin_required, current_role, json_body, json_endpoint, ok
from ..common.validators import require_int
from ..core.enums import PinOwner
from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/v1/pins/check", methods=["GET"], endpoint="pins_check")
    @admin_required
    @json_endpoint("Failed to check PIN")
    def pins_check():
        exclude_owner = None
        exclude_id = None
        if request.args.get("excludeId"):
            exclude_id = require_int(request.args.get("excludeId"), "excludeId")
            try:
                exclude_owner = PinOwner(request.args.get("excludeOwner") or PinOwner.EMPLOYEE.value)
            except ValueError:
                raise ValidationError("excludeOwner must be 'employee' or 'parent'")

        available = container.pin_service.is_available(
            request.args.get("pin"),
            exclude_owner=exclude_owner,
            exclude_id=exclude_id,
        )
        return ok({"available": available})

    @app.route("/api/v1/employees/<int:employee_id>/pin", methods=["PUT"], endpoint="employee_pin")
    @admin_required
    @json_endpoint("Failed to update PIN")
    def employee_pin(employee_id: int):
        pin = container.pin_service.assign_employee_pin(
            current_role=current_role(),
            employee_id=employee_id,
            pin_code=json_body().get("pinCode"),
        )
        return ok({"message": "PIN code updated successfully" if pin else "PIN code removed"})

    @app.route("/api/v1/parents/<int:parent_id>/pin", methods=["PUT"], endpoint="parent_pin")
    @admin_required
    @json_endpoint("Failed to update PIN")
    def parent_pin(parent_id: int):
        pin = container.pin_service.assign_parent_pin(
            current_role=current_role(),
            parent_id=parent_id,
            pin_code=json_body().get("pinCode"),
        )
        return ok({"message": "PIN code updated successfully" if pin else "PIN code removed"})

from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import parse_iso_datetime, parse_optional_date
from ..common.http import admin_required, current_role, current_user_id, json_body, json_endpoint, ok
from ..common.validators import require_int
from ..core.enums import EntryType
from ..core.exceptions import ValidationError
from ..container import Container
from .model import UNSET


def register(app: Flask, container: Container) -> None:
    def _optional_datetime(body: dict, key: str):
        """UNSET when the key is absent; None when explicitly null or blank."""
        if key not in body:
            return UNSET
        value = body[key]
        if value is None or (isinstance(value, str) and not value.strip()):
            return None
        return parse_iso_datetime(str(value))

    def _entry_type(value) -> EntryType:
        try:
            return EntryType(value or EntryType.SHIFT.value)
        except ValueError:
            raise ValidationError("entryType must be 'shift' or 'lunch_break'")

    @app.route("/api/v1/timeclock/today", methods=["GET"], endpoint="timeclock_today")
    @admin_required
    @json_endpoint("Failed to fetch today's time records")
    def timeclock_today():
        work_date = parse_optional_date(request.args.get("date"))
        summary = container.timeclock_service.get_daily_summary(work_date)
        return ok(summary.to_dict())

    @app.route("/api/v1/timeclock/report", methods=["GET"], endpoint="timeclock_report")
    @admin_required
    @json_endpoint("Failed to generate report")
    def timeclock_report():
        report = container.period_report_service.build_period_report(
            start=parse_optional_date(request.args.get("startDate")),
            end=parse_optional_date(request.args.get("endDate")),
            department=request.args.get("department"),
        )
        return ok(report.to_dict())

    @app.route("/api/v1/timeclock/employee/<int:employee_id>", methods=["GET"], endpoint="timeclock_employee")
    @admin_required
    @json_endpoint("Failed to fetch employee time records")
    def timeclock_employee(employee_id: int):
        data = container.timeclock_service.get_employee_records(
            employee_id,
            start_date=parse_optional_date(request.args.get("startDate")),
            end_date=parse_optional_date(request.args.get("endDate")),
            page=require_int(request.args.get("page", 1), "page"),
            limit=require_int(request.args.get("limit", app.config.get("RECORDS_PAGE_LIMIT", 50)), "limit"),
        )
        return ok(data)

    @app.route("/api/v1/timeclock/add-punch", methods=["POST"], endpoint="timeclock_add_punch")
    @admin_required
    @json_endpoint("Failed to add time record")
    def timeclock_add_punch():
        body = json_body()
        if not body.get("clockIn"):
            raise ValidationError("clockIn is required")

        clock_out = _optional_datetime(body, "clockOut")
        punch = container.correction_service.insert_punch(
            current_role=current_role(),
            admin_user_id=current_user_id(),
            employee_id=require_int(body.get("employeeId"), "employeeId"),
            clock_in=parse_iso_datetime(str(body["clockIn"])),
            clock_out=clock_out or None,
            entry_type=_entry_type(body.get("entryType")),
            notes=body.get("notes"),
        )
        return ok({"timeRecord": punch.to_dict(), "message": "Time record added successfully"}, 201)

    @app.route("/api/v1/timeclock/<int:punch_id>", methods=["PUT"], endpoint="timeclock_edit")
    @admin_required
    @json_endpoint("Failed to edit time record")
    def timeclock_edit(punch_id: int):
        body = json_body()
        punch = container.correction_service.edit_punch(
            current_role=current_role(),
            admin_user_id=current_user_id(),
            punch_id=punch_id,
            clock_in=_optional_datetime(body, "clockIn"),
            clock_out=_optional_datetime(body, "clockOut"),
            notes=body["notes"] if "notes" in body else UNSET,
            reason=body.get("reason"),
        )
        return ok({"timeRecord": punch.to_dict(), "message": "Time record updated successfully"})

    @app.route("/api/v1/timeclock/<int:punch_id>", methods=["DELETE"], endpoint="timeclock_delete")
    @admin_required
    @json_endpoint("Failed to delete time record")
    def timeclock_delete(punch_id: int):
        container.correction_service.delete_punch(
            current_role=current_role(),
            admin_user_id=current_user_id(),
            punch_id=punch_id,
        )
        return ok({"message": "Time record deleted successfully"})

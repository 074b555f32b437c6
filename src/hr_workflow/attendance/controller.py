from __future__ import annotations

import csv
import io
from datetime import date

from flask import Flask, jsonify, request

from ..common.datetime_utils import coerce_date, format_work_minutes, now_local
from ..common.web import admin_required, approver_required, json_body, login_required, range_from_args, target_employee
from ..container import Container
from ..core.exceptions import AuthorizationError, ValidationError
from ..core.principal import Principal
from ..notifications.notifier import (
    ATTENDANCE_CHECKED_IN,
    ATTENDANCE_CHECKED_OUT,
    ATTENDANCE_IMPORTED,
    ATTENDANCE_STATUS_CHANGED,
    NotificationEvent,
    notify_safely,
)
from .importing import ColumnMapping, SpreadsheetImportSource

CSV_FIELDS = ["Employee_ID", "Date", "In", "Out", "Status", "Minutes", "Worked"]


def register(app: Flask, container: Container) -> None:
    ledger = container.attendance_ledger

    def _event(type_: str, entry) -> None:
        notify_safely(
            container.notifier,
            NotificationEvent(type=type_, subject_employee_id=entry.employee_id, details=entry.to_dict()),
        )

    def _date_and_time(data: dict, time_key: str):
        now = now_local()
        work_date = coerce_date(data["work_date"], "work_date") if data.get("work_date") else now.date()
        at = data.get(time_key) or now.strftime("%H:%M:%S")
        return work_date, at

    def _write_entries_csv(entries, filename: str):
        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=CSV_FIELDS)
        writer.writeheader()
        for e in entries:
            writer.writerow(
                {
                    "Employee_ID": e.employee_id,
                    "Date": e.work_date.isoformat(),
                    "In": e.check_in.strftime("%H:%M") if e.check_in else "--",
                    "Out": e.check_out.strftime("%H:%M") if e.check_out else "--",
                    "Status": e.status.value,
                    "Minutes": e.work_minutes,
                    "Worked": format_work_minutes(e.work_minutes),
                }
            )

        csv_bytes = out.getvalue().encode("utf-8-sig")
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/attendance/check-in", methods=["POST"], endpoint="attendance_check_in")
    @login_required
    def check_in(principal: Principal):
        data = json_body()
        employee_id = target_employee(principal, data.get("employee_id"))
        work_date, at = _date_and_time(data, "check_in")
        entry = ledger.check_in(employee_id, work_date, at)
        _event(ATTENDANCE_CHECKED_IN, entry)
        return jsonify(entry.to_dict()), 201

    @app.route("/api/attendance/check-out", methods=["POST"], endpoint="attendance_check_out")
    @login_required
    def check_out(principal: Principal):
        data = json_body()
        employee_id = target_employee(principal, data.get("employee_id"))
        work_date, at = _date_and_time(data, "check_out")
        entry = ledger.check_out(employee_id, work_date, at)
        _event(ATTENDANCE_CHECKED_OUT, entry)
        return jsonify(entry.to_dict())

    @app.route("/api/attendance/<employee_id>/<work_date>/status", methods=["PUT"], endpoint="attendance_set_status")
    @admin_required
    def set_status(principal: Principal, employee_id: str, work_date: str):
        data = json_body()
        entry = ledger.set_status(employee_id, work_date, data.get("status"), principal, note=data.get("note"))
        _event(ATTENDANCE_STATUS_CHANGED, entry)
        return jsonify(entry.to_dict())

    @app.route("/api/attendance/import", methods=["POST"], endpoint="attendance_import")
    @admin_required
    def bulk_import(principal: Principal):
        upload = request.files.get("file")
        if upload is not None:
            mapping_raw = request.form.get("mapping")
            source = container.import_source
            if mapping_raw:
                source = SpreadsheetImportSource(ColumnMapping.from_json(mapping_raw))
            rows = source.read(upload.stream, filename=upload.filename)
        else:
            rows = json_body().get("rows")
            if not isinstance(rows, list):
                raise ValidationError("Provide a file upload or a JSON body with a 'rows' list")

        result = ledger.bulk_import(rows)
        notify_safely(
            container.notifier,
            NotificationEvent(
                type=ATTENDANCE_IMPORTED,
                subject_employee_id=None,
                details={"accepted": result.accepted, "rejected": len(result.rejected), "by": principal.employee_id},
            ),
        )
        return jsonify(result.to_dict())

    @app.route("/api/attendance/history", methods=["GET"], endpoint="attendance_history")
    @login_required
    def history(principal: Principal):
        employee_id = target_employee(principal, request.args.get("employee_id"))
        entries = ledger.history(employee_id, range_from_args(date.today()))
        return jsonify([e.to_dict() for e in entries])

    @app.route("/api/attendance/summary", methods=["GET"], endpoint="attendance_summary")
    @login_required
    def summary(principal: Principal):
        date_range = range_from_args(date.today())
        department = request.args.get("department")
        if department:
            if not principal.can_approve:
                raise AuthorizationError("Team reports need approver access")
            return jsonify({"department": department, **ledger.summarize_department(department, date_range).to_dict()})

        employee_id = target_employee(principal, request.args.get("employee_id"))
        return jsonify({"employee_id": employee_id, **ledger.summarize(employee_id, date_range).to_dict()})

    @app.route("/api/attendance/export.csv", methods=["GET"], endpoint="attendance_export_csv")
    @approver_required
    def export_csv(principal: Principal):
        employee_id = request.args.get("employee_id")
        if not employee_id:
            raise ValidationError("employee_id is required")
        date_range = range_from_args(date.today())
        entries = ledger.history(employee_id, date_range)
        filename = f"attendance_{employee_id}_{date_range.start.strftime('%Y%m%d')}_{date_range.end.strftime('%Y%m%d')}.csv"
        return _write_entries_csv(entries, filename)

from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import approver_required, json_body, login_required, target_employee
from ..container import Container
from ..core.enums import RequestKind, RequestStatus
from ..core.exceptions import AuthorizationError
from ..core.principal import Principal
from ..notifications.notifier import REQUEST_DECIDED, REQUEST_SUBMITTED, NotificationEvent, notify_safely


def register(app: Flask, container: Container) -> None:
    lifecycle = container.request_lifecycle
    ledger = container.attendance_ledger

    def _decide(principal: Principal, request_id: str, outcome: RequestStatus):
        record = lifecycle.get(request_id)
        correction = None
        if outcome == RequestStatus.APPROVED and record.kind == RequestKind.ATTENDANCE_CORRECTION and record.is_pending:
            correction = record.payload
            # Checked up front, written only once the approval is recorded.
            ledger.check_correction(
                record.subject_employee_id,
                correction["work_date"],
                check_in=correction.get("check_in"),
                check_out=correction.get("check_out"),
            )

        decided = lifecycle.decide(request_id, outcome, principal)
        if correction is not None:
            ledger.correct_times(
                decided.subject_employee_id,
                correction["work_date"],
                check_in=correction.get("check_in"),
                check_out=correction.get("check_out"),
                note=correction.get("note"),
            )

        notify_safely(
            container.notifier,
            NotificationEvent(
                type=REQUEST_DECIDED,
                subject_employee_id=decided.subject_employee_id,
                details={"request_id": decided.request_id, "kind": decided.kind.value, "status": decided.status.value},
            ),
        )
        return jsonify(decided.to_dict())

    @app.route("/api/requests", methods=["POST"], endpoint="submit_request")
    @login_required
    def submit_request(principal: Principal):
        data = json_body()
        subject = target_employee(principal, data.get("subject_employee_id"))
        record = lifecycle.submit(subject, data.get("kind"), data.get("payload") or {})
        notify_safely(
            container.notifier,
            NotificationEvent(
                type=REQUEST_SUBMITTED,
                subject_employee_id=record.subject_employee_id,
                details={"request_id": record.request_id, "kind": record.kind.value},
            ),
        )
        return jsonify(record.to_dict()), 201

    @app.route("/api/requests", methods=["GET"], endpoint="list_requests")
    @login_required
    def list_requests(principal: Principal):
        department = request.args.get("department")
        employee_id = request.args.get("employee_id")
        if principal.can_approve:
            rows = lifecycle.list_for(
                employee_id=employee_id or None,
                department=department or None,
                kind=request.args.get("kind") or None,
                status=request.args.get("status") or None,
            )
        else:
            rows = lifecycle.list_for(
                employee_id=target_employee(principal, employee_id),
                kind=request.args.get("kind") or None,
                status=request.args.get("status") or None,
            )
        return jsonify([r.to_dict() for r in rows])

    @app.route("/api/requests/counts", methods=["GET"], endpoint="request_counts")
    @login_required
    def request_counts(principal: Principal):
        employee_id = target_employee(principal, request.args.get("employee_id"))
        counts = lifecycle.count_by_status(employee_id, kind=request.args.get("kind") or None)
        return jsonify(counts.to_dict())

    @app.route("/api/requests/<request_id>", methods=["GET"], endpoint="get_request")
    @login_required
    def get_request(principal: Principal, request_id: str):
        record = lifecycle.get(request_id)
        if record.subject_employee_id != principal.employee_id and not principal.can_approve:
            raise AuthorizationError("You can only access your own requests")
        return jsonify(record.to_dict())

    @app.route("/api/requests/<request_id>/approve", methods=["POST"], endpoint="approve_request")
    @approver_required
    def approve_request(principal: Principal, request_id: str):
        return _decide(principal, request_id, RequestStatus.APPROVED)

    @app.route("/api/requests/<request_id>/reject", methods=["POST"], endpoint="reject_request")
    @approver_required
    def reject_request(principal: Principal, request_id: str):
        return _decide(principal, request_id, RequestStatus.REJECTED)

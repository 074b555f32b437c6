from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import admin_required, json_body, login_required
from ..container import Container
from ..core.exceptions import ValidationError
from ..core.principal import Principal
from .calculator.standard_calculator import compute_net
from .model import PayPeriod


def register(app: Flask, container: Container) -> None:
    def _period(data: dict) -> PayPeriod:
        try:
            return PayPeriod(month=int(data.get("month")), year=int(data.get("year")))
        except (TypeError, ValueError):
            raise ValidationError("month and year must be integers")

    @app.route("/api/payroll/preview", methods=["POST"], endpoint="payroll_preview")
    @admin_required
    def preview(principal: Principal):
        data = json_body()
        adjustments = data.get("adjustments") or []
        if not isinstance(adjustments, list):
            raise ValidationError("adjustments must be a list")
        return jsonify(compute_net(data.get("base_amount"), adjustments).to_dict())

    @app.route("/api/payroll/payslips", methods=["POST"], endpoint="payroll_compute_payslip")
    @admin_required
    def compute_payslip(principal: Principal):
        data = json_body()
        adjustments = data.get("adjustments") or []
        if not isinstance(adjustments, list):
            raise ValidationError("adjustments must be a list")
        line = container.payroll_service.compute_payslip(
            str(data.get("employee_id") or ""),
            _period(data),
            data.get("base_amount"),
            adjustments,
        )
        return jsonify(line.to_dict()), 201

    @app.route("/api/performance/efficiency", methods=["GET"], endpoint="performance_efficiency")
    @login_required
    def efficiency(principal: Principal):
        policy = container.efficiency_policy
        estimated = request.args.get("estimated")
        actual = request.args.get("actual")
        return jsonify(
            {
                "raw": str(policy.raw(estimated, actual)),
                "display": str(policy.clamped(estimated, actual)),
                "ceiling": str(policy.ceiling),
            }
        )

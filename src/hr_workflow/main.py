from __future__ import annotations

import importlib
import logging
from types import ModuleType
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from .attendance.controller import register as register_attendance
from .config import get_settings_module
from .container import Container, build_container
from .core.exceptions import (
    AuthorizationError,
    DomainError,
    DuplicateEntryError,
    InvalidTimeError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)
from .database.bootstrap import apply_schema
from .payroll.controller import register as register_payroll
from .requests.controller import register as register_requests

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    ValidationError: 400,
    AuthorizationError: 403,
    NotFoundError: 404,
    DuplicateEntryError: 409,
    InvalidTransitionError: 409,
    InvalidTimeError: 422,
}


def _status_for(exc: DomainError) -> int:
    for cls in type(exc).__mro__:
        if cls in ERROR_STATUS:
            return ERROR_STATUS[cls]
    return 400


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(exc: DomainError):
        status = _status_for(exc)
        logger.warning("%s: %s", type(exc).__name__, exc)
        return jsonify({"error": type(exc).__name__, "message": str(exc)}), status


def create_app(settings: Optional[ModuleType] = None, *, container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings or importlib.import_module(get_settings_module())
    app.secret_key = getattr(settings_module, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings_module, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings_module, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings_module, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    backend = getattr(settings_module, "STORAGE_BACKEND", "memory")
    db_config = getattr(settings_module, "DB_CONFIG", {})
    if backend == "mysql" and getattr(settings_module, "AUTO_INIT_DB", False):
        apply_schema(db_config)

    if container is None:
        container = build_container(
            backend=backend,
            db_config=db_config,
            grace_minutes=int(getattr(settings_module, "LATE_GRACE_MINUTES", 5)),
            efficiency_ceiling=int(getattr(settings_module, "EFFICIENCY_CEILING", 150)),
        )
    app.extensions["hr_workflow"] = container
    logger.info("hr_workflow app ready (backend=%s)", backend)

    register_error_handlers(app)
    register_requests(app, container)
    register_attendance(app, container)
    register_payroll(app, container)

    return app

from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

import mysql.connector
from dotenv import load_dotenv
from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from config import get_settings_module

from .attendance.classifier import WorkdayPolicy
from .attendance.controller import register as register_attendance
from .auth.controller import register as register_auth
from .auth.service import AuthService
from .common.responses import failure
from .container import Container, build_container
from .core.exceptions import DomainError
from .database.bootstrap import apply_schema, list_tables
from .database.connection import DBConfig
from .leaves.controller import register as register_leaves
from .reports.controller import register as register_reports
from .scanning.controller import register as register_scanning

logger = logging.getLogger("qr_attendance")

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def _backend_config(settings) -> Optional[DBConfig]:
    url = getattr(settings, "BACKEND_URL", None)
    key = getattr(settings, "BACKEND_KEY", None)
    if not url:
        logger.warning("BACKEND_URL not set: attendance storage is disabled")
        return None
    try:
        return DBConfig.from_url(url, key or "")
    except DomainError as e:
        logger.error("invalid backend configuration: %s", e)
        return None


def create_app(*, container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    debug = bool(getattr(settings, "DEBUG", False))

    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    app = Flask(__name__)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = debug
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    if container is None:
        db_config = _backend_config(settings)
        qr_secret_key = getattr(settings, "QR_SECRET_KEY", None)
        if not qr_secret_key:
            logger.warning("QR_SECRET_KEY not set: every scan will be rejected")

        if db_config and bool(getattr(settings, "AUTO_INIT_DB", False)):
            try:
                apply_schema(db_config, schema_path=SCHEMA_PATH)
                logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
            except mysql.connector.Error as e:
                logger.error("could not apply schema: %s", e)

        try:
            policy = WorkdayPolicy.from_settings(settings)
        except ValueError as e:
            logger.warning("invalid workday settings (%s): using defaults", e)
            policy = WorkdayPolicy()

        container = build_container(
            db_config=db_config,
            qr_secret_key=qr_secret_key,
            policy=policy,
            auth_service=AuthService.from_settings(settings),
        )

    logger.info("settings=%s backend=%s", settings_module, "on" if container.conn.is_configured else "off")

    register_auth(app, container)
    register_scanning(app, container)
    register_attendance(app, container)
    register_reports(app, container)
    register_leaves(app, container)

    @app.errorhandler(Exception)
    def unexpected_error(e):
        if isinstance(e, HTTPException):
            return e
        logger.exception("unhandled error on %s %s", request.method, request.path)
        return failure("Internal error", 500)

    @app.route("/health", endpoint="health")
    def health():
        return jsonify(
            {
                "status": "ok" if container.conn.is_configured and container.verifier.is_configured else "degraded",
                "backend": "configured" if container.conn.is_configured else "not configured",
                "verifier": "configured" if container.verifier.is_configured else "not configured",
                "workday": container.policy.as_dict(),
            }
        )

    return app

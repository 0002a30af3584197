from __future__ import annotations

import json
import logging

from flask import Flask, jsonify, request, send_file

from ..auth.controller import admin_required
from ..common.datetime_utils import now_local
from ..common.responses import error_response, failure
from ..core.constants import RESCAN_DELAY_SECONDS
from ..core.exceptions import DomainError
from ..container import Container
from ..qr.generator import build_signed_payload, render_qr_png

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def _scan_failed(e: DomainError):
        return error_response(e, rescan_after_seconds=RESCAN_DELAY_SECONDS)

    def _scan_crashed():
        logger.exception("unexpected error while processing scan")
        return failure("System error while marking attendance", 500, rescan_after_seconds=RESCAN_DELAY_SECONDS)

    def _scan_succeeded(result):
        return (
            jsonify(
                {
                    "success": True,
                    "message": result.message,
                    "data": result.to_dict(),
                    "rescan_after_seconds": RESCAN_DELAY_SECONDS,
                }
            ),
            201,
        )

    @app.route("/api/scan", methods=["POST"], endpoint="api_scan")
    def api_scan():
        """Scan decoded in the browser: body {"qr_data": "<decoded text>"}."""
        data = request.get_json(silent=True) or {}
        if not isinstance(data, dict):
            return failure("Invalid request body", 400, rescan_after_seconds=RESCAN_DELAY_SECONDS)
        qr_data = data.get("qr_data")
        if isinstance(qr_data, dict):
            qr_data = json.dumps(qr_data)
        if not qr_data or not str(qr_data).strip():
            return failure("QR code data is required", 400, rescan_after_seconds=RESCAN_DELAY_SECONDS)

        try:
            result = container.scan_service.process_text(str(qr_data))
        except DomainError as e:
            return _scan_failed(e)
        except Exception:
            return _scan_crashed()
        return _scan_succeeded(result)

    @app.route("/api/scan/image", methods=["POST"], endpoint="api_scan_image")
    def api_scan_image():
        """Accept a captured camera frame, decode the QR code server-side, then mark attendance."""
        if "image" not in request.files:
            return failure("Missing image file", 400, rescan_after_seconds=RESCAN_DELAY_SECONDS)

        try:
            result = container.scan_service.process_image(request.files["image"].stream)
        except DomainError as e:
            return _scan_failed(e)
        except Exception:
            return _scan_crashed()
        return _scan_succeeded(result)

    @app.route("/admin/qr/sample.png", endpoint="admin_qr_sample")
    @admin_required
    def admin_qr_sample():
        """Render a freshly signed payload, for testing a scanner without the mobile app."""
        try:
            payload = build_signed_payload(
                container.verifier,
                employee_id=request.args.get("employee_id", "demo-employee"),
                first_name=request.args.get("first_name", "Demo"),
                last_name=request.args.get("last_name", "Employee"),
                role=request.args.get("role", "employee"),
                department=request.args.get("department") or None,
                check_in_time=now_local().isoformat(timespec="seconds"),
            )
        except DomainError as e:
            return error_response(e)

        return send_file(render_qr_png(payload), mimetype="image/png")

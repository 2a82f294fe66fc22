from __future__ import annotations

import logging
from functools import wraps
from http import HTTPStatus

from flask import Flask, current_app, jsonify, request

from ..common.validators import parse_positive_int, require_user_id
from ..core.constants import DEFAULT_PAGE, DEFAULT_PAGE_LIMIT, DEFAULT_USER_ID, USER_ID_HEADER
from ..core.exceptions import DomainError
from ..container import Container

logger = logging.getLogger(__name__)


def error_response(status: int, message: str):
    return jsonify({
        "statusCode": status,
        "error": HTTPStatus(status).phrase,
        "message": message,
    }), status


def register(app: Flask, container: Container) -> None:
    def json_errors(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except DomainError as e:
                return error_response(e.http_status, str(e))
            except Exception:
                logger.exception("Unhandled error in %s %s", request.method, request.path)
                return error_response(500, "Internal server error")

        return wrapper

    def _current_user_id() -> str:
        # No identity layer: the header selects the subject, else the configured mock user.
        header = request.headers.get(USER_ID_HEADER)
        if header is not None:
            return require_user_id(header)
        return current_app.config.get("DEFAULT_USER_ID", DEFAULT_USER_ID)

    @app.route("/attendance/check-in", methods=["POST"], endpoint="attendance_check_in")
    @json_errors
    def check_in():
        record = container.attendance_service.check_in(_current_user_id())
        return jsonify(record.to_dict()), 201

    @app.route("/attendance/check-out", methods=["PATCH"], endpoint="attendance_check_out")
    @json_errors
    def check_out():
        record = container.attendance_service.check_out(_current_user_id())
        return jsonify(record.to_dict()), 200

    @app.route("/attendance/status", methods=["GET"], endpoint="attendance_status")
    @json_errors
    def status():
        is_working = container.attendance_service.is_working(_current_user_id())
        return jsonify({"isWorking": is_working}), 200

    @app.route("/attendance", methods=["GET"], endpoint="attendance_history")
    @json_errors
    def history():
        default_limit = int(current_app.config.get("DEFAULT_PAGE_LIMIT", DEFAULT_PAGE_LIMIT))
        page = parse_positive_int(request.args.get("page"), "page", default=DEFAULT_PAGE)
        limit = parse_positive_int(request.args.get("limit"), "limit", default=default_limit)

        result = container.attendance_service.list_history(_current_user_id(), page, limit)
        return jsonify(result.to_dict()), 200

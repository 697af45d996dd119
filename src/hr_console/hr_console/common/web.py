"""Shared Flask helpers: session identity, role guards, JSON errors."""

from __future__ import annotations

import dataclasses
import logging
from datetime import date, datetime
from enum import Enum
from functools import wraps
from typing import Any

from flask import Flask, jsonify, request, session
from werkzeug.exceptions import HTTPException

from ..core.enums import Role
from ..core.exceptions import (
    AuthorizationError,
    ConcurrencyError,
    DomainError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from ..employees.model import Identity
from .datetime_utils import parse_iso_date

logger = logging.getLogger(__name__)


def current_identity() -> Identity:
    """Identity the auth provider stored in the Flask session."""
    return Identity(
        uid=str(session["uid"]),
        email=str(session.get("email") or ""),
        display_name=str(session.get("name") or ""),
        role=Role(session.get("role") or Role.EMPLOYEE.value),
    )


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "uid" not in session:
            return jsonify({"success": False, "message": "Please sign in to continue"}), 401
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "uid" not in session:
            return jsonify({"success": False, "message": "Please sign in to continue"}), 401
        if session.get("role") != Role.ADMIN.value:
            return jsonify({"success": False, "message": "HR access only"}), 403
        return view(*args, **kwargs)

    return wrapper


def ensure_self_or_admin(employee_id: str) -> None:
    me = current_identity()
    if me.role != Role.ADMIN and me.uid != employee_id:
        raise AuthorizationError("You can only view your own records")


def json_body() -> dict:
    return request.get_json(silent=True) or {}


def parse_date_arg(value: str) -> date:
    try:
        return parse_iso_date((value or "").strip())
    except ValueError:
        raise ValidationError(f"Invalid date {value!r}, expected YYYY-MM-DD")


def to_json(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_json(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, dict):
        return {str(k): to_json(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json(v) for v in value]
    return value


_STATUS_BY_ERROR = (
    (ConcurrencyError, 409),
    (StoreError, 503),
    (NotFoundError, 404),
    (AuthorizationError, 403),
    (ValidationError, 400),
    (DomainError, 400),
)


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        status = next(code for cls, code in _STATUS_BY_ERROR if isinstance(e, cls))
        if status >= 500:
            logger.error("Store failure on %s %s: %s", request.method, request.path, e)
        return jsonify({"success": False, "message": str(e)}), status

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        if isinstance(e, HTTPException):
            return e
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return jsonify({"success": False, "message": "Internal server error"}), 500

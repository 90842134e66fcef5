"""Shared helpers for the JSON controllers."""

from __future__ import annotations

from functools import wraps

from flask import jsonify, session

from ..core.enums import Role
from ..core.exceptions import (
    AbsenceConflictError,
    AuthenticationError,
    AuthorizationError,
    ConfirmationRequired,
    DomainError,
    NotFoundError,
)


def current_role() -> Role:
    try:
        return Role(session.get("role"))
    except ValueError:
        return Role.FUNCIONARIO


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"success": False, "message": "Faça login para continuar"}), 401
        return view(*args, **kwargs)

    return wrapper


def editor_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"success": False, "message": "Faça login para continuar"}), 401

        if session.get("role") != Role.ENCARREGADO.value:
            return jsonify({"success": False, "message": "Acesso restrito ao encarregado"}), 403

        return view(*args, **kwargs)

    return wrapper


def error_response(e: DomainError):
    """Translate a domain error into a JSON response."""
    body = {"success": False, "message": str(e)}
    if isinstance(e, ConfirmationRequired):
        body["requiresConfirmation"] = True
        body["verdict"] = e.verdict.to_dict()
        return jsonify(body), 409
    if isinstance(e, AbsenceConflictError):
        body["verdict"] = e.verdict.to_dict()
        return jsonify(body), 409
    if isinstance(e, AuthenticationError):
        return jsonify(body), 401
    if isinstance(e, AuthorizationError):
        return jsonify(body), 403
    if isinstance(e, NotFoundError):
        return jsonify(body), 404
    return jsonify(body), 400


def server_error(message: str):
    return jsonify({"success": False, "message": message}), 500


def as_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value or "").strip().lower() in {"1", "true", "sim", "yes", "on"}

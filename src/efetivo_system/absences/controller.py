from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.validators import optional_int
from ..common.web import as_bool, current_role, editor_required, error_response, login_required, server_error
from ..container import Container
from ..core.exceptions import DomainError
from .query import FilterCriteria
from .service import parse_absence_payload

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    svc = container.absence_service

    @app.route("/api/ausencias", methods=["GET"], endpoint="search_absences")
    @login_required
    def search_absences():
        try:
            rows = svc.search(FilterCriteria.from_args(request.args))
            return jsonify({"success": True, "ausencias": [r.to_dict() for r in rows]})
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Absence search failed")
            return server_error("Erro ao consultar ausências")

    @app.route("/api/ausencias/<int:absence_id>", methods=["GET"], endpoint="get_absence")
    @login_required
    def get_absence(absence_id: int):
        try:
            return jsonify({"success": True, "ausencia": svc.get(absence_id).to_dict()})
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Load absence %s failed", absence_id)
            return server_error("Erro ao carregar ausência")

    @app.route("/api/ausencias/validar", methods=["POST"], endpoint="validate_absence")
    @editor_required
    def validate_absence():
        data = request.get_json(silent=True) or {}
        try:
            exclude_id = optional_int(data.get("id"), "Ausência")
            draft = parse_absence_payload(data, absence_id=exclude_id)
            verdict = svc.check(draft, exclude_id=exclude_id)
            return jsonify({"success": not verdict.blocking, "verdict": verdict.to_dict()})
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Absence validation failed")
            return server_error("Erro ao validar ausência")

    @app.route("/api/ausencias", methods=["POST"], endpoint="create_absence")
    @editor_required
    def create_absence():
        data = request.get_json(silent=True) or {}
        try:
            created = svc.create_absence(
                current_role=current_role(),
                draft=parse_absence_payload(data),
                confirm_warnings=as_bool(data.get("confirmar")),
            )
            return jsonify({"success": True, "ausencia": created.to_dict()}), 201
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Create absence failed")
            return server_error("Erro ao salvar ausência")

    @app.route("/api/ausencias/<int:absence_id>", methods=["PUT"], endpoint="update_absence")
    @editor_required
    def update_absence(absence_id: int):
        data = request.get_json(silent=True) or {}
        try:
            updated = svc.update_absence(
                current_role=current_role(),
                absence=parse_absence_payload(data, absence_id=absence_id),
                confirm_warnings=as_bool(data.get("confirmar")),
            )
            return jsonify({"success": True, "ausencia": updated.to_dict()})
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Update absence %s failed", absence_id)
            return server_error("Erro ao salvar ausência")

    @app.route("/api/ausencias/<int:absence_id>", methods=["DELETE"], endpoint="delete_absence")
    @editor_required
    def delete_absence(absence_id: int):
        try:
            svc.delete_absence(current_role=current_role(), absence_id=absence_id)
            return jsonify({"success": True})
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Delete absence %s failed", absence_id)
            return server_error("Erro ao excluir ausência")

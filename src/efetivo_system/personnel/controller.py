from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.validators import optional_int
from ..common.web import as_bool, current_role, editor_required, error_response, login_required, server_error
from ..container import Container
from ..core.exceptions import DomainError
from .model import Person

logger = logging.getLogger(__name__)


def person_to_dict(p: Person) -> dict:
    return {
        "id": p.person_id,
        "nome": p.name,
        "graduacao": p.rank.value,
        "categoria": p.category.value,
        "ordemAntiguidade": p.seniority,
        "ativo": p.is_active,
    }


def register(app: Flask, container: Container) -> None:
    svc = container.personnel_service

    @app.route("/api/funcionarios", methods=["GET"], endpoint="list_people")
    @login_required
    def list_people():
        try:
            only_active = as_bool(request.args.get("ativos"))
            people = svc.list_active() if only_active else svc.list_roster()
            return jsonify({"success": True, "funcionarios": [person_to_dict(p) for p in people]})
        except Exception:
            logger.exception("Roster listing failed")
            return server_error("Erro ao carregar funcionários")

    @app.route("/api/funcionarios", methods=["POST"], endpoint="create_person")
    @editor_required
    def create_person():
        data = request.get_json(silent=True) or {}
        try:
            person = svc.create_person(
                current_role=current_role(),
                name=data.get("nome", ""),
                rank=data.get("graduacao"),
                is_active=as_bool(data.get("ativo", True)),
            )
            return jsonify({"success": True, "funcionario": person_to_dict(person)}), 201
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Create person failed")
            return server_error("Erro ao salvar funcionário")

    @app.route("/api/funcionarios/<int:person_id>", methods=["PUT"], endpoint="update_person")
    @editor_required
    def update_person(person_id: int):
        data = request.get_json(silent=True) or {}
        try:
            person = svc.update_person(
                current_role=current_role(),
                person_id=person_id,
                name=data.get("nome", ""),
                rank=data.get("graduacao"),
                seniority=optional_int(data.get("ordemAntiguidade"), "Ordem de antiguidade"),
                is_active=as_bool(data.get("ativo", True)),
            )
            return jsonify({"success": True, "funcionario": person_to_dict(person)})
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Update person %s failed", person_id)
            return server_error("Erro ao salvar funcionário")

    @app.route("/api/funcionarios/<int:person_id>", methods=["DELETE"], endpoint="delete_person")
    @editor_required
    def delete_person(person_id: int):
        try:
            removed = svc.delete_person(current_role=current_role(), person_id=person_id)
            return jsonify({"success": True, "ausenciasRemovidas": removed})
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Delete person %s failed", person_id)
            return server_error("Erro ao excluir funcionário")

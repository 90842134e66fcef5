from __future__ import annotations

import logging
from datetime import timedelta

from flask import Flask, jsonify, request, session

from ..common.web import error_response, login_required, server_error
from ..core.constants import DEFAULT_SESSION_DAYS
from ..container import Container
from ..core.exceptions import DomainError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/login", methods=["POST"], endpoint="login")
    def login():
        data = request.get_json(silent=True) or {}
        try:
            s_user = container.auth_service.authenticate(data.get("email", ""), data.get("senha", ""))

            session.permanent = bool(data.get("lembrar"))
            app.permanent_session_lifetime = timedelta(days=int(app.config.get("SESSION_DAYS", DEFAULT_SESSION_DAYS)))

            session["user_id"] = s_user.user_id
            session["name"] = s_user.name
            session["role"] = s_user.role.value

            return jsonify(
                {
                    "success": True,
                    "user": {"id": s_user.user_id, "nome": s_user.name, "role": s_user.role.value},
                    "encarregado": s_user.is_editor,
                }
            )
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Login failed")
            return server_error("Erro no sistema ao fazer login")

    @app.route("/api/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"success": True})

    @app.route("/api/me", endpoint="me")
    @login_required
    def me():
        return jsonify(
            {
                "success": True,
                "user": {"id": session["user_id"], "nome": session.get("name"), "role": session.get("role")},
            }
        )

    @app.route("/api/senha", methods=["POST"], endpoint="change_password")
    @login_required
    def change_password():
        data = request.get_json(silent=True) or {}
        try:
            container.user_service.change_password(
                user_id=int(session["user_id"]),
                current_password=data.get("senhaAtual", ""),
                new_password=data.get("novaSenha", ""),
            )
            return jsonify({"success": True, "message": "Senha alterada com sucesso"})
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Password change failed")
            return server_error("Erro no sistema ao alterar a senha")

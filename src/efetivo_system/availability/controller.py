from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_optional_date, to_iso, today_local
from ..common.validators import optional_int, require_enum
from ..common.web import error_response, login_required, server_error
from ..container import Container
from ..core.enums import Shift
from ..core.exceptions import DomainError
from .aggregator import availability_to_dict

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    svc = container.availability_service

    @app.route("/api/efetivo", endpoint="staff_availability")
    @login_required
    def staff_availability():
        try:
            day = parse_optional_date(request.args.get("data")) or today_local()
            shift_s = (request.args.get("turno") or "").strip()
            shift = require_enum(Shift, shift_s, "Turno") if shift_s else None
            return jsonify(
                {
                    "success": True,
                    "data": to_iso(day),
                    "turno": shift.value if shift else None,
                    "efetivo": availability_to_dict(svc.for_date(day, shift)),
                    "ausencias": [item.to_dict() for item in svc.absences_on(day)],
                }
            )
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Availability lookup failed")
            return server_error("Erro ao carregar dados")

    @app.route("/api/proximos-dias", endpoint="upcoming_absences")
    @login_required
    def upcoming_absences():
        try:
            start = parse_optional_date(request.args.get("inicio"))
            days = optional_int(request.args.get("dias"), "Dias")
            upcoming = svc.upcoming(start, days)
            return jsonify(
                {
                    "success": True,
                    "dias": {to_iso(d): [item.to_dict() for item in items] for d, items in upcoming.items()},
                }
            )
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Upcoming absences lookup failed")
            return server_error("Erro ao carregar dados")

    @app.route("/api/dashboard", endpoint="dashboard")
    @login_required
    def dashboard():
        try:
            data = svc.dashboard(parse_optional_date(request.args.get("data")))
            return jsonify(
                {
                    "success": True,
                    "data": to_iso(data["day"]),
                    "efetivo": availability_to_dict(data["overall"]),
                    "porTurno": {shift.value: availability_to_dict(v) for shift, v in data["by_shift"].items()},
                    "ausenciasHoje": [item.to_dict() for item in data["absences"]],
                    "ausenciasAmanha": [item.to_dict() for item in data["tomorrow"]],
                }
            )
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Dashboard failed")
            return server_error("Erro ao carregar dados")

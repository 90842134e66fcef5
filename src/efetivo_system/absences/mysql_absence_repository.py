from __future__ import annotations

import json
from dataclasses import replace
from typing import Optional, Sequence

from ..common.datetime_utils import parse_iso_date
from ..core.enums import AbsenceReason, Shift
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, load_json_column
from .model import Absence, ShiftException
from .repository import AbsenceRepository

_COLUMNS = "id, funcionario_id, motivo, data_inicio, data_fim, turno_padrao, excecoes_por_dia, observacao"


def _row_to_absence(r: dict) -> Absence:
    raw_exceptions = load_json_column(r.get("excecoes_por_dia")) or []
    return Absence(
        absence_id=int(r["id"]),
        person_id=int(r["funcionario_id"]),
        reason=AbsenceReason(r["motivo"]),
        start_date=r["data_inicio"],
        end_date=r["data_fim"],
        default_shift=Shift(r["turno_padrao"]),
        exceptions=tuple(
            ShiftException(day=parse_iso_date(e["data"]), shift=Shift(e["turno"])) for e in raw_exceptions
        ),
        note=r.get("observacao"),
    )


def _exceptions_json(absence: Absence) -> str:
    return json.dumps([e.to_dict() for e in absence.exceptions])


class MySQLAbsenceRepository(AbsenceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Absence]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM ausencias ORDER BY data_inicio DESC, id ASC")
            return [_row_to_absence(r) for r in fetchall(cur)]

    def get_by_id(self, absence_id: int) -> Optional[Absence]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM ausencias WHERE id=%s", (int(absence_id),))
            r = fetchone(cur)
            return _row_to_absence(r) if r else None

    def create(self, absence: Absence) -> Absence:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO ausencias(funcionario_id, motivo, data_inicio, data_fim, turno_padrao, excecoes_por_dia, observacao)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(absence.person_id),
                    absence.reason.value,
                    absence.start_date,
                    absence.end_date,
                    absence.default_shift.value,
                    _exceptions_json(absence),
                    absence.note,
                ),
            )
            return replace(absence, absence_id=int(cur.lastrowid))

    def update(self, absence: Absence) -> Optional[Absence]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE ausencias
                SET funcionario_id=%s, motivo=%s, data_inicio=%s, data_fim=%s,
                    turno_padrao=%s, excecoes_por_dia=%s, observacao=%s
                WHERE id=%s
                """,
                (
                    int(absence.person_id),
                    absence.reason.value,
                    absence.start_date,
                    absence.end_date,
                    absence.default_shift.value,
                    _exceptions_json(absence),
                    absence.note,
                    int(absence.absence_id),
                ),
            )
            # rowcount is 0 when values are unchanged, so check existence explicitly.
            if cur.rowcount > 0:
                return absence
            cur.execute("SELECT id FROM ausencias WHERE id=%s", (int(absence.absence_id),))
            return absence if fetchone(cur) else None

    def delete(self, absence_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM ausencias WHERE id=%s", (int(absence_id),))
            return cur.rowcount > 0

    def delete_for_person(self, person_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM ausencias WHERE funcionario_id=%s", (int(person_id),))
            return int(cur.rowcount)

from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Rank
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Person
from .repository import PersonRepository

_COLUMNS = "id, nome, graduacao, ordem_antiguidade, ativo"


def _row_to_person(r: dict) -> Person:
    return Person(
        person_id=int(r["id"]),
        name=r["nome"],
        rank=Rank(r["graduacao"]),
        seniority=int(r["ordem_antiguidade"]),
        is_active=bool(r.get("ativo", True)),
    )


class MySQLPersonRepository(PersonRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Person]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM funcionarios ORDER BY ordem_antiguidade ASC, id ASC")
            return [_row_to_person(r) for r in fetchall(cur)]

    def get_by_id(self, person_id: int) -> Optional[Person]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM funcionarios WHERE id=%s", (int(person_id),))
            r = fetchone(cur)
            return _row_to_person(r) if r else None

    def create(self, *, name: str, rank: Rank, seniority: int, is_active: bool = True) -> Person:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO funcionarios(nome, graduacao, ordem_antiguidade, ativo)
                VALUES(%s,%s,%s,%s)
                """,
                (name, rank.value, int(seniority), int(bool(is_active))),
            )
            return Person(
                person_id=int(cur.lastrowid),
                name=name,
                rank=rank,
                seniority=int(seniority),
                is_active=bool(is_active),
            )

    def update(self, person: Person) -> Optional[Person]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE funcionarios
                SET nome=%s, graduacao=%s, ordem_antiguidade=%s, ativo=%s
                WHERE id=%s
                """,
                (
                    person.name,
                    person.rank.value,
                    int(person.seniority),
                    int(bool(person.is_active)),
                    int(person.person_id),
                ),
            )
            # rowcount is 0 when values are unchanged, so check existence explicitly.
            if cur.rowcount > 0:
                return person
            cur.execute("SELECT id FROM funcionarios WHERE id=%s", (int(person.person_id),))
            return person if fetchone(cur) else None

    def delete(self, person_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM funcionarios WHERE id=%s", (int(person_id),))
            return cur.rowcount > 0

    def max_seniority(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COALESCE(MAX(ordem_antiguidade), 0) AS max_ordem FROM funcionarios")
            r = fetchone(cur)
            return int(r["max_ordem"]) if r else 0

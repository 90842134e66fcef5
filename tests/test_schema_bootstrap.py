from __future__ import annotations

from efetivo_system.database.bootstrap import (
    SCHEMA_PATH,
    _iter_sql_statements,
    _strip_create_db_and_use,
    _strip_line_comments,
)


def test_schema_file_splits_into_table_statements():
    sql = _strip_line_comments(_strip_create_db_and_use(SCHEMA_PATH.read_text(encoding="utf-8")))
    statements = list(_iter_sql_statements(sql))
    assert len(statements) == 3
    assert all(s.upper().startswith("CREATE TABLE") for s in statements)
    assert "categoria" not in statements[0]


def test_splitter_ignores_semicolons_inside_quotes():
    sql = "INSERT INTO t VALUES ('a;b'); INSERT INTO t VALUES (\"c;d\");"
    assert list(_iter_sql_statements(sql)) == [
        "INSERT INTO t VALUES ('a;b')",
        'INSERT INTO t VALUES ("c;d")',
    ]

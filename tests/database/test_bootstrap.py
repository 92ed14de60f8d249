from src.school_attendance.school_attendance.database.bootstrap import _iter_sql_statements, _strip_create_db_and_use


def test_split_ignores_semicolons_inside_strings():
    sql = "INSERT INTO t VALUES ('a;b');\nINSERT INTO t VALUES ('it\\'s');\n\nSELECT 1"

    assert list(_iter_sql_statements(sql)) == [
        "INSERT INTO t VALUES ('a;b')",
        "INSERT INTO t VALUES ('it\\'s')",
        "SELECT 1",
    ]


def test_strip_create_database_and_use_lines():
    sql = "CREATE DATABASE IF NOT EXISTS x;\nUSE x;\nCREATE TABLE t (id INT);"

    assert list(_iter_sql_statements(_strip_create_db_and_use(sql))) == ["CREATE TABLE t (id INT)"]

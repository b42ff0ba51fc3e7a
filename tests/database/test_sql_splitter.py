from pathlib import Path

from src.hr_dashboard.hr_dashboard.database.bootstrap import _strip_create_db_and_use, iter_sql_statements


def test_splits_on_semicolons_outside_quotes():
    sql = "INSERT INTO t VALUES ('a;b'); -- note; here\nSELECT \"x;y\";\nSELECT 1"

    assert list(iter_sql_statements(sql)) == [
        "INSERT INTO t VALUES ('a;b')",
        'SELECT "x;y"',
        "SELECT 1",
    ]


def test_schema_file_yields_create_tables_only():
    schema = Path(__file__).resolve().parents[2] / "database" / "schema.sql"
    sql = _strip_create_db_and_use(schema.read_text(encoding="utf-8"))

    statements = list(iter_sql_statements(sql))

    assert len(statements) == 3
    assert all(s.startswith("CREATE TABLE IF NOT EXISTS") for s in statements)
    assert "attendance_logs" in statements[1]
    assert "announcements" in statements[2]

import sys

import init_db
from database import get_connection


def test_seed_users_is_idempotent(conn):
    init_db.seed_users(conn, ["alice", "bob"])
    init_db.seed_users(conn, ["alice"])

    names = [row["username"] for row in conn.execute("SELECT username FROM users ORDER BY id")]
    assert names == ["alice", "bob"]


def test_main_creates_schema_and_resets(tmp_path, monkeypatch, capsys):
    target = tmp_path / "fresh.db"
    monkeypatch.setattr(sys, "argv", ["init_db.py", "--database", str(target), "--user", "alice"])
    init_db.main()

    monkeypatch.setattr(sys, "argv", ["init_db.py", "--database", str(target), "--reset"])
    init_db.main()

    conn = get_connection(target)
    try:
        assert conn.execute("SELECT COUNT(*) AS total FROM users").fetchone()["total"] == 0
    finally:
        conn.close()
    assert "Existing database removed." in capsys.readouterr().out

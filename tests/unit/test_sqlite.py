import sqlite3
from pathlib import Path

import pytest

from dossier.infrastructure.db.sqlite import connect, initialize_schema, placeholders, schema_ready


def test_schema_ready_only_after_initialize(tmp_path: Path) -> None:
    db_path = tmp_path / "dossier.db"
    assert schema_ready(db_path) is False
    assert not db_path.exists()

    initialize_schema(db_path)
    initialize_schema(db_path)

    assert schema_ready(db_path) is True


def test_schema_ready_rejects_unrelated_database(tmp_path: Path) -> None:
    db_path = tmp_path / "other.db"
    with connect(db_path) as conn:
        conn.execute("CREATE TABLE notes (id INTEGER PRIMARY KEY)")

    assert schema_ready(db_path) is False


def test_connect_commits_and_closes(tmp_path: Path) -> None:
    db_path = tmp_path / "dossier.db"
    initialize_schema(db_path)

    with connect(db_path) as conn:
        conn.execute(
            "INSERT INTO files (id, uri, filename, status, created_at) VALUES (?, ?, ?, ?, ?)",
            ("f1", "public://a/report.pdf", "report.pdf", 1, "2024-03-05T00:00:00+00:00"),
        )

    with pytest.raises(sqlite3.ProgrammingError):
        conn.execute("SELECT 1")
    with connect(db_path) as check:
        assert check.execute("SELECT COUNT(*) AS c FROM files").fetchone()["c"] == 1


def test_connect_rolls_back_on_error(tmp_path: Path) -> None:
    db_path = tmp_path / "dossier.db"
    initialize_schema(db_path)

    with pytest.raises(RuntimeError):
        with connect(db_path) as conn:
            conn.execute(
                "INSERT INTO files (id, uri, filename, status, created_at) VALUES (?, ?, ?, ?, ?)",
                ("f1", "public://a/report.pdf", "report.pdf", 1, "2024-03-05T00:00:00+00:00"),
            )
            raise RuntimeError("abort")

    with connect(db_path) as check:
        assert check.execute("SELECT COUNT(*) AS c FROM files").fetchone()["c"] == 0


def test_busy_timeout_follows_environment(tmp_path: Path, monkeypatch) -> None:
    db_path = tmp_path / "dossier.db"

    monkeypatch.setenv("DOSSIER_SQLITE_BUSY_TIMEOUT_MS", "1234")
    with connect(db_path) as conn:
        assert conn.execute("PRAGMA busy_timeout").fetchone()[0] == 1234

    monkeypatch.setenv("DOSSIER_SQLITE_BUSY_TIMEOUT_MS", "not-a-number")
    with connect(db_path) as conn:
        assert conn.execute("PRAGMA busy_timeout").fetchone()[0] == 30_000


def test_placeholders() -> None:
    assert placeholders(3) == "?, ?, ?"
    assert placeholders(1) == "?"

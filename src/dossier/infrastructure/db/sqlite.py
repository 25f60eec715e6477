from __future__ import annotations

import os
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, TypeVar

DEFAULT_SQLITE_CONNECT_TIMEOUT_SECONDS = 30.0
DEFAULT_SQLITE_BUSY_TIMEOUT_MS = 30_000

SCHEMA_PATH = Path(__file__).resolve().parent / "schema.sql"
REQUIRED_TABLES = frozenset({"items", "item_translations", "item_files", "item_links", "files"})

_N = TypeVar("_N", int, float)


def _read_positive_env(name: str, default: _N, cast: Callable[[str], _N]) -> _N:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = cast(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def _configure_connection(conn: sqlite3.Connection) -> None:
    busy_timeout_ms = _read_positive_env("DOSSIER_SQLITE_BUSY_TIMEOUT_MS", DEFAULT_SQLITE_BUSY_TIMEOUT_MS, int)
    conn.execute("PRAGMA foreign_keys = ON;")
    conn.execute("PRAGMA journal_mode = WAL;")
    conn.execute("PRAGMA synchronous = NORMAL;")
    conn.execute(f"PRAGMA busy_timeout = {busy_timeout_ms};")


def get_connection(db_path: Path) -> sqlite3.Connection:
    timeout = _read_positive_env(
        "DOSSIER_SQLITE_CONNECT_TIMEOUT_SECONDS",
        DEFAULT_SQLITE_CONNECT_TIMEOUT_SECONDS,
        float,
    )
    conn = sqlite3.connect(db_path, timeout=timeout)
    conn.row_factory = sqlite3.Row
    _configure_connection(conn)
    return conn


@contextmanager
def connect(db_path: Path) -> Iterator[sqlite3.Connection]:
    """Connection scoped to one unit of work: commit on success, rollback on error, always close."""
    conn = get_connection(db_path)
    try:
        with conn:
            yield conn
    finally:
        conn.close()


def initialize_schema(db_path: Path, schema_path: Path = SCHEMA_PATH) -> None:
    with connect(db_path) as conn:
        conn.executescript(schema_path.read_text(encoding="utf-8"))


def schema_ready(db_path: Path) -> bool:
    if not db_path.is_file():
        return False
    with connect(db_path) as conn:
        rows = conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'").fetchall()
    return REQUIRED_TABLES <= {row["name"] for row in rows}


def placeholders(count: int) -> str:
    return ", ".join("?" for _ in range(count))

from __future__ import annotations

from pathlib import Path

from dossier.domain.models.stored_file import StoredFile
from dossier.infrastructure.db.sqlite import connect, placeholders


class FileRepo:
    def __init__(self, db_path: Path) -> None:
        self.db_path = db_path

    def insert(self, stored_file: StoredFile) -> None:
        with connect(self.db_path) as conn:
            conn.execute(
                """
                INSERT INTO files (id, uri, filename, status, created_at)
                VALUES (?, ?, ?, ?, ?)
                """,
                (
                    stored_file.id,
                    stored_file.uri,
                    stored_file.filename,
                    stored_file.status,
                    stored_file.created_at,
                ),
            )

    def get_by_uri(self, uri: str) -> StoredFile | None:
        with connect(self.db_path) as conn:
            row = conn.execute(
                "SELECT * FROM files WHERE uri = ?",
                (uri,),
            ).fetchone()
        return self._to_model(row) if row else None

    def list_by_uris(self, uris: list[str]) -> list[StoredFile]:
        """Membership lookup: every record whose uri is in ``uris``, once each."""
        wanted = list(dict.fromkeys(uris))
        if not wanted:
            return []
        with connect(self.db_path) as conn:
            rows = conn.execute(
                f"""
                SELECT * FROM files
                WHERE uri IN ({placeholders(len(wanted))})
                ORDER BY rowid
                """,
                wanted,
            ).fetchall()
        return [self._to_model(row) for row in rows]

    def uri_exists(self, uri: str) -> bool:
        with connect(self.db_path) as conn:
            row = conn.execute("SELECT 1 FROM files WHERE uri = ?", (uri,)).fetchone()
        return row is not None

    @staticmethod
    def _to_model(row) -> StoredFile:
        return StoredFile(
            id=row["id"],
            uri=row["uri"],
            filename=row["filename"],
            status=row["status"],
            created_at=row["created_at"],
        )

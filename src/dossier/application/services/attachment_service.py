from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from dossier.core.errors import AttachmentError
from dossier.core.files import safe_copy_atomic
from dossier.domain.models.stored_file import StoredFile
from dossier.infrastructure.db.repos.item_repo import ItemRepo
from dossier.infrastructure.storage.file_store import FileStore
from dossier.infrastructure.storage.stream_wrapper import PUBLIC_SCHEME


@dataclass(slots=True)
class AttachResult:
    item_id: str
    langcode: str
    field_name: str
    delta: int
    stored_file: StoredFile


class AttachmentService:
    def __init__(self, item_repo: ItemRepo, file_store: FileStore) -> None:
        self.item_repo = item_repo
        self.file_store = file_store

    def attach_file(
        self,
        item_id: str,
        field_name: str,
        langcode: str,
        source: Path,
        *,
        title: str | None = None,
        scheme: str = PUBLIC_SCHEME,
    ) -> AttachResult:
        path = source.expanduser().resolve()
        if not path.exists() or not path.is_file():
            raise AttachmentError(f"File not found: {path}")

        try:
            uri = self._available_uri(f"{scheme}://{field_name}", path.name)
            safe_copy_atomic(path, self.file_store.file_system.real_path(uri))
            stored_file = self.file_store.create_file_record(uri)
            self.item_repo.ensure_translation(item_id, langcode, title=title)
            delta = self.item_repo.append_file(item_id, langcode, field_name, uri)
        except (OSError, sqlite3.Error) as exc:
            raise AttachmentError(f"Unable to attach {path} to item {item_id}: {exc}") from exc

        return AttachResult(
            item_id=item_id,
            langcode=langcode,
            field_name=field_name,
            delta=delta,
            stored_file=stored_file,
        )

    def add_link(
        self,
        item_id: str,
        field_name: str,
        langcode: str,
        uri: str,
        *,
        title: str | None = None,
        item_title: str | None = None,
    ) -> int:
        try:
            self.item_repo.ensure_translation(item_id, langcode, title=item_title)
            return self.item_repo.append_link(item_id, langcode, field_name, uri, title)
        except sqlite3.Error as exc:
            raise AttachmentError(f"Unable to add link to item {item_id}: {exc}") from exc

    def _available_uri(self, directory_uri: str, filename: str) -> str:
        """Return a free URI, renaming ``name.ext`` to ``name_0.ext``, ``name_1.ext``..."""
        candidate = f"{directory_uri}/{filename}"
        if not self._taken(candidate):
            return candidate
        name = PurePosixPath(filename)
        stem, suffix = name.stem, name.suffix
        counter = 0
        while True:
            candidate = f"{directory_uri}/{stem}_{counter}{suffix}"
            if not self._taken(candidate):
                return candidate
            counter += 1

    def _taken(self, uri: str) -> bool:
        return self.file_store.file_repo.uri_exists(uri) or self.file_store.file_system.real_path(uri).exists()

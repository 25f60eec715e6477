from __future__ import annotations

from pathlib import PurePosixPath

from dossier.core.ids import new_uuid
from dossier.core.time import now_utc_iso
from dossier.domain.models.stored_file import FILE_STATUS_PERMANENT, StoredFile
from dossier.infrastructure.db.repos.file_repo import FileRepo
from dossier.infrastructure.storage.stream_wrapper import StreamWrapperFileSystem


class FileStore:
    def __init__(self, file_repo: FileRepo, file_system: StreamWrapperFileSystem) -> None:
        self.file_repo = file_repo
        self.file_system = file_system

    def find_by_uri(self, uri: str) -> StoredFile | None:
        return self.file_repo.get_by_uri(uri)

    def find_by_uris(self, uris: list[str]) -> list[StoredFile]:
        return self.file_repo.list_by_uris(uris)

    def read(self, stored_file: StoredFile) -> bytes:
        """Return the file contents; raises ``OSError`` when missing or unreadable."""
        return self.file_system.real_path(stored_file.uri).read_bytes()

    @staticmethod
    def label(stored_file: StoredFile) -> str:
        return stored_file.filename

    def canonical_link(self, stored_file: StoredFile) -> str:
        return self.file_system.external_url(stored_file.uri)

    def create_file_record(self, uri: str, *, status: int = FILE_STATUS_PERMANENT) -> StoredFile:
        stored_file = StoredFile(
            id=new_uuid(),
            uri=uri,
            filename=PurePosixPath(uri.partition("://")[2]).name,
            status=status,
            created_at=now_utc_iso(),
        )
        self.file_repo.insert(stored_file)
        return stored_file

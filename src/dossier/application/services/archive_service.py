from __future__ import annotations

import logging
import sqlite3
import zipfile
from datetime import datetime
from pathlib import Path
from typing import Callable

from dossier.core.config import AppSettings
from dossier.core.errors import (
    ConfigurationError,
    IOFailureError,
    NotFoundError,
    StorageUnavailableError,
)
from dossier.core.files import remove_if_empty, unique_entry_name
from dossier.core.ids import unique_suffix
from dossier.core.time import date_prefix, utc_now
from dossier.domain.models.download import RESULT_KIND_ARCHIVE, RESULT_KIND_FILE, ArchiveResult
from dossier.domain.models.stored_file import FILE_STATUS_TEMPORARY, StoredFile
from dossier.infrastructure.storage.file_store import FileStore
from dossier.infrastructure.storage.stream_wrapper import StreamWrapperFileSystem

logger = logging.getLogger(__name__)

ARCHIVE_FILENAME = "documents.zip"
EMPTY_DOWNLOAD_MESSAGE = "Couldn't find any file to download!"


class ArchiveService:
    """Turns a resolved list of file URIs into a single downloadable link.

    One URI is served as-is. Two or more are bundled into ``documents.zip``
    inside a fresh ``<dd-mm-YYYY>-<token>`` directory below the configured
    download root, so concurrent requests never share an output path.
    """

    def __init__(
        self,
        file_store: FileStore,
        file_system: StreamWrapperFileSystem,
        settings: AppSettings | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.file_store = file_store
        self.file_system = file_system
        self.settings = settings or AppSettings()
        self.clock = clock

    def prepare_download(self, uris: list[str]) -> ArchiveResult:
        if len(uris) < 2:
            return self.download_file(uris)
        return self.archive_files(uris)

    def download_file(self, uris: list[str]) -> ArchiveResult:
        if not uris:
            raise NotFoundError(EMPTY_DOWNLOAD_MESSAGE)
        uri = uris[0]
        try:
            stored_file = self.file_store.find_by_uri(uri)
        except sqlite3.Error as exc:
            raise StorageUnavailableError(f"Unable to look up file {uri}: {exc}") from exc
        if stored_file is None:
            raise NotFoundError(f"File not found: {uri}")
        return ArchiveResult(
            kind=RESULT_KIND_FILE,
            url=self.file_store.canonical_link(stored_file),
            uri=stored_file.uri,
        )

    def archive_files(self, uris: list[str]) -> ArchiveResult:
        try:
            stored_files = self.file_store.find_by_uris(uris)
        except sqlite3.Error as exc:
            raise StorageUnavailableError(f"Unable to look up files: {exc}") from exc

        directory_uri = self.new_directory_uri()
        archive_uri = f"{directory_uri}/{ARCHIVE_FILENAME}"
        try:
            directory = self.file_system.ensure_directory(directory_uri)
        except OSError as exc:
            raise IOFailureError(f"Unable to create download directory {directory_uri}: {exc}") from exc
        archive_path = directory / ARCHIVE_FILENAME

        try:
            entry_names = self._write_archive(archive_path, stored_files)
        except OSError as exc:
            self._discard(archive_path)
            raise IOFailureError(f"Unable to write archive {archive_uri}: {exc}") from exc

        if not entry_names:
            self._discard(archive_path)
            raise NotFoundError(EMPTY_DOWNLOAD_MESSAGE)

        try:
            record = self.file_store.create_file_record(archive_uri, status=FILE_STATUS_TEMPORARY)
        except sqlite3.Error as exc:
            self._discard(archive_path)
            raise StorageUnavailableError(f"Unable to register archive {archive_uri}: {exc}") from exc

        logger.info("Built %s with %d entries", archive_uri, len(entry_names))
        return ArchiveResult(
            kind=RESULT_KIND_ARCHIVE,
            url=self.file_store.canonical_link(record),
            uri=archive_uri,
            entry_count=len(entry_names),
        )

    def new_directory_uri(self) -> str:
        root = self.settings.download_dir.rstrip("/")
        return f"{root}/{date_prefix(self.clock())}-{unique_suffix()}"

    def _write_archive(self, archive_path: Path, stored_files: list[StoredFile]) -> list[str]:
        entry_names: list[str] = []
        taken: set[str] = set()
        with zipfile.ZipFile(archive_path, "w", compression=zipfile.ZIP_DEFLATED) as archive:
            for stored_file in stored_files:
                try:
                    content = self.file_store.read(stored_file)
                except (OSError, ConfigurationError) as exc:
                    logger.warning("Skipping unreadable file %s: %s", stored_file.uri, exc)
                    continue
                name = unique_entry_name(self.file_store.label(stored_file), taken)
                taken.add(name)
                archive.writestr(name, content)
                entry_names.append(name)
        return entry_names

    @staticmethod
    def _discard(archive_path: Path) -> None:
        archive_path.unlink(missing_ok=True)
        remove_if_empty(archive_path.parent)

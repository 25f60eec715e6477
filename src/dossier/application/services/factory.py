from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from dossier.application.services.archive_service import ArchiveService
from dossier.application.services.attachment_service import AttachmentService
from dossier.application.services.catalog_service import CatalogService, LinksFieldOverride
from dossier.application.services.download_service import DownloadService
from dossier.core.config import AppPaths, AppSettings
from dossier.core.time import utc_now
from dossier.infrastructure.db.repos.file_repo import FileRepo
from dossier.infrastructure.db.repos.item_repo import ItemRepo
from dossier.infrastructure.storage.file_store import FileStore
from dossier.infrastructure.storage.stream_wrapper import StreamWrapperFileSystem


@dataclass(slots=True)
class Services:
    item_repo: ItemRepo
    file_store: FileStore
    catalog: CatalogService
    archive: ArchiveService
    download: DownloadService
    attachments: AttachmentService


def build_services(
    paths: AppPaths,
    settings: AppSettings,
    *,
    links_field_override: LinksFieldOverride | None = None,
    clock: Callable[[], datetime] = utc_now,
) -> Services:
    item_repo = ItemRepo(paths.db_path)
    file_system = StreamWrapperFileSystem(paths, settings)
    file_store = FileStore(FileRepo(paths.db_path), file_system)
    catalog = CatalogService(item_repo, settings, links_field_override=links_field_override)
    archive = ArchiveService(file_store, file_system, settings, clock=clock)
    return Services(
        item_repo=item_repo,
        file_store=file_store,
        catalog=catalog,
        archive=archive,
        download=DownloadService(catalog, archive),
        attachments=AttachmentService(item_repo, file_store),
    )

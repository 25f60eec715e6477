from __future__ import annotations

import logging
from dataclasses import asdict
from datetime import datetime
from typing import Any, Callable, NoReturn

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from pydantic import BaseModel

from dossier.application.services.catalog_service import LinksFieldOverride
from dossier.application.services.factory import Services, build_services
from dossier.application.services.project_service import ProjectService
from dossier.core.config import AppPaths, AppSettings, load_settings
from dossier.core.errors import (
    ConfigurationError,
    DossierError,
    IOFailureError,
    NotFoundError,
    StorageUnavailableError,
    ValidationError,
)
from dossier.core.time import utc_now
from dossier.domain.models.download import SelectionRequest
from dossier.infrastructure.storage.stream_wrapper import PRIVATE_SCHEME, PUBLIC_SCHEME

logger = logging.getLogger(__name__)

DOWNLOAD_COMMAND = "downloadFileCommand"


class DownloadRequest(BaseModel):
    field_name: str
    item_ids: list[str] = []
    bulk_keys: list[str] = []
    formats: list[str] = []
    languages: list[str] = []


def _raise_http(exc: DossierError) -> NoReturn:
    if isinstance(exc, NotFoundError):
        status_code = 404
    elif isinstance(exc, (ValidationError, ConfigurationError)):
        status_code = 400
    elif isinstance(exc, StorageUnavailableError):
        status_code = 503
    elif isinstance(exc, IOFailureError):
        status_code = 500
    else:
        status_code = 400
    raise HTTPException(status_code=status_code, detail=str(exc)) from exc


def create_app(
    paths: AppPaths,
    settings: AppSettings | None = None,
    *,
    links_field_override: LinksFieldOverride | None = None,
    clock: Callable[[], datetime] = utc_now,
) -> FastAPI:
    app = FastAPI(title="Dossier", version="0.1.0")
    app_settings = settings or load_settings()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    project_service = ProjectService(paths)
    project_service.init_project()

    def get_services() -> Services:
        return build_services(
            paths,
            app_settings,
            links_field_override=links_field_override,
            clock=clock,
        )

    def resolve_item_ids(services: Services, item_ids: list[str], bulk_keys: list[str]) -> list[str]:
        ids = list(item_ids)
        if bulk_keys:
            ids.extend(services.download.item_ids_from_bulk_keys(bulk_keys))
        return list(dict.fromkeys(ids))

    def serve_stored(scheme: str, file_path: str) -> FileResponse:
        services = get_services()
        try:
            target = services.file_store.file_system.real_path(f"{scheme}://{file_path}")
        except ConfigurationError as exc:
            raise HTTPException(status_code=400, detail="Invalid file path.") from exc
        if not target.is_file():
            raise HTTPException(status_code=404, detail=f"File not found: {file_path}")
        return FileResponse(target, filename=target.name)

    @app.post("/api/init")
    def api_init() -> dict[str, Any]:
        result = project_service.init_project()
        return {
            "ok": True,
            "db_path": str(result.db_path),
            "schema_created": result.schema_created,
            "paths_created": [str(p) for p in result.paths_created],
        }

    @app.get("/api/items")
    def api_items(limit: int = Query(default=50, ge=1, le=1000)) -> dict[str, Any]:
        try:
            items = get_services().catalog.list_items(limit=limit)
        except DossierError as exc:
            _raise_http(exc)
        return {
            "count": len(items),
            "items": [
                {
                    "id": item.id,
                    "title": item.title,
                    "default_langcode": item.default_langcode,
                    "languages": item.translations(),
                }
                for item in items
            ],
        }

    @app.get("/api/download/options")
    def api_download_options(
        field: str,
        ids: list[str] = Query(default=[]),
        keys: list[str] = Query(default=[]),
    ) -> dict[str, Any]:
        services = get_services()
        try:
            item_ids = resolve_item_ids(services, ids, keys)
            options = services.download.options(item_ids, field)
        except DossierError as exc:
            _raise_http(exc)
        return {
            "item_ids": item_ids,
            "field_name": field,
            "formats": options.formats,
            "format_labels": options.format_labels,
            "languages": options.languages,
            "external_links": [asdict(link) for link in options.external_links],
            "empty": options.is_empty,
        }

    @app.post("/api/download")
    def api_download(req: DownloadRequest) -> dict[str, Any]:
        services = get_services()
        try:
            item_ids = resolve_item_ids(services, req.item_ids, req.bulk_keys)
            result = services.download.download(
                SelectionRequest(
                    item_ids=item_ids,
                    field_name=req.field_name,
                    formats=req.formats,
                    languages=req.languages,
                )
            )
        except DossierError as exc:
            logger.info("Download request failed: %s", exc)
            _raise_http(exc)
        return {
            "ok": True,
            "kind": result.kind,
            "entry_count": result.entry_count,
            "uri": result.uri,
            "command": DOWNLOAD_COMMAND,
            "filePath": result.url,
        }

    @app.get("/files/{file_path:path}")
    def public_file(file_path: str) -> FileResponse:
        return serve_stored(PUBLIC_SCHEME, file_path)

    @app.get("/system/files/{file_path:path}")
    def private_file(file_path: str) -> FileResponse:
        return serve_stored(PRIVATE_SCHEME, file_path)

    return app

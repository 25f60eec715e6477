from __future__ import annotations

import logging
from collections.abc import Iterable

from dossier.application.services.archive_service import ArchiveService
from dossier.application.services.catalog_service import CatalogService
from dossier.core.bulk_keys import decode_bulk_form_key
from dossier.core.errors import ValidationError
from dossier.domain.models.download import ArchiveResult, DownloadOptions, SelectionRequest

logger = logging.getLogger(__name__)

ITEM_ENTITY_TYPE = "item"


class DownloadService:
    def __init__(self, catalog: CatalogService, archive_service: ArchiveService) -> None:
        self.catalog = catalog
        self.archive_service = archive_service

    def options(self, item_ids: Iterable[str], field_name: str) -> DownloadOptions:
        ids = list(item_ids)
        formats, languages = self.catalog.available_options(ids, field_name)
        return DownloadOptions(
            formats=formats,
            languages=self.catalog.filter_languages(languages),
            format_labels=self.catalog.format_labels(formats),
            external_links=self.catalog.external_links(ids),
        )

    def download(self, request: SelectionRequest) -> ArchiveResult:
        formats = [value for value in request.formats if value]
        languages = [value for value in request.languages if value]
        if not formats or not languages:
            options = self.options(request.item_ids, request.field_name)
            formats = formats or self._preselect(options.formats)
            languages = languages or self._preselect(options.languages)
        if not formats:
            raise ValidationError("Format is required. Select at least one format.")
        if not languages:
            raise ValidationError("Language is required. Select at least one language.")

        uris = self.catalog.filtered_files(request.item_ids, request.field_name, formats, languages)
        logger.debug(
            "Resolved %d file(s) for items=%s formats=%s languages=%s",
            len(uris),
            request.item_ids,
            formats,
            languages,
        )
        return self.archive_service.prepare_download(uris)

    @staticmethod
    def item_ids_from_bulk_keys(encoded_keys: Iterable[str]) -> list[str]:
        item_ids: list[str] = []
        for encoded in encoded_keys:
            key = decode_bulk_form_key(encoded)
            if key.entity_type_id != ITEM_ENTITY_TYPE:
                raise ValidationError(f"Unsupported entity type in selection: {key.entity_type_id}")
            if key.entity_id not in item_ids:
                item_ids.append(key.entity_id)
        return item_ids

    @staticmethod
    def _preselect(available: list[str]) -> list[str]:
        # A lone option is selected by default; several require a choice.
        return list(available) if len(available) == 1 else []

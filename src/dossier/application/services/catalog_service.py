from __future__ import annotations

import logging
import sqlite3
from collections.abc import Iterable
from pathlib import PurePosixPath
from typing import Callable

from dossier.core.categories import CATEGORY_LABELS, classify
from dossier.core.config import AppSettings
from dossier.core.errors import StorageUnavailableError
from dossier.domain.models.content_item import ContentItem
from dossier.domain.models.external_link import ExternalLink
from dossier.domain.models.file_reference import FileReference
from dossier.infrastructure.db.repos.item_repo import ItemRepo

logger = logging.getLogger(__name__)

LinksFieldOverride = Callable[[str], str]


class CatalogService:
    """Resolves the downloadable files attached to a selection of items."""

    def __init__(
        self,
        item_repo: ItemRepo,
        settings: AppSettings | None = None,
        links_field_override: LinksFieldOverride | None = None,
    ) -> None:
        self.item_repo = item_repo
        self.settings = settings or AppSettings()
        self.links_field_override = links_field_override

    @staticmethod
    def classify(uri: str) -> str | None:
        return classify(uri)

    def load_items(self, item_ids: Iterable[str]) -> list[ContentItem]:
        try:
            items = self.item_repo.load_items([str(item_id) for item_id in item_ids])
        except sqlite3.Error as exc:
            raise StorageUnavailableError(f"Unable to load items: {exc}") from exc
        return list(items.values())

    def list_items(self, limit: int = 100) -> list[ContentItem]:
        try:
            return self.item_repo.list(limit=limit)
        except sqlite3.Error as exc:
            raise StorageUnavailableError(f"Unable to list items: {exc}") from exc

    def resolve_references(
        self,
        item_ids: Iterable[str],
        field_name: str,
        languages: Iterable[str] | None = None,
    ) -> list[FileReference]:
        """Classified files of ``field_name`` in item, language, then field order.

        With ``languages`` given, only those translations are visited, in that
        order; otherwise every translation of each item is.
        """
        requested = list(dict.fromkeys(languages)) if languages is not None else None
        references: list[FileReference] = []
        for item in self.load_items(item_ids):
            langcodes = requested if requested is not None else item.translations()
            for langcode in langcodes:
                if not item.has_translation(langcode):
                    continue
                for uri in item.files_in(field_name, langcode):
                    category = classify(uri)
                    if category is None:
                        logger.debug("Skipping unclassified file %s on item %s", uri, item.id)
                        continue
                    references.append(
                        FileReference(
                            uri=uri,
                            category=category,
                            langcode=langcode,
                            label=PurePosixPath(uri.partition("://")[2] or uri).name,
                        )
                    )
        return references

    def available_options(self, item_ids: Iterable[str], field_name: str) -> tuple[list[str], list[str]]:
        references = self.resolve_references(item_ids, field_name)
        categories = sorted({ref.category for ref in references})
        languages = sorted({ref.langcode for ref in references})
        return categories, languages

    def filtered_files(
        self,
        item_ids: Iterable[str],
        field_name: str,
        formats: Iterable[str],
        languages: Iterable[str],
    ) -> list[str]:
        wanted_formats = set(formats)
        return [
            ref.uri
            for ref in self.resolve_references(item_ids, field_name, languages)
            if ref.category in wanted_formats
        ]

    @staticmethod
    def format_labels(categories: Iterable[str]) -> dict[str, str]:
        return {category: CATEGORY_LABELS.get(category, "") for category in categories}

    def filter_languages(self, available: Iterable[str]) -> list[str]:
        available_set = set(available)
        if not self.settings.languages:
            return sorted(available_set)
        return [langcode for langcode in self.settings.languages if langcode in available_set]

    def links_field_name(self, field_name: str | None = None) -> str:
        name = field_name or self.settings.links_field
        if self.links_field_override is not None:
            name = self.links_field_override(name)
        return name

    def external_links(self, item_ids: Iterable[str], field_name: str | None = None) -> list[ExternalLink]:
        links_field = self.links_field_name(field_name)
        links: list[ExternalLink] = []
        for item in self.load_items(item_ids):
            for link in item.links_in(links_field):
                links.append(
                    ExternalLink(
                        uri=link.uri,
                        title=link.title,
                        attributes={"class": ["btn"], "target": "_blank"},
                    )
                )
        return links

from __future__ import annotations

from dataclasses import dataclass, field

from dossier.domain.models.external_link import ExternalLink


@dataclass(slots=True)
class ItemTranslation:
    langcode: str
    title: str
    files: dict[str, list[str]] = field(default_factory=dict)
    links: dict[str, list[ExternalLink]] = field(default_factory=dict)


@dataclass(slots=True)
class ContentItem:
    id: str
    title: str
    default_langcode: str
    created_at: str
    translations_by_langcode: dict[str, ItemTranslation] = field(default_factory=dict)

    def translations(self) -> list[str]:
        return list(self.translations_by_langcode)

    def has_translation(self, langcode: str) -> bool:
        return langcode in self.translations_by_langcode

    def files_in(self, field_name: str, langcode: str) -> list[str]:
        translation = self.translations_by_langcode.get(langcode)
        if translation is None:
            return []
        return list(translation.files.get(field_name, []))

    def links_in(self, field_name: str, langcode: str | None = None) -> list[ExternalLink]:
        translation = self.translations_by_langcode.get(langcode or self.default_langcode)
        if translation is None:
            return []
        return list(translation.links.get(field_name, []))

from __future__ import annotations

from dataclasses import dataclass, field

from dossier.domain.models.external_link import ExternalLink

RESULT_KIND_FILE = "file"
RESULT_KIND_ARCHIVE = "archive"


@dataclass(slots=True)
class SelectionRequest:
    item_ids: list[str]
    field_name: str
    formats: list[str] = field(default_factory=list)
    languages: list[str] = field(default_factory=list)


@dataclass(slots=True)
class DownloadOptions:
    formats: list[str]
    languages: list[str]
    format_labels: dict[str, str] = field(default_factory=dict)
    external_links: list[ExternalLink] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.languages and not self.external_links


@dataclass(frozen=True, slots=True)
class ArchiveResult:
    kind: str
    url: str
    uri: str
    entry_count: int = 1

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class FileReference:
    uri: str
    category: str
    langcode: str
    label: str

from __future__ import annotations

from dataclasses import dataclass

FILE_STATUS_TEMPORARY = 0
FILE_STATUS_PERMANENT = 1


@dataclass(slots=True)
class StoredFile:
    id: str
    uri: str
    filename: str
    status: int
    created_at: str

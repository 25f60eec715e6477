from __future__ import annotations

from pathlib import PurePosixPath

PDF = "pdf"
DOCUMENT = "document"
TEXT = "text"
IMAGE = "image"
PRESENTATION = "presentation"
SPREADSHEET = "spreadsheet"
VIDEO = "video"
LINK = "link"
UNKNOWN = "unknown"

CATEGORIES: tuple[str, ...] = (
    PDF,
    DOCUMENT,
    TEXT,
    IMAGE,
    PRESENTATION,
    SPREADSHEET,
    VIDEO,
    LINK,
    UNKNOWN,
)

EXTENSION_CATEGORIES: dict[str, str] = {
    "csv": DOCUMENT,
    "doc": DOCUMENT,
    "docx": DOCUMENT,
    "fodg": DOCUMENT,
    "fodt": DOCUMENT,
    "odf": DOCUMENT,
    "odg": DOCUMENT,
    "odt": DOCUMENT,
    "pages": DOCUMENT,
    "rtf": DOCUMENT,
    "pdf": PDF,
    "txt": TEXT,
    "gif": IMAGE,
    "jpg": IMAGE,
    "jpeg": IMAGE,
    "png": IMAGE,
    "svg": IMAGE,
    "key": PRESENTATION,
    "fodp": PRESENTATION,
    "odp": PRESENTATION,
    "ppt": PRESENTATION,
    "pptx": PRESENTATION,
    "numbers": SPREADSHEET,
    "fods": SPREADSHEET,
    "ods": SPREADSHEET,
    "xls": SPREADSHEET,
    "xlsx": SPREADSHEET,
    "shtml": LINK,
    "htm": LINK,
    "mp4": VIDEO,
    "mov": VIDEO,
    "avi": VIDEO,
}

# Short labels shown next to format icons.
CATEGORY_LABELS: dict[str, str] = {
    PDF: "PDF",
    DOCUMENT: "DOC",
    SPREADSHEET: "XLS",
    PRESENTATION: "PPT",
    VIDEO: "VIDEO",
    TEXT: "TEXT",
    IMAGE: "IMG",
}


def uri_extension(uri: str) -> str:
    # Stream-wrapper URIs ("public://a/b.pdf") and plain paths share the same tail.
    tail = uri.split("://", 1)[-1]
    name = PurePosixPath(tail.replace("\\", "/")).name
    _, dot, ext = name.rpartition(".")
    return ext.lower() if dot else ""


def classify(uri: str) -> str | None:
    """Map a file URI to its category, or ``None`` for unmapped extensions."""
    return EXTENSION_CATEGORIES.get(uri_extension(uri))

from __future__ import annotations

import os
import shutil
from pathlib import Path


def ensure_directory(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def safe_copy_atomic(src: Path, dst: Path) -> None:
    ensure_directory(dst.parent)
    temp_path = dst.parent / f".{dst.name}.tmp"
    shutil.copy2(src, temp_path)
    os.replace(temp_path, dst)


def remove_if_empty(path: Path) -> None:
    try:
        path.rmdir()
    except OSError:
        pass


def unique_entry_name(name: str, taken: set[str]) -> str:
    """Return ``name`` or ``stem (n).ext`` so that it is not in ``taken``."""
    if name not in taken:
        return name
    stem, dot, ext = name.rpartition(".")
    if not dot or not stem:
        stem, ext = name, ""
    counter = 1
    while True:
        candidate = f"{stem} ({counter}).{ext}" if ext else f"{stem} ({counter})"
        if candidate not in taken:
            return candidate
        counter += 1

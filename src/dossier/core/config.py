from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class AppPaths:
    project_root: Path
    dossier_dir: Path
    db_path: Path
    public_dir: Path
    private_dir: Path


@dataclass(frozen=True)
class AppSettings:
    base_url: str = "http://127.0.0.1:8765"
    download_dir: str = "public://downloads"
    links_field: str = "field_external_links"
    languages: tuple[str, ...] = ()


DEFAULT_DOSSIER_DIRNAME = ".dossier"


def load_paths(project_root: Path | None = None) -> AppPaths:
    root = (project_root or Path.cwd()).expanduser().resolve()

    dossier_home_raw = os.getenv("DOSSIER_HOME")
    if dossier_home_raw:
        dossier_dir = Path(dossier_home_raw).expanduser().resolve()
    else:
        dossier_dir = root / DEFAULT_DOSSIER_DIRNAME

    return AppPaths(
        project_root=root,
        dossier_dir=dossier_dir,
        db_path=dossier_dir / "dossier.db",
        public_dir=dossier_dir / "files",
        private_dir=dossier_dir / "private",
    )


def _split_csv_env(name: str) -> tuple[str, ...]:
    raw = os.getenv(name) or ""
    return tuple(part.strip() for part in raw.split(",") if part.strip())


def load_settings() -> AppSettings:
    defaults = AppSettings()
    return AppSettings(
        base_url=(os.getenv("DOSSIER_BASE_URL") or defaults.base_url).rstrip("/"),
        download_dir=os.getenv("DOSSIER_DOWNLOAD_DIR") or defaults.download_dir,
        links_field=os.getenv("DOSSIER_LINKS_FIELD") or defaults.links_field,
        languages=_split_csv_env("DOSSIER_LANGUAGES"),
    )

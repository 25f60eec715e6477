from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from dossier.core.config import AppPaths
from dossier.core.files import ensure_directory
from dossier.infrastructure.db.sqlite import initialize_schema, schema_ready


@dataclass(slots=True)
class InitResult:
    paths_created: list[Path]
    db_path: Path
    schema_created: bool


class ProjectService:
    def __init__(self, paths: AppPaths) -> None:
        self.paths = paths

    def init_project(self) -> InitResult:
        paths_created: list[Path] = []

        for path in (
            self.paths.dossier_dir,
            self.paths.public_dir,
            self.paths.private_dir,
        ):
            if not path.exists():
                paths_created.append(path)
            ensure_directory(path)

        schema_created = not schema_ready(self.paths.db_path)
        initialize_schema(self.paths.db_path)

        return InitResult(
            paths_created=paths_created,
            db_path=self.paths.db_path,
            schema_created=schema_created,
        )

    def is_initialized(self) -> bool:
        return schema_ready(self.paths.db_path)

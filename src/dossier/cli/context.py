from __future__ import annotations

from dataclasses import dataclass

from rich.console import Console

from dossier.application.services.factory import Services, build_services
from dossier.application.services.project_service import ProjectService
from dossier.core.config import AppPaths, AppSettings
from dossier.core.errors import ProjectNotInitializedError


@dataclass(slots=True)
class CLIContext:
    paths: AppPaths
    settings: AppSettings
    console: Console

    def require_services(self) -> Services:
        if not ProjectService(self.paths).is_initialized():
            raise ProjectNotInitializedError(
                f"Project is not initialized. Run 'dossier init' first in {self.paths.project_root}"
            )
        return build_services(self.paths, self.settings)

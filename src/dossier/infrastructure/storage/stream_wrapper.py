from __future__ import annotations

from pathlib import Path, PurePosixPath
from urllib.parse import quote

from dossier.core.config import AppPaths, AppSettings
from dossier.core.errors import ConfigurationError
from dossier.core.files import ensure_directory

PUBLIC_SCHEME = "public"
PRIVATE_SCHEME = "private"

_URL_PREFIXES = {
    PUBLIC_SCHEME: "/files",
    PRIVATE_SCHEME: "/system/files",
}


class StreamWrapperFileSystem:
    """Maps ``public://`` and ``private://`` URIs onto local directories and URLs."""

    def __init__(self, paths: AppPaths, settings: AppSettings) -> None:
        self.roots = {
            PUBLIC_SCHEME: paths.public_dir,
            PRIVATE_SCHEME: paths.private_dir,
        }
        self.base_url = settings.base_url.rstrip("/")

    @staticmethod
    def split_uri(uri: str) -> tuple[str, str]:
        scheme, sep, target = uri.partition("://")
        if not sep:
            raise ConfigurationError(f"Not a stream wrapper URI: {uri}")
        return scheme, target.strip("/")

    def real_path(self, uri: str) -> Path:
        scheme, target = self.split_uri(uri)
        root = self.roots.get(scheme)
        if root is None:
            raise ConfigurationError(f"Unsupported URI scheme: {scheme}")
        relative = PurePosixPath(target)
        if ".." in relative.parts:
            raise ConfigurationError(f"URI escapes its root: {uri}")
        return (root / relative).resolve()

    def ensure_directory(self, uri: str) -> Path:
        path = self.real_path(uri)
        ensure_directory(path)
        return path

    def external_url(self, uri: str) -> str:
        scheme, target = self.split_uri(uri)
        prefix = _URL_PREFIXES.get(scheme)
        if prefix is None:
            raise ConfigurationError(f"Unsupported URI scheme: {scheme}")
        return f"{self.base_url}{prefix}/{quote(target)}"


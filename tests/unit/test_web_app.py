import io
import sqlite3
import zipfile
from datetime import datetime, timezone
from pathlib import Path

from fastapi.testclient import TestClient

from dossier.application.services.factory import build_services
from dossier.core.bulk_keys import BulkFormKey, encode_bulk_form_key
from dossier.core.config import AppPaths, AppSettings
from dossier.infrastructure.db.repos.item_repo import ItemRepo
from dossier.web.app import create_app

BASE_URL = "http://testserver"
FIELD = "field_documents"


def _paths(tmp_path: Path) -> AppPaths:
    root = tmp_path / "proj"
    root.mkdir(parents=True, exist_ok=True)
    return AppPaths(
        project_root=root,
        dossier_dir=root / ".dossier",
        db_path=root / ".dossier" / "dossier.db",
        public_dir=root / ".dossier" / "files",
        private_dir=root / ".dossier" / "private",
    )


def test_web_download_flow(tmp_path: Path) -> None:
    paths = _paths(tmp_path)
    settings = AppSettings(base_url=BASE_URL)
    app = create_app(paths, settings, clock=lambda: datetime(2024, 3, 5, tzinfo=timezone.utc))
    client = TestClient(app)

    r = client.post("/api/init")
    assert r.status_code == 200
    assert r.json()["ok"] is True

    services = build_services(paths, settings)
    for item_id, langcode, name in (
        ("A", "en", "report.pdf"),
        ("A", "fr", "report.docx"),
        ("B", "en", "photo.png"),
    ):
        source = tmp_path / "sources" / item_id / langcode / name
        source.parent.mkdir(parents=True, exist_ok=True)
        source.write_bytes(f"{item_id}-{name}".encode("utf-8"))
        services.attachments.attach_file(item_id, FIELD, langcode, source)

    r = client.get("/api/items")
    assert r.status_code == 200
    assert r.json()["count"] == 2

    r = client.get("/api/download/options", params={"field": FIELD, "ids": ["A", "B"]})
    assert r.status_code == 200
    payload = r.json()
    assert payload["formats"] == ["document", "image", "pdf"]
    assert payload["languages"] == ["en", "fr"]
    assert payload["format_labels"]["image"] == "IMG"
    assert payload["empty"] is False

    r = client.post(
        "/api/download",
        json={"field_name": FIELD, "item_ids": ["A", "B"], "formats": ["pdf", "image"], "languages": ["en"]},
    )
    assert r.status_code == 200
    payload = r.json()
    assert payload["command"] == "downloadFileCommand"
    assert payload["kind"] == "archive"
    assert payload["entry_count"] == 2
    assert payload["filePath"].startswith(f"{BASE_URL}/files/downloads/05-03-2024-")

    r = client.get(payload["filePath"][len(BASE_URL):])
    assert r.status_code == 200
    with zipfile.ZipFile(io.BytesIO(r.content)) as archive:
        assert sorted(archive.namelist()) == ["photo.png", "report.pdf"]

    key = encode_bulk_form_key(BulkFormKey(langcode="fr", entity_type_id="item", entity_id="A"))
    r = client.post(
        "/api/download",
        json={"field_name": FIELD, "bulk_keys": [key], "formats": ["document"], "languages": ["fr"]},
    )
    assert r.status_code == 200
    assert r.json()["kind"] == "file"
    assert r.json()["filePath"] == f"{BASE_URL}/files/{FIELD}/report.docx"

    r = client.get(f"/files/{FIELD}/report.docx")
    assert r.status_code == 200
    assert r.content == b"A-report.docx"


def test_web_download_errors(tmp_path: Path) -> None:
    paths = _paths(tmp_path)
    client = TestClient(create_app(paths, AppSettings(base_url=BASE_URL)))

    r = client.post(
        "/api/download",
        json={"field_name": FIELD, "item_ids": ["missing"], "formats": ["pdf"], "languages": ["en"]},
    )
    assert r.status_code == 404
    assert r.json()["detail"] == "Couldn't find any file to download!"

    r = client.post("/api/download", json={"field_name": FIELD, "item_ids": ["missing"]})
    assert r.status_code == 400

    r = client.get("/api/download/options", params={"field": FIELD, "keys": ["%%%"]})
    assert r.status_code == 400

    r = client.get("/files/nowhere/file.pdf")
    assert r.status_code == 404


def test_web_item_listing_reports_unavailable_store(tmp_path: Path, monkeypatch) -> None:
    client = TestClient(create_app(_paths(tmp_path), AppSettings(base_url=BASE_URL)))

    def locked(self, limit: int = 100) -> list:
        raise sqlite3.OperationalError("database is locked")

    monkeypatch.setattr(ItemRepo, "list", locked)

    r = client.get("/api/items")
    assert r.status_code == 503
    assert "database is locked" in r.json()["detail"]

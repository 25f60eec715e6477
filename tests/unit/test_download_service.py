import zipfile
from pathlib import Path

import pytest

from dossier.application.services.factory import Services, build_services
from dossier.application.services.project_service import ProjectService
from dossier.core.bulk_keys import BulkFormKey, encode_bulk_form_key
from dossier.core.config import AppPaths, AppSettings
from dossier.core.errors import NotFoundError, ValidationError
from dossier.domain.models.download import SelectionRequest

FIELD = "field_documents"


def _bootstrap(tmp_path: Path) -> Services:
    root = tmp_path / "proj"
    paths = AppPaths(
        project_root=root,
        dossier_dir=root / ".dossier",
        db_path=root / ".dossier" / "dossier.db",
        public_dir=root / ".dossier" / "files",
        private_dir=root / ".dossier" / "private",
    )
    ProjectService(paths).init_project()
    return build_services(paths, AppSettings(base_url="https://docs.example.org"))


def _attach(services: Services, tmp_path: Path, item_id: str, langcode: str, name: str) -> str:
    source = tmp_path / "sources" / item_id / langcode / name
    source.parent.mkdir(parents=True, exist_ok=True)
    source.write_bytes(name.encode("utf-8"))
    return services.attachments.attach_file(item_id, FIELD, langcode, source).stored_file.uri


def test_options_bundle_labels_and_links(tmp_path: Path) -> None:
    services = _bootstrap(tmp_path)
    _attach(services, tmp_path, "A", "en", "report.pdf")
    _attach(services, tmp_path, "A", "fr", "report.docx")
    services.attachments.add_link("A", "field_external_links", "en", "https://publisher.example.org")

    options = services.download.options(["A"], FIELD)

    assert options.formats == ["document", "pdf"]
    assert options.format_labels == {"document": "DOC", "pdf": "PDF"}
    assert options.languages == ["en", "fr"]
    assert [link.uri for link in options.external_links] == ["https://publisher.example.org"]
    assert options.is_empty is False


def test_options_for_item_without_files_are_empty(tmp_path: Path) -> None:
    services = _bootstrap(tmp_path)

    options = services.download.options(["nothing-here"], FIELD)

    assert options.is_empty is True


def test_scenario_download_builds_two_entry_archive(tmp_path: Path) -> None:
    services = _bootstrap(tmp_path)
    _attach(services, tmp_path, "A", "en", "report.pdf")
    _attach(services, tmp_path, "A", "fr", "report.docx")
    _attach(services, tmp_path, "B", "en", "photo.png")

    result = services.download.download(
        SelectionRequest(item_ids=["A", "B"], field_name=FIELD, formats=["pdf", "image"], languages=["en"])
    )

    assert result.kind == "archive"
    with zipfile.ZipFile(services.file_store.file_system.real_path(result.uri)) as archive:
        assert sorted(archive.namelist()) == ["photo.png", "report.pdf"]


def test_single_option_is_preselected(tmp_path: Path) -> None:
    services = _bootstrap(tmp_path)
    uri = _attach(services, tmp_path, "A", "en", "report.pdf")

    result = services.download.download(SelectionRequest(item_ids=["A"], field_name=FIELD))

    assert result.kind == "file"
    assert result.uri == uri


def test_missing_choice_among_several_options_is_rejected(tmp_path: Path) -> None:
    services = _bootstrap(tmp_path)
    _attach(services, tmp_path, "A", "en", "report.pdf")
    _attach(services, tmp_path, "A", "en", "sheet.xlsx")
    _attach(services, tmp_path, "A", "fr", "rapport.pdf")

    with pytest.raises(ValidationError, match="Format is required"):
        services.download.download(SelectionRequest(item_ids=["A"], field_name=FIELD, languages=["en"]))
    with pytest.raises(ValidationError, match="Language is required"):
        services.download.download(SelectionRequest(item_ids=["A"], field_name=FIELD, formats=["pdf"]))


def test_filters_matching_nothing_are_not_found(tmp_path: Path) -> None:
    services = _bootstrap(tmp_path)
    _attach(services, tmp_path, "A", "en", "report.pdf")

    with pytest.raises(NotFoundError):
        services.download.download(
            SelectionRequest(item_ids=["A"], field_name=FIELD, formats=["video"], languages=["en"])
        )


def test_item_ids_from_bulk_keys(tmp_path: Path) -> None:
    services = _bootstrap(tmp_path)
    keys = [
        encode_bulk_form_key(BulkFormKey(langcode="en", entity_type_id="item", entity_id="A")),
        encode_bulk_form_key(BulkFormKey(langcode="fr", entity_type_id="item", entity_id="A")),
        encode_bulk_form_key(BulkFormKey(langcode="en", entity_type_id="item", entity_id="B", revision_id="4")),
    ]

    assert services.download.item_ids_from_bulk_keys(keys) == ["A", "B"]

    user_key = encode_bulk_form_key(BulkFormKey(langcode="en", entity_type_id="user", entity_id="1"))
    with pytest.raises(ValidationError):
        services.download.item_ids_from_bulk_keys([user_key])

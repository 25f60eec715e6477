import pytest

from dossier.core.categories import CATEGORIES, EXTENSION_CATEGORIES, classify


@pytest.mark.parametrize("extension,category", sorted(EXTENSION_CATEGORIES.items()))
def test_classify_known_extensions_any_case(extension: str, category: str) -> None:
    assert classify(f"public://docs/file.{extension}") == category
    assert classify(f"public://docs/FILE.{extension.upper()}") == category
    assert classify(f"private://docs/Mixed.{extension[0].upper()}{extension[1:]}") == category


def test_every_mapped_category_is_in_closed_set() -> None:
    assert set(EXTENSION_CATEGORIES.values()) <= set(CATEGORIES)


def test_classify_unknown_or_missing_extension() -> None:
    assert classify("public://docs/archive.tar.gz") is None
    assert classify("public://docs/README") is None
    assert classify("public://docs.v2/README") is None
    assert classify("public://docs/trailing.") is None
    assert classify("") is None


def test_classify_uses_last_extension_of_basename() -> None:
    assert classify("public://reports.pdf/summary.docx") == "document"
    assert classify("/var/data/report.final.PDF") == "pdf"

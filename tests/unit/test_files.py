from datetime import datetime, timedelta, timezone

from dossier.core.files import unique_entry_name
from dossier.core.time import date_prefix


def test_unique_entry_name_suffixes_before_extension() -> None:
    taken = {"report.pdf", "report (1).pdf"}
    assert unique_entry_name("report.pdf", taken) == "report (2).pdf"
    assert unique_entry_name("summary.pdf", taken) == "summary.pdf"


def test_unique_entry_name_without_extension() -> None:
    assert unique_entry_name("README", {"README"}) == "README (1)"
    assert unique_entry_name(".env", {".env"}) == ".env (1)"


def test_date_prefix_is_day_first_utc() -> None:
    moment = datetime(2024, 3, 5, 23, 30, tzinfo=timezone(timedelta(hours=-2)))
    assert date_prefix(moment) == "06-03-2024"

from __future__ import annotations

from datetime import datetime, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def now_utc_iso() -> str:
    """Return an RFC 3339/ISO timestamp in UTC with seconds precision."""
    return utc_now().replace(microsecond=0).isoformat()


def date_prefix(moment: datetime) -> str:
    """Day-first date used to prefix per-request download directories."""
    return moment.astimezone(timezone.utc).strftime("%d-%m-%Y")

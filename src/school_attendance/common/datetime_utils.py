from __future__ import annotations

import calendar
import re
import time
from datetime import date, datetime

_ISO_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_BR_RE = re.compile(r"^\d{2}[-/]\d{2}[-/]\d{4}$")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def to_iso_date(value: str) -> str:
    """Normalize a spreadsheet date (DD-MM-YYYY, DD/MM/YYYY or ISO) to YYYY-MM-DD.

    Only the first 10 characters are considered, so timestamps such as
    ``2025-03-05T03:00:00.000Z`` collapse to their date part. Unrecognized
    values are returned trimmed, unchanged.
    """
    if not value:
        return ""
    clean = value.strip()[:10]
    if _ISO_RE.match(clean):
        return clean
    if _BR_RE.match(clean):
        day, month, year = re.split(r"[-/]", clean)
        return f"{year}-{month}-{day}"
    return clean


def to_br_date(iso_value: str) -> str:
    """YYYY-MM-DD -> DD-MM-YYYY, the format the spreadsheet stores."""
    if not iso_value:
        return ""
    parts = iso_value.split("-")
    if len(parts) != 3:
        return iso_value
    return f"{parts[2]}-{parts[1]}-{parts[0]}"


def month_dates(year: int, month: int) -> list[str]:
    """ISO dates of every day in ``month`` (1-12)."""
    days = calendar.monthrange(int(year), int(month))[1]
    return [f"{int(year):04d}-{int(month):02d}-{day:02d}" for day in range(1, days + 1)]


def is_weekend(iso_value: str) -> bool:
    return parse_iso_date(iso_value).weekday() >= 5


def now_millis() -> int:
    """Current epoch milliseconds, used to mint client-side ids.

    Note: Wrapped so tests can patch it.
    """
    return int(time.time() * 1000)

"""Shared date parsing (receipt dates returned by the model)."""

import re
from datetime import date
from typing import Any

# Month name to number for parsing "May 10 2024" etc.
MONTH_NAMES = {
    "jan": "01", "january": "01", "feb": "02", "february": "02", "mar": "03", "march": "03",
    "apr": "04", "april": "04", "may": "05", "jun": "06", "june": "06", "jul": "07", "july": "07",
    "aug": "08", "august": "08", "sep": "09", "sept": "09", "september": "09", "oct": "10", "october": "10",
    "nov": "11", "november": "11", "dec": "12", "december": "12",
}

ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _month_number(name: str) -> str | None:
    mon = name.lower()[:3]
    return next((v for k, v in MONTH_NAMES.items() if k.startswith(mon)), None)


def _iso(year: str, month: str, day: str) -> str | None:
    """YYYY-MM-DD for a real calendar date, else None."""
    try:
        return date(int(year), int(month), int(day)).isoformat()
    except ValueError:
        return None


def is_iso_date(value: str) -> bool:
    """True if value is a real calendar date written as YYYY-MM-DD."""
    return bool(ISO_DATE_RE.match(value or "")) and _iso(*value.split("-")) is not None


def normalize_date(value: Any) -> str | None:
    """
    Normalize a receipt date string to YYYY-MM-DD; return None if unparseable.

    Handles: YYYY-MM-DD, YYYY/MM/DD, DD/MM/YYYY (day first, as on Mexican receipts,
    falling back to MM/DD/YYYY when the day-first reading is impossible),
    ISO timestamps, and month names (10 May 2024, May 10 2024).
    Dates that do not exist on the calendar yield None.
    """
    if value is None:
        return None
    s = re.sub(r"\s+", " ", str(value)).strip()
    if not s or s.lower() in ("null", "none", "n/a"):
        return None
    m = re.match(r"^(\d{4})-(\d{2})-(\d{2})(?:$|[T ])", s)
    if m:
        return _iso(*m.groups())
    s = s.replace(",", " ").replace(".", "-")
    s = re.sub(r"\s+", " ", s).strip()
    m = re.match(r"(\d{4})[/-](\d{1,2})[/-](\d{1,2})$", s)
    if m:
        return _iso(m.group(1), m.group(2), m.group(3))
    m = re.match(r"(\d{1,2})[/-](\d{1,2})[/-](\d{4})$", s)
    if m:
        first, second, y = m.groups()
        return _iso(y, second, first) or _iso(y, first, second)
    m = re.match(r"(\d{1,2}) ([a-zA-Z]+) (\d{4})$", s)
    if m:
        mo = _month_number(m.group(2))
        if mo:
            return _iso(m.group(3), mo, m.group(1))
    m = re.match(r"([a-zA-Z]+) (\d{1,2}) (\d{4})$", s)
    if m:
        mo = _month_number(m.group(1))
        if mo:
            return _iso(m.group(3), mo, m.group(2))
    return None

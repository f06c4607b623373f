from __future__ import annotations

from datetime import date, datetime
from typing import Optional

_DATE_FORMATS = ("%Y-%m-%d", "%m/%d/%Y", "%B %d, %Y", "%b %d, %Y")


def parse_date(value: str | None) -> Optional[datetime]:
    """Parse ISO timestamps (including a trailing ``Z``) and a few plain date spellings."""
    text = (value or "").strip()
    if not text:
        return None
    iso = text[:-1] + "+00:00" if text.endswith("Z") else text
    try:
        return datetime.fromisoformat(iso)
    except ValueError:
        pass
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def _as_datetime(value: str | date | datetime | None) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    return parse_date(value)


def format_short_date(value) -> str:
    parsed = _as_datetime(value)
    if parsed is None:
        return str(value or "")
    return f"{parsed.strftime('%b')} {parsed.day}, {parsed.year}"


def format_long_date(value) -> str:
    parsed = _as_datetime(value)
    if parsed is None:
        return str(value or "")
    return f"{parsed.strftime('%B')} {parsed.day}, {parsed.year}"


def format_long_upper(value) -> str:
    parsed = _as_datetime(value)
    if parsed is None:
        return str(value or "")
    return parsed.strftime("%B %d, %Y").upper()


def format_timestamp(value) -> str:
    parsed = _as_datetime(value)
    if parsed is None:
        return str(value or "")
    hour = parsed.hour % 12 or 12
    suffix = "AM" if parsed.hour < 12 else "PM"
    return f"{format_short_date(parsed)}, {hour}:{parsed.minute:02d} {suffix}"


def format_hours(value: float | None) -> str:
    if value is None:
        return ""
    return f"{float(value):.2f}"


def upper_value(value: str | None) -> str:
    return (value or "").strip().upper()


def title_status(value: str | None) -> str:
    words = (value or "").replace("-", " ").replace("_", " ").split()
    return " ".join(w.capitalize() for w in words)

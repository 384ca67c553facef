from __future__ import annotations

from datetime import date, datetime, time
from typing import Any, Optional

from agent.context.records import is_present


DATE_TBD = "Date TBD"
TIME_TBD = "Time TBD"

# Tried in order after ISO 8601.
_FALLBACK_FORMATS = (
    "%m/%d/%Y",
    "%m/%d/%Y %H:%M",
    "%Y/%m/%d",
    "%B %d, %Y",
    "%b %d, %Y",
    "%d %B %Y",
    "%d %b %Y",
)


def to_local_naive(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


def parse_date(value: Any) -> Optional[datetime]:
    """Parse a record date into a naive local ``datetime``.

    Returns ``None`` for missing or unparseable input instead of raising.
    Numbers are read as epoch milliseconds.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return to_local_naive(value)
    if isinstance(value, date):
        return datetime.combine(value, time())
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000)
        except (OverflowError, OSError, ValueError):
            return None
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return to_local_naive(datetime.fromisoformat(text))
    except ValueError:
        pass
    for fmt in _FALLBACK_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def format_display_date(value: Any) -> str:
    """``Tuesday, September 9, 2025``, or ``Date TBD`` when unknown."""
    parsed = parse_date(value)
    if parsed is None:
        return DATE_TBD
    return f"{parsed:%A}, {parsed:%B} {parsed.day}, {parsed.year}"


def format_time(value: Any) -> str:
    """24-hour ``HH:MM``, or ``Time TBD`` when unknown."""
    parsed = parse_date(value)
    if parsed is None:
        return TIME_TBD
    return f"{parsed:%H:%M}"


def format_record_date(value: Any) -> str:
    """Like ``format_display_date`` but keeps an unparseable raw value.

    This tells "no date" (``Date TBD``) apart from "date present but not
    understood", which is shown as given.
    """
    if not is_present(value):
        return DATE_TBD
    parsed = parse_date(value)
    if parsed is None:
        return str(value)
    return format_display_date(parsed)

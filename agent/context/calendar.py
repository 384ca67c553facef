from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional

from agent.context.dates import format_display_date, parse_date
from agent.context.records import as_records, display, is_present


UPCOMING_LIMIT = 10


@dataclass(frozen=True)
class CalendarEntry:
    category: str
    title: str
    date: datetime
    time: str = ""
    location: str = ""


def _event_category(value: Any) -> str:
    # Flutter clients send enum names such as "EventType.casting".
    if not is_present(value):
        return "event"
    return str(value).split(".")[-1]


def _entry(category: str, title: str, record: Dict[str, Any], time_key: str,
           now: datetime) -> Optional[CalendarEntry]:
    when = parse_date(record.get("date"))
    if when is None or not when > now:
        return None
    return CalendarEntry(
        category=category,
        title=title,
        date=when,
        time=display(record.get(time_key)),
        location=display(record.get("location")),
    )


def upcoming_entries(jobs: Any, events: Any, meetings: Any, now: datetime,
                     limit: int = UPCOMING_LIMIT) -> List[CalendarEntry]:
    """Merge future-dated jobs, events and meetings in date order.

    Equal dates keep jobs before events before meetings, each in input order
    (``sorted`` is stable).
    """
    candidates: List[Optional[CalendarEntry]] = []
    for job in as_records(jobs):
        candidates.append(_entry("job", display(job.get("clientName"), "Unknown Client"), job, "time", now))
    for event in as_records(events):
        candidates.append(_entry(_event_category(event.get("type")),
                                 display(event.get("clientName"), "Event"), event, "startTime", now))
    for meeting in as_records(meetings):
        candidates.append(_entry("meeting", display(meeting.get("clientName"), "Unknown Client"),
                                 meeting, "time", now))

    upcoming = [entry for entry in candidates if entry is not None]
    upcoming = sorted(upcoming, key=lambda entry: entry.date)
    return upcoming[:limit]


def format_calendar(entries: List[CalendarEntry]) -> str:
    if not entries:
        return "UPCOMING CALENDAR: No upcoming events scheduled."

    lines = [f"UPCOMING CALENDAR (Next {len(entries)} Events):"]
    for entry in entries:
        when = format_display_date(entry.date)
        if entry.time:
            when += f" at {entry.time}"
        lines.append(f"- {when}: {entry.category.upper()} - {entry.title}")
        if entry.location:
            lines.append(f"  Location: {entry.location}")
        lines.append("")
    return "\n".join(lines) + "\n"


def build_calendar_section(jobs: Any, events: Any, meetings: Any, now: datetime) -> str:
    return format_calendar(upcoming_entries(jobs, events, meetings, now))

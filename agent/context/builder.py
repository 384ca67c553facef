from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, List, Optional

from agent.context.calendar import build_calendar_section
from agent.context.dates import format_display_date, format_time, to_local_naive
from agent.context.records import COLLECTION_KEYS, normalize_bundle
from agent.context.sections import (
    build_agencies_section,
    build_agents_section,
    build_ai_jobs_section,
    build_events_section,
    build_jobs_section,
    build_meetings_section,
    build_profile_section,
    build_shootings_section,
    build_stays_section,
)
from agent.context.statistics import build_statistics_section
from agent.core.prompt import CONTEXT_GUIDANCE, CONTEXT_PREAMBLE


logger = logging.getLogger("modelday.context")


@dataclass(frozen=True)
class SectionResult:
    name: str
    text: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class Section:
    """One labelled block of the context and how to build it."""

    label: str
    name: str
    build: Callable[[], str]
    fallback: str


def run_section(name: str, build: Callable[[], str]) -> SectionResult:
    try:
        return SectionResult(name=name, text=build())
    except Exception as exc:
        logger.exception("Failed to build %s section", name)
        return SectionResult(name=name, error=f"{type(exc).__name__}: {exc}")


def _sections(bundle: dict, now: datetime) -> List[Section]:
    jobs = bundle["jobs"]
    events = bundle["events"]
    meetings = bundle["meetings"]
    return [
        Section("CURRENT USER DATA CONTEXT:", "profile",
                lambda: build_profile_section(bundle["userProfile"]),
                "USER PROFILE: Error loading profile data."),
        Section("JOBS DATA:", "jobs",
                lambda: build_jobs_section(jobs, now),
                "JOBS: Error loading jobs data."),
        Section("EVENTS DATA:", "events",
                lambda: build_events_section(events),
                "EVENTS: Error loading events data."),
        Section("AI JOBS DATA:", "AI jobs",
                lambda: build_ai_jobs_section(bundle["aiJobs"]),
                "AI JOBS: Error loading AI jobs data."),
        Section("AGENCIES DATA:", "agencies",
                lambda: build_agencies_section(bundle["agencies"]),
                "AGENCIES: Error loading agencies data."),
        Section("AGENTS DATA:", "agents",
                lambda: build_agents_section(bundle["agents"]),
                "AGENTS: Error loading agents data."),
        Section("MEETINGS DATA:", "meetings",
                lambda: build_meetings_section(meetings),
                "MEETINGS: Error loading meetings data."),
        Section("ON STAYS DATA:", "stays",
                lambda: build_stays_section(bundle["onStays"]),
                "ON STAYS: Error loading stays data."),
        Section("SHOOTINGS DATA:", "shootings",
                lambda: build_shootings_section(bundle["shootings"]),
                "SHOOTINGS: Error loading shootings data."),
        Section("STATISTICS:", "statistics",
                lambda: build_statistics_section(jobs, events, now),
                "STATISTICS: Error calculating statistics."),
        Section("UPCOMING CALENDAR (Next 10 Events):", "calendar",
                lambda: build_calendar_section(jobs, events, meetings, now),
                "UPCOMING CALENDAR: Error loading calendar data."),
    ]


def build_user_context(bundle: Any = None, now: Optional[datetime] = None) -> str:
    """Render a user's records as the system context for a chat request.

    ``bundle`` holds ``userProfile`` plus the record lists (``jobs``,
    ``events``, ``aiJobs``, ``agencies``, ``agents``, ``meetings``,
    ``onStays``, ``shootings``); anything missing is treated as empty.
    ``now`` is read once and shared by every date comparison.

    A section that fails to build is replaced by a one-line placeholder, so
    this always returns a usable string.
    """
    now = to_local_naive(now) if now is not None else datetime.now()
    data = normalize_bundle(bundle)
    logger.info(
        "Building user context: %s",
        ", ".join(
            f"{key}={len(data[key]) if isinstance(data[key], (list, tuple)) else '?'}"
            for key in COLLECTION_KEYS
        ),
    )

    parts = ["", CONTEXT_PREAMBLE, ""]
    failed = 0
    for section in _sections(data, now):
        result = run_section(section.name, section.build)
        if not result.ok:
            failed += 1
        parts.append(section.label)
        parts.append(result.text if result.ok else section.fallback)
        parts.append("")

    parts.append(f"Current Date: {format_display_date(now)}")
    parts.append(f"Current Time: {format_time(now)}")
    parts.append("")
    parts.append(CONTEXT_GUIDANCE)
    parts.append("")

    context = "\n".join(parts)
    if failed:
        logger.warning("User context built with %d failed section(s)", failed)
    else:
        logger.info("User context built: %d chars", len(context))
    return context

from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from agent.context.dates import TIME_TBD, format_record_date
from agent.context.records import as_records, display, is_present, to_amount
from agent.context.statistics import summarize_jobs


AI_JOBS_LIMIT = 5
MEETINGS_LIMIT = 10
STAYS_LIMIT = 10
SHOOTINGS_LIMIT = 10
EVENTS_LIMIT = 20

Record = Dict[str, Any]
BlockRenderer = Callable[[Record], List[str]]


def _render(header: str, records: List[Record], render_block: BlockRenderer,
            limit: Optional[int] = None) -> List[str]:
    lines = [header]
    shown = records if limit is None else records[:limit]
    for record in shown:
        lines.extend(render_block(record))
        lines.append("")
    return lines


def _join(lines: List[str]) -> str:
    return "\n".join(lines) + "\n"


def _place(record: Record) -> Optional[str]:
    if not is_present(record.get("city")):
        return None
    place = display(record.get("city"))
    if is_present(record.get("country")):
        place += f", {display(record.get('country'))}"
    return place


def build_profile_section(profile: Any) -> str:
    if not isinstance(profile, dict) or not profile:
        return "USER PROFILE: Profile not found."

    lines = [
        "USER PROFILE:",
        f"- Name: {display(profile.get('name'), 'Not specified')}",
        f"- Email: {display(profile.get('email'), 'Not specified')}",
    ]
    if is_present(profile.get("phone")):
        lines.append(f"- Phone: {display(profile.get('phone'))}")
    if is_present(profile.get("displayName")):
        lines.append(f"- Display Name: {display(profile.get('displayName'))}")
    lines.append("")
    return _join(lines)


def _job_block(job: Record) -> List[str]:
    lines = [
        f"- {format_record_date(job.get('date'))}: "
        f"{display(job.get('clientName'), 'Unknown Client')} ({display(job.get('type'), 'Job')})",
        f"  Rate: {display(job.get('rate'), 'TBD')} {display(job.get('currency'), 'USD')}"
        f" | Status: {display(job.get('status'), 'Unknown')}"
        f" | Payment: {display(job.get('paymentStatus'), 'Unknown')}",
        f"  Location: {display(job.get('location'), 'TBD')}",
    ]
    if is_present(job.get("notes")):
        lines.append(f"  Notes: {display(job.get('notes'))}")
    return lines


def build_jobs_section(jobs: Any, now: datetime) -> str:
    jobs = as_records(jobs)
    if not jobs:
        return "JOBS: No jobs found."

    lines = _render(f"JOBS ({len(jobs)} total):", jobs, _job_block)
    totals = summarize_jobs(jobs, now)
    lines.extend([
        "SUMMARY:",
        f"- Total Earnings: ${totals.total_income:.2f} USD",
        f"- Upcoming Jobs: {totals.upcoming}",
        f"- Completed Jobs: {totals.completed}",
    ])
    return _join(lines)


def _event_block(event: Record) -> List[str]:
    event_type = display(event.get("type"), "event").upper()
    lines = [
        f"- {format_record_date(event.get('date'))} at "
        f"{display(event.get('startTime'), TIME_TBD)}: {event_type}",
        f"  Client: {display(event.get('clientName'), 'Unknown Client')}",
        f"  Location: {display(event.get('location'), 'Location TBD')}",
    ]
    if is_present(event.get("dayRate")):
        lines.append(f"  Day Rate: {display(event.get('dayRate'))} {display(event.get('currency'), 'USD')}")
    if is_present(event.get("notes")):
        lines.append(f"  Notes: {display(event.get('notes'))}")
    return lines


def build_events_section(events: Any) -> str:
    events = as_records(events)
    if not events:
        return "EVENTS: No events found."
    return _join(_render(f"EVENTS ({len(events)} total):", events, _event_block, EVENTS_LIMIT))


def _ai_job_block(job: Record) -> List[str]:
    if is_present(job.get("rate")):
        rate = f"{display(job.get('rate'))} {display(job.get('currency'), 'USD')}"
    else:
        rate = "Rate TBD"
    lines = [
        f"- {format_record_date(job.get('date'))}: "
        f"{display(job.get('clientName'), 'Unknown Client')} ({display(job.get('type'), 'AI Job')})",
        f"  Rate: {rate} | Status: {display(job.get('status'), 'Unknown')}"
        f" | Payment: {display(job.get('paymentStatus'), 'Unknown')}",
    ]
    if is_present(job.get("location")):
        lines.append(f"  Location: {display(job.get('location'))}")
    return lines


def build_ai_jobs_section(ai_jobs: Any) -> str:
    ai_jobs = as_records(ai_jobs)
    if not ai_jobs:
        return "AI JOBS: No AI jobs found."
    return _join(_render(f"AI JOBS ({len(ai_jobs)} total):", ai_jobs, _ai_job_block, AI_JOBS_LIMIT))


def _agency_block(agency: Record) -> List[str]:
    lines = [f"- {display(agency.get('name'), 'Unknown Agency')}"]
    place = _place(agency)
    if place:
        lines.append(f"  Location: {place}")
    commission = agency.get("commissionRate")
    if is_present(commission) and to_amount(commission) > 0:
        lines.append(f"  Commission Rate: {display(commission)}%")
    return lines


def build_agencies_section(agencies: Any) -> str:
    agencies = as_records(agencies)
    if not agencies:
        return "AGENCIES: No agencies found."
    return _join(_render(f"AGENCIES ({len(agencies)} total):", agencies, _agency_block))


def _agent_block(agent: Record) -> List[str]:
    lines = [f"- {display(agent.get('name'), 'Unknown Agent')}"]
    if is_present(agent.get("email")):
        lines.append(f"  Email: {display(agent.get('email'))}")
    if is_present(agent.get("phone")):
        lines.append(f"  Phone: {display(agent.get('phone'))}")
    place = _place(agent)
    if place:
        lines.append(f"  Location: {place}")
    return lines


def build_agents_section(agents: Any) -> str:
    agents = as_records(agents)
    if not agents:
        return "AGENTS: No agents found."
    return _join(_render(f"AGENTS ({len(agents)} total):", agents, _agent_block))


def _meeting_block(meeting: Record) -> List[str]:
    lines = [
        f"- {format_record_date(meeting.get('date'))}: "
        f"{display(meeting.get('clientName'), 'Unknown Client')}"
    ]
    if is_present(meeting.get("time")):
        lines.append(f"  Time: {display(meeting.get('time'))}")
    if is_present(meeting.get("location")):
        lines.append(f"  Location: {display(meeting.get('location'))}")
    return lines


def build_meetings_section(meetings: Any) -> str:
    meetings = as_records(meetings)
    if not meetings:
        return "MEETINGS: No meetings found."
    return _join(_render(f"MEETINGS ({len(meetings)} total):", meetings, _meeting_block, MEETINGS_LIMIT))


def _stay_block(stay: Record) -> List[str]:
    lines = [f"- {display(stay.get('locationName'), 'Unknown Location')}"]
    if is_present(stay.get("checkInDate")):
        lines.append(f"  Check-in: {format_record_date(stay.get('checkInDate'))}")
    if is_present(stay.get("checkOutDate")):
        lines.append(f"  Check-out: {format_record_date(stay.get('checkOutDate'))}")
    lines.append(f"  Cost: {display(stay.get('cost'), 'TBD')} {display(stay.get('currency'), 'USD')}")
    return lines


def build_stays_section(stays: Any) -> str:
    stays = as_records(stays)
    if not stays:
        return "ON STAYS: No stays found."
    return _join(_render(f"ON STAYS ({len(stays)} total):", stays, _stay_block, STAYS_LIMIT))


def _shooting_block(shooting: Record) -> List[str]:
    lines = [
        f"- {format_record_date(shooting.get('date'))}: "
        f"{display(shooting.get('clientName'), 'Unknown Client')}"
    ]
    if is_present(shooting.get("location")):
        lines.append(f"  Location: {display(shooting.get('location'))}")
    if is_present(shooting.get("rate")):
        lines.append(f"  Rate: {display(shooting.get('rate'))} {display(shooting.get('currency'), 'USD')}")
    return lines


def build_shootings_section(shootings: Any) -> str:
    shootings = as_records(shootings)
    if not shootings:
        return "SHOOTINGS: No shootings found."
    return _join(_render(f"SHOOTINGS ({len(shootings)} total):", shootings, _shooting_block, SHOOTINGS_LIMIT))

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Tuple

from agent.context.dates import parse_date
from agent.context.records import as_records, is_present, to_amount


MONTHS_SHOWN = 6


@dataclass
class JobTotals:
    total_income: float = 0.0
    upcoming: int = 0
    completed: int = 0


@dataclass
class Statistics:
    total_income: float = 0.0
    total_jobs: int = 0
    upcoming_jobs: int = 0
    completed_jobs: int = 0
    total_events: int = 0
    activity_by_month: Dict[str, int] = field(default_factory=dict)

    def recent_months(self, limit: int = MONTHS_SHOWN) -> List[Tuple[str, int]]:
        keys = sorted(self.activity_by_month)[-limit:]
        return [(key, self.activity_by_month[key]) for key in keys]


def summarize_jobs(jobs: List[Dict[str, Any]], now: datetime) -> JobTotals:
    """Sum rates and split dated jobs into upcoming and completed.

    Jobs without a parseable date still count towards income but are left
    out of both date buckets.
    """
    totals = JobTotals()
    for job in jobs:
        if is_present(job.get("rate")):
            totals.total_income += to_amount(job.get("rate"))
        job_date = parse_date(job.get("date")) if is_present(job.get("date")) else None
        if job_date is None:
            continue
        if job_date > now:
            totals.upcoming += 1
        else:
            totals.completed += 1
    return totals


def month_histogram(*collections: List[Dict[str, Any]]) -> Dict[str, int]:
    counts: Counter = Counter()
    for records in collections:
        for record in records:
            if not is_present(record.get("date")):
                continue
            parsed = parse_date(record.get("date"))
            if parsed is not None:
                counts[f"{parsed.year:04d}-{parsed.month:02d}"] += 1
    return dict(counts)


def calculate_statistics(jobs: Any, events: Any, now: datetime) -> Statistics:
    jobs = as_records(jobs)
    events = as_records(events)
    totals = summarize_jobs(jobs, now)
    return Statistics(
        total_income=totals.total_income,
        total_jobs=len(jobs),
        upcoming_jobs=totals.upcoming,
        completed_jobs=totals.completed,
        total_events=len(events),
        activity_by_month=month_histogram(jobs, events),
    )


def format_statistics(stats: Statistics) -> str:
    lines = [
        "STATISTICS:",
        f"- Total Income: ${stats.total_income:.2f} USD",
        f"- Total Jobs: {stats.total_jobs}",
        f"- Upcoming Jobs: {stats.upcoming_jobs}",
        f"- Completed Jobs: {stats.completed_jobs}",
        f"- Total Events: {stats.total_events}",
    ]
    months = stats.recent_months()
    if months:
        lines.append("- Activity by Month:")
        lines.extend(f"  {month}: {count} events" for month, count in months)
    return "\n".join(lines) + "\n"


def build_statistics_section(jobs: Any, events: Any, now: datetime) -> str:
    return format_statistics(calculate_statistics(jobs, events, now))

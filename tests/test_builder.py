"""Tests for the assembled user context."""

import pytest

from agent.context import build_user_context
from agent.context.builder import run_section


LABELS = [
    "CURRENT USER DATA CONTEXT:",
    "JOBS DATA:",
    "EVENTS DATA:",
    "AI JOBS DATA:",
    "AGENCIES DATA:",
    "AGENTS DATA:",
    "MEETINGS DATA:",
    "ON STAYS DATA:",
    "SHOOTINGS DATA:",
    "STATISTICS:",
    "UPCOMING CALENDAR (Next 10 Events):",
    "Current Date:",
    "Current Time:",
]


def test_null_bundle_renders_full_skeleton(now):
    context = build_user_context(None, now=now)

    for label in LABELS:
        assert label in context
    assert "USER PROFILE: Profile not found." in context
    assert "JOBS DATA:\nJOBS: No jobs found.\n\nEVENTS DATA:" in context
    assert "SHOOTINGS: No shootings found." in context
    assert "UPCOMING CALENDAR: No upcoming events scheduled." in context
    assert "Error loading" not in context


def test_sections_appear_in_fixed_order(sample_bundle, now):
    context = build_user_context(sample_bundle, now=now)
    positions = [context.index(label) for label in LABELS]
    assert positions == sorted(positions)
    assert context.strip().startswith("You are an AI assistant for a modeling professional")
    assert context.rstrip().endswith("Maintain a friendly, professional tone.")


def test_current_date_and_time_use_the_given_clock(now):
    context = build_user_context({}, now=now)
    assert "Current Date: Friday, August 1, 2025" in context
    assert "Current Time: 12:00" in context


def test_full_bundle_renders_every_category(sample_bundle, now):
    context = build_user_context(sample_bundle, now=now)

    assert "- Name: Sarah Johnson" in context
    assert "JOBS (3 total):" in context
    assert "- Total Income: $10500.00 USD" in context
    assert "- Upcoming Jobs: 2" in context
    assert "- Completed Jobs: 1" in context
    assert "- Tuesday, August 5, 2025 at 10:00: CASTING" in context
    assert "- Elite Model Management" in context
    assert "  Commission Rate: 20%" in context
    assert "- Jessica Martinez" in context
    assert "  Check-in: Tuesday, September 9, 2025" in context
    assert "- Friday, August 22, 2025: Nike" in context
    assert "UPCOMING CALENDAR (Next 4 Events):" in context


def test_calendar_uses_the_same_cutoff_as_statistics(sample_bundle, now):
    context = build_user_context(sample_bundle, now=now)
    calendar = context.split("UPCOMING CALENDAR (Next 10 Events):", 1)[1]
    assert "Luxury Brand Co" not in calendar
    assert "JOB - Fashion Forward Magazine" in calendar
    assert "CASTING - Elite Modeling Agency" in calendar
    assert "MEETING - Vogue" in calendar


def test_malformed_category_only_breaks_its_own_sections(sample_bundle, now):
    sample_bundle["jobs"] = "not a list"
    context = build_user_context(sample_bundle, now=now)

    assert "JOBS DATA:\nJOBS: Error loading jobs data." in context
    assert "STATISTICS: Error calculating statistics." in context
    assert "UPCOMING CALENDAR: Error loading calendar data." in context
    assert "EVENTS (1 total):" in context
    assert "AGENTS (1 total):" in context


def test_failing_section_builder_is_replaced_by_placeholder(monkeypatch, sample_bundle, now):
    def boom(agents):
        raise RuntimeError("agents store exploded")

    monkeypatch.setattr("agent.context.builder.build_agents_section", boom)
    context = build_user_context(sample_bundle, now=now)

    assert "AGENTS DATA:\nAGENTS: Error loading agents data." in context
    assert "AGENCIES (1 total):" in context
    assert "MEETINGS (1 total):" in context


@pytest.mark.parametrize("bundle", ["garbage", 7, [], {"jobs": None, "userProfile": None}])
def test_unusable_bundles_degrade_to_empty(bundle, now):
    context = build_user_context(bundle, now=now)
    assert "JOBS: No jobs found." in context
    assert "USER PROFILE: Profile not found." in context


def test_run_section_reports_failures_without_raising():
    ok = run_section("jobs", lambda: "JOBS: fine")
    assert ok.ok and ok.text == "JOBS: fine"

    def broken():
        raise ValueError("bad")

    failed = run_section("jobs", broken)
    assert not failed.ok
    assert failed.text is None
    assert failed.error == "ValueError: bad"

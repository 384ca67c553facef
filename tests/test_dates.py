"""Tests for record date parsing and display formatting."""

from datetime import date, datetime, timedelta, timezone

from agent.context.dates import format_display_date, format_record_date, format_time, parse_date


def test_parse_date_handles_iso_dates_and_datetimes():
    assert parse_date("2025-09-09") == datetime(2025, 9, 9)
    assert parse_date("2025-09-09T14:30:00") == datetime(2025, 9, 9, 14, 30)
    assert parse_date(date(2025, 9, 9)) == datetime(2025, 9, 9)


def test_parse_date_handles_common_human_formats():
    assert parse_date("09/10/2025") == datetime(2025, 9, 10)
    assert parse_date("July 20, 2025") == datetime(2025, 7, 20)
    assert parse_date("Jul 20, 2025") == datetime(2025, 7, 20)
    assert parse_date("2025/07/20") == datetime(2025, 7, 20)


def test_parse_date_converts_aware_values_to_local_naive():
    aware = datetime(2025, 9, 9, 12, 0, tzinfo=timezone.utc)
    parsed = parse_date("2025-09-09T12:00:00Z")
    assert parsed.tzinfo is None
    assert parsed == aware.astimezone().replace(tzinfo=None)


def test_parse_date_reads_numbers_as_epoch_milliseconds():
    stamp = datetime(2025, 1, 2, 3, 4)
    assert parse_date(stamp.timestamp() * 1000) == stamp


def test_parse_date_returns_none_for_unknown_values():
    assert parse_date(None) is None
    assert parse_date("") is None
    assert parse_date("   ") is None
    assert parse_date("not-a-date") is None
    assert parse_date(True) is None
    assert parse_date({"date": "2025-01-01"}) is None


def test_format_display_date():
    assert format_display_date("2025-09-09") == "Tuesday, September 9, 2025"
    assert format_display_date(datetime(2025, 12, 25, 8, 0)) == "Thursday, December 25, 2025"
    assert format_display_date(None) == "Date TBD"
    assert format_display_date("garbage") == "Date TBD"


def test_format_time_is_24_hour():
    assert format_time(datetime(2025, 1, 1, 18, 5)) == "18:05"
    assert format_time(datetime(2025, 1, 1, 7, 0)) == "07:00"
    assert format_time(None) == "Time TBD"
    assert format_time("later") == "Time TBD"


def test_format_record_date_keeps_unparseable_raw_value():
    assert format_record_date(None) == "Date TBD"
    assert format_record_date("") == "Date TBD"
    assert format_record_date(0) == "Date TBD"
    assert format_record_date("not-a-date") == "not-a-date"
    assert format_record_date("2nd week of May") == "2nd week of May"
    assert format_record_date("2025-08-15") == "Friday, August 15, 2025"


def test_format_record_date_accepts_datetime_objects():
    when = datetime(2025, 8, 15, 9, 0) + timedelta(days=1)
    assert format_record_date(when) == "Saturday, August 16, 2025"

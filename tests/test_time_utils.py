from datetime import date, datetime, timedelta, timezone

from vocabdrill_app.utils.time_utils import (
    format_date,
    is_due,
    parse_datetime,
    study_day_start,
    study_today,
)


def test_study_today_before_rollover_is_previous_day():
    now = datetime(2024, 3, 10, 3, 30, tzinfo=timezone.utc)
    assert study_today(now, rollover_hour=4) == date(2024, 3, 9)
    assert study_today(now, rollover_hour=0) == date(2024, 3, 10)


def test_study_today_uses_timezone():
    # 23:00 UTC is already the next morning in Shanghai
    now = datetime(2024, 3, 10, 23, 0, tzinfo=timezone.utc)
    assert study_today(now, tz_name='Asia/Shanghai') == date(2024, 3, 11)


def test_study_day_start_is_utc():
    start = study_day_start(date(2024, 3, 10))
    assert start == datetime(2024, 3, 10, tzinfo=timezone.utc)


def test_is_due_boundary():
    now = datetime(2024, 3, 10, 12, tzinfo=timezone.utc)
    assert is_due(now, now)
    assert is_due(now - timedelta(seconds=1), now)
    assert not is_due(now + timedelta(seconds=1), now)
    assert not is_due(None, now)


def test_naive_datetimes_are_utc():
    now = datetime(2024, 3, 10, 12, tzinfo=timezone.utc)
    assert is_due(datetime(2024, 3, 10, 11), now)


def test_parse_datetime():
    assert parse_datetime('2024-03-10T00:00:00Z') == datetime(2024, 3, 10, tzinfo=timezone.utc)
    assert parse_datetime('') is None
    assert parse_datetime('not a date') is None


def test_format_date():
    assert format_date(date(2024, 3, 9)) == '2024-03-09'


def test_next_study_day_is_due_after_midnight_with_rollover():
    # scheduled for the study day of 11 March, which starts at 04:00
    next_review = study_day_start(date(2024, 3, 11), rollover_hour=4)
    now = datetime(2024, 3, 11, 1, 0, tzinfo=timezone.utc)

    assert is_due(next_review, now, rollover_hour=4)
    assert not is_due(next_review, now, rollover_hour=0)

"""Tests for day identity and weekday helpers."""

from datetime import date, datetime, timedelta, timezone

import pytest

from habit_tracker.calendar.days import day_identity, parse_date, today, weekday_of
from habit_tracker.errors import InvalidDate, ValidationError


def test_day_identity_truncates_to_midnight():
    assert day_identity(datetime(2024, 1, 10, 23, 59, 59, 999)) == datetime(2024, 1, 10)


def test_same_date_has_same_identity():
    morning = datetime(2024, 1, 10, 6, 0)
    night = datetime(2024, 1, 10, 22, 15)
    assert day_identity(morning) == day_identity(night)


def test_day_identity_accepts_date():
    assert day_identity(date(2024, 1, 10)) == datetime(2024, 1, 10)


def test_day_identity_drops_timezone_without_conversion():
    aware = datetime(2024, 1, 10, 23, 0, tzinfo=timezone(timedelta(hours=-5)))
    assert day_identity(aware) == datetime(2024, 1, 10)


@pytest.mark.parametrize(
    "day, expected",
    [
        (date(2024, 1, 7), 0),  # Sunday
        (date(2024, 1, 8), 1),  # Monday
        (date(2024, 1, 10), 3),  # Wednesday
        (date(2024, 1, 13), 6),  # Saturday
    ],
)
def test_weekday_of_starts_on_sunday(day, expected):
    assert weekday_of(day) == expected


@pytest.mark.parametrize(
    "raw",
    [
        "2024-01-10",
        "20240110",
        "2024-01-10T18:45:00",
        "2024-01-10T18:45:00.000Z",
        "2024-01-10T21:00:00.1Z",
        "2024-01-10T03:00:00+09:00",
    ],
)
def test_parse_date_returns_day_identity(raw):
    assert parse_date(raw) == datetime(2024, 1, 10)


@pytest.mark.parametrize("raw", ["", "yesterday", "2024-13-01", "10/01/2024"])
def test_parse_date_rejects_garbage(raw):
    with pytest.raises(InvalidDate):
        parse_date(raw)


def test_invalid_date_is_a_validation_error():
    assert issubclass(InvalidDate, ValidationError)


def test_today_uses_clock():
    assert today(lambda: datetime(2024, 2, 29, 12, 0)) == datetime(2024, 2, 29)

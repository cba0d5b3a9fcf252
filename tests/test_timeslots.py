from datetime import date

import pytest

from app.errors import ValidationError
from app.services.timeslots import (
    from_minutes, is_valid_time, merge_consecutive, normalize_time, parse_date, to_minutes,
)


@pytest.mark.parametrize("value", ["09:05", "9:05", "00:00", "23:59", "19:30"])
def test_valid_times(value):
    assert is_valid_time(value)


@pytest.mark.parametrize("value", ["25:00", "9:5", "24:00", "12:60", "noon", "", None, "1200"])
def test_invalid_times(value):
    assert not is_valid_time(value)


def test_normalize_pads_hour():
    assert normalize_time("9:05") == "09:05"
    with pytest.raises(ValidationError):
        normalize_time("9:5")


def test_parse_date_keeps_calendar_day():
    assert parse_date("2025-03-10") == date(2025, 3, 10)
    assert parse_date("2025-03-10T00:00:00.000Z") == date(2025, 3, 10)
    with pytest.raises(ValidationError):
        parse_date("10/03/2025")
    with pytest.raises(ValidationError):
        parse_date("")


def test_minutes_conversion():
    assert to_minutes("10:30") == 630
    assert from_minutes(630) == "10:30"
    assert from_minutes(5) == "00:05"


def test_merge_consecutive_same_day_same_type():
    slots = [
        {"id": 1, "date": "2025-03-10", "startTime": "10:00", "endTime": "11:00", "interviewType": "online"},
        {"id": 2, "date": "2025-03-10", "startTime": "11:00", "endTime": "12:00", "interviewType": "online"},
        {"id": 3, "date": "2025-03-10", "startTime": "12:00", "endTime": "13:00", "interviewType": "onsite"},
        {"id": 4, "date": "2025-03-11", "startTime": "13:00", "endTime": "14:00", "interviewType": "onsite"},
    ]
    merged = merge_consecutive(slots)
    assert [(m["id"], m["startTime"], m["endTime"]) for m in merged] == [
        (1, "10:00", "12:00"), (3, "12:00", "13:00"), (4, "13:00", "14:00"),
    ]
    # input rows untouched
    assert slots[0]["endTime"] == "11:00"

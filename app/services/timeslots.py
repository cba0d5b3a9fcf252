import re
from datetime import date, datetime

from ..errors import ValidationError
from ..models.schedule import INTERVIEW_TYPES

TIME_RE = re.compile(r"^([01]?[0-9]|2[0-3]):[0-5][0-9]$")

LAST_MINUTE = 24 * 60 - 1


def is_valid_time(value):
    return isinstance(value, str) and bool(TIME_RE.match(value))


def normalize_time(value, field="time"):
    """'9:05' -> '09:05'. Raises ValidationError on anything else."""
    if not is_valid_time(value):
        raise ValidationError(f"無効な時刻形式です: {field}")
    h, m = value.split(":")
    return f"{int(h):02d}:{m}"


def parse_date(value, field="date"):
    """Accept a date, 'YYYY-MM-DD' or an ISO datetime string; keep the calendar day."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"日付は必須です: {field}")
    try:
        return date.fromisoformat(value.strip()[:10])
    except ValueError:
        raise ValidationError(f"無効な日付形式です: {field}")


def parse_interview_type(value, default="online"):
    if value in (None, ""):
        return default
    if value not in INTERVIEW_TYPES:
        raise ValidationError(f"無効な面接形式です: {value}")
    return value


def to_minutes(hhmm):
    h, m = hhmm.split(":")
    return int(h) * 60 + int(m)


def from_minutes(total):
    return f"{total // 60:02d}:{total % 60:02d}"


def overlaps(start_a, end_a, start_b, end_b):
    """Half-open [a) / [b) overlap on minute values."""
    return end_a > start_b and start_a < end_b


def merge_consecutive(slots):
    """Join slots whose end equals the next one's start (same date and type).

    ``slots`` are dicts as produced by ``Schedule.to_dict``, sorted by date
    and start time. Used for the public view only; the rows are untouched.
    """
    merged = []
    for slot in slots:
        prev = merged[-1] if merged else None
        if (
            prev is not None
            and prev["date"] == slot["date"]
            and prev["interviewType"] == slot["interviewType"]
            and prev["endTime"] == slot["startTime"]
        ):
            prev["endTime"] = slot["endTime"]
            continue
        merged.append(dict(slot))
    return merged

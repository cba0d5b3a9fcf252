"""Persistence of candidate interview slots.

Functions here add/modify rows on ``db.session`` but never commit; the
orchestration layer (``scheduling``) owns the transaction.
"""
from flask import current_app

from ..errors import ConflictError, NotFoundError, ValidationError
from ..extensions import db
from ..models.base import iso
from ..models.schedule import Schedule, AVAILABLE, BOOKED, BLOCKED, CANCELLED
from .timeslots import normalize_time, parse_date, parse_interview_type


def _slot_fields(data):
    if not data.get("date") or not data.get("startTime") or not data.get("endTime"):
        raise ValidationError("日付と時間は必須です")
    return {
        "date": parse_date(data["date"]),
        "start_time": normalize_time(data["startTime"], "startTime"),
        "end_time": normalize_time(data["endTime"], "endTime"),
        "interview_type": parse_interview_type(data.get("interviewType")),
    }


def get_schedule(schedule_id, for_update=False):
    q = Schedule.query.filter_by(id=schedule_id)
    if for_update:
        # re-read inside the transaction; don't trust the identity map
        q = q.populate_existing().with_for_update()
    s = q.first()
    if s is None:
        raise NotFoundError("日程が見つかりません")
    return s


def create_slot(candidate, data):
    fields = _slot_fields(data)
    s = Schedule(candidate_id=candidate.id, status=AVAILABLE, **fields)
    db.session.add(s)
    db.session.flush()
    return s


def bulk_create_slots(candidate, slots):
    """Insert the slots that don't already exist; returns the inserted rows.

    A duplicate is a non-cancelled slot of the candidate with the same
    date, start and end time (interview type is ignored).
    """
    if not isinstance(slots, list):
        raise ValidationError("slots は配列で指定してください")
    limit = current_app.config.get("SCHEDULE_BULK_MAX_SLOTS", 200)
    if len(slots) > limit:
        raise ValidationError(f"一度に登録できる日程は{limit}件までです")

    parsed = []
    for item in slots:
        if not isinstance(item, dict):
            raise ValidationError("日程の形式が不正です")
        parsed.append(_slot_fields(item))

    existing = (
        Schedule.query.filter_by(candidate_id=candidate.id)
        .filter(Schedule.status != CANCELLED)
        .all()
    )
    seen = {(s.date, s.start_time, s.end_time) for s in existing}

    created = []
    for fields in parsed:
        key = (fields["date"], fields["start_time"], fields["end_time"])
        if key in seen:
            continue
        seen.add(key)
        s = Schedule(candidate_id=candidate.id, status=AVAILABLE, **fields)
        db.session.add(s)
        created.append(s)
    db.session.flush()
    return created


def update_slot(schedule, data):
    if schedule.status == BOOKED:
        raise ConflictError("確定済みの日程は更新できません。一度キャンセルしてから再登録してください。")
    # status is deliberately not settable here
    if data.get("date"):
        schedule.date = parse_date(data["date"])
    if data.get("startTime"):
        schedule.start_time = normalize_time(data["startTime"], "startTime")
    if data.get("endTime"):
        schedule.end_time = normalize_time(data["endTime"], "endTime")
    if data.get("interviewType"):
        schedule.interview_type = parse_interview_type(data["interviewType"])
    db.session.flush()
    return schedule


def cancel_slot(schedule):
    if schedule.status == BOOKED:
        raise ConflictError(
            "確定済みの日程はこのAPIではキャンセルできません。cancel-bookingを使用してください。",
            code="CANNOT_CANCEL_BOOKED_SCHEDULE",
        )
    if schedule.status == CANCELLED:
        return schedule
    schedule.status = CANCELLED
    schedule.blocked_by_id = None
    db.session.flush()
    return schedule


def list_slots(candidate_id):
    rows = (
        Schedule.query.filter_by(candidate_id=candidate_id)
        .order_by(Schedule.date.asc(), Schedule.start_time.asc())
        .all()
    )
    out = []
    for s in rows:
        d = s.to_dict()
        b = s.booking
        d["booking"] = {
            "companyName": b.company_name,
            "confirmedAt": iso(b.confirmed_at),
            "cancelledAt": iso(b.cancelled_at),
        } if b else None
        d["blockedBy"] = {"id": s.blocked_by.id, "status": s.blocked_by.status} if s.blocked_by else None
        d["blocks"] = [x.id for x in s.blocks if x.status == BLOCKED]
        out.append(d)
    return out

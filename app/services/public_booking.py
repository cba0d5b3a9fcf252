"""Booking through the candidate's public schedule link (no staff login)."""
from datetime import date

from flask import current_app

from ..errors import ConflictError, NotFoundError, ValidationError
from ..extensions import db, rq
from ..models.company import Company
from ..models.schedule import Schedule, AVAILABLE, BOOKED, CANCELLED
from . import booking_store, conflict_resolver, schedule_store
from .directory import get_candidate_by_token
from .scheduling import run_atomic
from .timeslots import from_minutes, merge_consecutive, normalize_time, overlaps, to_minutes


def onsite_block_minutes(candidate):
    if candidate.onsite_block_minutes is not None:
        return candidate.onsite_block_minutes
    return current_app.config.get("SCHEDULE_ONSITE_BLOCK_MINUTES", 60)


def public_schedule(token):
    candidate = get_candidate_by_token(token)
    rows = (
        Schedule.query.filter_by(candidate_id=candidate.id, status=AVAILABLE)
        .filter(Schedule.date >= date.today())
        .order_by(Schedule.date.asc(), Schedule.start_time.asc())
        .all()
    )
    slots = [
        {k: v for k, v in s.to_dict().items() if k in ("id", "date", "startTime", "endTime", "interviewType")}
        for s in rows
    ]
    companies = Company.query.order_by(Company.name.asc()).all()
    return {
        "jobSeeker": {"name": candidate.name, "onsiteBlockMinutes": onsite_block_minutes(candidate)},
        "schedules": merge_consecutive(slots),
        "companies": [c.to_dict() for c in companies],
    }


def _resolve_type(slot_type, requested):
    if slot_type != "both":
        return slot_type
    return "onsite" if requested == "onsite" else "online"


def _as_id(value, message):
    if isinstance(value, bool):
        raise ValidationError(message, code="INVALID_REQUEST")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(message, code="INVALID_REQUEST")


def _contiguous_run(base):
    """``base`` plus the available same-type rows that follow it back to back.

    Mirrors ``merge_consecutive`` so any window shown publicly can be booked.
    """
    rows = (
        Schedule.query.filter_by(candidate_id=base.candidate_id, date=base.date,
                                 interview_type=base.interview_type, status=AVAILABLE)
        .filter(Schedule.start_time >= base.end_time)
        .order_by(Schedule.start_time.asc())
        .with_for_update()
        .all()
    )
    run = [base]
    for r in rows:
        if r.start_time != run[-1].end_time:
            break
        run.append(r)
    return run


def book_slot(token, data):
    candidate = get_candidate_by_token(token)
    if not data.get("scheduleId"):
        raise ValidationError("日程を選択してください", code="INVALID_REQUEST")
    schedule_id = _as_id(data["scheduleId"], "日程IDが不正です")
    company_id = _as_id(data["companyId"], "企業IDが不正です") if data.get("companyId") else None
    company_name = data.get("companyName")
    if company_name is not None and not isinstance(company_name, str):
        raise ValidationError("企業名が不正です", code="INVALID_REQUEST")
    if not company_id and not company_name:
        raise ValidationError("企業名を入力してください", code="INVALID_REQUEST")
    start = normalize_time(data["startTime"], "startTime") if data.get("startTime") else None
    end = normalize_time(data["endTime"], "endTime") if data.get("endTime") else None

    def work():
        s = schedule_store.get_schedule(schedule_id, for_update=True)
        if s.candidate_id != candidate.id:
            raise NotFoundError("日程が見つかりません", code="SCHEDULE_NOT_FOUND")
        if s.status != AVAILABLE:
            raise ConflictError("この日程は予約できません。")

        b_start = to_minutes(start or s.start_time)
        b_end = to_minutes(end or s.end_time)
        run = [s] if b_end <= to_minutes(s.end_time) else _contiguous_run(s)
        if b_start >= b_end or b_start < to_minutes(s.start_time) or b_end > to_minutes(run[-1].end_time):
            raise ValidationError("選択した時間が枠の範囲外です", code="INVALID_TIME_RANGE")

        covering = [r for r in run if overlaps(to_minutes(r.start_time), to_minutes(r.end_time), b_start, b_end)]
        if not covering:
            raise ValidationError("選択した時間が枠の範囲外です", code="INVALID_TIME_RANGE")
        first, last = covering[0], covering[-1]
        remainders = []
        if b_start > to_minutes(first.start_time):
            remainders.append((first.start_time, from_minutes(b_start)))
        if b_end < to_minutes(last.end_time):
            remainders.append((from_minutes(b_end), last.end_time))
        for r_start, r_end in remainders:
            db.session.add(Schedule(
                candidate_id=s.candidate_id, date=s.date, interview_type=s.interview_type,
                start_time=r_start, end_time=r_end, status=AVAILABLE,
            ))

        # the booked range now lives on ``first``; the rest of the run is retired
        for r in covering[1:]:
            r.status = CANCELLED
        first.start_time = from_minutes(b_start)
        first.end_time = from_minutes(b_end)
        first.interview_type = _resolve_type(first.interview_type, data.get("interviewType"))
        first.status = BOOKED
        booking = booking_store.create_booking(first, company_id, company_name)
        blocked = conflict_resolver.block_around(first, onsite_block_minutes(candidate))
        return first, booking, blocked, remainders, covering[1:]

    s, booking, blocked, remainders, merged = run_atomic(work)
    current_app.logger.info("public booking schedule=%s booking=%s merged=%s blocked=%s",
                            s.id, booking.id, [m.id for m in merged], [b.id for b in blocked])

    from ..jobs.notify import notify_booking
    rq.enqueue(notify_booking, booking.id)

    return {
        "success": True,
        "booking": {
            "id": booking.id,
            "candidateName": candidate.name,
            "companyName": booking.company_name,
            "date": s.date.isoformat(),
            "startTime": s.start_time,
            "endTime": s.end_time,
            "interviewType": s.interview_type,
            "confirmedAt": booking.confirmed_at.isoformat(),
        },
        "blockedSchedules": [b.id for b in blocked],
        "newSchedules": [{"startTime": a, "endTime": b} for a, b in remainders],
        "mergedSchedules": [m.id for m in merged],
    }

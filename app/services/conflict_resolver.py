"""Blocking and releasing slots around confirmed onsite interviews.

Blocks are explicit links (``Schedule.blocked_by_id``) written when an
onsite booking is confirmed. Releasing follows those links only; it never
recomputes which slots share the day.
"""
from ..extensions import db
from ..models.schedule import Schedule, AVAILABLE, BLOCKED
from .timeslots import LAST_MINUTE, from_minutes, overlaps, to_minutes


def release_blocked_slots(schedule):
    """Return the candidate's slots blocked by ``schedule`` to available.

    Does not commit. Non-onsite schedules never block anything, so
    nothing is released for them.
    """
    if schedule.interview_type != "onsite":
        return []
    blocked = Schedule.query.filter_by(blocked_by_id=schedule.id, status=BLOCKED).all()
    for s in blocked:
        s.status = AVAILABLE
        s.blocked_by_id = None
    db.session.flush()
    return blocked


def _block_range(slot_start, slot_end, windows):
    hits = [w for w in windows if overlaps(slot_start, slot_end, *w)]
    if len(hits) != 1:
        # touching both windows: block the whole slot
        return slot_start, slot_end
    w_start, w_end = hits[0]
    return max(slot_start, w_start), min(slot_end, w_end)


def block_around(booked, block_minutes):
    """Block same-day available slots within ``block_minutes`` of ``booked``.

    A slot only partly inside a block window is narrowed to the overlap;
    the parts outside become new available slots. Returns the blocked rows.
    Does not commit.
    """
    if booked.interview_type != "onsite" or not block_minutes or block_minutes <= 0:
        return []

    start = to_minutes(booked.start_time)
    end = to_minutes(booked.end_time)
    windows = [
        (max(0, start - block_minutes), start),
        (end, min(LAST_MINUTE, end + block_minutes)),
    ]

    candidates = (
        Schedule.query.filter_by(candidate_id=booked.candidate_id, date=booked.date, status=AVAILABLE)
        .filter(Schedule.id != booked.id)
        .order_by(Schedule.start_time.asc())
        .all()
    )

    blocked = []
    for s in candidates:
        s_start = to_minutes(s.start_time)
        s_end = to_minutes(s.end_time)
        if not any(overlaps(s_start, s_end, *w) for w in windows):
            continue

        b_start, b_end = _block_range(s_start, s_end, windows)
        if b_start > s_start:
            db.session.add(Schedule(
                candidate_id=s.candidate_id, date=s.date, interview_type=s.interview_type,
                start_time=s.start_time, end_time=from_minutes(b_start), status=AVAILABLE,
            ))
        if b_end < s_end:
            db.session.add(Schedule(
                candidate_id=s.candidate_id, date=s.date, interview_type=s.interview_type,
                start_time=from_minutes(b_end), end_time=s.end_time, status=AVAILABLE,
            ))
        s.start_time = from_minutes(b_start)
        s.end_time = from_minutes(b_end)
        s.status = BLOCKED
        s.blocked_by_id = booked.id
        blocked.append(s)

    db.session.flush()
    return blocked

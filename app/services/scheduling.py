"""Staff-facing scheduling operations.

Each function is one unit of work: check access, apply the store /
resolver changes and commit, or roll everything back. ``caller`` is the
staff member's email as handed over by the HTTP layer.
"""
from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from ..errors import ConflictError, SchedulingError, StorageError
from ..extensions import db
from ..models.schedule import BOOKED, CANCELLED
from . import booking_store, conflict_resolver, schedule_store
from .access import ensure_access
from .directory import get_candidate


def _commit():
    try:
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        raise StorageError() from e


def run_atomic(work):
    """Run ``work()`` and commit; roll back on any failure."""
    try:
        result = work()
    except SchedulingError:
        db.session.rollback()
        raise
    except SQLAlchemyError as e:
        db.session.rollback()
        raise StorageError() from e
    _commit()
    return result


def list_slots(candidate_id, caller):
    get_candidate(candidate_id)
    ensure_access(candidate_id, caller)
    return schedule_store.list_slots(candidate_id)


def create_slot(candidate_id, data, caller):
    candidate = get_candidate(candidate_id)
    ensure_access(candidate.id, caller)
    s = run_atomic(lambda: schedule_store.create_slot(candidate, data))
    current_app.logger.info("schedule created id=%s candidate=%s", s.id, candidate.id)
    return s.to_dict()


def bulk_create_slots(candidate_id, slots, caller):
    candidate = get_candidate(candidate_id)
    ensure_access(candidate.id, caller)
    created = run_atomic(lambda: schedule_store.bulk_create_slots(candidate, slots))
    current_app.logger.info("bulk schedules candidate=%s requested=%s created=%s",
                            candidate.id, len(slots), len(created))
    if not created:
        return {"message": "All slots already exist", "count": 0}
    return {"message": "Schedules created", "count": len(created)}


def update_slot(schedule_id, data, caller):
    s = schedule_store.get_schedule(schedule_id)
    ensure_access(s.candidate_id, caller)

    def work():
        locked = schedule_store.get_schedule(schedule_id, for_update=True)
        return schedule_store.update_slot(locked, data)

    s = run_atomic(work)
    current_app.logger.info("schedule updated id=%s", s.id)
    return {"success": True, "schedule": s.to_dict()}


def cancel_slot(schedule_id, caller):
    s = schedule_store.get_schedule(schedule_id)
    ensure_access(s.candidate_id, caller)

    def work():
        locked = schedule_store.get_schedule(schedule_id, for_update=True)
        return schedule_store.cancel_slot(locked)

    s = run_atomic(work)
    current_app.logger.info("schedule cancelled id=%s", s.id)
    return {"success": True, "schedule": {"id": s.id, "status": s.status}}


def cancel_booking(schedule_id, reason, caller):
    """Cancel a confirmed interview and release the slots it blocked.

    The schedule status, the booking's cancellation stamp and the release
    of blocked slots are committed together or not at all.
    """
    s = schedule_store.get_schedule(schedule_id)
    ensure_access(s.candidate_id, caller)

    def work():
        locked = schedule_store.get_schedule(schedule_id, for_update=True)
        if locked.status != BOOKED:
            raise ConflictError("この日程は確定状態ではありません。")
        locked.status = CANCELLED
        booking = booking_store.active_booking_for(locked)
        if booking is not None:
            booking_store.mark_cancelled(booking, reason)
        released = conflict_resolver.release_blocked_slots(locked)
        return locked, released

    s, released = run_atomic(work)
    current_app.logger.info("booking cancelled schedule=%s released=%s", s.id, [r.id for r in released])
    return {
        "success": True,
        "schedule": {"id": s.id, "status": s.status},
        "unblockedSchedules": [r.summary() for r in released],
    }


def list_bookings(candidate_id, caller):
    get_candidate(candidate_id)
    ensure_access(candidate_id, caller)
    return booking_store.get_bookings_for_candidate(candidate_id)


def refresh_schedule_url(candidate_id, caller):
    candidate = get_candidate(candidate_id)
    ensure_access(candidate.id, caller)
    token = run_atomic(candidate.issue_schedule_token)
    base = current_app.config.get("PUBLIC_BASE_URL", "").rstrip("/")
    return {"scheduleToken": token, "scheduleUrl": f"{base}/schedule/{token}"}

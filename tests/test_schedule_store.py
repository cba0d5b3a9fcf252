from datetime import date

import pytest

from app.errors import ConflictError, NotFoundError, ValidationError
from app.extensions import db
from app.models.schedule import Schedule
from app.services import scheduling


def _slot(day="2025-03-10", start="10:00", end="11:00", interview_type="online"):
    return {"date": day, "startTime": start, "endTime": end, "interviewType": interview_type}


def test_create_slot_starts_available(candidate, staff):
    out = scheduling.create_slot(candidate.id, _slot(start="9:05"), staff.email)
    assert out["status"] == "available"
    assert out["startTime"] == "09:05"
    assert out["blockedById"] is None


@pytest.mark.parametrize("start", ["25:00", "9:5"])
def test_create_slot_rejects_bad_time(candidate, staff, start):
    with pytest.raises(ValidationError):
        scheduling.create_slot(candidate.id, _slot(start=start), staff.email)
    assert Schedule.query.count() == 0


def test_create_slot_requires_date(candidate, staff):
    with pytest.raises(ValidationError):
        scheduling.create_slot(candidate.id, {"startTime": "10:00", "endTime": "11:00"}, staff.email)


def test_create_slot_unknown_candidate(staff):
    with pytest.raises(NotFoundError):
        scheduling.create_slot(9999, _slot(), staff.email)


def test_create_slot_does_not_check_order_of_times(candidate, staff):
    # known boundary: end before start is stored as given
    out = scheduling.create_slot(candidate.id, _slot(start="11:00", end="10:00"), staff.email)
    assert out["startTime"] == "11:00" and out["endTime"] == "10:00"


def test_bulk_create_is_idempotent(candidate, staff):
    slots = [_slot(start="10:00", end="11:00"), _slot(start="11:00", end="12:00")]
    first = scheduling.bulk_create_slots(candidate.id, slots, staff.email)
    assert first == {"message": "Schedules created", "count": 2}
    second = scheduling.bulk_create_slots(candidate.id, slots, staff.email)
    assert second == {"message": "All slots already exist", "count": 0}
    assert Schedule.query.filter_by(candidate_id=candidate.id).count() == 2


def test_bulk_duplicate_ignores_interview_type_and_cancelled(candidate, staff, make_slot):
    make_slot(date(2025, 3, 10), "10:00", "11:00", interview_type="onsite")
    make_slot(date(2025, 3, 10), "13:00", "14:00", status="cancelled")
    out = scheduling.bulk_create_slots(candidate.id, [
        _slot(start="10:00", end="11:00", interview_type="online"),
        _slot(start="13:00", end="14:00"),
        _slot(start="13:00", end="14:00"),
    ], staff.email)
    assert out["count"] == 1


def test_bulk_rejects_malformed_slot(candidate, staff):
    with pytest.raises(ValidationError):
        scheduling.bulk_create_slots(candidate.id, [_slot(), _slot(start="25:00")], staff.email)
    assert Schedule.query.count() == 0


def test_bulk_rejects_oversized_payload(app, candidate, staff):
    app.config["SCHEDULE_BULK_MAX_SLOTS"] = 2
    with pytest.raises(ValidationError):
        scheduling.bulk_create_slots(candidate.id, [_slot(start=f"1{i}:00", end=f"1{i}:30") for i in range(3)], staff.email)


def test_update_slot_partial(candidate, staff, make_slot):
    s = make_slot(date(2025, 3, 10), "10:00", "11:00")
    out = scheduling.update_slot(s.id, {"endTime": "11:30", "status": "booked"}, staff.email)
    assert out["schedule"]["endTime"] == "11:30"
    assert out["schedule"]["startTime"] == "10:00"
    assert out["schedule"]["status"] == "available"


def test_update_booked_slot_conflicts(candidate, staff, make_slot):
    s = make_slot(date(2025, 3, 10), "10:00", "11:00", status="booked")
    with pytest.raises(ConflictError) as exc:
        scheduling.update_slot(s.id, {"endTime": "11:30"}, staff.email)
    assert exc.value.code == "INVALID_STATUS"
    db.session.refresh(s)
    assert s.end_time == "11:00"


def test_cancel_slot(candidate, staff, make_slot):
    s = make_slot(date(2025, 3, 10), "10:00", "11:00")
    assert scheduling.cancel_slot(s.id, staff.email)["schedule"] == {"id": s.id, "status": "cancelled"}
    # cancelling twice is fine
    assert scheduling.cancel_slot(s.id, staff.email)["schedule"]["status"] == "cancelled"


def test_cancel_slot_rejects_booked(candidate, staff, make_slot):
    s = make_slot(date(2025, 3, 10), "10:00", "11:00", status="booked")
    with pytest.raises(ConflictError) as exc:
        scheduling.cancel_slot(s.id, staff.email)
    assert exc.value.code == "CANNOT_CANCEL_BOOKED_SCHEDULE"
    db.session.refresh(s)
    assert s.status == "booked"


def test_cancel_blocked_slot_clears_link(candidate, staff, make_slot):
    a = make_slot(date(2025, 3, 10), "10:00", "11:00", interview_type="onsite", status="booked")
    b = make_slot(date(2025, 3, 10), "11:00", "12:00", status="blocked", blocked_by=a)
    scheduling.cancel_slot(b.id, staff.email)
    db.session.refresh(b)
    assert b.status == "cancelled" and b.blocked_by_id is None


def test_list_slots_order_and_relations(candidate, staff, make_slot, make_booking):
    late = make_slot(date(2025, 3, 11), "09:00", "10:00")
    a = make_slot(date(2025, 3, 10), "13:00", "14:00", interview_type="onsite", status="booked")
    b = make_slot(date(2025, 3, 10), "09:00", "10:00", status="blocked", blocked_by=a)
    make_booking(a, company_name="ACME")

    out = scheduling.list_slots(candidate.id, staff.email)
    assert [s["id"] for s in out] == [b.id, a.id, late.id]
    by_id = {s["id"]: s for s in out}
    assert by_id[a.id]["booking"]["companyName"] == "ACME"
    assert by_id[a.id]["blocks"] == [b.id]
    assert by_id[b.id]["blockedBy"] == {"id": a.id, "status": "booked"}
    assert by_id[late.id]["booking"] is None


def test_list_slots_shows_cancelled_booking(candidate, staff, make_slot, make_booking):
    a = make_slot(date(2025, 3, 10), "10:00", "11:00", status="booked")
    make_booking(a)
    [live] = scheduling.list_slots(candidate.id, staff.email)
    assert live["booking"]["cancelledAt"] is None

    scheduling.cancel_booking(a.id, "辞退", staff.email)
    [row] = scheduling.list_slots(candidate.id, staff.email)
    assert row["status"] == "cancelled"
    assert row["booking"]["cancelledAt"] is not None


def test_other_staff_is_denied(candidate, other_staff, make_slot):
    from app.errors import AuthorizationError
    s = make_slot(date(2025, 3, 10), "10:00", "11:00")
    with pytest.raises(AuthorizationError):
        scheduling.cancel_slot(s.id, other_staff.email)
    with pytest.raises(AuthorizationError):
        scheduling.list_slots(candidate.id, other_staff.email)

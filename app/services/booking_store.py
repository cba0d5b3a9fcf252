from datetime import datetime

from ..extensions import db
from ..models.booking import ScheduleBooking
from ..models.company import Company


def create_booking(schedule, company_id=None, company_name=None):
    # a known company id wins over the free-text name
    if company_id:
        company = Company.query.get(company_id)
        if company is not None:
            company_name = company.name
        else:
            company_id = None
    b = ScheduleBooking(
        schedule_id=schedule.id,
        candidate_id=schedule.candidate_id,
        company_id=company_id,
        company_name=company_name,
        confirmed_at=datetime.utcnow(),
    )
    db.session.add(b)
    db.session.flush()
    return b


def active_booking_for(schedule):
    return ScheduleBooking.query.filter_by(schedule_id=schedule.id, cancelled_at=None).first()


def get_bookings_for_candidate(candidate_id):
    rows = (
        ScheduleBooking.query.filter_by(candidate_id=candidate_id)
        .order_by(ScheduleBooking.confirmed_at.desc())
        .all()
    )
    return [b.to_dict() for b in rows]


def mark_cancelled(booking, reason=None):
    """Only call from within the cancel-booking transaction."""
    booking.cancelled_at = datetime.utcnow()
    booking.cancel_reason = reason or None
    db.session.flush()
    return booking

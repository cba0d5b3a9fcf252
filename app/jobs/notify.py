from flask import current_app
from python_http_client.exceptions import HTTPError

from ..extensions import db
from ..services.mail import send_mail
from ..models.booking import ScheduleBooking
from ..models.candidate import Candidate
from ..models.notification import Notification
from datetime import datetime

TYPE_LABELS = {"online": "オンライン", "onsite": "対面", "both": "両方可能"}


def booking_mail(booking, candidate):
    s = booking.schedule
    subject = f"【面接確定】{candidate.name}様 / {booking.company_name}"
    body = (
        f"<p>{candidate.name}様の面接日程が確定しました。</p>"
        f"<ul><li>企業: {booking.company_name}</li>"
        f"<li>日時: {s.date.isoformat()} {s.start_time}-{s.end_time}</li>"
        f"<li>形式: {TYPE_LABELS.get(s.interview_type, s.interview_type)}</li></ul>"
    )
    return subject, body


def notify_booking(booking_id: int):
    """Mail the registering staff member about a confirmed booking.

    Send failures are logged only; the booking is already committed.
    """
    if not current_app.config.get('SENDGRID_API_KEY'):
        current_app.logger.info('SENDGRID_API_KEY not set, skip booking notification booking=%s', booking_id)
        return None

    booking = ScheduleBooking.query.get(booking_id)
    if booking is None:
        return None
    candidate = Candidate.query.get(booking.candidate_id)
    to_email = candidate.registered_by.email if candidate and candidate.registered_by else None
    if not to_email:
        return None

    subject, body_html = booking_mail(booking, candidate)
    try:
        _, message_id = send_mail(to_email, subject, body_html)
    except HTTPError:
        current_app.logger.exception('booking notification failed booking=%s', booking_id)
        return None

    n = Notification(booking_id=booking.id, type="sendgrid", sent_to=to_email,
                     subject=subject, body=body_html,
                     provider_message_id=message_id, sent_at=datetime.utcnow())
    db.session.add(n); db.session.commit()
    return n.id

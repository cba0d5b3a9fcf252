from datetime import datetime

from ..extensions import db
from .base import TimestampMixin, iso


class ScheduleBooking(db.Model, TimestampMixin):
    __tablename__ = "schedule_bookings"

    id = db.Column(db.Integer, primary_key=True)
    schedule_id = db.Column(db.Integer, db.ForeignKey("schedules.id"), nullable=False, unique=True)
    candidate_id = db.Column(db.Integer, db.ForeignKey("candidates.id"), nullable=False, index=True)
    company_id = db.Column(db.Integer, db.ForeignKey("companies.id"))
    company_name = db.Column(db.String(200), nullable=False)

    confirmed_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    cancelled_at = db.Column(db.DateTime)
    cancel_reason = db.Column(db.Text)

    schedule = db.relationship("Schedule", back_populates="booking")

    @property
    def is_cancelled(self):
        return self.cancelled_at is not None

    def to_dict(self):
        s = self.schedule
        return {
            "id": self.id,
            "companyName": self.company_name,
            "confirmedAt": iso(self.confirmed_at),
            "cancelledAt": iso(self.cancelled_at),
            "cancelReason": self.cancel_reason,
            "schedule": {
                "date": iso(s.date),
                "startTime": s.start_time,
                "endTime": s.end_time,
                "interviewType": s.interview_type,
            },
        }

    def __repr__(self) -> str:
        return f"<ScheduleBooking id={self.id} schedule_id={self.schedule_id}>"

from ..extensions import db
from .base import TimestampMixin, iso

INTERVIEW_TYPES = ("online", "onsite", "both")

AVAILABLE = "available"
BOOKED = "booked"
BLOCKED = "blocked"
CANCELLED = "cancelled"
SCHEDULE_STATUSES = (AVAILABLE, BOOKED, BLOCKED, CANCELLED)


class Schedule(db.Model, TimestampMixin):
    __tablename__ = "schedules"

    id = db.Column(db.Integer, primary_key=True)
    candidate_id = db.Column(db.Integer, db.ForeignKey("candidates.id"), nullable=False, index=True)

    date = db.Column(db.Date, nullable=False, index=True)
    start_time = db.Column(db.String(5), nullable=False)  # HH:MM
    end_time = db.Column(db.String(5), nullable=False)    # HH:MM
    interview_type = db.Column(db.String(10), nullable=False, default="online")  # online/onsite/both
    status = db.Column(db.String(20), nullable=False, default=AVAILABLE, index=True)  # available/booked/blocked/cancelled

    # このスロットをブロックした対面面接の日程
    blocked_by_id = db.Column(db.Integer, db.ForeignKey("schedules.id"), index=True)

    blocked_by = db.relationship("Schedule", remote_side=[id], backref=db.backref("blocks", lazy="select"))
    booking = db.relationship("ScheduleBooking", back_populates="schedule", uselist=False)

    def to_dict(self):
        return {
            "id": self.id,
            "candidateId": self.candidate_id,
            "date": iso(self.date),
            "startTime": self.start_time,
            "endTime": self.end_time,
            "interviewType": self.interview_type,
            "status": self.status,
            "blockedById": self.blocked_by_id,
            "createdAt": iso(self.created_at),
            "updatedAt": iso(self.updated_at),
        }

    def summary(self):
        return {
            "id": self.id,
            "date": iso(self.date),
            "startTime": self.start_time,
            "endTime": self.end_time,
            "status": self.status,
        }

    def __repr__(self) -> str:
        return f"<Schedule id={self.id} {self.date} {self.start_time}-{self.end_time} {self.status}>"

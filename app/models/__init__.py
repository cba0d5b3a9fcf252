from .user import User
from .company import Company
from .candidate import Candidate
from .schedule import Schedule
from .booking import ScheduleBooking
from .notification import Notification
# base and mixins are imported by the above as needed

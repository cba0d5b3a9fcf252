import os
import sys
from datetime import date, timedelta

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from app import create_app
from app.extensions import db
from app.models.booking import ScheduleBooking
from app.models.candidate import Candidate
from app.models.schedule import Schedule
from app.models.user import User


@pytest.fixture
def app():
    app = create_app('config.TestConfig')
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def _user(email):
    u = User(email=email, name=email.split('@')[0], role='staff')
    u.set_password('password123')
    db.session.add(u)
    db.session.commit()
    return u


@pytest.fixture
def staff(app):
    return _user('ca@recruit-agency.jp')


@pytest.fixture
def other_staff(app):
    return _user('other@recruit-agency.jp')


@pytest.fixture
def candidate(staff):
    c = Candidate(user_id=staff.id, name='山田太郎', email='taro@example.com')
    c.issue_schedule_token()
    db.session.add(c)
    db.session.commit()
    return c


@pytest.fixture
def login(client):
    def _login(email='ca@recruit-agency.jp', password='password123'):
        resp = client.post('/auth/login', json={'email': email, 'password': password})
        assert resp.status_code == 200, resp.get_json()
        return client
    return _login


@pytest.fixture
def staff_client(login, staff):
    return login(staff.email)


@pytest.fixture
def future_day():
    return date.today() + timedelta(days=7)


@pytest.fixture
def make_slot(candidate):
    """Insert a schedule row directly, bypassing the API."""
    def _make(day, start, end, interview_type='online', status='available', blocked_by=None):
        s = Schedule(candidate_id=candidate.id, date=day, start_time=start, end_time=end,
                     interview_type=interview_type, status=status,
                     blocked_by_id=blocked_by.id if blocked_by else None)
        db.session.add(s)
        db.session.commit()
        return s
    return _make


@pytest.fixture
def make_booking():
    def _make(schedule, company_name='株式会社テスト'):
        b = ScheduleBooking(schedule_id=schedule.id, candidate_id=schedule.candidate_id,
                            company_name=company_name)
        db.session.add(b)
        db.session.commit()
        return b
    return _make

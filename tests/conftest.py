"""Pytest configuration and shared fixtures."""

from datetime import datetime, timezone

import pytest

from app import create_app
from config import TestConfig
from models import db
from models.court import Court
from services.booking_engine import engine_from_config


class FakeClock:
    """Settable clock for the booking engine."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def court(app):
    c = Court(name="Court 1", surface="synthetic")
    db.session.add(c)
    db.session.commit()
    return c


@pytest.fixture
def other_court(app):
    c = Court(name="Court 2", surface="clay")
    db.session.add(c)
    db.session.commit()
    return c


@pytest.fixture
def clock():
    # the day before the sample bookings, 08:00 UTC
    return FakeClock(datetime(2025, 5, 31, 8, 0, tzinfo=timezone.utc))


@pytest.fixture
def engine(app, clock):
    return engine_from_config(db.session, app.config, clock=clock)


@pytest.fixture
def make_payload():
    def _make(court_id, **overrides):
        data = {
            "court_id": court_id,
            "start_date": "2025-06-01",
            "end_date": "2025-06-03",
            "start_time": "09:00",
            "end_time": "10:00",
            "phone_number": "9876543210",
            "first_name": "Asha",
            "last_name": "Rao",
            "whatsapp_number": "9876543210",
            "address": "12 MG Road, Pune",
            "amount": 1500,
            "mode_of_payment": "upi",
        }
        data.update(overrides)
        return data
    return _make

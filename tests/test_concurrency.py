"""Concurrent bookings against a file-backed SQLite database.

Each worker runs in its own thread with its own app context, so each gets its
own session and connection, the way two requests would.

Run with: pytest tests/test_concurrency.py -v
"""

import threading
from datetime import datetime, timezone

import pytest

from app import create_app
from config import TestConfig
from models import db
from models.court import Court
from models.slot import Slot
from models.user import User
from services.booking_engine import BookingEngine, engine_from_config
from services.errors import ConflictError

NOW = datetime(2025, 5, 31, 8, 0, tzinfo=timezone.utc)


@pytest.fixture
def file_app(tmp_path):
    class FileConfig(TestConfig):
        SQLALCHEMY_DATABASE_URI = "sqlite:///" + str(tmp_path / "booking.db")
        # long enough for a blocked writer to outlast the other transaction
        SQLALCHEMY_ENGINE_OPTIONS = {"connect_args": {"timeout": 15}}

    app = create_app(FileConfig)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()
        db.engine.dispose()


@pytest.fixture
def regulars(file_app):
    """A court and two known parties whose stored details match their requests."""
    court = Court(name="Court 1", surface="synthetic")
    db.session.add(court)
    for phone, first, last in (("9876543210", "Asha", "Rao"), ("9123456780", "Vikram", "Shah")):
        db.session.add(User(
            first_name=first,
            last_name=last,
            phone_number=phone,
            whatsapp_number=phone,
            address="Pune",
            mode_of_payment="upi",
        ))
    db.session.flush()
    court_id = court.id
    db.session.commit()
    return court_id


def _payload(court_id, phone, start, end):
    return {
        "court_id": court_id,
        "start_date": "2025-06-01",
        "end_date": "2025-06-01",
        "start_time": start,
        "end_time": end,
        "phone_number": phone,
        "amount": 1000,
        "mode_of_payment": "upi",
    }


def test_overlapping_requests_on_one_court_book_once(file_app, regulars, monkeypatch):
    barrier = threading.Barrier(2, timeout=1)
    find_overlap = BookingEngine._find_overlap

    def check_then_wait(self, *args):
        found = find_overlap(self, *args)
        # line both requests up between the check and the insert; a writer
        # still waiting for the court never arrives and the barrier breaks
        try:
            barrier.wait()
        except threading.BrokenBarrierError:
            pass
        return found

    monkeypatch.setattr(BookingEngine, "_find_overlap", check_then_wait)

    results = []

    def worker(payload):
        with file_app.app_context():
            engine = engine_from_config(db.session, file_app.config, clock=lambda: NOW)
            try:
                booking = engine.book(payload)
                results.append(("ok", booking.id))
            except ConflictError:
                results.append(("conflict", None))

    threads = [
        threading.Thread(target=worker, args=(_payload(regulars, "9876543210", "09:00", "10:00"),)),
        threading.Thread(target=worker, args=(_payload(regulars, "9123456780", "09:30", "10:30"),)),
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=30)
    assert not any(t.is_alive() for t in threads)

    assert sorted(kind for kind, _ in results) == ["conflict", "ok"]

    db.session.expire_all()
    booked = Slot.query.filter(Slot.is_booked.is_(True)).all()
    assert len(booked) == 1
    assert db.session.get(Court, regulars).lock_version == 1

from datetime import datetime
from models.db import db

class Slot(db.Model):
    __tablename__ = "slots"

    id = db.Column(db.Integer, primary_key=True)

    court_id = db.Column(db.Integer, db.ForeignKey("courts.id"), nullable=False, index=True)
    booking_id = db.Column(db.Integer, db.ForeignKey("bookings.id"), nullable=True, index=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=True, index=True)

    # calendar day the slot belongs to
    start_date = db.Column(db.Date, nullable=False, index=True)
    end_date = db.Column(db.Date, nullable=False)
    # UTC instants, half-open [start_time, end_time)
    start_time = db.Column(db.DateTime, nullable=False, index=True)
    end_time = db.Column(db.DateTime, nullable=False)

    is_booked = db.Column(db.Boolean, default=True, nullable=False)
    is_multi_day = db.Column(db.Boolean, default=False, nullable=False)
    notes = db.Column(db.String(300), nullable=True)

    # copied from the booking's billing details
    amount = db.Column(db.Numeric(12, 2), nullable=False, default=0)
    is_gst = db.Column(db.Boolean, default=False, nullable=False)
    gst = db.Column(db.Numeric(5, 2), nullable=True)
    gst_number = db.Column(db.String(20), nullable=True)
    mode_of_payment = db.Column(db.String(10), nullable=False)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    user = db.relationship("User")
    court = db.relationship("Court")

    __table_args__ = (
        # Storage-level backstop for double booking: one booked row per court window
        db.Index(
            "uq_slot_booked_window",
            "court_id", "start_time", "end_time",
            unique=True,
            sqlite_where=db.text("is_booked = 1"),
            postgresql_where=db.text("is_booked"),
        ),
    )

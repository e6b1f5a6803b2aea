from datetime import datetime
from models.db import db

BOOKING_STATUSES = ("active", "cancelled", "expired")
TERMINAL_STATUSES = ("cancelled", "expired")

class Booking(db.Model):
    __tablename__ = "bookings"

    id = db.Column(db.Integer, primary_key=True)

    court_id = db.Column(db.Integer, db.ForeignKey("courts.id"), nullable=False, index=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)

    start_date = db.Column(db.Date, nullable=False)
    end_date = db.Column(db.Date, nullable=False)
    # first day's start and last day's end, UTC
    start_time = db.Column(db.DateTime, nullable=False, index=True)
    end_time = db.Column(db.DateTime, nullable=False)
    is_multi_day = db.Column(db.Boolean, default=False, nullable=False)

    status = db.Column(db.String(20), nullable=False, default="active")
    # status values: active, cancelled, expired

    notes = db.Column(db.String(300), nullable=True)
    amount = db.Column(db.Numeric(12, 2), nullable=False, default=0)
    is_gst = db.Column(db.Boolean, default=False, nullable=False)
    gst = db.Column(db.Numeric(5, 2), nullable=True)
    gst_number = db.Column(db.String(20), nullable=True)
    mode_of_payment = db.Column(db.String(10), nullable=False)

    is_renewal = db.Column(db.Boolean, default=False, nullable=False)
    parent_booking_id = db.Column(db.Integer, db.ForeignKey("bookings.id"), nullable=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    cancelled_at = db.Column(db.DateTime, nullable=True)

    slots = db.relationship("Slot", backref="booking", order_by="Slot.start_time")
    user = db.relationship("User")
    court = db.relationship("Court")

    @property
    def slot_ids(self):
        return [s.id for s in self.slots]

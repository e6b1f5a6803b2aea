from datetime import datetime
from models.db import db

class Billing(db.Model):
    __tablename__ = "billings"

    id = db.Column(db.Integer, primary_key=True)

    # plain references: billing outlives the booking, the party and the court
    booking_id = db.Column(db.Integer, nullable=True, index=True)
    user_id = db.Column(db.Integer, nullable=True, index=True)
    court_id = db.Column(db.Integer, nullable=True, index=True)

    amount = db.Column(db.Numeric(12, 2), nullable=False)
    is_gst = db.Column(db.Boolean, default=False, nullable=False)
    gst = db.Column(db.Numeric(5, 2), nullable=True)
    gst_number = db.Column(db.String(20), nullable=True)
    mode_of_payment = db.Column(db.String(10), nullable=False)

    # party details as they were when the booking was paid for
    user_info = db.Column(db.JSON, nullable=False)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

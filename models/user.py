from datetime import datetime
from models.db import db

class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)

    first_name = db.Column(db.String(50), nullable=False)
    last_name = db.Column(db.String(50), nullable=False)
    # natural key: one party per phone number
    phone_number = db.Column(db.String(10), unique=True, nullable=False, index=True)
    whatsapp_number = db.Column(db.String(10), nullable=True)
    address = db.Column(db.String(200), nullable=True)
    email = db.Column(db.String(255), nullable=True)

    # last GST settings / payment mode used, prefilled on the next booking
    is_gst = db.Column(db.Boolean, default=False, nullable=False)
    gst = db.Column(db.Numeric(5, 2), nullable=True)
    gst_number = db.Column(db.String(20), nullable=True)
    mode_of_payment = db.Column(db.String(10), nullable=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    @property
    def full_name(self) -> str:
        return f"{self.first_name or ''} {self.last_name or ''}".strip()

import json
from datetime import datetime
from models.db import db

class AuditLog(db.Model):
    """Append-only trail of booking, court and party changes."""

    __tablename__ = "audit_logs"

    id = db.Column(db.Integer, primary_key=True)
    action = db.Column(db.String(80), nullable=False, index=True)  # BOOKING_CREATE, COURT_DELETE, ...
    # party the change concerns; court events carry none
    user_id = db.Column(db.Integer, nullable=True)
    entity = db.Column(db.String(80), nullable=True)   # booking, court, user
    entity_id = db.Column(db.String(80), nullable=True)

    # requesting client, absent for CLI writes
    ip = db.Column(db.String(64), nullable=True)
    user_agent = db.Column(db.String(255), nullable=True)
    metadata_json = db.Column(db.Text, nullable=True)

    timestamp = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)

    @property
    def details(self) -> dict:
        return json.loads(self.metadata_json) if self.metadata_json else {}

from datetime import datetime
from models.db import db

class DeletedUser(db.Model):
    __tablename__ = "deleted_users"

    id = db.Column(db.Integer, primary_key=True)
    user = db.Column(db.JSON, nullable=False)
    billings = db.Column(db.JSON, nullable=False, default=list)
    deleted_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)

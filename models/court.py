from datetime import datetime
from models.db import db

class Court(db.Model):
    __tablename__ = "courts"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    surface = db.Column(db.String(80), nullable=True)  # e.g. synthetic, clay, hardwood

    # bumped by every booking write; the update holds the court's write lock until commit
    lock_version = db.Column(db.Integer, default=0, server_default="0", nullable=False)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

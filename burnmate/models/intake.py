# burnmate/models/intake.py
from datetime import datetime
from .. import db
from ..utils import to_utc_iso


class Intake(db.Model):
    __tablename__ = "intakes"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    name = db.Column(db.String(200), nullable=False)
    calories = db.Column(db.Float, nullable=False)
    protein = db.Column(db.Float, nullable=False, default=0)
    timestamp = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, index=True)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    user = db.relationship("User", backref="intakes")

    def to_dict(self):
        return {
            "id": str(self.id),
            "userId": str(self.user_id),
            "name": self.name,
            "calories": self.calories,
            "protein": self.protein or 0,
            "timestamp": to_utc_iso(self.timestamp),
            "createdAt": to_utc_iso(self.created_at),
        }
